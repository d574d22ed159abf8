"""
Game engines for the parlor package.

Each engine owns one game's state and drives it through that game's
transition functions in response to discrete commands.
"""

from parlor.engine.base import GameEngine
from parlor.engine.tictactoe import TicTacToeEngine
from parlor.engine.twentyone import TwentyOneEngine

__all__ = ["GameEngine", "TicTacToeEngine", "TwentyOneEngine"]
