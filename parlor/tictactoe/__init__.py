"""
Tic Tac Toe game module.

This module provides the board model, line detection, the computer's move
heuristic and the state transitions for Tic Tac Toe.
"""

from parlor.tictactoe.state import (
    Board as Board,
    GameOutcome as GameOutcome,
    GameStage as GameStage,
    GameState as GameState,
    Marker as Marker,
    RoundOutcome as RoundOutcome,
)
from parlor.tictactoe.rules import (
    choose_computer_square as choose_computer_square,
    find_at_risk_square as find_at_risk_square,
    winning_marker as winning_marker,
)
from parlor.tictactoe.transitions import StateTransitionEngine as StateTransitionEngine

__all__ = [
    "Board",
    "GameOutcome",
    "GameStage",
    "GameState",
    "Marker",
    "RoundOutcome",
    "StateTransitionEngine",
    "choose_computer_square",
    "find_at_risk_square",
    "winning_marker",
]
