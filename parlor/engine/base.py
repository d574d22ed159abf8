"""
Base engine class for the parlor games.

This module provides the abstract base class for the game engines. An engine
owns the current immutable game state and the collaborators the game needs
(random source, event emitter), validates incoming commands, and advances the
state through the game's transition functions.

Engines never block for input. Whatever drives them (a terminal loop, a test)
issues one command at a time and renders the queries in between.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import random

from parlor.events import EventEmitter


class GameEngine(ABC):
    """
    Abstract base class for all game engines.

    This class defines the common interface that all game engines implement,
    providing methods for starting and restarting games and querying their
    outcome.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        rng: Optional[random.Random] = None,
        emitter: Optional[EventEmitter] = None,
    ):
        """
        Initialize the engine.

        Args:
            config: Configuration options for the game. ``seed`` seeds the
                    random source when no ``rng`` is given.
            rng: Source of randomness for the game
            emitter: Event emitter to publish game events on
        """
        self.config = config or {}
        self.rng = rng if rng is not None else random.Random(self.config.get("seed"))
        self.event_emitter = emitter if emitter is not None else EventEmitter()
        self.state = None

    @abstractmethod
    def start_game(self) -> None:
        """
        Start a new game.
        """
        pass

    @abstractmethod
    def restart(self) -> None:
        """
        Reset the game so it can be played again.
        """
        pass

    @abstractmethod
    def round_outcome(self):
        """
        Return the outcome of the most recently finished round, if any.
        """
        pass

    @abstractmethod
    def game_outcome(self):
        """
        Return whether the game is over, and how it stands.
        """
        pass

    def render_state(self) -> Dict[str, Any]:
        """
        Return the current game state in a form ready for display.
        """
        return self.state.to_dict()
