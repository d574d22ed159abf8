"""
Tic Tac Toe engine implementation.

This module provides the TicTacToeEngine class, which implements the
GameEngine interface for a human playing Tic Tac Toe against the computer.
"""

from typing import Any, Callable, Dict, List, Optional
import logging
import random

from parlor.common.errors import GameError, InvalidActionError
from parlor.engine.base import GameEngine
from parlor.events import EngineEventType, EventEmitter
from parlor.tictactoe.rules import choose_computer_square
from parlor.tictactoe.state import (
    DEFAULT_GLYPHS,
    Board,
    GameOutcome,
    GameStage,
    GameState,
    Marker,
    RoundOutcome,
)
from parlor.tictactoe.transitions import StateTransitionEngine

logger = logging.getLogger("parlor.engine.tictactoe")


def _glyph(config: Dict[str, Any], key: str, default: str) -> str:
    glyph = config.get(key, default)
    if not isinstance(glyph, str) or len(glyph) != 1:
        raise ValueError(f"{key} must be a single character, got {glyph!r}")
    if glyph == DEFAULT_GLYPHS[Marker.UNMARKED]:
        raise ValueError(f"{key} cannot be the unmarked-square glyph {glyph!r}")
    return glyph


class TicTacToeEngine(GameEngine):
    """
    Engine implementation for Tic Tac Toe.

    The human always opens a round. The computer answers with the win/block
    heuristic and, when there is nothing to win or block, asks ``fallback``
    to choose among the unmarked cells.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        rng: Optional[random.Random] = None,
        emitter: Optional[EventEmitter] = None,
        fallback: Optional[Callable[[List[int]], int]] = None,
    ):
        """
        Initialize the Tic Tac Toe engine.

        Args:
            config: Configuration options (names, glyphs, seed)
            rng: Source of randomness for the computer's fallback move
            emitter: Event emitter to publish game events on
            fallback: Chooses the computer's cell when it has nothing to win or block.
                      Defaults to a random choice.
        """
        super().__init__(config, rng, emitter)
        self.human_name = self.config.get("human_name", "Player")
        self.computer_name = self.config.get("computer_name", "Hal")
        self.glyphs = {
            Marker.UNMARKED: DEFAULT_GLYPHS[Marker.UNMARKED],
            Marker.HUMAN: _glyph(self.config, "human_glyph", DEFAULT_GLYPHS[Marker.HUMAN]),
            Marker.COMPUTER: _glyph(
                self.config, "computer_glyph", DEFAULT_GLYPHS[Marker.COMPUTER]
            ),
        }
        if self.glyphs[Marker.HUMAN] == self.glyphs[Marker.COMPUTER]:
            raise ValueError("The human and the computer need different glyphs")
        self.fallback = fallback if fallback is not None else self.rng.choice
        self.state = GameState()

    @property
    def board(self) -> Board:
        return self.state.board

    def start_game(self) -> None:
        """
        Start a new game of Tic Tac Toe with a fresh board and zeroed tallies.
        """
        self.state = GameState()
        logger.debug("Started game %s", self.state.id)
        self.event_emitter.emit(
            EngineEventType.GAME_STARTED,
            {"game_id": self.state.id, "timestamp": self.state.timestamp},
        )
        self._emit_round_started()

    def apply_human_move(self, cell: int) -> None:
        """
        Mark ``cell`` for the human.

        Raises:
            InvalidCellError: If the cell is out of range or already marked
            InvalidActionError: If it is not the human's turn
        """
        self._move(cell, Marker.HUMAN)

    def apply_computer_move(self) -> int:
        """
        Let the computer choose and mark a cell.

        Returns:
            The cell the computer marked

        Raises:
            InvalidActionError: If it is not the computer's turn
        """
        if self.state.stage is not GameStage.AWAITING_MOVE:
            raise InvalidActionError(
                f"Cannot move while the game is {self.state.stage.name}"
            )
        if self.state.turn is not Marker.COMPUTER:
            raise InvalidActionError("It is not the computer's turn")

        cell = choose_computer_square(self.state.board, self.fallback)
        self._move(cell, Marker.COMPUTER)
        return cell

    def next_round(self) -> None:
        """
        Clear the board for the next round once the current one is over.

        Raises:
            InvalidActionError: If the round is still in progress or the game is over
        """
        self.state = StateTransitionEngine.next_round(self.state)
        self._emit_round_started()

    def restart(self) -> None:
        """
        Reset both tallies and the board, keeping the same game.
        """
        self.state = StateTransitionEngine.restart(self.state)
        logger.debug("Restarted game %s", self.state.id)
        self.event_emitter.emit(
            EngineEventType.GAME_STARTED,
            {"game_id": self.state.id, "timestamp": self.state.timestamp},
        )
        self._emit_round_started()

    def round_outcome(self) -> Optional[RoundOutcome]:
        """
        Return how the current round ended, or None while it is still being played.
        """
        if self.state.stage is GameStage.AWAITING_MOVE:
            return None
        winner = self.state.round_winner
        return RoundOutcome(winner=winner, is_tie=winner is None)

    def game_outcome(self) -> GameOutcome:
        return GameOutcome(
            winner=self.state.game_winner,
            is_over=self.state.stage is GameStage.GAME_OVER,
            human_score=self.state.human_score,
            computer_score=self.state.computer_score,
        )

    def render_state(self) -> Dict[str, Any]:
        """
        Return the current game state, with glyphs and names, ready for display.
        """
        rendered = self.state.to_dict(self.glyphs)
        rendered["human"] = {
            "name": self.human_name,
            "glyph": self.glyphs[Marker.HUMAN],
        }
        rendered["computer"] = {
            "name": self.computer_name,
            "glyph": self.glyphs[Marker.COMPUTER],
        }
        return rendered

    def _move(self, cell: int, marker: Marker) -> None:
        try:
            self.state = StateTransitionEngine.apply_move(self.state, cell, marker)
        except GameError as e:
            logger.debug("Rejected %s move at %r: %s", marker.name, cell, e)
            raise

        self.event_emitter.emit(
            EngineEventType.SQUARE_MARKED,
            {"game_id": self.state.id, "cell": cell, "marker": marker.name},
        )

        if self.state.stage is GameStage.AWAITING_MOVE:
            return

        winner = self.state.round_winner
        logger.info(
            "Round %d over: %s (human %d, computer %d)",
            self.state.rounds_played,
            winner.name if winner else "tie",
            self.state.human_score,
            self.state.computer_score,
        )
        self.event_emitter.emit(
            EngineEventType.ROUND_ENDED,
            {
                "game_id": self.state.id,
                "round_number": self.state.rounds_played,
                "winner": winner.name if winner else None,
                "human_score": self.state.human_score,
                "computer_score": self.state.computer_score,
            },
        )
        if self.state.stage is GameStage.GAME_OVER:
            self.event_emitter.emit(
                EngineEventType.GAME_ENDED,
                {"game_id": self.state.id, "winner": self.state.game_winner.name},
            )

    def _emit_round_started(self) -> None:
        self.event_emitter.emit(
            EngineEventType.ROUND_STARTED,
            {"game_id": self.state.id, "round_number": self.state.rounds_played + 1},
        )
