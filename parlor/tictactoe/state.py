"""
Immutable state models for the Tic Tac Toe game.

This module provides dataclasses for representing the state of a Tic Tac Toe
game in an immutable manner. These classes are designed to be used with pure
transition functions that create new state instances rather than modifying
existing ones.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple
from enum import Enum, auto
import uuid
import time

from parlor.common.errors import InvalidCellError
from parlor.tictactoe.constants import CELLS, WINNING_SCORE


class Marker(Enum):
    """Which side, if any, occupies a square."""

    UNMARKED = auto()
    HUMAN = auto()
    COMPUTER = auto()

    @property
    def opponent(self) -> "Marker":
        if self is Marker.HUMAN:
            return Marker.COMPUTER
        if self is Marker.COMPUTER:
            return Marker.HUMAN
        raise ValueError("An unmarked square has no opponent.")


# Presentation glyphs; engines may override the human and computer ones
DEFAULT_GLYPHS: Dict[Marker, str] = {
    Marker.UNMARKED: " ",
    Marker.HUMAN: "X",
    Marker.COMPUTER: "O",
}


class GameStage(Enum):
    """Possible stages of a Tic Tac Toe game."""

    AWAITING_MOVE = auto()
    ROUND_OVER = auto()
    GAME_OVER = auto()


def validate_cell(cell: Any) -> int:
    """Return ``cell`` if it names a board square, else raise InvalidCellError."""
    if isinstance(cell, bool) or not isinstance(cell, int) or cell not in CELLS:
        raise InvalidCellError(f"Cell must be an integer from 1 to 9, got {cell!r}")
    return cell


@dataclass(frozen=True)
class Board:
    """
    Immutable snapshot of the nine squares.

    Squares are addressed by cell number 1-9. Marking a square returns a new
    board; a square goes from unmarked to marked once and never back.

    >>> board = Board().mark(5, Marker.HUMAN)
    >>> board[5]
    <Marker.HUMAN: 2>
    >>> board.unmarked_cells()
    [1, 2, 3, 4, 6, 7, 8, 9]
    """

    squares: Tuple[Marker, ...] = (Marker.UNMARKED,) * len(CELLS)

    def __post_init__(self):
        if len(self.squares) != len(CELLS):
            raise ValueError(f"A board has exactly {len(CELLS)} squares")

    def __getitem__(self, cell: int) -> Marker:
        return self.squares[validate_cell(cell) - 1]

    def markers(self, cells: Tuple[int, ...]) -> List[Marker]:
        """Return the markers at ``cells``, in the order given."""
        return [self[cell] for cell in cells]

    def unmarked_cells(self) -> List[int]:
        return [cell for cell in CELLS if self[cell] is Marker.UNMARKED]

    def is_full(self) -> bool:
        return not self.unmarked_cells()

    def mark(self, cell: int, marker: Marker) -> "Board":
        """
        Return a new board with ``cell`` marked by ``marker``.

        Raises:
            InvalidCellError: If the cell is out of range or already marked
            ValueError: If ``marker`` is UNMARKED
        """
        if marker is Marker.UNMARKED:
            raise ValueError("Cannot mark a square as unmarked")
        if self[cell] is not Marker.UNMARKED:
            raise InvalidCellError(f"Cell {cell} is already marked")
        squares = list(self.squares)
        squares[cell - 1] = marker
        return Board(tuple(squares))

    def render(self, glyphs: Mapping[Marker, str] = DEFAULT_GLYPHS) -> List[List[str]]:
        """Return the board as three rows of glyphs."""
        return [
            [glyphs[self[cell]] for cell in CELLS[row : row + 3]]
            for row in range(0, len(CELLS), 3)
        ]


@dataclass(frozen=True)
class RoundOutcome:
    """Result of a finished round. ``winner`` is None on a tie."""

    winner: Optional[Marker]
    is_tie: bool


@dataclass(frozen=True)
class GameOutcome:
    """
    Standing of the whole game.

    Attributes:
        winner: Side that reached the winning score, if any
        is_over: Whether either tally has reached the winning score
        human_score: Rounds won by the human
        computer_score: Rounds won by the computer
    """

    winner: Optional[Marker]
    is_over: bool
    human_score: int
    computer_score: int


@dataclass(frozen=True)
class GameState:
    """
    Immutable representation of the Tic Tac Toe game state.

    Attributes:
        id: Unique identifier for this game
        board: Current board snapshot
        stage: Current stage of the game
        turn: Side to move next while a round is in progress
        human_score: Rounds won by the human
        computer_score: Rounds won by the computer
        rounds_played: Number of finished rounds
        round_winner: Winner of the last finished round (None on a tie or mid-round)
        timestamp: Time when this state was created
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    board: Board = field(default_factory=Board)
    stage: GameStage = GameStage.AWAITING_MOVE
    turn: Marker = Marker.HUMAN
    human_score: int = 0
    computer_score: int = 0
    rounds_played: int = 0
    round_winner: Optional[Marker] = None
    timestamp: float = field(default_factory=lambda: time.time())

    @property
    def game_winner(self) -> Optional[Marker]:
        if self.human_score >= WINNING_SCORE:
            return Marker.HUMAN
        if self.computer_score >= WINNING_SCORE:
            return Marker.COMPUTER
        return None

    def to_dict(self, glyphs: Mapping[Marker, str] = DEFAULT_GLYPHS) -> Dict[str, Any]:
        """
        Convert the game state to a dictionary suitable for rendering.

        Args:
            glyphs: Display glyph for each marker

        Returns:
            Dictionary representation of the game state
        """
        return {
            "id": self.id,
            "stage": self.stage.name,
            "turn": self.turn.name,
            "board": self.board.render(glyphs),
            "unmarked_cells": self.board.unmarked_cells(),
            "human_score": self.human_score,
            "computer_score": self.computer_score,
            "winning_score": WINNING_SCORE,
            "rounds_played": self.rounds_played,
            "round_winner": self.round_winner.name if self.round_winner else None,
            "timestamp": self.timestamp,
        }
