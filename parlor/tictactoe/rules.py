"""
Line detection and the computer's move heuristic for Tic Tac Toe.

The computer does not search the game tree. On its turn it takes a square
that completes one of its own lines, otherwise a square that blocks one of
the human's lines, otherwise whatever the fallback picks.
"""

from typing import Callable, List, Optional

from parlor.tictactoe.constants import WINNING_LINES
from parlor.tictactoe.state import Board, Marker

# fallback(unmarked_cells) -> cell
FallbackChooser = Callable[[List[int]], int]


def winning_marker(board: Board) -> Optional[Marker]:
    """
    Return the marker occupying a complete line, or None.

    Lines are scanned rows first, then columns, then diagonals, and the first
    complete line decides.

    >>> board = Board().mark(1, Marker.HUMAN).mark(2, Marker.HUMAN).mark(3, Marker.HUMAN)
    >>> winning_marker(board)
    <Marker.HUMAN: 2>
    >>> winning_marker(Board()) is None
    True
    """
    for line in WINNING_LINES:
        first, *rest = board.markers(line)
        if first is not Marker.UNMARKED and all(m is first for m in rest):
            return first
    return None


def find_at_risk_square(board: Board, marker: Marker) -> Optional[int]:
    """
    Return the cell that would complete a line for ``marker``, or None.

    A line qualifies when exactly two of its squares bear ``marker`` and the
    third is unmarked. The first qualifying line in scan order wins.

    >>> board = Board().mark(1, Marker.COMPUTER).mark(2, Marker.COMPUTER)
    >>> find_at_risk_square(board, Marker.COMPUTER)
    3
    >>> find_at_risk_square(board, Marker.HUMAN) is None
    True
    """
    for line in WINNING_LINES:
        markers = board.markers(line)
        if markers.count(marker) == 2 and markers.count(Marker.UNMARKED) == 1:
            return line[markers.index(Marker.UNMARKED)]
    return None


def choose_computer_square(board: Board, fallback: FallbackChooser) -> int:
    """
    Pick the computer's next cell: win if possible, else block, else fallback.

    Args:
        board: Current board; must have at least one unmarked cell
        fallback: Called with the unmarked cells when there is nothing to win or block

    Returns:
        The chosen cell number
    """
    square = find_at_risk_square(board, Marker.COMPUTER)
    if square is not None:
        return square
    square = find_at_risk_square(board, Marker.HUMAN)
    if square is not None:
        return square
    return fallback(board.unmarked_cells())
