"""Tic Tac Toe board geometry and game constants."""

from typing import Tuple

# Cells are numbered 1-9, left to right, top to bottom:
#   1 | 2 | 3
#   4 | 5 | 6
#   7 | 8 | 9
CELLS: Tuple[int, ...] = tuple(range(1, 10))

# Rows, then columns, then diagonals. Lines are scanned in this order.
WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (1, 2, 3),
    (4, 5, 6),
    (7, 8, 9),
    (1, 4, 7),
    (2, 5, 8),
    (3, 6, 9),
    (1, 5, 9),
    (3, 5, 7),
)

# Round wins needed to take the game
WINNING_SCORE = 5
