"""
Exceptions raised by the parlor game cores.

Every error is a distinct, named condition reported to the caller. The cores
never retry a rejected command; re-prompting is the job of whatever drives them.

Exceptions:
    - `GameError`: Base class for all core errors.
    - `InvalidCellError`: Raised when a move targets an out-of-range or already-marked cell.
    - `InvalidBetError`: Raised when a bet is not a positive integer within the balance.
    - `InvalidActionError`: Raised when an action is unrecognized or not currently valid.
    - `EmptyDeckError`: Raised when a card is drawn from an empty deck.
"""


class GameError(Exception):
    """Base class for errors raised by the game cores."""

    pass


class InvalidCellError(GameError):
    """Raised when a move targets an out-of-range or already-marked cell."""

    pass


class InvalidBetError(GameError):
    """Raised when a bet is non-positive, not an integer, or exceeds the balance."""

    pass


class InvalidActionError(GameError):
    """Raised when a player attempts to perform an action that is not currently valid."""

    pass


class EmptyDeckError(GameError, IndexError):
    """Raised when a card is drawn from a deck with no cards remaining."""

    pass
