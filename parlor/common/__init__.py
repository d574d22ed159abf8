"""
Building blocks shared by the parlor games: cards, the deck, and errors.
"""

from parlor.common.card import Card, Face, Suit
from parlor.common.deck import Deck
from parlor.common.errors import (
    EmptyDeckError,
    GameError,
    InvalidActionError,
    InvalidBetError,
    InvalidCellError,
)

__all__ = [
    "Card",
    "Deck",
    "EmptyDeckError",
    "Face",
    "GameError",
    "InvalidActionError",
    "InvalidBetError",
    "InvalidCellError",
    "Suit",
]
