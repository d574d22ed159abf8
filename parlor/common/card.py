"""
This module defines the `Suit`, `Face`, and `Card` classes, which are used to represent playing cards.

- `Suit`: An enum representing the four suits of a standard deck of playing
cards: Diamonds, Hearts, Spades, and Clubs.

- `Face`: An enum representing the thirteen faces of a standard deck of playing
cards: Two through Ten, Jack, Queen, King, and Ace.

- `Card`: An immutable playing card. A card has a suit, a face and a base
value derived from the face.

This module is part of the `parlor` package.
"""

from dataclasses import dataclass, field
from enum import Enum, unique


@unique
class Suit(Enum):
    """
    Enum for suits in a card deck.
    """

    DIAMONDS = "Diamonds"
    HEARTS = "Hearts"
    SPADES = "Spades"
    CLUBS = "Clubs"

    def __str__(self) -> str:
        return self.value


@unique
class Face(Enum):
    """
    Enum for faces in a card deck.
    """

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "Jack"
    QUEEN = "Queen"
    KING = "King"
    ACE = "Ace"

    @property
    def base_value(self) -> int:
        """The value of the face before any contextual Ace adjustment."""
        if self is Face.ACE:
            return 11
        if self in (Face.JACK, Face.QUEEN, Face.KING):
            return 10
        return int(self.value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Card:
    """
    Class representing a playing card.

    >>> card = Card(Suit.HEARTS, Face.TWO)
    >>> print(card)
    2 of Hearts
    >>> Card(Suit.SPADES, Face.ACE).value
    11
    """

    suit: Suit
    face: Face
    value: int = field(init=False, compare=False)

    def __post_init__(self):
        if not isinstance(self.suit, Suit):
            raise TypeError(f"Invalid suit: {self.suit}")
        if not isinstance(self.face, Face):
            raise TypeError(f"Invalid face: {self.face}")
        object.__setattr__(self, "value", self.face.base_value)

    @property
    def is_ace(self) -> bool:
        return self.face is Face.ACE

    def __repr__(self) -> str:
        """
        Provide a machine-readable representation of the card.

        :return: A string representation of the card.
        """
        return f"Card(Suit.{self.suit.name}, Face.{self.face.name})"

    def __str__(self) -> str:
        """
        Provide a human-readable representation of the card.

        :return: A string representation of the card.
        """
        return f"{self.face} of {self.suit}"
