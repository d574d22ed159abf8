"""
This module contains the Deck class, which represents a deck of cards.

Cards are drawn uniformly at random and without replacement. The source of
randomness is injected so that dealing can be made deterministic.

>>> import random
>>> deck = Deck(rng=random.Random(7))
>>> deck.size
52
>>> card = deck.draw_one()
>>> deck.size
51
"""

import random
from typing import Iterable, List, Optional, Tuple

from parlor.common.card import Card, Face, Suit
from parlor.common.errors import EmptyDeckError


class Deck:
    """
    A class representing a deck of cards.
    """

    # Precompute the default deck
    _default_deck = [Card(suit, face) for suit in Suit for face in Face]

    def __init__(
        self,
        cards: Optional[List[Card]] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize a Deck instance.

        :param cards: A list of Card instances to populate the deck (optional).
                      If not provided, a default deck will be constructed.
        :param rng: Source of randomness used for drawing. Only ``randrange``
                    is called on it. Defaults to a fresh ``random.Random``.
        """
        self._rng = rng if rng is not None else random.Random()
        if cards is None:
            self.cards: List[Card] = self.initialize_default_deck()
        else:
            if len(set(cards)) != len(cards):
                raise ValueError("A deck cannot hold the same card twice.")
            self.cards = list(cards)

    def initialize_default_deck(self) -> List[Card]:
        """
        Construct a default deck with all possible combinations of suits and faces.

        :return: A list of Card instances representing the default deck.
        >>> len(Deck().initialize_default_deck())
        52
        """
        return self._default_deck.copy()

    def draw_one(self) -> Card:
        """
        Remove and return a uniformly random card from the deck.

        :return: The drawn card.
        :raises EmptyDeckError: If no cards remain.
        """
        if not self.cards:
            raise EmptyDeckError("Cannot draw from an empty deck.")
        return self.cards.pop(self._rng.randrange(len(self.cards)))

    def draw_two(self) -> Tuple[Card, Card]:
        """
        Draw two cards, as for an initial deal.

        :return: A pair of cards in draw order.
        """
        first = self.draw_one()
        second = self.draw_one()
        return first, second

    @property
    def size(self) -> int:
        """
        Return the number of remaining cards in the deck.

        :return: The size of the deck.
        """
        return len(self.cards)

    def is_empty(self) -> bool:
        """
        Check if the deck is empty.

        :return: True if the deck is empty, False otherwise.
        """
        return len(self.cards) == 0

    def refresh(self, exclude: Iterable[Card] = ()) -> None:
        """
        Reset the deck to a full, unused set of 52 cards.

        :param exclude: Cards still in play, left out of the refreshed deck.
        """
        in_play = set(exclude)
        self.cards = [card for card in self.initialize_default_deck() if card not in in_play]

    def __repr__(self) -> str:
        return f"Deck({[repr(card) for card in self.cards]})"

    def __str__(self) -> str:
        return f"Deck of {len(self.cards)} cards"
