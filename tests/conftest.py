"""
Pytest configuration and shared fixtures.

Provides shorthand for building cards and stacked decks so that deals can be
scripted card by card.
"""

import random

import pytest

from parlor.common.card import Card, Face, Suit
from parlor.common.deck import Deck

_FACES = {face.value[0] if face.value != "10" else "10": face for face in Face}
_SUITS = {suit.value[0]: suit for suit in Suit}


def parse_card(text: str) -> Card:
    """
    Build a card from shorthand: face then suit letter.

    Examples: ``"AS"`` Ace of Spades, ``"10H"`` Ten of Hearts, ``"KD"`` King of Diamonds.
    """
    return Card(_SUITS[text[-1]], _FACES[text[:-1]])


class FirstCardRandom(random.Random):
    """Random source whose ``randrange`` always picks the first position."""

    def randrange(self, *args, **kwargs):
        return 0


@pytest.fixture
def card():
    """Expose parse_card as a fixture."""
    return parse_card


@pytest.fixture
def cards():
    """Build a list of cards from shorthand strings."""

    def build(*texts: str):
        return [parse_card(text) for text in texts]

    return build


@pytest.fixture
def stacked_deck():
    """Build a deck that deals the given cards in the order listed."""

    def build(*texts: str) -> Deck:
        return Deck([parse_card(text) for text in texts], rng=FirstCardRandom())

    return build
