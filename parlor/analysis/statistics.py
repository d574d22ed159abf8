"""
Statistical checks for the Twenty-One deck and dealer policy.

This module provides tools for checking that the deck draws uniformly and for
measuring how often the dealer's fixed policy finishes on each total.
"""

import logging
import random
from typing import Dict, Optional, Sequence

import numpy as np

from parlor.common.card import Card, Face, Suit
from parlor.common.deck import Deck
from parlor.twentyone.constants import BUST_LIMIT, STOPPING_SCORE
from parlor.twentyone.rules import is_bust, score, should_hit

logger = logging.getLogger("parlor.analysis")

_SUITS = list(Suit)
_FACES = list(Face)
DECK_SIZE = len(_SUITS) * len(_FACES)


def card_index(card: Card) -> int:
    """Return the card's position (0-51) in canonical suit-major order."""
    return _SUITS.index(card.suit) * len(_FACES) + _FACES.index(card.face)


def calculate_chi_square(
    observed_values: Sequence[float], expected_values: Sequence[float]
) -> float:
    """
    Calculate the chi-square statistic given observed and expected values.

    :param observed_values: Observed counts
    :param expected_values: Expected counts
    :return: The calculated chi-square statistic
    :raises ValueError: If the two sequences do not have the same length
    """
    if len(observed_values) != len(expected_values):
        raise ValueError("Observed and expected value lists must have the same length.")

    observed = np.asarray(observed_values, dtype=float)
    expected = np.asarray(expected_values, dtype=float)
    return float(np.sum((observed - expected) ** 2 / expected))


def first_draw_frequencies(
    num_trials: int, rng: Optional[random.Random] = None
) -> np.ndarray:
    """
    Count which card comes out first across many freshly refreshed decks.

    Args:
        num_trials: Number of draws to make
        rng: Source of randomness for the deck

    Returns:
        Array of 52 counts, indexed by ``card_index``
    """
    deck = Deck(rng=rng)
    indices = np.empty(num_trials, dtype=np.int64)
    for trial in range(num_trials):
        deck.refresh()
        indices[trial] = card_index(deck.draw_one())
    return np.bincount(indices, minlength=DECK_SIZE)


def draw_uniformity(num_trials: int, rng: Optional[random.Random] = None) -> float:
    """
    Chi-square statistic of first-draw counts against a uniform expectation.

    With 51 degrees of freedom, values far above ~70 suggest the deck is not
    drawing uniformly.
    """
    counts = first_draw_frequencies(num_trials, rng)
    expected = np.full(DECK_SIZE, num_trials / DECK_SIZE)
    chi_square = calculate_chi_square(counts, expected)
    logger.debug("Draw uniformity over %d trials: chi-square %.2f", num_trials, chi_square)
    return chi_square


def simulate_dealer_totals(
    num_rounds: int, rng: Optional[random.Random] = None
) -> Dict[str, float]:
    """
    Play the dealer's policy out from fresh two-card deals.

    Args:
        num_rounds: Number of dealer hands to play
        rng: Source of randomness for the deck

    Returns:
        Fraction of hands finishing on each total 17-21, plus ``"bust"``
    """
    if num_rounds <= 0:
        raise ValueError("num_rounds must be positive")

    deck = Deck(rng=rng)
    finals = np.empty(num_rounds, dtype=np.int64)
    for round_number in range(num_rounds):
        deck.refresh()
        cards = list(deck.draw_two())
        while should_hit(score(cards)) and not is_bust(cards):
            cards.append(deck.draw_one())
        finals[round_number] = score(cards)

    totals = range(STOPPING_SCORE, BUST_LIMIT + 1)
    distribution = {str(total): float(np.mean(finals == total)) for total in totals}
    distribution["bust"] = float(np.mean(finals > BUST_LIMIT))
    return distribution
