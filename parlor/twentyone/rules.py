"""
Hand scoring, dealer policy, and settlement for Twenty-One.

Scoring counts every Ace as 11 and then, Ace by Ace in hand order, knocks
10 off the total while the total is still over 21. This is a fixed greedy
correction and is kept exactly as is:

    score([A, K])     -> 21
    score([A, A, 9])  -> 21   (31, then 21; the second Ace stays at 11)
    score([K, Q, 5])  -> 25   (bust)

Settlement payout convention (chips returned to the player's balance):
    win  -> 2 x bet
    tie  -> bet
    loss -> nothing (the bet was already taken when it was placed)
"""

from enum import Enum, auto
from typing import Any, Sequence

from parlor.common.card import Card
from parlor.common.errors import InvalidBetError
from parlor.twentyone.constants import (
    ACE_ADJUSTMENT,
    BUST_LIMIT,
    STOPPING_SCORE,
    WIN_PAYOUT_MULTIPLIER,
)


class Winner(Enum):
    """Who took a settled round."""

    PLAYER = auto()
    DEALER = auto()
    TIE = auto()


def score(cards: Sequence[Card]) -> int:
    """
    Return the score of a hand.

    Args:
        cards: Cards held, in hand order.

    Returns:
        Total with each Ace counted as 1 only while the running total exceeds 21.
    """
    total = sum(card.value for card in cards)
    for card in cards:
        if card.is_ace and total > BUST_LIMIT:
            total -= ACE_ADJUSTMENT
    return total


def is_bust(cards: Sequence[Card]) -> bool:
    """Return True if the hand scores over 21."""
    return score(cards) > BUST_LIMIT


def should_hit(dealer_score: int) -> bool:
    """
    Dealer policy: hit below the stopping score, hold at or above it.

    >>> should_hit(16)
    True
    >>> should_hit(17)
    False
    """
    return dealer_score < STOPPING_SCORE


def determine_winner(
    player_cards: Sequence[Card], dealer_cards: Sequence[Card]
) -> Winner:
    """
    Compare two finished hands.

    A bust player loses even if the dealer also busts. Otherwise a bust dealer
    loses, and failing that the higher score wins. Equal scores tie.
    """
    if is_bust(player_cards):
        return Winner.DEALER
    if is_bust(dealer_cards):
        return Winner.PLAYER

    player_score = score(player_cards)
    dealer_score = score(dealer_cards)
    if player_score > dealer_score:
        return Winner.PLAYER
    if player_score == dealer_score:
        return Winner.TIE
    return Winner.DEALER


def settle_chips(balance: int, bet: int, winner: Winner) -> int:
    """Return the balance after paying out ``bet`` according to ``winner``."""
    if winner is Winner.PLAYER:
        return balance + WIN_PAYOUT_MULTIPLIER * bet
    if winner is Winner.TIE:
        return balance + bet
    return balance


def validate_bet(amount: Any, balance: int) -> int:
    """
    Check that ``amount`` can be wagered from ``balance``.

    Returns:
        The amount, unchanged

    Raises:
        InvalidBetError: If the amount is not a positive integer no larger than the balance
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidBetError(f"Bet must be a whole number of chips, got {amount!r}")
    if amount <= 0:
        raise InvalidBetError(f"Bet must be positive, got {amount}")
    if amount > balance:
        raise InvalidBetError(f"Bet of {amount} exceeds balance of {balance}")
    return amount
