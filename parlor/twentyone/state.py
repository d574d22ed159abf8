"""
Immutable state models for the Twenty-One game.

This module provides dataclasses for representing the state of a Twenty-One
game in an immutable manner. These classes are designed to be used with pure
transition functions that create new state instances rather than modifying
existing ones.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union
from enum import Enum, auto
import uuid
import time

from parlor.common.card import Card
from parlor.common.errors import InvalidActionError
from parlor.twentyone.constants import INITIAL_CHIP_COUNT
from parlor.twentyone import rules
from parlor.twentyone.rules import Winner


class PlayerAction(Enum):
    """Actions available to the player on their turn."""

    HIT = "hit"
    STAY = "stay"

    @classmethod
    def parse(cls, value: Union["PlayerAction", str]) -> "PlayerAction":
        """
        Interpret an action given as an enum member or as player input.

        Accepts ``h``/``hit`` and ``s``/``stay`` in any case.

        Raises:
            InvalidActionError: If the value names no action
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip().lower()
            for action in cls:
                if text in (action.value, action.value[0]):
                    return action
        raise InvalidActionError(f"Unrecognized action: {value!r}")


class GameStage(Enum):
    """Possible stages of a Twenty-One game."""

    BETTING = auto()
    DEALING = auto()
    PLAYER_TURN = auto()
    DEALER_TURN = auto()
    OUT_OF_CHIPS = auto()


@dataclass(frozen=True)
class ParticipantState:
    """
    Immutable representation of one side's hand.

    Attributes:
        name: Display name
        cards: Cards held, in the order they were dealt
    """

    name: str = "Player"
    cards: Tuple[Card, ...] = ()

    @property
    def score(self) -> int:
        return rules.score(self.cards)

    @property
    def is_bust(self) -> bool:
        return rules.is_bust(self.cards)

    def with_card(self, card: Card) -> "ParticipantState":
        return ParticipantState(name=self.name, cards=self.cards + (card,))

    def to_dict(self, hide_hole_card: bool = False) -> Dict[str, Any]:
        if hide_hole_card and self.cards:
            return {
                "name": self.name,
                "cards": [str(self.cards[0]), None],
                "score": self.cards[0].value,
                "is_bust": False,
            }
        return {
            "name": self.name,
            "cards": [str(card) for card in self.cards],
            "score": self.score,
            "is_bust": self.is_bust,
        }


@dataclass(frozen=True)
class RoundOutcome:
    """
    Result of a settled round.

    Attributes:
        winner: Who took the round
        player_score: Player's final score
        dealer_score: Dealer's final score
        player_bust: Whether the player went over 21
        dealer_bust: Whether the dealer went over 21
        bet: Chips wagered on the round
        balance: Player's balance after settlement
    """

    winner: Winner
    player_score: int
    dealer_score: int
    player_bust: bool
    dealer_bust: bool
    bet: int
    balance: int


@dataclass(frozen=True)
class GameOutcome:
    """Whether the player has run out of chips, and the current balance."""

    is_over: bool
    balance: int


@dataclass(frozen=True)
class GameState:
    """
    Immutable representation of the Twenty-One game state.

    Attributes:
        id: Unique identifier for this game
        stage: Current stage of the game
        player: Player's hand
        dealer: Dealer's hand
        balance: Chips the player holds, not counting the current bet
        bet: Chips wagered on the current (or last) round
        rounds_played: Number of settled rounds
        last_outcome: Result of the most recently settled round
        timestamp: Time when this state was created
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    stage: GameStage = GameStage.BETTING
    player: ParticipantState = field(default_factory=ParticipantState)
    dealer: ParticipantState = field(
        default_factory=lambda: ParticipantState(name="Dealer")
    )
    balance: int = INITIAL_CHIP_COUNT
    bet: int = 0
    rounds_played: int = 0
    last_outcome: Optional[RoundOutcome] = None
    timestamp: float = field(default_factory=lambda: time.time())

    def to_dict(self, reveal_dealer: Optional[bool] = None) -> Dict[str, Any]:
        """
        Convert the game state to a dictionary suitable for rendering.

        Args:
            reveal_dealer: Show the dealer's hole card. By default it stays
                           hidden only during the player's turn.

        Returns:
            Dictionary representation of the game state
        """
        if reveal_dealer is None:
            reveal_dealer = self.stage is not GameStage.PLAYER_TURN
        outcome = self.last_outcome
        return {
            "id": self.id,
            "stage": self.stage.name,
            "balance": self.balance,
            "bet": self.bet,
            "rounds_played": self.rounds_played,
            "player": self.player.to_dict(),
            "dealer": self.dealer.to_dict(hide_hole_card=not reveal_dealer),
            "last_winner": outcome.winner.name if outcome else None,
            "timestamp": self.timestamp,
        }
