"""
Twenty-One card game module.

This module provides hand scoring, the dealer's stopping policy, settlement
and the state transitions for Twenty-One.
"""

from parlor.twentyone.rules import (
    Winner as Winner,
    determine_winner as determine_winner,
    is_bust as is_bust,
    score as score,
    settle_chips as settle_chips,
    should_hit as should_hit,
)
from parlor.twentyone.state import (
    GameOutcome as GameOutcome,
    GameStage as GameStage,
    GameState as GameState,
    ParticipantState as ParticipantState,
    PlayerAction as PlayerAction,
    RoundOutcome as RoundOutcome,
)
from parlor.twentyone.transitions import StateTransitionEngine as StateTransitionEngine

__all__ = [
    "GameOutcome",
    "GameStage",
    "GameState",
    "ParticipantState",
    "PlayerAction",
    "RoundOutcome",
    "StateTransitionEngine",
    "Winner",
    "determine_winner",
    "is_bust",
    "score",
    "settle_chips",
    "should_hit",
]
