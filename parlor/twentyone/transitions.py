"""
State transition functions for the Twenty-One game.

This module provides pure functions for transitioning between game states,
without modifying the original state objects. Cards are passed in by the
caller; drawing them from a deck is the engine's job.
"""

from dataclasses import replace

from parlor.common.card import Card
from parlor.common.errors import InvalidActionError
from parlor.twentyone import rules
from parlor.twentyone.constants import INITIAL_CHIP_COUNT
from parlor.twentyone.state import (
    GameStage,
    GameState,
    ParticipantState,
    RoundOutcome,
)


def _require_stage(state: GameState, *stages: GameStage) -> None:
    if state.stage not in stages:
        expected = " or ".join(stage.name for stage in stages)
        raise InvalidActionError(
            f"Expected the game to be {expected}, but it is {state.stage.name}"
        )


class StateTransitionEngine:
    """
    Pure functions for state transitions in Twenty-One.

    This class contains static methods that implement game state transitions.
    Each method takes a state and returns a new state, without modifying the
    original.
    """

    @staticmethod
    def place_bet(state: GameState, amount: int) -> GameState:
        """
        Take the bet from the balance and clear both hands for dealing.

        Args:
            state: Current game state
            amount: Chips to wager

        Returns:
            New game state in the DEALING stage

        Raises:
            InvalidActionError: If the game is not taking bets
            InvalidBetError: If the amount is not a positive integer within the balance
        """
        _require_stage(state, GameStage.BETTING)
        rules.validate_bet(amount, state.balance)

        return replace(
            state,
            balance=state.balance - amount,
            bet=amount,
            player=ParticipantState(name=state.player.name),
            dealer=ParticipantState(name=state.dealer.name),
            stage=GameStage.DEALING,
        )

    @staticmethod
    def deal_card(state: GameState, card: Card, to_dealer: bool = False) -> GameState:
        """
        Add a card to the player's or the dealer's hand.

        Either side may receive cards while dealing; afterwards only the side
        whose turn it is may.

        Args:
            state: Current game state
            card: Card to deal
            to_dealer: Deal to the dealer instead of the player

        Returns:
            New game state with the card dealt
        """
        if to_dealer:
            _require_stage(state, GameStage.DEALING, GameStage.DEALER_TURN)
            return replace(state, dealer=state.dealer.with_card(card))

        _require_stage(state, GameStage.DEALING, GameStage.PLAYER_TURN)
        return replace(state, player=state.player.with_card(card))

    @staticmethod
    def finish_deal(state: GameState) -> GameState:
        """
        Hand control to the player once both sides hold their opening cards.
        """
        _require_stage(state, GameStage.DEALING)
        if len(state.player.cards) < 2 or len(state.dealer.cards) < 2:
            raise InvalidActionError("Both hands need two cards before play begins")
        return replace(state, stage=GameStage.PLAYER_TURN)

    @staticmethod
    def stay(state: GameState) -> GameState:
        """
        End the player's turn and pass play to the dealer.
        """
        _require_stage(state, GameStage.PLAYER_TURN)
        return replace(state, stage=GameStage.DEALER_TURN)

    @staticmethod
    def settle(state: GameState) -> GameState:
        """
        Compare hands, pay out the bet and close the round.

        Settlement happens after the dealer's turn, or straight from the
        player's turn when the player has bust.

        Returns:
            New game state back in BETTING, or OUT_OF_CHIPS if the balance is spent
        """
        if state.stage is GameStage.PLAYER_TURN and not state.player.is_bust:
            raise InvalidActionError("The dealer has not played yet")
        _require_stage(state, GameStage.PLAYER_TURN, GameStage.DEALER_TURN)

        winner = rules.determine_winner(state.player.cards, state.dealer.cards)
        balance = rules.settle_chips(state.balance, state.bet, winner)
        outcome = RoundOutcome(
            winner=winner,
            player_score=state.player.score,
            dealer_score=state.dealer.score,
            player_bust=state.player.is_bust,
            dealer_bust=state.dealer.is_bust,
            bet=state.bet,
            balance=balance,
        )

        return replace(
            state,
            balance=balance,
            rounds_played=state.rounds_played + 1,
            last_outcome=outcome,
            stage=GameStage.OUT_OF_CHIPS if balance == 0 else GameStage.BETTING,
        )

    @staticmethod
    def restart(state: GameState) -> GameState:
        """
        Give a broke player a fresh stack of chips.
        """
        _require_stage(state, GameStage.OUT_OF_CHIPS)
        return replace(
            state,
            balance=INITIAL_CHIP_COUNT,
            bet=0,
            player=ParticipantState(name=state.player.name),
            dealer=ParticipantState(name=state.dealer.name),
            last_outcome=None,
            stage=GameStage.BETTING,
        )
