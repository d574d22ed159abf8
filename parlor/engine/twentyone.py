"""
Twenty-One engine implementation.

This module provides the TwentyOneEngine class, which implements the
GameEngine interface for a player betting chips against a dealer who hits
below 17 and holds otherwise.
"""

from typing import Any, Dict, Optional, Tuple, Union
import logging
import random

from parlor.common.card import Card
from parlor.common.deck import Deck
from parlor.common.errors import EmptyDeckError, GameError, InvalidActionError
from parlor.engine.base import GameEngine
from parlor.events import EngineEventType, EventEmitter
from parlor.twentyone.rules import should_hit
from parlor.twentyone.state import (
    GameOutcome,
    GameStage,
    GameState,
    ParticipantState,
    PlayerAction,
    RoundOutcome,
)
from parlor.twentyone.transitions import StateTransitionEngine

logger = logging.getLogger("parlor.engine.twentyone")


class TwentyOneEngine(GameEngine):
    """
    Engine implementation for Twenty-One.

    A round runs: ``apply_bet`` deals two cards to each side, the player then
    hits or stays through ``apply_player_action``, and ``run_dealer_turn``
    plays the dealer out and settles. A player who busts is settled at once
    and the dealer does not play.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        rng: Optional[random.Random] = None,
        emitter: Optional[EventEmitter] = None,
        deck: Optional[Deck] = None,
    ):
        """
        Initialize the Twenty-One engine.

        Args:
            config: Configuration options (names, seed)
            rng: Source of randomness for drawing cards
            emitter: Event emitter to publish game events on
            deck: Deck to deal from. Defaults to a full deck drawing from ``rng``.
        """
        super().__init__(config, rng, emitter)
        self.deck = deck if deck is not None else Deck(rng=self.rng)
        self.state = self._new_state()

    def _new_state(self) -> GameState:
        return GameState(
            player=ParticipantState(name=self.config.get("player_name", "Player")),
            dealer=ParticipantState(name=self.config.get("dealer_name", "Dealer")),
        )

    def start_game(self) -> None:
        """
        Start a new game of Twenty-One with a full starting balance.
        """
        self.state = self._new_state()
        logger.debug("Started game %s", self.state.id)
        self.event_emitter.emit(
            EngineEventType.GAME_STARTED,
            {
                "game_id": self.state.id,
                "balance": self.state.balance,
                "timestamp": self.state.timestamp,
            },
        )

    def apply_bet(self, amount: int) -> None:
        """
        Wager ``amount`` chips and deal the opening hands.

        Raises:
            InvalidBetError: If the amount is not a positive integer within the balance
            InvalidActionError: If the game is not taking bets
            EmptyDeckError: If the deck cannot supply the opening cards. The
                bet is not taken and the deck is refreshed, so the bet can be
                placed again.
        """
        try:
            state = StateTransitionEngine.place_bet(self.state, amount)
        except GameError as e:
            logger.debug("Rejected bet %r: %s", amount, e)
            raise

        # Draw before committing so a short deck leaves the game taking bets
        try:
            player_cards = self.deck.draw_two()
            dealer_cards = self.deck.draw_two()
        except EmptyDeckError:
            logger.warning("Deck ran out dealing the opening hands; bet not taken")
            self._refresh_deck()
            raise
        self.state = state

        self.event_emitter.emit(
            EngineEventType.ROUND_STARTED,
            {"game_id": self.state.id, "round_number": self.state.rounds_played + 1},
        )
        self.event_emitter.emit(
            EngineEventType.PLAYER_BET,
            {"game_id": self.state.id, "amount": amount},
        )
        self._emit_bankroll()

        for card in player_cards:
            self._deal(card, to_dealer=False)
        first, hole = dealer_cards
        self._deal(first, to_dealer=True)
        self._deal(hole, to_dealer=True, hidden=True)
        self.state = StateTransitionEngine.finish_deal(self.state)

    def apply_player_action(self, action: Union[PlayerAction, str]) -> ParticipantState:
        """
        Hit or stay on the player's hand.

        A hit that takes the player over 21 settles the round immediately.

        Args:
            action: A PlayerAction, or ``"h"``/``"hit"``/``"s"``/``"stay"``

        Returns:
            The player's hand after the action

        Raises:
            InvalidActionError: If the action is unrecognized or it is not the player's turn
            EmptyDeckError: If the deck runs out on a hit. The deck is refreshed
                without the cards in play and the turn continues.
        """
        action = PlayerAction.parse(action)
        if self.state.stage is not GameStage.PLAYER_TURN:
            logger.debug("Rejected %s during %s", action.name, self.state.stage.name)
            raise InvalidActionError(
                f"Cannot {action.value} while the game is {self.state.stage.name}"
            )

        self.event_emitter.emit(
            EngineEventType.PLAYER_ACTION,
            {"game_id": self.state.id, "action": action.name},
        )

        if action is PlayerAction.STAY:
            self.state = StateTransitionEngine.stay(self.state)
            return self.state.player

        self._deal(self._draw_one(), to_dealer=False)
        player = self.state.player
        if player.is_bust:
            self.event_emitter.emit(
                EngineEventType.HAND_BUSTED,
                {"game_id": self.state.id, "name": player.name, "score": player.score},
            )
            self._settle()
        return player

    def run_dealer_turn(self) -> ParticipantState:
        """
        Play the dealer's hand out and settle the round.

        The dealer draws while below the stopping score and holds once at or
        above it, or on bust.

        Returns:
            The dealer's final hand

        Raises:
            InvalidActionError: If it is not the dealer's turn
            EmptyDeckError: If the deck runs out while the dealer draws. The deck
                is refreshed without the cards in play, so the turn can be run again.
        """
        if self.state.stage is not GameStage.DEALER_TURN:
            raise InvalidActionError(
                f"The dealer cannot play while the game is {self.state.stage.name}"
            )

        while should_hit(self.state.dealer.score) and not self.state.dealer.is_bust:
            self.event_emitter.emit(
                EngineEventType.DEALER_ACTION,
                {"game_id": self.state.id, "action": "HIT", "score": self.state.dealer.score},
            )
            self._deal(self._draw_one(), to_dealer=True)

        dealer = self.state.dealer
        if dealer.is_bust:
            self.event_emitter.emit(
                EngineEventType.HAND_BUSTED,
                {"game_id": self.state.id, "name": dealer.name, "score": dealer.score},
            )
        else:
            self.event_emitter.emit(
                EngineEventType.DEALER_ACTION,
                {"game_id": self.state.id, "action": "HOLD", "score": dealer.score},
            )
        self._settle()
        return dealer

    def restart(self) -> None:
        """
        Restore the starting balance after the player has run out of chips.

        Raises:
            InvalidActionError: If the player still has chips
        """
        self.state = StateTransitionEngine.restart(self.state)
        logger.debug("Restarted game %s", self.state.id)
        self.event_emitter.emit(
            EngineEventType.GAME_STARTED,
            {
                "game_id": self.state.id,
                "balance": self.state.balance,
                "timestamp": self.state.timestamp,
            },
        )
        self._emit_bankroll()

    def round_outcome(self) -> Optional[RoundOutcome]:
        """
        Return the result of the last settled round, or None before the first.
        """
        return self.state.last_outcome

    def game_outcome(self) -> GameOutcome:
        return GameOutcome(
            is_over=self.state.stage is GameStage.OUT_OF_CHIPS,
            balance=self.state.balance,
        )

    def _draw_one(self) -> Card:
        try:
            return self.deck.draw_one()
        except EmptyDeckError:
            logger.warning("Deck ran out mid-round; refreshed around the cards in play")
            self._refresh_deck(self.state.player.cards + self.state.dealer.cards)
            raise

    def _refresh_deck(self, in_play: Tuple[Card, ...] = ()) -> None:
        self.deck.refresh(exclude=in_play)
        self.event_emitter.emit(
            EngineEventType.SHUFFLE, {"game_id": self.state.id, "cards": self.deck.size}
        )

    def _deal(self, card: Card, to_dealer: bool, hidden: bool = False) -> None:
        self.state = StateTransitionEngine.deal_card(self.state, card, to_dealer)
        self.event_emitter.emit(
            EngineEventType.CARD_DEALT,
            {
                "game_id": self.state.id,
                "to": "dealer" if to_dealer else "player",
                "card": None if hidden else str(card),
            },
        )

    def _settle(self) -> None:
        self.state = StateTransitionEngine.settle(self.state)
        outcome = self.state.last_outcome
        logger.info(
            "Round %d settled: %s wins (player %d, dealer %d), balance %d",
            self.state.rounds_played,
            outcome.winner.name,
            outcome.player_score,
            outcome.dealer_score,
            outcome.balance,
        )

        self.deck.refresh()
        self.event_emitter.emit(
            EngineEventType.SHUFFLE, {"game_id": self.state.id, "cards": self.deck.size}
        )
        self.event_emitter.emit(
            EngineEventType.ROUND_ENDED,
            {
                "game_id": self.state.id,
                "round_number": self.state.rounds_played,
                "winner": outcome.winner.name,
                "player_score": outcome.player_score,
                "dealer_score": outcome.dealer_score,
            },
        )
        self._emit_bankroll()
        if self.state.stage is GameStage.OUT_OF_CHIPS:
            logger.info("Player is out of chips")
            self.event_emitter.emit(
                EngineEventType.GAME_ENDED,
                {"game_id": self.state.id, "balance": self.state.balance},
            )

    def _emit_bankroll(self) -> None:
        self.event_emitter.emit(
            EngineEventType.BANKROLL_UPDATED,
            {"game_id": self.state.id, "balance": self.state.balance, "bet": self.state.bet},
        )
