"""
Event system for the parlor engines.

Engines publish what happens during a game (squares marked, cards dealt,
rounds settled) through an `EventEmitter` they own. Presentation layers
subscribe to those events instead of polling engine state.
"""

from collections import defaultdict
from typing import Any, Callable, Dict, Union
import logging
from enum import Enum

logger = logging.getLogger("parlor.events")


class EventPriority(Enum):
    """Order in which handlers for the same event run, highest first."""

    LOW = 0
    NORMAL = 1
    HIGH = 2
    CRITICAL = 3


class EventEmitter:
    """
    Publishes one engine's events to its subscribers.

    Each engine holds its own emitter, so subscribers only hear about the
    game they registered with. ``emit`` calls every matching handler before
    returning, on the caller's thread, ordered by `EventPriority` and then by
    subscription order. A handler that raises is logged and skipped.
    """

    def __init__(self):
        self._listeners = defaultdict(list)
        self._global_listeners = []

    @staticmethod
    def _insert_by_priority(handlers: list, handler: Dict[str, Any]) -> None:
        # Higher priority first; equal priorities keep subscription order
        for i, existing in enumerate(handlers):
            if existing["priority"] < handler["priority"]:
                handlers.insert(i, handler)
                break
        else:
            handlers.append(handler)

    def on(
        self,
        event_type: Union[str, Enum],
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """
        Call ``callback(data)`` every time ``event_type`` is emitted.

        An enum member and its name address the same event, so
        ``EngineEventType.CARD_DEALT`` and ``"CARD_DEALT"`` are interchangeable.

        Returns:
            A function that removes this one subscription when called
        """
        if isinstance(event_type, Enum):
            event_type = event_type.name

        handler = {"callback": callback, "priority": priority.value}
        self._insert_by_priority(self._listeners[event_type], handler)

        def unsubscribe():
            handlers = self._listeners[event_type]
            for i, existing in enumerate(handlers):
                if existing is handler:
                    handlers.pop(i)
                    break

        return unsubscribe

    def once(
        self,
        event_type: Union[str, Enum],
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """
        Like `on`, but the subscription ends after its first delivery.

        The subscription is dropped even when ``callback`` raises.
        """
        unsubscribe_ref = []

        def one_time_handler(event_data):
            try:
                callback(event_data)
            finally:
                if unsubscribe_ref:
                    unsubscribe_ref[0]()

        unsubscribe_ref.append(self.on(event_type, one_time_handler, priority))
        return unsubscribe_ref[0]

    def on_any(
        self, callback: Callable, priority: EventPriority = EventPriority.NORMAL
    ) -> Callable:
        """
        Receive every event this emitter publishes.

        ``callback`` gets a single ``(event_name, data)`` pair, and runs after
        the handlers registered for that specific event.

        Returns:
            A function that removes this subscription when called
        """
        handler = {"callback": callback, "priority": priority.value}
        self._insert_by_priority(self._global_listeners, handler)

        def unsubscribe():
            for i, existing in enumerate(self._global_listeners):
                if existing is handler:
                    self._global_listeners.pop(i)
                    break

        return unsubscribe

    def emit(self, event_type: Union[str, Enum], data: Dict[str, Any]) -> None:
        """
        Deliver ``data`` to the subscribers of ``event_type``, then to `on_any` subscribers.
        """
        if isinstance(event_type, Enum):
            event_type = event_type.name

        # Snapshot so handlers may unsubscribe while being called
        handlers_to_call = [
            (handler["callback"], data) for handler in self._listeners.get(event_type, [])
        ]
        handlers_to_call.extend(
            (handler["callback"], (event_type, data)) for handler in self._global_listeners
        )

        for callback, args in handlers_to_call:
            try:
                callback(args)
            except Exception as e:
                logger.error(
                    f"Error in event handler for {event_type}: {e}", exc_info=True
                )

    def remove_all_listeners(self, event_type: Union[str, Enum, None] = None) -> None:
        """
        Drop the subscribers of ``event_type``, or of everything when it is None.

        `on_any` subscribers are only dropped by the no-argument form.
        """
        if event_type is None:
            self._listeners.clear()
            self._global_listeners.clear()
        else:
            if isinstance(event_type, Enum):
                event_type = event_type.name
            self._listeners[event_type].clear()


class EngineEventType(Enum):
    """
    Events published by the Tic Tac Toe and Twenty-One engines.
    """

    GAME_STARTED = "game_started"
    GAME_ENDED = "game_ended"
    ROUND_STARTED = "round_started"
    ROUND_ENDED = "round_ended"

    # Tic Tac Toe
    SQUARE_MARKED = "square_marked"

    # Twenty-One
    PLAYER_BET = "player_bet"
    PLAYER_ACTION = "player_action"
    CARD_DEALT = "card_dealt"
    SHUFFLE = "shuffle"
    HAND_BUSTED = "hand_busted"
    DEALER_ACTION = "dealer_action"
    BANKROLL_UPDATED = "bankroll_updated"
