"""
Event system for the treasure chest engine.

Transitions stay pure with respect to game state, but they announce what
happened (a correct guess, a chest formed, the game ending) on a process-wide
event bus so that a presentation layer can show notifications without
inspecting state diffs.
"""

from collections import defaultdict
from typing import Any, Callable, Dict, Union
import threading
import logging
from enum import Enum

# Create a logger for the event system
logger = logging.getLogger("treasurechest.events")


class EventPriority(Enum):
    """Priority levels for event handlers."""

    LOW = 0
    NORMAL = 1
    HIGH = 2
    CRITICAL = 3


def _event_key(event_type: Union[str, Enum]) -> str:
    if isinstance(event_type, Enum):
        return event_type.name
    return event_type


class EventEmitter:
    """
    Event emitter with priority-ordered subscriptions.

    Features:
    - Subscribing by string or enum event type
    - Once-only subscriptions
    - Catch-all subscriptions receiving ``(event_type, data)``
    - Thread-safe listener bookkeeping
    """

    def __init__(self):
        """Initialize the event emitter."""
        self._listeners = defaultdict(list)
        self._global_listeners = []
        self._listener_lock = threading.RLock()

    @staticmethod
    def _insert_by_priority(handlers: list, handler: Dict[str, Any]) -> None:
        # Higher priorities run first; equal priorities keep subscription order
        for i, existing in enumerate(handlers):
            if existing["priority"] < handler["priority"]:
                handlers.insert(i, handler)
                return
        handlers.append(handler)

    @staticmethod
    def _remove_callback(handlers: list, callback: Callable) -> None:
        for i, existing in enumerate(handlers):
            if existing["callback"] == callback:
                handlers.pop(i)
                return

    def on(
        self,
        event_type: Union[str, Enum],
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to subscribe to (string or enum)
            callback: Function to call when event occurs, signature: fn(event_data)
            priority: Priority level for this handler

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        key = _event_key(event_type)
        handler = {"callback": callback, "priority": priority.value}

        with self._listener_lock:
            self._insert_by_priority(self._listeners[key], handler)

        def unsubscribe():
            with self._listener_lock:
                self._remove_callback(self._listeners[key], callback)

        return unsubscribe

    def once(
        self,
        event_type: Union[str, Enum],
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """
        Subscribe to an event type for a single occurrence.

        Returns:
            Unsubscribe function that can be called to remove this subscription
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
        Subscribe to all events.

        Args:
            callback: Function to call for any event, signature: fn((event_type, event_data))
            priority: Priority level for this handler

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        handler = {"callback": callback, "priority": priority.value}

        with self._listener_lock:
            self._insert_by_priority(self._global_listeners, handler)

        def unsubscribe():
            with self._listener_lock:
                self._remove_callback(self._global_listeners, callback)

        return unsubscribe

    def emit(self, event_type: Union[str, Enum], data: Dict[str, Any]) -> None:
        """
        Emit an event to all registered listeners.

        A failing handler is logged and does not stop the remaining handlers.

        Args:
            event_type: The type of event to emit
            data: The data to include with the event
        """
        key = _event_key(event_type)

        with self._listener_lock:
            handlers_to_call = [
                (handler["callback"], data) for handler in self._listeners.get(key, [])
            ]
            handlers_to_call.extend(
                (handler["callback"], (key, data)) for handler in self._global_listeners
            )

        # Call handlers outside of the lock so they may subscribe or unsubscribe
        for callback, args in handlers_to_call:
            try:
                callback(args)
            except Exception as e:
                logger.error("Error in event handler for %s: %s", key, e, exc_info=True)

    def listener_count(self, event_type: Union[str, Enum, None] = None) -> int:
        """Number of handlers for one event type, or of all handlers if None."""
        with self._listener_lock:
            if event_type is None:
                return sum(len(h) for h in self._listeners.values()) + len(
                    self._global_listeners
                )
            return len(self._listeners.get(_event_key(event_type), []))

    def remove_all_listeners(self, event_type: Union[str, Enum, None] = None) -> None:
        """
        Remove all listeners for a specific event type or all events.

        Args:
            event_type: Optional event type. If None, removes all listeners for all events.
        """
        with self._listener_lock:
            if event_type is None:
                self._listeners.clear()
                self._global_listeners.clear()
            else:
                self._listeners[_event_key(event_type)].clear()


class EventBus:
    """
    Global event bus for the application.

    This singleton class provides a centralized event emitter that can be
    accessed from anywhere in the application.
    """

    _instance = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> EventEmitter:
        """
        Get the singleton instance of the EventBus.

        Returns:
            EventEmitter instance
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = EventEmitter()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton so the next ``get_instance`` starts fresh."""
        with cls._lock:
            cls._instance = None


class EngineEventType(Enum):
    """
    Event types emitted by the treasure chest engine.

    Every payload carries the ``game_id`` of the state that produced it.
    """

    # Game lifecycle
    GAME_CREATED = "game_created"
    CARDS_DEALT = "cards_dealt"
    GAME_ENDED = "game_ended"

    # Guess protocol
    PLAYER_SELECTED = "player_selected"
    GUESS_CORRECT = "guess_correct"
    GUESS_INCORRECT = "guess_incorrect"
    CARDS_TRANSFERRED = "cards_transferred"
    TREASURE_CHEST_FORMED = "treasure_chest_formed"

    # Turn handling
    TURN_KEPT = "turn_kept"
    TURN_PASSED = "turn_passed"

    # Rejected or ignored input
    ACTION_IGNORED = "action_ignored"
    ERROR = "error"
