"""
Event bus for DUNGEON DASH.

Two kinds of traffic share the bus:

* Input triggers (JUMP, FAST_FALL, ATTACK, START, RETRY) are queued by the
  window as keys are pressed and drained once per frame, before the
  simulation steps, so every press lands on a frame boundary.
* Run observability (lives, score, level, hits, game over) is emitted
  synchronously by the run controller while it steps, for the renderer,
  audio and the debug trace.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable
from enum import Enum, auto
import asyncio
import inspect
import logging
import time
from collections import defaultdict

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Input events (edge-triggered, one per key press)
    JUMP = auto()
    FAST_FALL = auto()
    ATTACK = auto()
    START = auto()
    RETRY = auto()

    # Run lifecycle
    RUN_STARTED = auto()
    RUN_RESET = auto()
    GAME_OVER = auto()

    # Gameplay observability
    PLAYER_JUMPED = auto()
    HAZARD_HIT = auto()
    HAZARDS_SMASHED = auto()
    ITEM_COLLECTED = auto()
    LIVES_CHANGED = auto()
    SCORE_CHANGED = auto()
    LEVEL_CHANGED = auto()

    @property
    def is_input(self) -> bool:
        return self in _INPUT_EVENTS


_INPUT_EVENTS = frozenset({
    EventType.JUMP,
    EventType.FAST_FALL,
    EventType.ATTACK,
    EventType.START,
    EventType.RETRY,
})


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type
        data: Event payload (character id, lives, score, ...)
        source: Component that emitted the event
        timestamp: Monotonic time of creation
    """
    type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.monotonic)


Handler = Callable[[Event], None] | Callable[[Event], Awaitable[None]]


class EventBus:
    """
    Routes input triggers into the run and run events out to listeners.

    ``emit`` dispatches immediately to synchronous handlers; the run
    controller uses it mid-frame. ``queue_event`` defers an event to the
    next ``process_queue``, which also awaits coroutine handlers.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)
        self._global_handlers: list[Handler] = []
        self._queue: asyncio.Queue[Event] = asyncio.Queue()

    def subscribe(self, event_type: EventType, handler: Handler) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Callback function (sync or async)

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type.name}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)

        return unsubscribe

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Subscribe to every event (used for the debug trace)."""
        self._global_handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._global_handlers:
                self._global_handlers.remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Dispatch now. Coroutine handlers only run for queued events."""
        for handler in self._handlers_for(event):
            if inspect.iscoroutinefunction(handler):
                continue
            self._call(handler, event)

    def queue_event(self, event: Event) -> None:
        """Defer an event to the next ``process_queue``."""
        self._queue.put_nowait(event)

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    async def process_queue(self) -> int:
        """Dispatch every queued event in arrival order.

        Returns:
            Number of events processed
        """
        processed = 0
        while not self._queue.empty():
            event = self._queue.get_nowait()
            coroutines = []
            for handler in self._handlers_for(event):
                if inspect.iscoroutinefunction(handler):
                    coroutines.append(handler(event))
                else:
                    self._call(handler, event)

            if coroutines:
                results = await asyncio.gather(*coroutines, return_exceptions=True)
                for result in results:
                    if isinstance(result, Exception):
                        logger.error(f"Error in async handler for {event.type.name}: {result}")
            processed += 1
        return processed

    def _handlers_for(self, event: Event) -> list[Handler]:
        return list(self._handlers.get(event.type, [])) + self._global_handlers

    def _call(self, handler: Handler, event: Event) -> None:
        try:
            handler(event)
        except Exception as e:
            logger.error(f"Error in handler for {event.type.name}: {e}")


def input_event(event_type: EventType, source: str = "keyboard", **data: Any) -> Event:
    """Create an input trigger event."""
    if not event_type.is_input:
        raise ValueError(f"{event_type.name} is not an input event")
    return Event(event_type, data=data, source=source)


def jump_event(source: str = "keyboard") -> Event:
    return input_event(EventType.JUMP, source)


def fast_fall_event(source: str = "keyboard") -> Event:
    return input_event(EventType.FAST_FALL, source)


def attack_event(source: str = "keyboard") -> Event:
    return input_event(EventType.ATTACK, source)
