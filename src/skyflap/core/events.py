"""
Event bus system for SKYFLAP.

Provides pub/sub messaging between the simulation core and its
presentation collaborators (renderer, audio, window).
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
import logging
import time
from collections import defaultdict, deque

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Input events
    JUMP = auto()

    # Lifecycle events
    PHASE_CHANGED = auto()

    # Power-up events
    POWER_UP_STARTED = auto()
    POWER_UP_ENDED = auto()

    # Audio events
    SOUND_PLAY = auto()

    # System events
    TICK = auto()  # Frame tick
    SHUTDOWN = auto()


class SoundCue(Enum):
    """Named sound cues requested by the engine."""
    START = "start"
    GAME_OVER = "game_over"
    BONUS = "bonus"
    PIPE_PASS = "pipe_pass"
    CELEBRATION = "celebration"


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type (EventType enum or custom string)
        data: Event payload
        source: Component that emitted the event
        timestamp: When event was created
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)


Handler = Callable[[Event], None]


class EventBus:
    """
    Synchronous pub/sub hub between the engine and its collaborators.

    Handlers run in subscription order, type-specific ones first, then
    wildcard ones. A handler that raises is logged and skipped so one
    broken collaborator cannot stall a tick. The most recent events are
    kept for inspection.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._wildcard: list[Handler] = []
        self._history: deque[Event] = deque(maxlen=history_limit)

    def subscribe(self, event_type: EventType | str, handler: Handler) -> Callable[[], None]:
        """Register ``handler`` for one event type; returns its unsubscribe callback."""
        bucket = self._handlers[event_type]
        bucket.append(handler)
        logger.debug(f"{getattr(handler, '__qualname__', handler)} listening for {event_type}")
        return lambda: self._detach(bucket, handler)

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Register ``handler`` for every event type."""
        self._wildcard.append(handler)
        return lambda: self._detach(self._wildcard, handler)

    @staticmethod
    def _detach(bucket: list[Handler], handler: Handler) -> None:
        if handler in bucket:
            bucket.remove(handler)

    def emit(self, event: Event) -> None:
        """Record ``event`` and deliver it to every matching handler now."""
        self._history.append(event)

        for handler in [*self._handlers.get(event.type, ()), *self._wildcard]:
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.type}: {e}")

    def get_history(
        self,
        event_type: EventType | str | None = None,
        limit: int = 10,
    ) -> list[Event]:
        """Most recent ``limit`` events, oldest first, optionally of one type."""
        matching = [e for e in self._history if event_type is None or e.type == event_type]
        return matching[-limit:] if limit > 0 else []


# Convenience functions for creating common events
def jump_event(source: str = "input") -> Event:
    """Create a jump input event."""
    return Event(EventType.JUMP, source=source)


def sound_event(cue: SoundCue, source: str = "engine") -> Event:
    """Create a sound cue request."""
    return Event(EventType.SOUND_PLAY, data={"cue": cue}, source=source)


def tick_event(delta: float, frame: int) -> Event:
    """Create a frame tick event."""
    return Event(EventType.TICK, data={"delta": delta, "frame": frame})
