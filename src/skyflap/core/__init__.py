"""Core framework components for SKYFLAP."""

from .state import Phase, PhaseMachine
from .events import EventBus, Event, EventType, SoundCue

__all__ = ["Phase", "PhaseMachine", "EventBus", "Event", "EventType", "SoundCue"]
