"""Core framework components for DUNGEON DASH."""

from .state import RunPhase, StateMachine
from .events import EventBus, Event, EventType

__all__ = ["RunPhase", "StateMachine", "EventBus", "Event", "EventType"]
