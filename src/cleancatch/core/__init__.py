"""Core framework components for Clean Catch."""

from .state import RoundState, RoundOutcome, StateMachine
from .events import EventBus, Event, EventType
from .interfaces import AudioCues, Display, InputDevice, SilentCues

__all__ = [
    "RoundState",
    "RoundOutcome",
    "StateMachine",
    "EventBus",
    "Event",
    "EventType",
    "AudioCues",
    "Display",
    "InputDevice",
    "SilentCues",
]
