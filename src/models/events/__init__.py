"""
Event system for the radar loop viewer

UI adapters publish these events; ViewerEventController applies them to the
frame controller.
"""

from models.events.types import EventType
from models.events.base import Event
from models.events.viewer_events import (
    PlaybackToggleEvent,
    FrameStepEvent,
    OpacityChangedEvent,
    ColorSchemeChangedEvent,
    BaseStyleChangedEvent,
)

__all__ = [
    "EventType",
    "Event",
    "PlaybackToggleEvent",
    "FrameStepEvent",
    "OpacityChangedEvent",
    "ColorSchemeChangedEvent",
    "BaseStyleChangedEvent",
]
