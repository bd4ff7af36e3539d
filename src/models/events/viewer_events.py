"""UI events published by the viewer HTTP adapter"""

from dataclasses import dataclass

from models.enums import EventSource, LayerClass, StepDirection
from models.events.base import Event
from models.events.types import EventType


@dataclass(init=False)
class PlaybackToggleEvent(Event):
    """Play/pause button"""

    def __init__(self, source: EventSource = EventSource.API):
        super().__init__(type=EventType.PLAYBACK_TOGGLE, source=source)


@dataclass(init=False)
class FrameStepEvent(Event):
    """Step one frame forward or back"""
    direction: StepDirection

    def __init__(self, direction: StepDirection, source: EventSource = EventSource.API):
        super().__init__(type=EventType.FRAME_STEP, source=source)
        self.direction = direction


@dataclass(init=False)
class OpacityChangedEvent(Event):
    """Opacity slider for one layer class"""
    layer_class: LayerClass
    value: float

    def __init__(self, layer_class: LayerClass, value: float, source: EventSource = EventSource.API):
        super().__init__(type=EventType.OPACITY_CHANGED, source=source)
        self.layer_class = layer_class
        self.value = value


@dataclass(init=False)
class ColorSchemeChangedEvent(Event):
    """Radar color scheme selector"""
    scheme: str

    def __init__(self, scheme: str, source: EventSource = EventSource.API):
        super().__init__(type=EventType.COLOR_SCHEME_CHANGED, source=source)
        self.scheme = scheme


@dataclass(init=False)
class BaseStyleChangedEvent(Event):
    """Base map style selector"""
    style: str

    def __init__(self, style: str, source: EventSource = EventSource.API):
        super().__init__(type=EventType.BASE_STYLE_CHANGED, source=source)
        self.style = style
