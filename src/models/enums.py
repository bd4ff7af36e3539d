"""
Enums for the radar loop viewer
"""

from enum import Enum, auto


class LayerClass(Enum):
    """Overlay layer classes driven by the shared frame index"""
    RADAR = auto()
    SATELLITE = auto()   # Infrared cloud imagery ("cloud" layer in the UI)

    @classmethod
    def from_key(cls, key: str) -> "LayerClass":
        """Accept enum names plus the UI alias 'cloud'."""
        normalized = key.strip().upper()
        if normalized == "CLOUD":
            return cls.SATELLITE
        return cls[normalized]


class ColorScheme(Enum):
    """
    Radar color palettes rendered by the tile server.

    Values are the numeric scheme IDs embedded in radar tile URLs.
    """
    RAW = 0              # Raw dBZ values (black & white)
    ORIGINAL = 1
    UNIVERSAL_BLUE = 2
    TITAN = 3
    WEATHERCHANNEL = 4
    METEORED = 5
    NEXRAD = 6
    RAINBOW = 7
    DARKSKY = 8

    @property
    def key(self) -> str:
        return self.name.lower()

    @classmethod
    def from_key(cls, key: str) -> "ColorScheme":
        return cls[key.strip().upper()]


class PlaybackState(Enum):
    """
    Frame controller states

    IDLE: No catalog loaded (or catalog had no usable frames)
    READY: A frame is shown, timer inactive
    PLAYING: READY + auto-play timer running
    """
    IDLE = auto()
    READY = auto()
    PLAYING = auto()


class StepDirection(Enum):
    """Frame step direction for UI step events"""
    NEXT = 1
    PREVIOUS = -1


class EventSource(Enum):
    """Event source identifiers"""
    API = auto()         # HTTP UI adapter


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    CATALOG = auto()     # Metadata fetch, frame catalog
    OVERLAY = auto()     # Overlay layer cache, tile URLs
    PLAYBACK = auto()    # Frame stepping, auto-play timer
    BASE_LAYER = auto()  # Base map style
    EVENT = auto()       # Event bus events and handling
    API = auto()
    SYSTEM = auto()      # Startup, errors
    SHUTDOWN = auto()
    TASK = auto()

    GENERAL = auto()     # Default general category
