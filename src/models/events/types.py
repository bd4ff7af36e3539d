from enum import Enum, auto


class EventType(Enum):
    # Playback
    PLAYBACK_TOGGLE = auto()
    FRAME_STEP = auto()

    # Render options
    OPACITY_CHANGED = auto()
    COLOR_SCHEME_CHANGED = auto()

    # Base map
    BASE_STYLE_CHANGED = auto()
