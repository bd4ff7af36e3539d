"""
Core error types.

FetchError: metadata request failed or returned malformed JSON.
InvalidFrameIndexError: internal precondition violation in frame stepping.
"""

from typing import Optional


class ViewerError(Exception):
    """Base class for viewer core errors"""


class FetchError(ViewerError):
    """Metadata source unreachable or returned an unusable document"""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class InvalidFrameIndexError(ViewerError, IndexError):
    """Frame index outside [0, frame_count)"""

    def __init__(self, index: int, frame_count: int):
        self.index = index
        self.frame_count = frame_count
        super().__init__(f"Frame index {index} outside [0, {frame_count})")


class UnknownColorSchemeError(ViewerError, KeyError):
    """Color scheme key or ID not in the scheme table"""

    def __init__(self, scheme):
        self.scheme = scheme
        super().__init__(f"Unknown color scheme: {scheme!r}")


class UnknownBaseStyleError(ViewerError, KeyError):
    """Base map style key not in the style table"""

    def __init__(self, style: str):
        self.style = style
        super().__init__(f"Unknown base style: {style!r}")
