"""
Models package - Data models for the radar loop viewer
"""

from .enums import LayerClass, ColorScheme, PlaybackState, StepDirection, LogLevel, LogCategory
from .frame import FrameDescriptor
from .errors import ViewerError, FetchError, InvalidFrameIndexError, UnknownColorSchemeError, UnknownBaseStyleError

__all__ = [
    'LayerClass',
    'ColorScheme',
    'PlaybackState',
    'StepDirection',
    'LogLevel',
    'LogCategory',
    'FrameDescriptor',
    'ViewerError',
    'FetchError',
    'InvalidFrameIndexError',
    'UnknownColorSchemeError',
    'UnknownBaseStyleError',
]
