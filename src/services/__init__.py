"""Services layer"""

from .event_bus import EventBus
from .frame_catalog import FrameCatalog
from .base_layer_service import BaseLayerService

__all__ = [
    "EventBus",
    "FrameCatalog",
    "BaseLayerService",
]
