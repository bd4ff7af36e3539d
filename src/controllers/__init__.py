from .frame_controller import FrameController
from .viewer_event_controller import ViewerEventController

__all__ = [
    'FrameController',
    'ViewerEventController',
]
