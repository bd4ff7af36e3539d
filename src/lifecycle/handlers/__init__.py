from .all_tasks_cancellation_handler import AllTasksCancellationHandler
from .api_server_shutdown_handler import APIServerShutdownHandler
from .catalog_shutdown_handler import CatalogShutdownHandler
from .playback_shutdown_handler import PlaybackShutdownHandler

__all__ = [
    "AllTasksCancellationHandler",
    "APIServerShutdownHandler",
    "CatalogShutdownHandler",
    "PlaybackShutdownHandler",
]
