from __future__ import annotations
from typing import TYPE_CHECKING

from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from controllers.frame_controller import FrameController

log = get_logger().for_category(LogCategory.SHUTDOWN)


class PlaybackShutdownHandler(IShutdownHandler):
    """
    Stops the auto-play timer before anything else goes down.

    Priority: 130 (FIRST)
    """

    def __init__(self, frame_controller: "FrameController"):
        self.frame_controller = frame_controller

    @property
    def shutdown_priority(self) -> int:
        return 130

    async def shutdown(self) -> None:
        log.info("Stopping playback...")
        await self.frame_controller.shutdown()
