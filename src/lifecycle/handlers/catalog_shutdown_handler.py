from __future__ import annotations
from typing import TYPE_CHECKING

from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from services.frame_catalog import FrameCatalog

log = get_logger().for_category(LogCategory.SHUTDOWN)


class CatalogShutdownHandler(IShutdownHandler):
    """
    Closes the metadata HTTP client.

    Priority: 50 (after the API server, before task cancellation)
    """

    def __init__(self, catalog: "FrameCatalog"):
        self.catalog = catalog

    @property
    def shutdown_priority(self) -> int:
        return 50

    async def shutdown(self) -> None:
        log.info("Closing metadata client...")
        await self.catalog.close()
