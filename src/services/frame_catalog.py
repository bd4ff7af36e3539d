"""
Frame catalog - weather-maps metadata source

Fetches the metadata document once per load() and exposes the ordered radar
and satellite frame sequences.

Document shape (every field optional):
    {
        "host": "https://tilecache.rainviewer.com",
        "radar": {"past": [{"path": ..., "time": ...}], "nowcast": [...]},
        "satellite": {"infrared": [...]}
    }

Missing sections degrade to empty sequences. Transport errors, non-2xx
responses and malformed JSON raise FetchError. The catalog never touches the
display: the caller decides what to show after a successful load.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

import httpx

from models.enums import LogCategory
from models.errors import FetchError
from models.frame import FrameDescriptor
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.CATALOG)

DEFAULT_METADATA_URL = "https://api.rainviewer.com/public/weather-maps.json"

FrameSequences = Tuple[List[FrameDescriptor], List[FrameDescriptor]]


def _section(data: Any, key: str) -> dict:
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, dict) else {}


def _frames(entries: Any, label: str) -> List[FrameDescriptor]:
    # Some feeds wrap satellite.infrared as {"past": [...]}
    if isinstance(entries, dict):
        entries = entries.get("past")
    if not isinstance(entries, list):
        return []

    frames = []
    for entry in entries:
        frame = FrameDescriptor.from_dict(entry)
        if frame is None:
            log.warn(f"Skipping {label} frame without path", entry=entry)
            continue
        frames.append(frame)
    return frames


def parse_metadata(data: Any, fallback_host: str = "") -> Tuple[str, List[FrameDescriptor], List[FrameDescriptor]]:
    """
    Extract (host, radar_frames, satellite_frames) from a decoded document.

    Radar frames are past frames followed by nowcast frames.

    Raises:
        FetchError: document root is not a JSON object
    """
    if not isinstance(data, dict):
        raise FetchError(f"Metadata root must be an object, got {type(data).__name__}")

    host = data.get("host")
    if not isinstance(host, str):
        host = fallback_host

    radar = _section(data, "radar")
    radar_frames = _frames(radar.get("past"), "radar") + _frames(radar.get("nowcast"), "nowcast")
    satellite_frames = _frames(_section(data, "satellite").get("infrared"), "satellite")

    return host, radar_frames, satellite_frames


class FrameCatalog:
    """
    Ordered radar and satellite frame lists from the metadata source.

    Example:
        catalog = FrameCatalog()
        radar, satellite = await catalog.load()
        await catalog.close()
    """

    def __init__(
        self,
        url: str = DEFAULT_METADATA_URL,
        timeout: float = 10.0,
        fallback_host: str = "",
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Args:
            url: Metadata document URL
            timeout: Request timeout (seconds)
            fallback_host: Tile host used when the document has no "host"
            client: Shared AsyncClient (created on demand when omitted)
        """
        self.url = url
        self.timeout = timeout
        self.fallback_host = fallback_host
        self._client = client
        self._owns_client = client is None

        self.host: str = fallback_host
        self.radar_frames: List[FrameDescriptor] = []
        self.satellite_frames: List[FrameDescriptor] = []
        self.loaded: bool = False

    @property
    def frame_count(self) -> int:
        """Frames addressable by the shared index."""
        return min(len(self.radar_frames), len(self.satellite_frames))

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def load(self) -> FrameSequences:
        """
        Fetch and parse the metadata document.

        Returns:
            (radar_frames, satellite_frames)

        Raises:
            FetchError: request failed, bad status, or malformed JSON
        """
        log.info("Fetching frame metadata", url=self.url)

        try:
            response = await self._get_client().get(self.url)
            response.raise_for_status()
        except httpx.HTTPError as ex:
            raise FetchError(f"Metadata request failed: {ex}", url=self.url) from ex

        try:
            data = response.json()
        except ValueError as ex:
            raise FetchError(f"Metadata is not valid JSON: {ex}", url=self.url) from ex

        host, radar_frames, satellite_frames = parse_metadata(data, self.fallback_host)

        self.host = host
        self.radar_frames = radar_frames
        self.satellite_frames = satellite_frames
        self.loaded = True

        log.info(
            "Frame catalog loaded",
            host=host or "(none)",
            radar=len(radar_frames),
            satellite=len(satellite_frames)
        )
        return radar_frames, satellite_frames

    async def close(self) -> None:
        """Close the HTTP client if this catalog created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
