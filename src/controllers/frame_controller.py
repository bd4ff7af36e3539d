"""
Frame controller - radar/satellite animation state machine.

States:
    IDLE     no catalog loaded (or the catalog had no usable frames)
    READY    a frame is shown, no timer
    PLAYING  READY + auto-play task

Architecture:
- Radar and satellite frame lists are driven by one shared index; the valid
  range is [0, min(len(radar), len(satellite))). Trailing frames of the
  longer list are never shown.
- Overlay layers are materialized lazily per index through one OverlayCache
  per layer class and kept for replay.
- Auto-play is a single tracked asyncio task calling next_frame() every
  `interval` seconds. toggle_play() starts the task or cancels and awaits
  it; a reload while playing cancels it too.
- Every call before a successful load is a no-op.
"""

import asyncio
from typing import Any, Dict, List, Optional, Sequence

from engine.overlay_cache import OverlayCache
from engine.render_options import RenderOptions, SchemeLike
from lifecycle.task_registry import create_tracked_task, TaskCategory
from models.enums import ColorScheme, LayerClass, LogCategory, PlaybackState
from models.errors import FetchError, InvalidFrameIndexError
from models.frame import FrameDescriptor
from surface.tile_surface_interface import ITileSurface
from utils.logger import get_category_logger

log = get_category_logger(LogCategory.PLAYBACK)

DEFAULT_FRAME_INTERVAL = 0.7


class FrameController:
    """
    Owns the current frame index, the overlay caches, the render options and
    the playback timer.

    Usage:
        controller = FrameController(surface, RenderOptions())
        await controller.load(catalog)        # IDLE → READY, frame 0 shown

        controller.next_frame()
        controller.previous_frame()
        await controller.toggle_play()        # READY → PLAYING
        controller.change_color_scheme("titan")
        controller.set_opacity(LayerClass.RADAR, 0.4)
        await controller.toggle_play()        # PLAYING → READY

        await controller.shutdown()
    """

    def __init__(
        self,
        surface: ITileSurface,
        options: Optional[RenderOptions] = None,
        interval: float = DEFAULT_FRAME_INTERVAL
    ) -> None:
        """
        Args:
            surface: Map surface the overlays are attached to
            options: Render options (defaults when omitted)
            interval: Auto-play tick in seconds
        """
        self.surface = surface
        self.options = options or RenderOptions()
        self.interval = interval

        self.radar_cache = OverlayCache(LayerClass.RADAR, surface)
        self.satellite_cache = OverlayCache(LayerClass.SATELLITE, surface)
        self.options.bind_cache(self.radar_cache)
        self.options.bind_cache(self.satellite_cache)

        # Catalog data
        self._host: str = ""
        self._radar_frames: List[FrameDescriptor] = []
        self._satellite_frames: List[FrameDescriptor] = []
        self._loaded: bool = False

        # Playback state
        self._current_index: int = 0
        self._play_task: Optional[asyncio.Task] = None

        log.debug("FrameController initialized", interval=interval)

    # ============================================================
    # State
    # ============================================================

    @property
    def state(self) -> PlaybackState:
        if not self._loaded:
            return PlaybackState.IDLE
        if self._play_task is not None:
            return PlaybackState.PLAYING
        return PlaybackState.READY

    @property
    def is_playing(self) -> bool:
        return self._play_task is not None

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def frame_count(self) -> int:
        """Number of frames reachable by the shared index."""
        return min(len(self._radar_frames), len(self._satellite_frames))

    @property
    def host(self) -> str:
        return self._host

    def cache_for(self, layer_class: LayerClass) -> OverlayCache:
        if layer_class is LayerClass.RADAR:
            return self.radar_cache
        return self.satellite_cache

    # ============================================================
    # Loading
    # ============================================================

    async def load(self, catalog) -> bool:
        """
        Fetch the catalog and show frame 0.

        A FetchError is logged and leaves the controller IDLE (no retry).

        Returns:
            True if a frame is now shown
        """
        try:
            radar_frames, satellite_frames = await catalog.load()
        except FetchError as ex:
            log.error("Frame metadata unavailable, staying idle", error=str(ex))
            return False

        return self.load_complete(radar_frames, satellite_frames, catalog.host)

    def load_complete(
        self,
        radar_frames: Sequence[FrameDescriptor],
        satellite_frames: Sequence[FrameDescriptor],
        host: str = ""
    ) -> bool:
        """
        IDLE → READY with frame 0 shown.

        Stays IDLE when no index is valid for both lists.

        Returns:
            True if a frame is now shown
        """
        if self._play_task is not None:
            # Reload leaves PLAYING; the timer must not outlive it
            self._play_task.cancel()
            self._play_task = None
            log.info("Playback stopped by reload", index=self._current_index)

        if self._loaded:
            # Index-keyed caches belong to the previous frame lists
            self._detach_overlays(self._current_index)
            self.radar_cache.invalidate_all()
            self.satellite_cache.invalidate_all()
            self._loaded = False

        self._host = host
        self._radar_frames = list(radar_frames)
        self._satellite_frames = list(satellite_frames)
        self._current_index = 0

        if self.frame_count == 0:
            log.warn(
                "Catalog has no usable frames, staying idle",
                radar=len(self._radar_frames),
                satellite=len(self._satellite_frames)
            )
            return False

        self._loaded = True
        self._attach_overlays(0)

        log.info(
            f"Catalog ready: {self.frame_count} frames",
            radar=len(self._radar_frames),
            satellite=len(self._satellite_frames)
        )
        return True

    # ============================================================
    # Overlay attach/detach
    # ============================================================

    def _attach_overlays(self, index: int) -> None:
        radar = self.radar_cache.get_or_create(
            index, self._radar_frames[index], self.options, self._host
        )
        radar.attach()

        satellite = self.satellite_cache.get_or_create(
            index, self._satellite_frames[index], self.options, self._host
        )
        satellite.attach()

    def _detach_overlays(self, index: int) -> None:
        for cache in (self.radar_cache, self.satellite_cache):
            layer = cache.get(index)
            if layer is not None:
                layer.detach()

    def redraw_current(self) -> None:
        """Detach and reattach the current frame's overlays (puts them on top)."""
        if self.state is PlaybackState.IDLE:
            return
        self._detach_overlays(self._current_index)
        self._attach_overlays(self._current_index)

    # ============================================================
    # Frame Navigation
    # ============================================================

    def show_frame(self, index: int) -> bool:
        """
        Swap the displayed overlays to `index`.

        Callers compute `index` with modulo arithmetic; no clamping here.

        Returns:
            False when IDLE, True otherwise

        Raises:
            InvalidFrameIndexError: index outside [0, frame_count)
        """
        if self.state is PlaybackState.IDLE:
            log.debug("show_frame ignored (idle)", index=index)
            return False

        if not 0 <= index < self.frame_count:
            raise InvalidFrameIndexError(index, self.frame_count)

        self._detach_overlays(self._current_index)
        self._current_index = index
        self._attach_overlays(index)

        log.debug(
            f"Frame {index + 1}/{self.frame_count}",
            time=self._radar_frames[index].time,
            status=self.state.name
        )
        return True

    def next_frame(self) -> bool:
        """Advance to next frame (with wrapping)."""
        frame_count = self.frame_count
        if self.state is PlaybackState.IDLE or frame_count == 0:
            return False
        return self.show_frame((self._current_index + 1) % frame_count)

    def previous_frame(self) -> bool:
        """Go to previous frame (with wrapping)."""
        frame_count = self.frame_count
        if self.state is PlaybackState.IDLE or frame_count == 0:
            return False
        return self.show_frame((self._current_index - 1 + frame_count) % frame_count)

    # ============================================================
    # Playback Control
    # ============================================================

    async def toggle_play(self) -> bool:
        """
        READY ↔ PLAYING.

        Returns:
            True if playing after the call
        """
        if self.state is PlaybackState.IDLE:
            log.debug("toggle_play ignored (idle)")
            return False

        if self._play_task is not None:
            await self.stop()
            return False

        self._start()
        return True

    def _start(self) -> None:
        log.info(f"Starting playback: {self.interval:.2f}s per frame")
        self._play_task = create_tracked_task(
            self._playback_loop(self.interval),
            category=TaskCategory.PLAYBACK,
            description="FrameController auto-play timer"
        )

    async def stop(self) -> None:
        """Cancel and await the auto-play task."""
        task = self._play_task
        if task is None:
            return

        self._play_task = None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

        log.info("Playback stopped", index=self._current_index)

    async def _playback_loop(self, interval: float) -> None:
        try:
            while True:
                await asyncio.sleep(interval)
                self.next_frame()
        except asyncio.CancelledError:
            log.debug("Playback loop cancelled")
            raise

    # ============================================================
    # Options
    # ============================================================

    def change_color_scheme(self, scheme: SchemeLike) -> ColorScheme:
        """
        Switch radar palette and rebuild radar overlays.

        Detaches the current overlays, clears the whole radar cache and
        reattaches: radar is rebuilt with the new scheme, the cached satellite
        layer is reused unchanged.

        Raises:
            UnknownColorSchemeError: scheme not in the table (nothing changes)
        """
        scheme = self.options.set_color_scheme(scheme)

        if self.state is PlaybackState.IDLE:
            self.radar_cache.invalidate_all()
        else:
            self._detach_overlays(self._current_index)
            self.radar_cache.invalidate_all()
            self._attach_overlays(self._current_index)

        log.info(f"Color scheme: {scheme.key}", scheme_id=scheme.value)
        return scheme

    def set_opacity(self, layer_class: LayerClass, value: float) -> None:
        """Set class opacity on every cached layer (see RenderOptions.set_opacity)."""
        self.options.set_opacity(layer_class, value)

    # ============================================================
    # Introspection / teardown
    # ============================================================

    def snapshot(self) -> Dict[str, Any]:
        """Current state for the UI adapter."""
        loaded = self.state is not PlaybackState.IDLE
        return {
            "state": self.state.name,
            "playing": self.is_playing,
            "current_index": self._current_index if loaded else None,
            "frame_count": self.frame_count,
            "radar_time": self._radar_frames[self._current_index].time if loaded else None,
            "satellite_time": self._satellite_frames[self._current_index].time if loaded else None,
            "options": self.options.to_dict(),
        }

    async def shutdown(self) -> None:
        """Cancel the auto-play timer."""
        await self.stop()
