"""
Overlay layer cache.

One OverlayCache per layer class (radar, satellite), keyed by frame index.
Entries are created lazily on first display and live for the session; the
only way to drop them is invalidate_all(), which clears the whole class.
Partial invalidation is not supported: every entry of a cache was built with
the options current at its creation time, and a scheme change clears the
radar cache wholesale.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

from engine.tile_urls import build_tile_url
from models.enums import LayerClass, LogCategory
from models.frame import FrameDescriptor
from surface.tile_surface_interface import ITileSurface
from utils.logger import get_logger

if TYPE_CHECKING:
    from engine.render_options import RenderOptions

log = get_logger().for_category(LogCategory.OVERLAY)


@dataclass(eq=False)
class OverlayLayer:
    """
    Handle to one frame's tile layer.

    Built detached; `handle` is set while the layer sits on the surface.
    Compared by identity.
    """

    layer_class: LayerClass
    frame_index: int
    url_template: str
    opacity: float
    surface: ITileSurface = field(repr=False)
    handle: Optional[int] = None

    @property
    def is_attached(self) -> bool:
        return self.handle is not None and self.surface.is_attached(self.handle)

    def attach(self) -> None:
        if self.is_attached:
            return
        self.handle = self.surface.attach(self.url_template, self.opacity)

    def detach(self) -> None:
        if self.handle is not None and self.surface.is_attached(self.handle):
            self.surface.detach(self.handle)
        self.handle = None

    def set_opacity(self, value: float) -> None:
        self.opacity = value
        if self.is_attached:
            self.surface.set_opacity(self.handle, value)


class OverlayCache:
    """
    Sparse frame-index → OverlayLayer store for one layer class.

    Invariant: at most one OverlayLayer per index; get_or_create checks
    presence before building.
    """

    def __init__(self, layer_class: LayerClass, surface: ITileSurface):
        self.layer_class = layer_class
        self._surface = surface
        self._layers: Dict[int, OverlayLayer] = {}

    def get(self, index: int) -> Optional[OverlayLayer]:
        return self._layers.get(index)

    def get_or_create(
        self,
        index: int,
        frame: FrameDescriptor,
        options: "RenderOptions",
        host: str
    ) -> OverlayLayer:
        """
        Return the cached layer for `index`, building it if absent.

        New layers take the class opacity current at creation time.
        """
        layer = self._layers.get(index)
        if layer is not None:
            return layer

        layer = OverlayLayer(
            layer_class=self.layer_class,
            frame_index=index,
            url_template=build_tile_url(self.layer_class, host, frame, options),
            opacity=options.opacity_for(self.layer_class),
            surface=self._surface,
        )
        self._layers[index] = layer

        log.debug(
            f"{self.layer_class.name} overlay created",
            index=index,
            url=layer.url_template
        )
        return layer

    def set_opacity(self, value: float) -> None:
        """Apply opacity to every cached layer, displayed or not."""
        for layer in self._layers.values():
            layer.set_opacity(value)

    def invalidate_all(self) -> None:
        """
        Drop every entry.

        Attached layers stay on the surface; callers detach them first.
        """
        dropped = len(self._layers)
        self._layers.clear()
        log.debug(f"{self.layer_class.name} overlay cache cleared", dropped=dropped)

    def indices(self) -> List[int]:
        return sorted(self._layers)

    def __len__(self) -> int:
        return len(self._layers)

    def __contains__(self, index: object) -> bool:
        return index in self._layers
