from __future__ import annotations
from itertools import count
from typing import Dict, List, Optional
from surface.tile_surface_interface import ITileSurface, TileLayerState


class InMemoryTileSurface(ITileSurface):
    """
    Layer stack kept in memory.

    Used as the render surface of the viewer process: the browser front end
    mirrors `layers()` through the HTTP API. Tests use it as a fake map.
    """

    def __init__(self):
        self._layers: Dict[int, TileLayerState] = {}
        self._handles = count(1)

    def attach(self, url_template: str, opacity: float = 1.0, attribution: Optional[str] = None) -> int:
        handle = next(self._handles)
        self._layers[handle] = TileLayerState(
            handle=handle,
            url_template=url_template,
            opacity=opacity,
            attribution=attribution,
        )
        return handle

    def detach(self, handle: int) -> None:
        self._layers.pop(handle, None)

    def set_opacity(self, handle: int, value: float) -> None:
        layer = self._layers.get(handle)
        if layer is not None:
            layer.opacity = value

    def is_attached(self, handle: int) -> bool:
        return handle in self._layers

    def layers(self) -> List[TileLayerState]:
        return list(self._layers.values())
