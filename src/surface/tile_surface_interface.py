# surface/tile_surface_interface.py
"""
ITileSurface Protocol
=====================
Rendering abstraction for map tile layers.
Minimal contract for any map widget (browser Leaflet mirror, notebook map, etc).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, List, Optional


@dataclass
class TileLayerState:
    """One layer currently on the surface, in draw order."""
    handle: int
    url_template: str
    opacity: float
    attribution: Optional[str] = None


class ITileSurface(Protocol):
    """
    Protocol defining the minimal tile layer surface.

    URL templates carry {z}, {x}, {y} placeholders; the surface resolves them.

    All implementations must provide:
    - attach: put a tile layer on the map, return its handle
    - detach: take a layer off the map
    - set_opacity: change opacity of an attached layer
    - is_attached: check whether a handle is on the map
    - layers: current layer stack (bottom first)
    """

    def attach(self, url_template: str, opacity: float = 1.0, attribution: Optional[str] = None) -> int:
        """Add a tile layer on top of the stack and return its handle."""
        ...

    def detach(self, handle: int) -> None:
        """Remove a layer. Unknown handles are ignored."""
        ...

    def set_opacity(self, handle: int, value: float) -> None:
        """Update opacity of an attached layer."""
        ...

    def is_attached(self, handle: int) -> bool:
        ...

    def layers(self) -> List[TileLayerState]:
        """Layer stack snapshot, bottom layer first."""
        ...
