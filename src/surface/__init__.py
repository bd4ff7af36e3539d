from .tile_surface_interface import ITileSurface, TileLayerState
from .in_memory_surface import InMemoryTileSurface

__all__ = [
    "ITileSurface",
    "TileLayerState",
    "InMemoryTileSurface",
]
