"""
Tile URL templates for radar and satellite frames.

Radar:     {host}{path}/256/{z}/{x}/{y}/{scheme}/{smooth}_{snow}.{format}
Satellite: {host}{path}/256/{z}/{x}/{y}/0/0_0.{format}

The tile server only renders satellite imagery with the raw palette and with
smoothing / snow colors off, so satellite URLs ignore those options and
inherit only the image format. No validation is done here: a malformed frame
path gives a malformed URL.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from models.enums import LayerClass
from models.frame import FrameDescriptor

if TYPE_CHECKING:
    from engine.render_options import RenderOptions

TILE_SIZE = 256
TILE_PLACEHOLDER = "{z}/{x}/{y}"


def _flag(value: bool) -> int:
    return 1 if value else 0


def radar_url(host: str, frame: FrameDescriptor, options: "RenderOptions") -> str:
    return (
        f"{host}{frame.path}/{TILE_SIZE}/{TILE_PLACEHOLDER}"
        f"/{options.color_scheme.value}"
        f"/{_flag(options.smooth)}_{_flag(options.snow_colors)}.{options.image_format}"
    )


def satellite_url(host: str, frame: FrameDescriptor, options: "RenderOptions") -> str:
    return f"{host}{frame.path}/{TILE_SIZE}/{TILE_PLACEHOLDER}/0/0_0.{options.image_format}"


def build_tile_url(
    layer_class: LayerClass,
    host: str,
    frame: FrameDescriptor,
    options: "RenderOptions"
) -> str:
    """Dispatch on layer class."""
    if layer_class is LayerClass.RADAR:
        return radar_url(host, frame, options)
    return satellite_url(host, frame, options)
