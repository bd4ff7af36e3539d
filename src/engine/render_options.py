"""
Render options shared by tile URL construction and overlay opacity.

One instance per FrameController, mutated only through its setters.
Changing the color scheme here is a plain mutation: invalidating the radar
overlay cache is FrameController.change_color_scheme's job.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Union

from models.enums import ColorScheme, LayerClass, LogCategory
from models.errors import UnknownColorSchemeError
from utils.logger import get_logger

if TYPE_CHECKING:
    from engine.overlay_cache import OverlayCache
    from managers.config_manager import RenderConfig

log = get_logger().for_category(LogCategory.OVERLAY)

SchemeLike = Union[ColorScheme, str, int]


def coerce_color_scheme(value: SchemeLike) -> ColorScheme:
    """Resolve a scheme enum, key ("titan") or numeric ID (3)."""
    if isinstance(value, ColorScheme):
        return value
    try:
        if isinstance(value, bool):
            raise ValueError(value)
        if isinstance(value, int):
            return ColorScheme(value)
        if isinstance(value, str):
            return ColorScheme.from_key(value)
    except (KeyError, ValueError):
        pass
    raise UnknownColorSchemeError(value)


def _check_opacity(value: float) -> float:
    value = float(value)
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"Opacity must be within [0, 1], got {value}")
    return value


class RenderOptions:
    """
    Mutable rendering configuration.

    - radar_opacity / cloud_opacity: per layer class, applied to every cached layer
    - color_scheme: radar palette (URL component)
    - smooth / snow_colors: radar flags (URL component)
    - image_format: tile file extension for both classes

    Example:
        options = RenderOptions()
        options.bind_cache(radar_cache)
        options.set_opacity(LayerClass.RADAR, 0.4)   # every cached radar layer → 0.4
    """

    def __init__(
        self,
        radar_opacity: float = 1.0,
        cloud_opacity: float = 1.0,
        color_scheme: SchemeLike = ColorScheme.UNIVERSAL_BLUE,
        smooth: bool = True,
        snow_colors: bool = True,
        image_format: str = "webp"
    ):
        self.radar_opacity = _check_opacity(radar_opacity)
        self.cloud_opacity = _check_opacity(cloud_opacity)
        self.color_scheme = coerce_color_scheme(color_scheme)
        self.smooth = bool(smooth)
        self.snow_colors = bool(snow_colors)
        self.image_format = image_format
        self._caches: Dict[LayerClass, "OverlayCache"] = {}

    @classmethod
    def from_config(cls, config: "RenderConfig") -> "RenderOptions":
        return cls(
            radar_opacity=config.radar_opacity,
            cloud_opacity=config.cloud_opacity,
            color_scheme=config.color_scheme,
            smooth=config.smooth,
            snow_colors=config.snow_colors,
            image_format=config.image_format,
        )

    def bind_cache(self, cache: "OverlayCache") -> None:
        """Register the overlay cache that receives opacity updates for its class."""
        self._caches[cache.layer_class] = cache

    def opacity_for(self, layer_class: LayerClass) -> float:
        if layer_class is LayerClass.RADAR:
            return self.radar_opacity
        return self.cloud_opacity

    def set_opacity(self, layer_class: LayerClass, value: float) -> None:
        """
        Store opacity and apply it to all cached layers of the class.

        Frames visited earlier keep the new opacity when shown again.

        Raises:
            ValueError: value outside [0, 1]
        """
        value = _check_opacity(value)
        if layer_class is LayerClass.RADAR:
            self.radar_opacity = value
        else:
            self.cloud_opacity = value

        cache = self._caches.get(layer_class)
        if cache is not None:
            cache.set_opacity(value)

        log.debug(f"{layer_class.name} opacity set", value=value)

    def set_color_scheme(self, scheme: SchemeLike) -> ColorScheme:
        """
        Store a new radar color scheme.

        Raises:
            UnknownColorSchemeError: key or ID not in the scheme table
        """
        self.color_scheme = coerce_color_scheme(scheme)
        return self.color_scheme

    def to_dict(self) -> Dict[str, Any]:
        return {
            "radar_opacity": self.radar_opacity,
            "cloud_opacity": self.cloud_opacity,
            "color_scheme": self.color_scheme.key,
            "smooth": self.smooth,
            "snow_colors": self.snow_colors,
            "image_format": self.image_format,
        }
