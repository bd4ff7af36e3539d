"""
Base layer service

Owns the single base map layer. Switching style replaces that layer; frame
overlays are not touched and keep their cache.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from models.base_style import BaseStyle
from models.enums import LogCategory
from models.errors import UnknownBaseStyleError
from surface.tile_surface_interface import ITileSurface
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.BASE_LAYER)


class BaseLayerService:
    """
    Base map style switcher.

    Example:
        service = BaseLayerService(surface, config.base_styles)
        service.show("geographic")
        service.show("satellite")   # replaces the previous base layer
    """

    def __init__(self, surface: ITileSurface, styles: Dict[str, BaseStyle]):
        self._surface = surface
        self._styles = dict(styles)
        self._handle: Optional[int] = None
        self.current: Optional[BaseStyle] = None

    @property
    def style_keys(self) -> List[str]:
        return list(self._styles)

    def get_style(self, key: str) -> BaseStyle:
        try:
            return self._styles[key]
        except KeyError:
            raise UnknownBaseStyleError(key) from None

    def show(self, key: str) -> BaseStyle:
        """
        Attach the base layer for `key`, removing the previous one.

        Raises:
            UnknownBaseStyleError: style not in the table
        """
        style = self.get_style(key)

        if self._handle is not None:
            self._surface.detach(self._handle)

        self._handle = self._surface.attach(style.url, 1.0, style.attribution)
        self.current = style

        log.info(f"Base style: {style.key}", url=style.url)
        return style
