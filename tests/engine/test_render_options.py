"""
Tests for RenderOptions and color scheme resolution.
"""

import pytest

from engine.overlay_cache import OverlayCache
from engine.render_options import RenderOptions, coerce_color_scheme
from models.enums import ColorScheme, LayerClass
from models.errors import UnknownColorSchemeError
from models.frame import FrameDescriptor
from surface.in_memory_surface import InMemoryTileSurface


class TestCoerceColorScheme:

    @pytest.mark.parametrize("value", [ColorScheme.TITAN, "titan", " TITAN ", 3])
    def test_accepts_enum_key_and_id(self, value):
        assert coerce_color_scheme(value) is ColorScheme.TITAN

    @pytest.mark.parametrize("value", ["purple", 9, -1, True, None])
    def test_rejects_unknown(self, value):
        with pytest.raises(UnknownColorSchemeError):
            coerce_color_scheme(value)

    def test_unknown_is_key_error(self):
        with pytest.raises(KeyError):
            coerce_color_scheme("purple")


class TestRenderOptions:

    def test_defaults(self):
        options = RenderOptions()
        assert options.radar_opacity == 1.0
        assert options.cloud_opacity == 1.0
        assert options.color_scheme is ColorScheme.UNIVERSAL_BLUE
        assert options.smooth is True
        assert options.snow_colors is True
        assert options.image_format == "webp"

    def test_opacity_for(self):
        options = RenderOptions(radar_opacity=0.3, cloud_opacity=0.6)
        assert options.opacity_for(LayerClass.RADAR) == 0.3
        assert options.opacity_for(LayerClass.SATELLITE) == 0.6

    @pytest.mark.parametrize("value", [-0.1, 1.5])
    def test_set_opacity_out_of_range(self, value):
        options = RenderOptions()
        with pytest.raises(ValueError):
            options.set_opacity(LayerClass.RADAR, value)
        assert options.radar_opacity == 1.0

    def test_set_opacity_reaches_bound_cache(self):
        surface = InMemoryTileSurface()
        options = RenderOptions()
        cache = OverlayCache(LayerClass.SATELLITE, surface)
        options.bind_cache(cache)

        layer = cache.get_or_create(0, FrameDescriptor(path="/sat/0"), options, "h")
        options.set_opacity(LayerClass.SATELLITE, 0.25)

        assert options.cloud_opacity == 0.25
        assert layer.opacity == 0.25
        assert options.radar_opacity == 1.0

    def test_set_color_scheme_failure_keeps_previous(self):
        options = RenderOptions(color_scheme="rainbow")
        with pytest.raises(UnknownColorSchemeError):
            options.set_color_scheme("nope")
        assert options.color_scheme is ColorScheme.RAINBOW

    def test_to_dict(self):
        data = RenderOptions(color_scheme=ColorScheme.METEORED).to_dict()
        assert data["color_scheme"] == "meteored"
        assert set(data) == {
            "radar_opacity", "cloud_opacity", "color_scheme",
            "smooth", "snow_colors", "image_format",
        }
