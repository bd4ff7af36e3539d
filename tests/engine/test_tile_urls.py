"""
Tests for radar / satellite tile URL templates.
"""

from engine.render_options import RenderOptions
from engine.tile_urls import build_tile_url, radar_url, satellite_url
from models.enums import ColorScheme, LayerClass
from models.frame import FrameDescriptor

HOST = "https://tilecache.rainviewer.com"
FRAME = FrameDescriptor(path="/v2/radar/1718000400", time=1718000400)


class TestRadarUrl:

    def test_default_options(self):
        url = radar_url(HOST, FRAME, RenderOptions())
        assert url == "https://tilecache.rainviewer.com/v2/radar/1718000400/256/{z}/{x}/{y}/2/1_1.webp"

    def test_scheme_id_and_flags(self):
        options = RenderOptions(color_scheme=ColorScheme.TITAN, smooth=False, snow_colors=True, image_format="png")
        url = radar_url(HOST, FRAME, options)
        assert url.endswith("/256/{z}/{x}/{y}/3/0_1.png")

    def test_raw_scheme_is_zero(self):
        url = radar_url(HOST, FRAME, RenderOptions(color_scheme="raw"))
        assert "/{z}/{x}/{y}/0/" in url


class TestSatelliteUrl:

    def test_ignores_radar_options(self):
        options = RenderOptions(color_scheme=ColorScheme.DARKSKY, smooth=True, snow_colors=True)
        frame = FrameDescriptor(path="/v2/satellite/abc", time=1)
        url = satellite_url(HOST, frame, options)
        assert url == "https://tilecache.rainviewer.com/v2/satellite/abc/256/{z}/{x}/{y}/0/0_0.webp"

    def test_inherits_image_format(self):
        frame = FrameDescriptor(path="/v2/satellite/abc")
        url = satellite_url(HOST, frame, RenderOptions(image_format="png"))
        assert url.endswith("0/0_0.png")


def test_build_tile_url_dispatches_on_layer_class():
    options = RenderOptions(color_scheme=ColorScheme.NEXRAD)
    assert build_tile_url(LayerClass.RADAR, HOST, FRAME, options) == radar_url(HOST, FRAME, options)
    assert build_tile_url(LayerClass.SATELLITE, HOST, FRAME, options) == satellite_url(HOST, FRAME, options)


def test_empty_host_gives_relative_url():
    assert radar_url("", FRAME, RenderOptions()).startswith("/v2/radar/1718000400/256/")
