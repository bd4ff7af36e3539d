"""
Tests for ConfigManager (include merge, factory defaults fallback, typed sections).
"""

import textwrap

import pytest

from managers.config_manager import ConfigManager
from models.enums import ColorScheme

DEFAULTS = """
metadata:
  url: https://defaults.test/weather-maps.json
playback:
  interval_ms: 900
base_styles:
  geographic:
    url: https://osm.test/{z}/{x}/{y}.png
"""


def write(path, text):
    path.write_text(textwrap.dedent(text), encoding="utf-8")


@pytest.fixture
def config_dir(tmp_path):
    write(tmp_path / "defaults.yaml", DEFAULTS)
    return tmp_path


def make_manager(config_dir):
    return ConfigManager(config_path="config.yaml", defaults_path="defaults.yaml", base_dir=config_dir)


def test_include_files_are_merged(config_dir):
    write(config_dir / "config.yaml", """
        include:
          - viewer.yaml
          - styles.yaml
    """)
    write(config_dir / "viewer.yaml", """
        metadata:
          url: https://meta.test/maps.json
          timeout: 3
          fallback_host: https://tiles.test
        playback:
          interval_ms: 500
        render:
          color_scheme: titan
          smooth: false
          radar_opacity: 0.5
        map:
          center: [52.2, 21.0]
          zoom: 7
          base_style: satellite
        api:
          host: 127.0.0.1
          port: 9000
    """)
    write(config_dir / "styles.yaml", """
        base_styles:
          satellite:
            url: https://imagery.test/{z}/{y}/{x}
            attribution: Esri
    """)

    config = make_manager(config_dir)
    config.load()

    assert config.metadata.url == "https://meta.test/maps.json"
    assert config.metadata.timeout == 3.0
    assert config.metadata.fallback_host == "https://tiles.test"
    assert config.playback.interval == pytest.approx(0.5)
    assert config.render.color_scheme is ColorScheme.TITAN
    assert config.render.smooth is False
    assert config.render.radar_opacity == 0.5
    assert config.map.center == (52.2, 21.0)
    assert config.map.base_style == "satellite"
    assert config.api.port == 9000
    assert config.base_styles["satellite"].attribution == "Esri"


def test_monolithic_config(config_dir):
    write(config_dir / "config.yaml", """
        playback:
          interval_ms: 250
    """)

    config = make_manager(config_dir)
    config.load()

    assert config.playback.interval_ms == 250
    assert config.metadata.url == "https://api.rainviewer.com/public/weather-maps.json"
    assert config.render.color_scheme is ColorScheme.UNIVERSAL_BLUE
    assert config.base_styles == {}


def test_missing_config_falls_back_to_defaults(config_dir):
    config = make_manager(config_dir)
    config.load()

    assert config.metadata.url == "https://defaults.test/weather-maps.json"
    assert config.playback.interval_ms == 900
    assert list(config.base_styles) == ["geographic"]


def test_missing_include_falls_back_to_defaults(config_dir):
    write(config_dir / "config.yaml", """
        include:
          - nowhere.yaml
    """)

    config = make_manager(config_dir)
    config.load()

    assert config.playback.interval_ms == 900


def test_malformed_yaml_falls_back_to_defaults(config_dir):
    write(config_dir / "config.yaml", "playback: [unclosed\n")

    config = make_manager(config_dir)
    config.load()

    assert config.playback.interval_ms == 900


def test_shipped_configuration_loads():
    config = ConfigManager()
    config.load()

    assert config.playback.interval_ms == 700
    assert config.map.base_style in config.base_styles
    assert config.metadata.fallback_host.startswith("https://")
