"""
Config Manager

Loads the viewer's YAML configuration with include support and exposes
typed sections.
"""

import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from models.base_style import BaseStyle
from models.enums import ColorScheme
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

SRC_DIR = Path(__file__).resolve().parent.parent


@dataclass
class MetadataConfig:
    url: str = "https://api.rainviewer.com/public/weather-maps.json"
    timeout: float = 10.0
    fallback_host: str = ""


@dataclass
class PlaybackConfig:
    interval_ms: int = 700

    @property
    def interval(self) -> float:
        return self.interval_ms / 1000.0


@dataclass
class RenderConfig:
    radar_opacity: float = 1.0
    cloud_opacity: float = 1.0
    color_scheme: ColorScheme = ColorScheme.UNIVERSAL_BLUE
    smooth: bool = True
    snow_colors: bool = True
    image_format: str = "webp"


@dataclass
class MapConfig:
    center: Tuple[float, float] = (24.7136, 46.6753)
    zoom: int = 6
    base_style: str = "geographic"


@dataclass
class ApiConfig:
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str] = field(default_factory=list)


class ConfigManager:
    """
    Main configuration manager with include system support

    Loads config.yaml and processes the include: directive to merge modular
    YAML files. Falls back to factory_defaults.yaml when loading fails.

    Example:
        config = ConfigManager()
        config.load()

        config.metadata.url
        config.playback.interval       # seconds
        config.base_styles["satellite"].url
    """

    def __init__(
        self,
        config_path: str = "config/config.yaml",
        defaults_path: str = "config/factory_defaults.yaml",
        base_dir: Optional[Path] = None
    ):
        """
        Args:
            config_path: Path to main config.yaml (relative to base_dir)
            defaults_path: Path to factory defaults fallback
            base_dir: Directory paths are resolved against (default: src/)
        """
        self.base_dir = Path(base_dir) if base_dir is not None else SRC_DIR
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict = {}

        self.metadata = MetadataConfig()
        self.playback = PlaybackConfig()
        self.render = RenderConfig()
        self.map = MapConfig()
        self.api = ApiConfig()
        self.base_styles: Dict[str, BaseStyle] = {}

    def load(self) -> Dict:
        """
        Load YAML configuration

        Process:
        1. Load main config.yaml
        2. If it has 'include:' list, load and merge those files
        3. Otherwise treat it as a monolithic config
        4. Fall back to factory defaults on failure
        5. Build typed sections

        Returns:
            Merged config data dict
        """
        full_path = self.base_dir / self.config_path
        try:
            with open(full_path, "r", encoding="utf-8") as f:
                main_config = yaml.safe_load(f) or {}

            if "include" in main_config:
                log.info("Using include-based configuration")
                self.data = self._load_with_includes(main_config["include"], full_path.parent)
            else:
                log.info("Using monolithic configuration")
                self.data = main_config

        except (OSError, yaml.YAMLError) as ex:
            log.error("Failed to load config.yaml", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")

            with open(self.base_dir / self.factory_defaults_path, "r", encoding="utf-8") as f:
                self.data = yaml.safe_load(f) or {}

        self._build_sections()
        return self.data

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict:
        """
        Load and merge multiple YAML files from include list (later files win)
        """
        merged = {}

        for filename in include_list:
            filepath = config_dir / filename
            try:
                with open(filepath, "r", encoding="utf-8") as f:
                    file_data = yaml.safe_load(f)
            except FileNotFoundError:
                log.error(f"File not found: {filename}")
                raise

            if file_data:
                merged.update(file_data)
                log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))

        log.info("Config merge complete", total_keys=len(merged))
        return merged

    def _build_sections(self) -> None:
        metadata = self.data.get("metadata") or {}
        self.metadata = MetadataConfig(
            url=metadata.get("url", MetadataConfig.url),
            timeout=float(metadata.get("timeout", MetadataConfig.timeout)),
            fallback_host=metadata.get("fallback_host") or "",
        )

        playback = self.data.get("playback") or {}
        self.playback = PlaybackConfig(
            interval_ms=int(playback.get("interval_ms", PlaybackConfig.interval_ms)),
        )

        render = self.data.get("render") or {}
        self.render = RenderConfig(
            radar_opacity=float(render.get("radar_opacity", 1.0)),
            cloud_opacity=float(render.get("cloud_opacity", 1.0)),
            color_scheme=ColorScheme.from_key(render.get("color_scheme", "universal_blue")),
            smooth=bool(render.get("smooth", True)),
            snow_colors=bool(render.get("snow_colors", True)),
            image_format=str(render.get("image_format", "webp")),
        )

        map_data = self.data.get("map") or {}
        center = map_data.get("center") or MapConfig.center
        self.map = MapConfig(
            center=(float(center[0]), float(center[1])),
            zoom=int(map_data.get("zoom", MapConfig.zoom)),
            base_style=map_data.get("base_style", MapConfig.base_style),
        )

        api = self.data.get("api") or {}
        self.api = ApiConfig(
            host=api.get("host", ApiConfig.host),
            port=int(api.get("port", ApiConfig.port)),
            cors_origins=list(api.get("cors_origins") or []),
        )

        self.base_styles = {
            key: BaseStyle(key=key, url=entry["url"], attribution=entry.get("attribution", ""))
            for key, entry in (self.data.get("base_styles") or {}).items()
        }

        if self.base_styles and self.map.base_style not in self.base_styles:
            log.warn(
                f"Unknown default base style '{self.map.base_style}'",
                available=", ".join(self.base_styles)
            )

        log.debug(
            "Config sections ready",
            metadata_url=self.metadata.url,
            interval_ms=self.playback.interval_ms,
            base_styles=len(self.base_styles)
        )
