"""Service Container - dependency container for the viewer core and its adapters"""

from dataclasses import dataclass

from controllers.frame_controller import FrameController
from managers.config_manager import ConfigManager
from services.base_layer_service import BaseLayerService
from services.event_bus import EventBus
from services.frame_catalog import FrameCatalog
from surface.tile_surface_interface import ITileSurface


@dataclass
class ServiceContainer:
    """
    Everything the HTTP adapter and lifecycle handlers need.

    Adapters read state from frame_controller / surface and mutate it only by
    publishing events on event_bus.

    Usage:
        services = ServiceContainer(
            config_manager=config_manager,
            event_bus=event_bus,
            surface=surface,
            catalog=catalog,
            frame_controller=frame_controller,
            base_layer_service=base_layer_service
        )
        set_service_container(services)
    """

    config_manager: ConfigManager
    event_bus: EventBus
    surface: ITileSurface
    catalog: FrameCatalog
    frame_controller: FrameController
    base_layer_service: BaseLayerService
