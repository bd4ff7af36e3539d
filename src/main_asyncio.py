"""
main_asyncio.py - Application entry point for the radar loop viewer
-----------------------------------------------------------------

Responsible for:
- initializing config, core components and adapters
- wiring dependencies (Dependency Injection)
- loading the frame catalog and starting the API server
- graceful shutdown on Ctrl+C or fatal errors
"""

import sys

# ---------------------------------------------------------------------------
# UTF-8 ENCODING FIX
# ---------------------------------------------------------------------------

# Set UTF-8 encoding for output BEFORE any logging (fixes Unicode symbol rendering)
if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore
if hasattr(sys.stderr, 'reconfigure') and sys.stderr.encoding != 'UTF-8':
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore

import asyncio

from api.main import create_app
from api.dependencies import set_service_container
from controllers import FrameController, ViewerEventController
from engine.render_options import RenderOptions
from lifecycle import ShutdownCoordinator
from lifecycle.api_server_wrapper import APIServerWrapper
from lifecycle.handlers import (
    AllTasksCancellationHandler,
    APIServerShutdownHandler,
    CatalogShutdownHandler,
    PlaybackShutdownHandler,
)
from lifecycle.task_registry import create_tracked_task, TaskCategory
from managers import ConfigManager
from models.enums import LogCategory, LogLevel
from services import EventBus, FrameCatalog, BaseLayerService
from services.middleware import log_middleware
from services.service_container import ServiceContainer
from surface.in_memory_surface import InMemoryTileSurface
from utils.logger import get_logger, configure_logger

log = get_logger().for_category(LogCategory.SYSTEM)


# ---------------------------------------------------------------------------
# Application Entry
# ---------------------------------------------------------------------------

async def main():
    """Main async entry point (dependency injection and event loop startup)."""

    log.info("Starting radar loop viewer...")

    # ========================================================================
    # 1. INFRASTRUCTURE
    # ========================================================================

    log.info("Loading configuration...")
    config_manager = ConfigManager()
    config_manager.load()

    level_name = str((config_manager.data.get("logging") or {}).get("level", "INFO")).upper()
    configure_logger(LogLevel[level_name] if level_name in LogLevel.__members__ else LogLevel.INFO)

    log.info("Initializing event bus...")
    event_bus = EventBus()
    event_bus.add_middleware(log_middleware)

    # ========================================================================
    # 2. MAP SURFACE + BASE LAYER
    # ========================================================================

    surface = InMemoryTileSurface()

    base_layer_service = BaseLayerService(surface, config_manager.base_styles)
    if config_manager.map.base_style in config_manager.base_styles:
        base_layer_service.show(config_manager.map.base_style)

    # ========================================================================
    # 3. FRAME CONTROLLER
    # ========================================================================

    log.info("Initializing FrameController...")
    frame_controller = FrameController(
        surface,
        RenderOptions.from_config(config_manager.render),
        interval=config_manager.playback.interval
    )

    ViewerEventController(frame_controller, event_bus, base_layer_service)

    catalog = FrameCatalog(
        url=config_manager.metadata.url,
        timeout=config_manager.metadata.timeout,
        fallback_host=config_manager.metadata.fallback_host
    )

    # ========================================================================
    # 4. SERVICE CONTAINER
    # ========================================================================

    services = ServiceContainer(
        config_manager=config_manager,
        event_bus=event_bus,
        surface=surface,
        catalog=catalog,
        frame_controller=frame_controller,
        base_layer_service=base_layer_service
    )

    set_service_container(services)
    log.info("Service container registered with API")

    # ========================================================================
    # 5. FRAME CATALOG
    # ========================================================================

    create_tracked_task(
        frame_controller.load(catalog),
        category=TaskCategory.CATALOG,
        description="Frame metadata fetch"
    )

    # ========================================================================
    # 6. API SERVER
    # ========================================================================

    log.info("Starting API server task...")

    app = create_app(cors_origins=config_manager.api.cors_origins)
    api_server = APIServerWrapper(app, host=config_manager.api.host, port=config_manager.api.port)
    create_tracked_task(
        api_server.serve(),
        category=TaskCategory.API,
        description="FastAPI/Uvicorn Server"
    )

    # ============================================================
    # 7. SHUTDOWN COORDINATOR
    # ============================================================

    log.info("Initializing shutdown system...")

    coordinator = ShutdownCoordinator()
    coordinator.register(PlaybackShutdownHandler(frame_controller))
    coordinator.register(APIServerShutdownHandler(api_server))
    coordinator.register(CatalogShutdownHandler(catalog))
    coordinator.register(AllTasksCancellationHandler())

    loop = asyncio.get_running_loop()
    coordinator.setup_signal_handlers(loop)

    log.info("🏁 Viewer initialized. Waiting for exit signal...")

    await coordinator.wait_for_shutdown()
    await coordinator.shutdown_all()

    set_service_container(None)
    log.info("👋 Viewer shut down cleanly.")


# ---------------------------------------------------------------------------
# ENTRY POINT
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")
    except Exception as e:
        log.error(f"Fatal error: {e}", error_type=type(e).__name__)
        sys.exit(1)
