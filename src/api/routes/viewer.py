"""
Viewer endpoints - playback, render options, base style, layer stack

Read endpoints return core state directly. Write endpoints validate input,
publish the matching UI event on the EventBus (the core applies it) and
return the resulting state.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_service_container
from api.middleware.error_handler import LayerClassNotFoundError
from api.schemas.viewer import (
    ViewerStateResponse,
    LayerStackResponse,
    MapViewResponse,
    TileLayerResponse,
    OpacityRequest,
    ColorSchemeRequest,
    BaseStyleRequest,
    ChoiceResponse,
    ChoiceListResponse,
)
from engine.render_options import coerce_color_scheme
from models.enums import ColorScheme, LayerClass, StepDirection
from models.events import (
    PlaybackToggleEvent,
    FrameStepEvent,
    OpacityChangedEvent,
    ColorSchemeChangedEvent,
    BaseStyleChangedEvent,
)
from services.service_container import ServiceContainer
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)

router = APIRouter(prefix="/viewer", tags=["Viewer"])


def _state(services: ServiceContainer) -> ViewerStateResponse:
    current = services.base_layer_service.current
    map_config = services.config_manager.map
    return ViewerStateResponse(
        **services.frame_controller.snapshot(),
        base_style=current.key if current else None,
        map=MapViewResponse(center=list(map_config.center), zoom=map_config.zoom)
    )


@router.get(
    "/state",
    response_model=ViewerStateResponse,
    summary="Get playback state"
)
async def get_state(
    services: ServiceContainer = Depends(get_service_container)
) -> ViewerStateResponse:
    """
    Current frame controller state.

    **Returns:**
    - state: IDLE (nothing loaded), READY or PLAYING
    - current_index / frame_count: position in the shared frame index
    - radar_time / satellite_time: timestamps of the shown frames
    - options: render options
    """
    return _state(services)


@router.get(
    "/layers",
    response_model=LayerStackResponse,
    summary="Get map layer stack",
    description="Tile layers currently on the map, bottom first"
)
async def get_layers(
    services: ServiceContainer = Depends(get_service_container)
) -> LayerStackResponse:
    layers = [
        TileLayerResponse(
            handle=layer.handle,
            url_template=layer.url_template,
            opacity=layer.opacity,
            attribution=layer.attribution
        )
        for layer in services.surface.layers()
    ]
    return LayerStackResponse(layers=layers, count=len(layers))


@router.post("/play-toggle", response_model=ViewerStateResponse, summary="Play/pause")
async def toggle_play(
    services: ServiceContainer = Depends(get_service_container)
) -> ViewerStateResponse:
    await services.event_bus.publish(PlaybackToggleEvent())
    return _state(services)


@router.post("/next", response_model=ViewerStateResponse, summary="Step to next frame")
async def next_frame(
    services: ServiceContainer = Depends(get_service_container)
) -> ViewerStateResponse:
    await services.event_bus.publish(FrameStepEvent(StepDirection.NEXT))
    return _state(services)


@router.post("/previous", response_model=ViewerStateResponse, summary="Step to previous frame")
async def previous_frame(
    services: ServiceContainer = Depends(get_service_container)
) -> ViewerStateResponse:
    await services.event_bus.publish(FrameStepEvent(StepDirection.PREVIOUS))
    return _state(services)


@router.put(
    "/opacity/{layer}",
    response_model=ViewerStateResponse,
    summary="Set overlay opacity"
)
async def set_opacity(
    layer: str,
    request: OpacityRequest,
    services: ServiceContainer = Depends(get_service_container)
) -> ViewerStateResponse:
    """
    Set opacity for every cached layer of a class.

    **Parameters:**
    - `layer`: "radar", "satellite" or "cloud"

    **Errors:**
    - 404: Unknown layer
    - 422: Value outside [0, 1]
    """
    try:
        layer_class = LayerClass.from_key(layer)
    except KeyError:
        raise LayerClassNotFoundError(layer) from None

    await services.event_bus.publish(OpacityChangedEvent(layer_class, request.value))
    return _state(services)


@router.put("/color-scheme", response_model=ViewerStateResponse, summary="Set radar color scheme")
async def set_color_scheme(
    request: ColorSchemeRequest,
    services: ServiceContainer = Depends(get_service_container)
) -> ViewerStateResponse:
    scheme = coerce_color_scheme(request.scheme)
    await services.event_bus.publish(ColorSchemeChangedEvent(scheme.key))
    return _state(services)


@router.put("/base-style", response_model=ViewerStateResponse, summary="Set base map style")
async def set_base_style(
    request: BaseStyleRequest,
    services: ServiceContainer = Depends(get_service_container)
) -> ViewerStateResponse:
    style = services.base_layer_service.get_style(request.style)
    await services.event_bus.publish(BaseStyleChangedEvent(style.key))
    return _state(services)


@router.get("/color-schemes", response_model=ChoiceListResponse, summary="List radar color schemes")
async def list_color_schemes(
    services: ServiceContainer = Depends(get_service_container)
) -> ChoiceListResponse:
    items = [
        ChoiceResponse(key=scheme.key, label=scheme.name.replace("_", " ").title())
        for scheme in ColorScheme
    ]
    return ChoiceListResponse(
        items=items,
        current=services.frame_controller.options.color_scheme.key
    )


@router.get("/base-styles", response_model=ChoiceListResponse, summary="List base map styles")
async def list_base_styles(
    services: ServiceContainer = Depends(get_service_container)
) -> ChoiceListResponse:
    base = services.base_layer_service
    items = [
        ChoiceResponse(key=key, label=base.get_style(key).attribution or key)
        for key in base.style_keys
    ]
    return ChoiceListResponse(items=items, current=base.current.key if base.current else None)
