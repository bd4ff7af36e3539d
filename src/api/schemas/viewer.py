"""
Viewer schemas - Pydantic models for playback, options and layer stack
"""

from pydantic import BaseModel, Field
from typing import List, Optional


class RenderOptionsResponse(BaseModel):
    radar_opacity: float
    cloud_opacity: float
    color_scheme: str
    smooth: bool
    snow_colors: bool
    image_format: str


class MapViewResponse(BaseModel):
    """Initial map view from config"""
    center: List[float] = Field(description="[lat, lon]")
    zoom: int


class ViewerStateResponse(BaseModel):
    """Frame controller snapshot"""
    state: str = Field(description="IDLE, READY or PLAYING")
    playing: bool
    current_index: Optional[int] = Field(None, description="Shown frame index (null while idle)")
    frame_count: int = Field(description="Frames reachable by the shared index")
    radar_time: Optional[int] = Field(None, description="UNIX time of the shown radar frame")
    satellite_time: Optional[int] = Field(None, description="UNIX time of the shown satellite frame")
    base_style: Optional[str] = None
    map: MapViewResponse
    options: RenderOptionsResponse


class TileLayerResponse(BaseModel):
    handle: int
    url_template: str
    opacity: float
    attribution: Optional[str] = None


class LayerStackResponse(BaseModel):
    """Layers on the map, bottom first"""
    layers: List[TileLayerResponse]
    count: int


class OpacityRequest(BaseModel):
    """Request to change one layer class opacity"""
    value: float = Field(ge=0.0, le=1.0, description="Opacity 0.0-1.0")


class ColorSchemeRequest(BaseModel):
    scheme: str = Field(description="Scheme key, e.g. 'universal_blue', 'titan'")


class BaseStyleRequest(BaseModel):
    style: str = Field(description="Base style key, e.g. 'geographic', 'satellite'")


class ChoiceResponse(BaseModel):
    key: str
    label: str


class ChoiceListResponse(BaseModel):
    items: List[ChoiceResponse]
    current: Optional[str] = None
