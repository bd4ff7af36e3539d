"""
Viewer event controller - UI events → frame controller mutators.

Subscribes to the UI events on the EventBus and applies each one to the
FrameController / BaseLayerService. Adapters never touch the core directly.
"""

from typing import Optional

from controllers.frame_controller import FrameController
from models.events import (
    EventType,
    PlaybackToggleEvent,
    FrameStepEvent,
    OpacityChangedEvent,
    ColorSchemeChangedEvent,
    BaseStyleChangedEvent,
)
from models.enums import LogCategory, StepDirection
from services.base_layer_service import BaseLayerService
from services.event_bus import EventBus
from utils.logger import get_category_logger

log = get_category_logger(LogCategory.EVENT)


class ViewerEventController:
    """
    Event mapping:
    - PLAYBACK_TOGGLE       → FrameController.toggle_play()
    - FRAME_STEP            → next_frame() / previous_frame()
    - OPACITY_CHANGED       → set_opacity(layer_class, value)
    - COLOR_SCHEME_CHANGED  → change_color_scheme(key)
    - BASE_STYLE_CHANGED    → BaseLayerService.show(key), then overlays back on top
    """

    def __init__(
        self,
        frame_controller: FrameController,
        event_bus: EventBus,
        base_layer_service: Optional[BaseLayerService] = None
    ) -> None:
        self.frame_controller = frame_controller
        self.base_layer_service = base_layer_service
        self.event_bus = event_bus

        event_bus.subscribe(EventType.PLAYBACK_TOGGLE, self._on_playback_toggle)
        event_bus.subscribe(EventType.FRAME_STEP, self._on_frame_step)
        event_bus.subscribe(EventType.OPACITY_CHANGED, self._on_opacity_changed)
        event_bus.subscribe(EventType.COLOR_SCHEME_CHANGED, self._on_color_scheme_changed)
        event_bus.subscribe(EventType.BASE_STYLE_CHANGED, self._on_base_style_changed)

        log.debug("ViewerEventController initialized")

    async def _on_playback_toggle(self, event: PlaybackToggleEvent) -> None:
        await self.frame_controller.toggle_play()

    def _on_frame_step(self, event: FrameStepEvent) -> None:
        if event.direction is StepDirection.NEXT:
            self.frame_controller.next_frame()
        else:
            self.frame_controller.previous_frame()

    def _on_opacity_changed(self, event: OpacityChangedEvent) -> None:
        self.frame_controller.set_opacity(event.layer_class, event.value)

    def _on_color_scheme_changed(self, event: ColorSchemeChangedEvent) -> None:
        self.frame_controller.change_color_scheme(event.scheme)

    def _on_base_style_changed(self, event: BaseStyleChangedEvent) -> None:
        if self.base_layer_service is None:
            log.warn("Base style change ignored (no base layer service)", style=event.style)
            return
        self.base_layer_service.show(event.style)
        # New base layer sits on top of the stack
        self.frame_controller.redraw_current()
