"""
Event Bus - UI event routing

Pub-sub between UI adapters and the viewer core:
- Publishers: publish(event)
- Subscribers: subscribe(event_type, handler, priority, filter_fn)
- Middleware: add_middleware(middleware_fn)

All handlers run on the event loop that publishes, one event at a time, so
the frame controller sees a single writer.
"""

import inspect
from typing import Callable, List, Dict, Optional
from dataclasses import dataclass
from models.events import Event, EventType
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EVENT)


@dataclass
class EventHandler:
    """Event handler registration"""
    handler: Callable[[Event], None]
    priority: int
    filter_fn: Optional[Callable[[Event], bool]]


class EventBus:
    """
    Event bus for UI events

    Features:
    - Priority-based handler execution (high priority first)
    - Per-handler filtering
    - Middleware pipeline (logging, blocking)
    - Async/sync handler support (auto-detected)
    - Fault tolerance (one handler crash doesn't stop others)

    Example:
        bus = EventBus()
        bus.subscribe(EventType.FRAME_STEP, controller.on_frame_step)
        await bus.publish(FrameStepEvent(StepDirection.NEXT))
    """

    def __init__(self):
        self._handlers: Dict[EventType, List[EventHandler]] = {}
        self._middleware: List[Callable[[Event], Optional[Event]]] = []

    def subscribe(
        self,
        event_type: EventType,
        handler: Callable[[Event], None],
        priority: int = 0,
        filter_fn: Optional[Callable[[Event], bool]] = None
    ) -> None:
        """
        Subscribe to event type

        Args:
            event_type: Which events to listen for
            handler: Function to call (can be async or sync)
            priority: Execution priority (higher = called first, default: 0)
            filter_fn: Optional filter (return True = handle, False = skip)
        """
        handlers = self._handlers.setdefault(event_type, [])
        handlers.append(EventHandler(handler, priority, filter_fn))
        handlers.sort(key=lambda h: h.priority, reverse=True)

        log.debug(
            "Event handler subscribed",
            event_type=event_type.name,
            handler=getattr(handler, "__name__", repr(handler)),
            priority=priority
        )

    def add_middleware(self, middleware: Callable[[Event], Optional[Event]]) -> None:
        """
        Add middleware to the pipeline (runs in registration order).

        Middleware returns the (possibly modified) event, or None to block it.
        """
        self._middleware.append(middleware)

    async def publish(self, event: Event) -> None:
        """
        Publish event to all subscribers

        Flow:
        1. Apply middleware (can modify or block event)
        2. Execute handlers by priority, skipping filtered ones
        3. Log handler exceptions and continue
        """
        for middleware in self._middleware:
            processed_event = middleware(event)
            if processed_event is None:
                return
            event = processed_event

        handlers = self._handlers.get(event.type, [])
        if not handlers:
            log.debug("No handlers for event", event_type=event.type.name)
            return

        for handler_entry in handlers:
            if handler_entry.filter_fn and not handler_entry.filter_fn(event):
                continue

            try:
                result = handler_entry.handler(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                log.error(
                    f"Event handler failed: {getattr(handler_entry.handler, '__name__', '?')} for {event.type.name}",
                    error=str(e),
                    error_type=type(e).__name__
                )
