"""
Middleware for EventBus

Pipeline functions that see every event before handlers.
"""

from models.events import Event
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EVENT)


def log_middleware(event: Event) -> Event:
    """
    Log all events

    Usage:
        event_bus.add_middleware(log_middleware)
    """
    data = event.to_data()
    data_str = ", ".join(
        f"{k}={v.name if hasattr(v, 'name') else v}" for k, v in data.items()
    )
    log.info(f"Event: {event.type.name} from {event.source.name}" + (f" | {data_str}" if data_str else ""))
    return event
