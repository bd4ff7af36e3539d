from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict

from models.enums import EventSource
from models.events.types import EventType


@dataclass(init=False)
class Event:
    """
    Base event class.

    - type: EventType
    - source: EventSource
    - timestamp: auto
    """

    type: EventType
    source: EventSource
    timestamp: float = field(default_factory=time.time)

    def __init__(self, *, type: EventType, source: EventSource):
        self.type = type
        self.source = source
        self.timestamp = time.time()

    def to_data(self) -> Dict[str, Any]:
        """Event payload without metadata fields."""
        return {
            k: v for k, v in self.__dict__.items()
            if k not in ("type", "source", "timestamp")
        }
