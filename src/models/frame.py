"""
Frame descriptor model.

One descriptor per time step of radar or satellite imagery, as listed by the
weather-maps metadata document.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class FrameDescriptor:
    """
    Immutable frame entry.

    path: tile path prefix on the tile host (e.g. "/v2/radar/1718000400")
    time: UNIX timestamp of the frame (informational, catalog order rules)
    """

    path: str
    time: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> Optional["FrameDescriptor"]:
        """Build from a metadata entry; returns None when the entry has no usable path."""
        if not isinstance(data, dict):
            return None
        path = data.get("path")
        if not isinstance(path, str) or not path:
            return None
        try:
            time = int(data.get("time") or 0)
        except (TypeError, ValueError):
            time = 0
        return cls(path=path, time=time)

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "time": self.time}
