from dataclasses import dataclass


@dataclass(frozen=True)
class BaseStyle:
    """Base map tile source: URL template plus attribution text"""
    key: str
    url: str
    attribution: str = ""
