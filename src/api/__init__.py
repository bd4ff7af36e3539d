"""
Radar Loop Viewer - API Layer

HTTP UI adapter over the viewer core. Write endpoints publish UI events on
the EventBus; read endpoints return core state.

Structure:
- routes/     : Endpoint handlers
- schemas/    : Pydantic schemas
- middleware/ : Error handling
"""

from api.main import create_app

__all__ = ["create_app"]
