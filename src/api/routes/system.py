"""
System endpoints - task introspection
"""

from fastapi import APIRouter
from typing import Dict, Any
from lifecycle.task_registry import TaskRegistry

router = APIRouter(prefix="/system", tags=["System"])


@router.get("/tasks/summary")
async def get_task_summary() -> Dict[str, Any]:
    """
    High-level task summary (auto-play timer, metadata fetch, API server).
    """
    registry = TaskRegistry.instance()
    return {
        "summary": registry.summary(),
        "total": len(registry.list_all()),
        "active": len(registry.active()),
        "failed": len(registry.failed()),
        "cancelled": len(registry.cancelled())
    }


@router.get("/tasks")
async def get_all_tasks() -> Dict[str, Any]:
    """Detailed list of tracked tasks."""
    records = TaskRegistry.instance().list_all()
    tasks = [
        {
            "id": r.info.id,
            "category": r.info.category.name,
            "description": r.info.description,
            "created_at": r.info.created_at,
            "status": r.status,
            "error": str(r.finished_with_error) if r.finished_with_error else None,
        }
        for r in records
    ]
    return {"count": len(tasks), "tasks": tasks}
