"""
Task Registry
-------------

Central record of asyncio tasks created by the viewer (auto-play timer,
metadata fetch, API server). Logs failures as they happen and lets the
shutdown coordinator and the system API list what is still running.
"""

from __future__ import annotations

import asyncio
import traceback
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional, List, Any
from datetime import datetime, timezone

from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.TASK)


class TaskCategory(Enum):
    """Logical grouping of asynchronous tasks."""
    API = auto()
    CATALOG = auto()
    PLAYBACK = auto()
    SYSTEM = auto()
    BACKGROUND = auto()


@dataclass(frozen=True)
class TaskInfo:
    """Immutable metadata captured at task creation time."""
    id: int
    category: TaskCategory
    description: str
    created_at: str  # ISO UTC string
    created_timestamp: float
    origin_stack: str  # short stack trace where create_tracked_task was called


@dataclass
class TaskRecord:
    """Internal structure tracking task state."""
    task: asyncio.Task
    info: TaskInfo
    cancelled: bool = False
    finished_with_error: Optional[BaseException] = None
    finished_return: Optional[Any] = None

    @property
    def status(self) -> str:
        if not self.task.done():
            return "running"
        if self.cancelled:
            return "cancelled"
        if self.finished_with_error is not None:
            return "failed"
        return "completed"


class TaskRegistry:
    """
    Process-wide registry of tracked tasks.

    Responsibilities:
    - Track tasks and metadata
    - Log task failures
    - Expose active/failed/cancelled views for shutdown and the API
    """

    _instance: Optional["TaskRegistry"] = None

    def __init__(self) -> None:
        self._records: Dict[int, TaskRecord] = {}
        self._next_id: int = 1

    @classmethod
    def instance(cls) -> "TaskRegistry":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def register(
        self,
        task: asyncio.Task,
        category: TaskCategory,
        description: str
    ) -> int:
        """Register a new task with metadata."""
        task_id = self._next_id
        self._next_id += 1

        # Drop the last frame, it is inside this module
        origin_stack = "".join(traceback.format_stack(limit=8)[:-1])
        now = datetime.now(timezone.utc)

        info = TaskInfo(
            id=task_id,
            category=category,
            description=description,
            created_at=now.isoformat(),
            created_timestamp=now.timestamp(),
            origin_stack=origin_stack,
        )
        self._records[task_id] = TaskRecord(task=task, info=info)

        log.debug(f"[Task {task_id}] Registered ({category.name}) - {description}")

        task.add_done_callback(self._on_task_done)
        return task_id

    def _on_task_done(self, task: asyncio.Task) -> None:
        record = self.get_record(task)
        if record is None:
            return

        if task.cancelled():
            record.cancelled = True
            log.debug(f"[Task {record.info.id}] Cancelled")
            return

        exc = task.exception()
        if exc:
            record.finished_with_error = exc
            log.error(
                f"[Task {record.info.id}] FAILED: {exc}",
                description=record.info.description,
                error_type=type(exc).__name__
            )
        else:
            record.finished_return = task.result()
            log.debug(f"[Task {record.info.id}] Completed successfully")

    def get_record(self, task: asyncio.Task) -> Optional[TaskRecord]:
        for record in self._records.values():
            if record.task is task:
                return record
        return None

    def list_all(self) -> List[TaskRecord]:
        return list(self._records.values())

    def active(self) -> List[TaskRecord]:
        return [r for r in self._records.values() if not r.task.done()]

    def failed(self) -> List[TaskRecord]:
        return [r for r in self._records.values() if r.finished_with_error is not None]

    def cancelled(self) -> List[TaskRecord]:
        return [r for r in self._records.values() if r.cancelled]

    def summary(self) -> str:
        return (
            f"Tasks: total={len(self._records)}, running={len(self.active())}, "
            f"failed={len(self.failed())}, cancelled={len(self.cancelled())}"
        )

    def get_tasks_for_shutdown(
        self,
        exclude: Optional[List[asyncio.Task]] = None
    ) -> List[asyncio.Task]:
        """Return running tasks that should be cancelled during shutdown."""
        exclude = exclude or []
        tasks = [
            r.task for r in self._records.values()
            if not r.task.done() and r.task not in exclude
        ]
        log.debug(f"Shutdown: {len(tasks)} tasks to cancel")
        return tasks


def create_tracked_task(
    coro,
    *,
    category: TaskCategory,
    description: str,
    loop: Optional[asyncio.AbstractEventLoop] = None
) -> asyncio.Task:
    """
    Create and register a task in a single call.
    """
    loop = loop or asyncio.get_running_loop()
    task = loop.create_task(coro)

    TaskRegistry.instance().register(
        task=task,
        category=category,
        description=description
    )
    return task
