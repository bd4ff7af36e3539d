# lifecycle/handlers/all_tasks_cancellation_handler.py

import asyncio
from typing import List, Optional

from utils.logger import get_logger, LogCategory
from lifecycle.shutdown_protocol import IShutdownHandler
from lifecycle.task_registry import TaskRegistry

log = get_logger().for_category(LogCategory.SHUTDOWN)


class AllTasksCancellationHandler(IShutdownHandler):
    """
    Cancels every tracked task that is still running, except the task that
    executes the shutdown sequence and any explicitly excluded tasks.
    """

    shutdown_priority = 30  # LAST

    def __init__(self, exclude_tasks: Optional[List[asyncio.Task]] = None):
        self.exclude_tasks = exclude_tasks or []

    async def shutdown(self) -> None:
        current = asyncio.current_task()

        exclude = list(self.exclude_tasks)
        if current:
            exclude.append(current)

        tasks = TaskRegistry.instance().get_tasks_for_shutdown(exclude=exclude)
        if not tasks:
            log.debug("No tasks to cancel")
            return

        log.info(f"Cancelling {len(tasks)} background task{'s' if len(tasks) != 1 else ''}")

        for task in tasks:
            task.cancel(msg="shutdown")

        results = await asyncio.gather(*tasks, return_exceptions=True)
        for task, result in zip(tasks, results):
            if isinstance(result, Exception):
                log.warn(f"Task ended with error during shutdown: {result}", task=task.get_name())

        log.debug("All tasks cancelled")
