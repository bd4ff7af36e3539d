"""
Shutdown coordinator for the viewer process.

Installs SIGINT/SIGTERM handlers, waits for a signal or for a critical task
to fail, then runs registered shutdown handlers by priority.
"""

import asyncio
import signal
from typing import List, Optional, Set

from lifecycle.task_registry import TaskRegistry, TaskCategory
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)

# A failure in one of these categories shuts the viewer down
CRITICAL_CATEGORIES: Set[TaskCategory] = {TaskCategory.API}


class ShutdownCoordinator:
    """
    Coordinates graceful shutdown of multiple components.

    Example:
        coordinator = ShutdownCoordinator()
        coordinator.register(PlaybackShutdownHandler(frame_controller))
        coordinator.register(APIServerShutdownHandler(api_server))

        coordinator.setup_signal_handlers(loop)
        await coordinator.wait_for_shutdown()
        await coordinator.shutdown_all()
    """

    def __init__(self, timeout_per_handler: float = 5.0, total_timeout: float = 15.0):
        self._handlers: List = []
        self._shutdown_event: Optional[asyncio.Event] = None
        self._timeout_per_handler = timeout_per_handler
        self._total_timeout = total_timeout
        self.reason: Optional[str] = None

    def register(self, handler) -> None:
        """
        Register a shutdown handler.

        Handler must have a shutdown_priority property (int) and an async
        shutdown() method.
        """
        if not hasattr(handler, "shutdown_priority"):
            raise ValueError(f"Handler {handler} missing shutdown_priority property")
        if not hasattr(handler, "shutdown"):
            raise ValueError(f"Handler {handler} missing shutdown() method")

        self._handlers.append(handler)
        log.debug(f"Registered shutdown handler: {handler.__class__.__name__}")

    def setup_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        """Install SIGINT and SIGTERM handlers on the running loop."""
        self._shutdown_event = asyncio.Event()

        def signal_handler(sig: signal.Signals) -> None:
            self.request_shutdown(sig.name)

        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))

        log.info("Signal handlers installed (SIGINT, SIGTERM)")

    def request_shutdown(self, reason: str) -> None:
        """Trigger shutdown programmatically (signals call this too)."""
        if self._shutdown_event is None:
            self._shutdown_event = asyncio.Event()
        self.reason = reason
        log.info(f"Shutdown requested: {reason}")
        self._shutdown_event.set()

    def _failed_critical_task(self) -> Optional[str]:
        for record in TaskRegistry.instance().failed():
            if record.info.category in CRITICAL_CATEGORIES:
                return record.info.description
        return None

    async def wait_for_shutdown(self, poll_interval: float = 0.2) -> None:
        """
        Return when a shutdown is requested or a critical task has failed.

        Raises:
            RuntimeError: If signal handlers weren't set up
        """
        if self._shutdown_event is None:
            raise RuntimeError("Call setup_signal_handlers() first")

        while not self._shutdown_event.is_set():
            failed = self._failed_critical_task()
            if failed is not None:
                self.reason = f"Task failure: {failed}"
                log.error(f"❌ Critical task failed: {failed}")
                return
            try:
                await asyncio.wait_for(self._shutdown_event.wait(), timeout=poll_interval)
            except asyncio.TimeoutError:
                continue

    async def shutdown_all(self) -> None:
        """
        Run handlers in descending priority order.

        Each handler gets timeout_per_handler seconds; the whole sequence
        stops after total_timeout. A failing handler does not stop the others.
        """
        log.info("🛑 Initiating graceful shutdown sequence...", reason=self.reason or "UNKNOWN")

        sorted_handlers = sorted(self._handlers, key=lambda h: h.shutdown_priority, reverse=True)
        loop = asyncio.get_running_loop()
        start_time = loop.time()

        for handler in sorted_handlers:
            handler_name = handler.__class__.__name__

            elapsed = loop.time() - start_time
            if elapsed > self._total_timeout:
                log.error(f"⚠️  Total shutdown timeout exceeded ({elapsed:.1f}s > {self._total_timeout}s)")
                break

            try:
                await asyncio.wait_for(handler.shutdown(), timeout=self._timeout_per_handler)
                log.debug(f"✓ {handler_name} shutdown complete")
            except asyncio.TimeoutError:
                log.error(f"⚠️  {handler_name} shutdown timeout ({self._timeout_per_handler}s)")
            except Exception as e:
                log.error(f"❌ Error shutting down {handler_name}: {e}", error_type=type(e).__name__)

        log.info("✓ Shutdown sequence complete")
