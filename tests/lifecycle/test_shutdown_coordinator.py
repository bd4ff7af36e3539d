"""
Tests for ShutdownCoordinator: shutdown triggers and handler ordering.
"""

import asyncio
import signal

import pytest
import pytest_asyncio

from lifecycle.shutdown_coordinator import ShutdownCoordinator
from lifecycle.task_registry import create_tracked_task, TaskCategory


class RecordingHandler:
    def __init__(self, name, priority, calls, delay=0.0, error=None):
        self.name = name
        self.shutdown_priority = priority
        self.calls = calls
        self.delay = delay
        self.error = error

    async def shutdown(self):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        self.calls.append(self.name)


@pytest_asyncio.fixture
async def coordinator():
    coordinator = ShutdownCoordinator(timeout_per_handler=0.1)
    loop = asyncio.get_running_loop()
    coordinator.setup_signal_handlers(loop)
    yield coordinator
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.remove_signal_handler(sig)


@pytest.mark.asyncio
async def test_wait_returns_on_request(coordinator):
    async def request_later():
        await asyncio.sleep(0.05)
        coordinator.request_shutdown("test")

    asyncio.create_task(request_later())
    await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=2.0)

    assert coordinator.reason == "test"


@pytest.mark.asyncio
async def test_wait_returns_on_critical_task_failure(coordinator):
    async def failing_server():
        await asyncio.sleep(0.01)
        raise OSError("address already in use")

    create_tracked_task(failing_server(), category=TaskCategory.API, description="Test API server")

    await asyncio.wait_for(coordinator.wait_for_shutdown(poll_interval=0.02), timeout=2.0)

    assert coordinator.reason == "Task failure: Test API server"


@pytest.mark.asyncio
async def test_non_critical_failure_keeps_running(coordinator):
    async def failing_fetch():
        raise RuntimeError("metadata down")

    create_tracked_task(failing_fetch(), category=TaskCategory.CATALOG, description="Fetch")

    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(coordinator.wait_for_shutdown(poll_interval=0.02), timeout=0.2)


@pytest.mark.asyncio
async def test_wait_without_setup_raises():
    with pytest.raises(RuntimeError):
        await ShutdownCoordinator().wait_for_shutdown()


@pytest.mark.asyncio
async def test_handlers_run_by_priority():
    calls = []
    coordinator = ShutdownCoordinator()
    coordinator.register(RecordingHandler("tasks", 30, calls))
    coordinator.register(RecordingHandler("playback", 130, calls))
    coordinator.register(RecordingHandler("api", 90, calls))

    await coordinator.shutdown_all()

    assert calls == ["playback", "api", "tasks"]


@pytest.mark.asyncio
async def test_failing_or_slow_handler_does_not_block_others():
    calls = []
    coordinator = ShutdownCoordinator(timeout_per_handler=0.05)
    coordinator.register(RecordingHandler("broken", 100, calls, error=RuntimeError("boom")))
    coordinator.register(RecordingHandler("slow", 90, calls, delay=1.0))
    coordinator.register(RecordingHandler("last", 10, calls))

    await coordinator.shutdown_all()

    assert calls == ["last"]


def test_register_rejects_incomplete_handler():
    with pytest.raises(ValueError):
        ShutdownCoordinator().register(object())
