import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from engine.render_options import RenderOptions
from lifecycle.task_registry import TaskRegistry
from models.frame import FrameDescriptor
from surface.in_memory_surface import InMemoryTileSurface

HOST = "https://tilecache.rainviewer.com"


def make_frames(kind: str, count: int, start: int = 1718000000):
    return [
        FrameDescriptor(path=f"/v2/{kind}/{start + i * 600}", time=start + i * 600)
        for i in range(count)
    ]


@pytest.fixture(autouse=True)
def fresh_task_registry():
    """Each test starts with an empty process-wide task registry."""
    TaskRegistry._instance = None
    yield
    TaskRegistry._instance = None


@pytest.fixture
def surface():
    return InMemoryTileSurface()


@pytest.fixture
def options():
    return RenderOptions()


@pytest.fixture
def radar_frames():
    return make_frames("radar", 5)


@pytest.fixture
def satellite_frames():
    return make_frames("satellite", 5)
