"""Shared fixtures for rasterkit tests.

RecordingCanvas logs every write a renderer attempts (including ones the
canvas drops for being out of bounds), so tests can assert on exact write
sets and counts as well as on the resulting pixels.
"""

from pathlib import Path

import pytest

from rasterkit.canvas import RgbaCanvas
from rasterkit.renderers import AntiAliasingRenderer, BasicRenderer
from rasterkit.utils import logging_config
from rasterkit.utils.color import WHITE, Rgba


class RecordingCanvas(RgbaCanvas):
    """RgbaCanvas that records (x, y, color) for every set/blend call."""

    def __init__(self, width: int = 32, height: int = 32, background=WHITE):
        super().__init__(width, height, background)
        self.sets = []
        self.blends = []

    def set_pixel(self, x: int, y: int, color: Rgba) -> None:
        self.sets.append((x, y, Rgba(*color)))
        super().set_pixel(x, y, color)

    def blend_pixel(self, x: int, y: int, color: Rgba) -> None:
        self.blends.append((x, y, Rgba(*color)))
        super().blend_pixel(x, y, color)

    @property
    def writes(self):
        return self.sets + self.blends

    def written_points(self):
        """Distinct (x, y) of every attempted write."""
        return {(x, y) for x, y, _ in self.writes}

    def visible_points(self):
        """Distinct (x, y) of writes with non-zero alpha."""
        return {(x, y) for x, y, c in self.writes if c.a > 0}


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture(scope="session")
def project_root():
    """Project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def canvas():
    """Fresh 32x32 white recording canvas."""
    return RecordingCanvas(32, 32)


@pytest.fixture
def basic():
    return BasicRenderer()


@pytest.fixture
def aa():
    return AntiAliasingRenderer()


@pytest.fixture(params=["basic", "antialiased"])
def renderer(request):
    """Each renderer tier in turn."""
    if request.param == "basic":
        return BasicRenderer()
    return AntiAliasingRenderer()


@pytest.fixture
def clean_logging():
    """Drop handlers and context installed by setup_logging() during a test."""
    yield
    import logging

    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler).__module__.startswith("_pytest"):
            continue
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.WARNING)
    logging.captureWarnings(False)
    logging_config.pop_context()


@pytest.fixture
def make_canvas():
    """Factory for recording canvases of any size/background."""
    return RecordingCanvas
