# cherry test configuration and shared fixtures
from __future__ import annotations

import numpy as np
import pytest

from cherry.canvas import Canvas
from cherry.pixel import pack
from cherry.pool import BufferPool


# ─────────────────────────────────────────────────────────────────────────────
# Pixel fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def red() -> int:
    """Opaque red."""
    return pack(255, 0, 0, 255)


@pytest.fixture
def green() -> int:
    """Opaque green."""
    return pack(0, 255, 0, 255)


@pytest.fixture
def blue() -> int:
    """Opaque blue."""
    return pack(0, 0, 255, 255)


@pytest.fixture
def white() -> int:
    """Opaque white."""
    return pack(255, 255, 255, 255)


@pytest.fixture
def half_red() -> int:
    """Red at roughly half opacity."""
    return pack(255, 0, 0, 128)


# ─────────────────────────────────────────────────────────────────────────────
# Buffer/Canvas fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def buffer_4x4() -> np.ndarray:
    """Zero-filled 4x4 packed pixel buffer."""
    return np.zeros(16, dtype=np.uint32)


@pytest.fixture
def canvas_4x4(buffer_4x4) -> Canvas:
    """4x4 canvas over a zeroed buffer, stride 4."""
    return Canvas(buffer_4x4, 4, 4, 4)


@pytest.fixture
def canvas_8x8() -> Canvas:
    """8x8 zeroed canvas."""
    return Canvas(np.zeros(64, dtype=np.uint32), 8, 8)


@pytest.fixture
def canvas_10x10() -> Canvas:
    """10x10 zeroed canvas."""
    return Canvas(np.zeros(100, dtype=np.uint32), 10, 10)


@pytest.fixture
def make_canvas():
    """Factory for zeroed canvases of arbitrary size."""
    def _make(width: int, height: int, **kwargs) -> Canvas:
        stride = kwargs.pop('stride', width)
        return Canvas(np.zeros(max(stride * height, 1), dtype=np.uint32),
                      width, height, stride, **kwargs)
    return _make


@pytest.fixture
def pool() -> BufferPool:
    """Fresh buffer pool."""
    return BufferPool()


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def painted():
    """Function returning the set of (x, y) coordinates holding a non-zero pixel."""
    def _painted(canvas: Canvas) -> set:
        ys, xs = np.nonzero(canvas.pixels)
        return set(zip(xs.tolist(), ys.tolist()))
    return _painted


# ─────────────────────────────────────────────────────────────────────────────
# Pytest configuration
# ─────────────────────────────────────────────────────────────────────────────


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "scenario: marks end-to-end rendering scenarios")
