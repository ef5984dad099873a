import numpy as np
import pytest

from glyphgrid.pixels import PixelBuffer

PALETTE = ".,:;!*#@"

# Black, white / mid grey, red
SCENARIO_PIXELS = [
    [(0, 0, 0, 255), (255, 255, 255, 255)],
    [(128, 128, 128, 255), (255, 0, 0, 255)],
]


def make_buffer(pixels) -> PixelBuffer:
    """Build a buffer from nested rows of RGBA tuples."""
    return PixelBuffer(np.array(pixels, dtype=np.uint8))


def solid_buffer(width, height, rgba=(128, 128, 128, 255)) -> PixelBuffer:
    return PixelBuffer(np.full((height, width, 4), rgba, dtype=np.uint8))


def random_buffer(width, height, seed=42) -> PixelBuffer:
    rng = np.random.default_rng(seed)
    return PixelBuffer(rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8))


@pytest.fixture
def scenario_buffer():
    return make_buffer(SCENARIO_PIXELS)
