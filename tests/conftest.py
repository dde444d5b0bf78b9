import numpy as np
import pytest

from palette_theme.core_types import PixelBuffer

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


def solid(rgb, width=4, height=3, alpha=255):
    arr = np.empty((height, width, 4), dtype=np.uint8)
    arr[..., :3] = rgb
    arr[..., 3] = alpha
    return PixelBuffer(arr)


def stripes(colours, stripe_width=2, height=4):
    """Vertical stripes of equal width, one per colour."""
    width = stripe_width * len(colours)
    arr = np.empty((height, width, 4), dtype=np.uint8)
    arr[..., 3] = 255
    for i, c in enumerate(colours):
        arr[:, i * stripe_width : (i + 1) * stripe_width, :3] = c
    return PixelBuffer(arr)


@pytest.fixture
def noisy_buffer():
    rng = np.random.default_rng(1234)
    arr = rng.integers(0, 256, size=(24, 32, 4), dtype=np.uint8)
    arr[..., 3] = 255
    return PixelBuffer(arr)
