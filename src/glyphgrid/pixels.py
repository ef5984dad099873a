from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from PIL import Image

from glyphgrid.errors import InputError

logger = logging.getLogger(__name__)

# Longest source side kept before sampling; larger images are downscaled on load
MAX_IMAGE_SIZE = 1920


def optimize_dimensions(width: int, height: int, max_size: int = MAX_IMAGE_SIZE) -> tuple[int, int, bool]:
    """Fit (width, height) inside max_size on the longest side.

    Returns the new width, the new height and whether a resize is needed.
    """
    longest = max(width, height)
    if longest <= max_size:
        return width, height, False
    scale = max_size / longest
    return max(1, round(width * scale)), max(1, round(height * scale)), True


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Read-only RGBA pixels of shape (height, width, 4)."""

    data: np.ndarray

    def __post_init__(self):
        data = np.array(self.data, dtype=np.uint8, copy=True)
        if data.ndim != 3 or data.shape[2] != 4:
            raise InputError(f"Expected an (height, width, 4) RGBA array, got shape {data.shape}")
        if data.shape[0] == 0 or data.shape[1] == 0:
            raise InputError(f"Source image has zero area: {data.shape[1]}x{data.shape[0]}")
        data.setflags(write=False)
        object.__setattr__(self, "data", data)

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def height(self) -> int:
        return self.data.shape[0]

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        r, g, b, a = self.data[y, x]
        return int(r), int(g), int(b), int(a)

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes) -> PixelBuffer:
        if width <= 0 or height <= 0:
            raise InputError(f"Source image has zero area: {width}x{height}")
        expected = width * height * 4
        if len(data) != expected:
            raise InputError(f"Expected {expected} bytes of RGBA data for {width}x{height}, got {len(data)}")
        arr = np.frombuffer(data, dtype=np.uint8).reshape(height, width, 4)
        return cls(arr)

    @classmethod
    def from_image(cls, image: Image.Image, max_size: int | None = MAX_IMAGE_SIZE) -> PixelBuffer:
        """Build a buffer from a decoded Pillow image, downscaling very large sources."""
        if image.width == 0 or image.height == 0:
            raise InputError(f"Source image has zero area: {image.width}x{image.height}")
        image = image.convert("RGBA")
        if max_size is not None:
            width, height, resize = optimize_dimensions(image.width, image.height, max_size)
            if resize:
                logger.debug("Downscaling source %dx%d to %dx%d", image.width, image.height, width, height)
                image = image.resize((width, height), Image.LANCZOS)
        return cls(np.asarray(image, dtype=np.uint8))
