import math

import numpy as np

from glyphgrid.errors import InternalError
from glyphgrid.pixels import PixelBuffer
from glyphgrid.planner import GridSpec


def source_coordinates(output_size: int, source_size: int) -> np.ndarray:
    """Nearest-neighbour source index for every output position along one axis."""
    scale = source_size / output_size
    return np.floor(np.arange(output_size) * scale).astype(np.intp)


def source_pixel(x: int, y: int, buffer: PixelBuffer, grid: GridSpec) -> tuple[int, int, int, int]:
    """RGBA of the source pixel under output cell (x, y)."""
    sx = math.floor(x * (buffer.width / grid.width))
    sy = math.floor(y * (buffer.height / grid.height))
    if not (0 <= sx < buffer.width and 0 <= sy < buffer.height):
        raise InternalError(f"Cell ({x}, {y}) maps outside the {buffer.width}x{buffer.height} source: ({sx}, {sy})")
    return buffer.pixel(sx, sy)


def sample_band(buffer: PixelBuffer, grid: GridSpec, start_row: int, end_row: int) -> np.ndarray:
    """Sample output rows [start_row, end_row). Returns array of shape (rows, grid.width, 4)."""
    if not (0 <= start_row <= end_row <= grid.height):
        raise InternalError(f"Row band {start_row}-{end_row} is outside a grid of height {grid.height}")

    xs = source_coordinates(grid.width, buffer.width)
    ys = source_coordinates(grid.height, buffer.height)[start_row:end_row]

    if xs.size and (xs[0] < 0 or xs[-1] >= buffer.width):
        raise InternalError(f"Column mapping leaves the source: {xs[0]}..{xs[-1]} of {buffer.width}")
    if ys.size and (ys[0] < 0 or ys[-1] >= buffer.height):
        raise InternalError(f"Row mapping leaves the source: {ys[0]}..{ys[-1]} of {buffer.height}")

    # Fancy indexing copies, so the band never aliases the read-only buffer
    return buffer.data[ys[:, None], xs[None, :]]
