import numpy as np

# ITU-R BT.601 weights
RED_WEIGHT = 0.299
GREEN_WEIGHT = 0.587
BLUE_WEIGHT = 0.114

BLACKWHITE_THRESHOLD = 128

COLOR_MODES = ("color", "grayscale", "blackwhite")


def luminance(r: float, g: float, b: float) -> float:
    return RED_WEIGHT * r + GREEN_WEIGHT * g + BLUE_WEIGHT * b


def cell_luminance(r: int, g: int, b: int, a: int, color_mode: str) -> float:
    """Brightness of one sampled pixel after the mode transform and alpha dampening."""
    value = luminance(r, g, b)
    if color_mode == "blackwhite":
        value = 255.0 if value > BLACKWHITE_THRESHOLD else 0.0
    if a < 255:
        value = value * (a / 255)
    return value


def band_luminance(pixels: np.ndarray, color_mode: str) -> np.ndarray:
    """Vectorised `cell_luminance` over an (..., 4) uint8 RGBA array."""
    rgba = pixels.astype(np.float64)
    r, g, b, a = rgba[..., 0], rgba[..., 1], rgba[..., 2], rgba[..., 3]
    values = RED_WEIGHT * r + GREEN_WEIGHT * g + BLUE_WEIGHT * b
    if color_mode == "blackwhite":
        values = np.where(values > BLACKWHITE_THRESHOLD, 255.0, 0.0)
    # Opaque pixels keep their value untouched so scalar and vector paths agree bit for bit
    return np.where(a < 255, values * (a / 255), values)
