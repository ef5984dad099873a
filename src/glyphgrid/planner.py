from dataclasses import dataclass

from glyphgrid.errors import InputError
from glyphgrid.settings import MAX_CUSTOM_SIZE, MIN_CUSTOM_SIZE, ConversionSettings

# Character cells are roughly 1.5x taller than wide
CHARACTER_ASPECT_CORRECTION = 1.5

# Used when the source dimensions are unknown
SIZE_PRESETS = {
    "small": (80, 60),
    "medium": (120, 90),
    "large": (200, 150),
}

# Rows per preset when the source aspect ratio is known
PRESET_HEIGHTS = {
    "small": 40,
    "medium": 60,
    "large": 100,
}

PRESET_MIN = 10
PRESET_MAX_WIDTH = 300
PRESET_MAX_HEIGHT = 200


@dataclass(frozen=True)
class GridSpec:
    width: int
    height: int

    @property
    def cells(self) -> int:
        return self.width * self.height


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def plan_grid(settings: ConversionSettings) -> GridSpec:
    """Work out the output grid size for the given settings."""
    if settings.size == "custom":
        return GridSpec(
            width=_clamp(int(settings.custom_width), MIN_CUSTOM_SIZE, MAX_CUSTOM_SIZE),
            height=_clamp(int(settings.custom_height), MIN_CUSTOM_SIZE, MAX_CUSTOM_SIZE),
        )

    if settings.image_width is None or settings.image_height is None:
        width, height = SIZE_PRESETS.get(settings.size, SIZE_PRESETS["medium"])
        return GridSpec(width, height)

    return preset_for_source(settings.size, settings.image_width, settings.image_height)


def preset_for_source(size: str, image_width: int, image_height: int) -> GridSpec:
    """Derive an aspect-preserving grid for a named preset."""
    if image_width <= 0 or image_height <= 0:
        raise InputError(f"Cannot derive an aspect ratio from a {image_width}x{image_height} source")

    target_aspect = image_width / image_height * CHARACTER_ASPECT_CORRECTION
    target_height = PRESET_HEIGHTS.get(size, PRESET_HEIGHTS["medium"])

    raw_width = round(target_height * target_aspect)
    width = _clamp(raw_width, PRESET_MIN, PRESET_MAX_WIDTH)
    height = _clamp(target_height, PRESET_MIN, PRESET_MAX_HEIGHT)

    if width != raw_width:
        height = _clamp(round(width / target_aspect), PRESET_MIN, PRESET_MAX_HEIGHT)

    return GridSpec(width, height)
