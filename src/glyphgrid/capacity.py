from __future__ import annotations

import logging
from dataclasses import dataclass

from glyphgrid.errors import CapacityError
from glyphgrid.planner import GridSpec, plan_grid
from glyphgrid.settings import ConversionSettings

logger = logging.getLogger(__name__)

MAX_MEMORY_MB = 100
MAX_SECONDS = 30

# Rough bytes per output cell in colour mode once wrapped in markup
MARKUP_BYTES_PER_CELL = 50


@dataclass(frozen=True)
class MemoryEstimate:
    input_mb: float
    output_mb: float

    @property
    def total_mb(self) -> float:
        return self.input_mb + self.output_mb


@dataclass(frozen=True)
class TimeEstimate:
    seconds: int
    complexity: str  # low | medium | high


def estimate_memory(image_width: int, image_height: int, grid: GridSpec) -> MemoryEstimate:
    input_mb = image_width * image_height * 4 / 1024 / 1024  # RGBA
    output_mb = grid.width * grid.height * 2 / 1024 / 1024
    return MemoryEstimate(input_mb, output_mb)


def estimate_processing_time(image_width: int, image_height: int, grid: GridSpec) -> TimeEstimate:
    score = (image_width * image_height + grid.width * grid.height) / 1_000_000
    if score < 1:
        return TimeEstimate(2, "low")
    if score < 5:
        return TimeEstimate(5, "medium")
    return TimeEstimate(10, "high")


def check_capacity(image_width: int, image_height: int, grid: GridSpec) -> None:
    """Raise CapacityError if the job should not be started."""
    memory = estimate_memory(image_width, image_height, grid)
    time = estimate_processing_time(image_width, image_height, grid)
    logger.debug(
        "Capacity estimate for %dx%d -> %dx%d: %.2f MB, ~%ds (%s)",
        image_width,
        image_height,
        grid.width,
        grid.height,
        memory.total_mb,
        time.seconds,
        time.complexity,
    )

    if memory.total_mb > MAX_MEMORY_MB:
        logger.warning("Rejecting job: estimated %.1f MB exceeds %d MB", memory.total_mb, MAX_MEMORY_MB)
        raise CapacityError(
            f"Image too large to process ({memory.total_mb:.1f} MB estimated, limit {MAX_MEMORY_MB} MB)",
            "Try reducing the output size or using a smaller source image",
        )
    if time.seconds > MAX_SECONDS:
        logger.warning("Rejecting job: estimated %ds exceeds %ds", time.seconds, MAX_SECONDS)
        raise CapacityError(
            f"Processing would take too long (~{time.seconds}s estimated, limit {MAX_SECONDS}s)",
            "Reduce the output dimensions or the source resolution for faster processing",
        )


def estimate_output_size(settings: ConversionSettings) -> tuple[int, int]:
    """Return (characters, bytes) the rendered output is expected to take."""
    grid = plan_grid(settings)
    chars = grid.cells
    bytes_per_char = MARKUP_BYTES_PER_CELL if settings.color_mode == "color" else 1
    return chars, chars * bytes_per_char
