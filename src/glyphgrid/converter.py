from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from glyphgrid.capacity import check_capacity
from glyphgrid.charsets import get_palette
from glyphgrid.errors import ConversionError, InternalError
from glyphgrid.monitor import PerformanceMonitor
from glyphgrid.pixels import PixelBuffer
from glyphgrid.planner import GridSpec, plan_grid
from glyphgrid.render import render_band
from glyphgrid.result import ConversionResult
from glyphgrid.sampling import sample_band
from glyphgrid.settings import ConversionSettings

logger = logging.getLogger(__name__)

SETUP_PERCENT = 10
BAND_PERCENT_SPAN = 80
FINALIZE_PERCENT = 95


@dataclass(frozen=True)
class ProgressEvent:
    percent: float
    stage: str


ProgressCallback = Callable[[ProgressEvent], None]


class JobState(enum.Enum):
    IDLE = "idle"
    LOADED = "loaded"
    PLANNED = "planned"
    GUARDED = "guarded"
    EXECUTING = "executing"
    COMPLETE = "complete"
    FAILED = "failed"


def chunk_size(output_height: int) -> int:
    """Rows per band: finer for small grids, coarser for large ones."""
    if output_height <= 50:
        return 5
    if output_height <= 100:
        return 10
    if output_height <= 200:
        return 15
    if output_height <= 400:
        return 20
    return 25


def row_bands(output_height: int) -> Iterator[tuple[int, int]]:
    step = chunk_size(output_height)
    for start in range(0, output_height, step):
        yield start, min(start + step, output_height)


class Conversion:
    """A single conversion job, driven one state at a time.

    Each job owns its buffer and settings. Nothing is retried: a failed job
    ends in FAILED and has to be resubmitted with different settings.
    """

    def __init__(self, buffer: PixelBuffer, settings: ConversionSettings):
        self.buffer = buffer
        self.settings = settings
        self.state = JobState.IDLE
        self.grid: GridSpec | None = None
        self.palette: str | None = None
        self.monitor = PerformanceMonitor()

    def _enter(self, state: JobState) -> None:
        logger.debug("Job %s -> %s", self.state.value, state.value)
        self.state = state

    def load(self) -> None:
        self.monitor.start()
        self.settings.validate()
        self._enter(JobState.LOADED)

    def plan(self) -> GridSpec:
        self.palette = get_palette(self.settings.character_set, self.settings.custom_characters)
        self.grid = plan_grid(self.settings)
        self.monitor.checkpoint("Planned")
        self._enter(JobState.PLANNED)
        return self.grid

    def guard(self) -> None:
        check_capacity(self.buffer.width, self.buffer.height, self.grid)
        self.monitor.checkpoint("Capacity check complete")
        self._enter(JobState.GUARDED)

    def execute(self, on_progress: ProgressCallback | None = None) -> ConversionResult:
        emit = on_progress or (lambda event: None)
        grid = self.grid
        self._enter(JobState.EXECUTING)

        emit(ProgressEvent(SETUP_PERCENT, "Starting conversion..."))
        rows = []
        for start, end in row_bands(grid.height):
            samples = sample_band(self.buffer, grid, start, end)
            band = render_band(samples, self.palette, self.settings.color_mode)
            if len(band) != end - start:
                raise InternalError(f"Band {start}-{end} rendered {len(band)} rows")
            rows.extend(band)
            percent = SETUP_PERCENT + end / grid.height * BAND_PERCENT_SPAN
            emit(ProgressEvent(percent, f"Converting rows {start}-{end}..."))

        emit(ProgressEvent(FINALIZE_PERCENT, "Finalizing..."))
        result = ConversionResult(tuple(rows))
        self.monitor.checkpoint("Conversion complete")
        self._enter(JobState.COMPLETE)
        emit(ProgressEvent(100, "Complete!"))
        self.monitor.log_report()
        return result

    def run(self, on_progress: ProgressCallback | None = None) -> ConversionResult:
        try:
            self.load()
            self.plan()
            self.guard()
            return self.execute(on_progress)
        except ConversionError:
            self._enter(JobState.FAILED)
            raise
        except Exception:
            self._enter(JobState.FAILED)
            logger.exception("Conversion failed unexpectedly")
            raise


def convert(
    buffer: PixelBuffer,
    settings: ConversionSettings,
    on_progress: ProgressCallback | None = None,
) -> ConversionResult:
    """Convert a pixel buffer to a glyph grid in the calling thread."""
    return Conversion(buffer, settings).run(on_progress)
