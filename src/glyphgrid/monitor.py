import logging
import time
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class Checkpoint:
    name: str
    time: float  # seconds since start
    duration: float  # seconds since previous checkpoint


@dataclass
class PerformanceMonitor:
    """Wall-clock checkpoints for one conversion job."""

    _start: float = 0.0
    checkpoints: list[Checkpoint] = field(default_factory=list)

    def start(self) -> None:
        self._start = time.perf_counter()
        self.checkpoints = []

    def checkpoint(self, name: str) -> None:
        elapsed = time.perf_counter() - self._start
        previous = self.checkpoints[-1].time if self.checkpoints else 0.0
        self.checkpoints.append(Checkpoint(name, elapsed, elapsed - previous))

    @property
    def total(self) -> float:
        return time.perf_counter() - self._start

    def log_report(self) -> None:
        logger.debug("Conversion took %.3fs", self.total)
        for cp in self.checkpoints:
            logger.debug("  %-28s at %.3fs (+%.3fs)", cp.name, cp.time, cp.duration)
