"""Background conversion jobs.

A job runs in its own daemon thread and reports back only through an
ordered message queue: zero or more ProgressEvent messages followed by
exactly one Completed or Failed message. The job's buffer is read-only
and its settings immutable, so caller and worker share no mutable state.
There is no cancellation inside the engine; a caller that loses interest
simply stops reading and drops the job.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Iterator
from dataclasses import dataclass

from glyphgrid.converter import ProgressCallback, ProgressEvent, convert
from glyphgrid.pixels import PixelBuffer
from glyphgrid.result import ConversionResult
from glyphgrid.settings import ConversionSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Completed:
    result: ConversionResult


@dataclass(frozen=True)
class Failed:
    error: BaseException


Message = ProgressEvent | Completed | Failed


class ConversionJob:
    def __init__(self, buffer: PixelBuffer, settings: ConversionSettings):
        self.job_id = f"{id(self):x}"
        self._buffer = buffer
        self._settings = settings
        self._messages: queue.Queue[Message] = queue.Queue()
        self._thread = threading.Thread(target=self._work, name=f"glyphgrid-job-{self.job_id}", daemon=True)
        self._finished = False

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def start(self) -> ConversionJob:
        logger.debug("Starting job %s", self.job_id)
        self._thread.start()
        return self

    def _work(self) -> None:
        try:
            result = convert(self._buffer, self._settings, self._messages.put)
        except Exception as exc:
            logger.debug("Job %s failed: %s", self.job_id, exc)
            self._messages.put(Failed(exc))
        else:
            self._messages.put(Completed(result))
        finally:
            # Drop references so the buffer can be freed once the caller is done
            self._buffer = None

    def messages(self, timeout: float | None = None) -> Iterator[Message]:
        """Yield messages in order, ending with the Completed or Failed one."""
        while not self._finished:
            try:
                message = self._messages.get(timeout=timeout)
            except queue.Empty:
                raise TimeoutError(f"No message from job {self.job_id} within {timeout}s") from None
            if isinstance(message, (Completed, Failed)):
                self._finished = True
                # The worker exits right after posting its terminal message
                self._thread.join()
            yield message

    def result(self, on_progress: ProgressCallback | None = None, timeout: float | None = None) -> ConversionResult:
        """Wait for the job, forwarding progress, and return its result or raise its error."""
        for message in self.messages(timeout=timeout):
            if isinstance(message, ProgressEvent):
                if on_progress is not None:
                    on_progress(message)
            elif isinstance(message, Completed):
                return message.result
            else:
                raise message.error
        raise RuntimeError(f"Job {self.job_id} has already delivered its result")


def submit(
    buffer: PixelBuffer,
    settings: ConversionSettings,
) -> ConversionJob:
    """Start a conversion in the background and return its job handle."""
    return ConversionJob(buffer, settings).start()
