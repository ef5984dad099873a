class ConversionError(Exception):
    """Base class for every error raised by a conversion job."""


class ValidationError(ConversionError, ValueError):
    """Settings are out of range or a custom palette is empty."""


class InputError(ConversionError, ValueError):
    """The source image is degenerate (zero width or height)."""


class CapacityError(ConversionError):
    """A job was rejected before starting because it is too large or too slow."""

    def __init__(self, reason: str, suggestion: str):
        super().__init__(f"{reason}. {suggestion}")
        self.reason = reason
        self.suggestion = suggestion


class InternalError(ConversionError, RuntimeError):
    """Planner and sampler disagree about the grid. Fatal for the job."""
