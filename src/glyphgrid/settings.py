from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from glyphgrid.charsets import CHARACTER_SETS
from glyphgrid.errors import ValidationError
from glyphgrid.luminance import COLOR_MODES

SIZES = ("small", "medium", "large", "custom")

MIN_CUSTOM_SIZE = 10
MAX_CUSTOM_SIZE = 500


@dataclass(frozen=True)
class ConversionSettings:
    character_set: str = "basic"
    custom_characters: str = ""
    size: str = "medium"
    custom_width: int = 100
    custom_height: int = 50
    color_mode: str = "grayscale"
    # Source dimensions, only used to derive aspect-aware preset sizes
    image_width: int | None = None
    image_height: int | None = None

    @classmethod
    def from_dict(cls, options: dict[str, Any]) -> ConversionSettings:
        """Build settings from the camelCase option names used by the web front end."""
        keys = {
            "characterSet": "character_set",
            "customCharacters": "custom_characters",
            "size": "size",
            "customWidth": "custom_width",
            "customHeight": "custom_height",
            "colorMode": "color_mode",
            "imageWidth": "image_width",
            "imageHeight": "image_height",
        }
        unknown = sorted(set(options) - set(keys))
        if unknown:
            raise ValidationError(f"Unknown settings: {', '.join(unknown)}")
        return cls(**{keys[name]: value for name, value in options.items()})

    def validate(self) -> ConversionSettings:
        """Raise ValidationError listing every problem, or return self."""
        errors = validate_settings(self)
        if errors:
            raise ValidationError("; ".join(errors))
        return self


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_settings(settings: ConversionSettings) -> list[str]:
    errors = []
    if not isinstance(settings.custom_characters, str):
        errors.append(f"Custom characters must be a string, got {type(settings.custom_characters).__name__}")
    if settings.character_set not in CHARACTER_SETS:
        errors.append(f"Unknown character set: {settings.character_set!r}")
    elif (
        settings.character_set == "custom"
        and isinstance(settings.custom_characters, str)
        and not settings.custom_characters.strip()
    ):
        errors.append("Custom character set cannot be empty")

    for name in ("custom_width", "custom_height"):
        value = getattr(settings, name)
        if not _is_int(value):
            errors.append(f"{name.replace('_', ' ').capitalize()} must be an integer, got {value!r}")
    for name in ("image_width", "image_height"):
        value = getattr(settings, name)
        if value is not None and not _is_int(value):
            errors.append(f"{name.replace('_', ' ').capitalize()} must be an integer, got {value!r}")

    if settings.size not in SIZES:
        errors.append(f"Unknown size: {settings.size!r}")
    elif settings.size == "custom":
        if _is_int(settings.custom_width) and not MIN_CUSTOM_SIZE <= settings.custom_width <= MAX_CUSTOM_SIZE:
            errors.append(f"Custom width must be between {MIN_CUSTOM_SIZE} and {MAX_CUSTOM_SIZE}")
        if _is_int(settings.custom_height) and not MIN_CUSTOM_SIZE <= settings.custom_height <= MAX_CUSTOM_SIZE:
            errors.append(f"Custom height must be between {MIN_CUSTOM_SIZE} and {MAX_CUSTOM_SIZE}")

    if settings.color_mode not in COLOR_MODES:
        errors.append(f"Unknown color mode: {settings.color_mode!r}")
    return errors
