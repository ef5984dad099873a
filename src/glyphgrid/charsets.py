from glyphgrid.errors import ValidationError

# Ordered from light to dense: index grows with luminance
BASIC = ".,:;!*#@"

EXTENDED = " .'\"^`,:;Il!i><~+_-?][}{1)(|\\/tfjrxnuvczXYUJCLQ0OZmwqpdbkhao*#MW&8%B@$"

CHARACTER_SETS = ("basic", "extended", "custom")

_FIXED = {"basic": BASIC, "extended": EXTENDED}


def get_palette(character_set: str, custom_characters: str = "") -> str:
    """Return the glyph palette for a character set selector."""
    if character_set == "custom":
        if not custom_characters or not custom_characters.strip():
            raise ValidationError("Custom character set cannot be empty")
        return custom_characters
    try:
        return _FIXED[character_set]
    except KeyError:
        raise ValidationError(f"Unknown character set: {character_set!r}") from None
