from __future__ import annotations

import math
from typing import NamedTuple

import numpy as np

from glyphgrid.luminance import band_luminance, cell_luminance

Colour = tuple[int, int, int]


class RenderCell(NamedTuple):
    glyph: str
    color: Colour | None = None


def glyph_index(value: float, palette_length: int) -> int:
    clamped = min(255.0, max(0.0, value))
    return math.floor(clamped / 255 * (palette_length - 1))


def select_glyph(value: float, palette: str) -> str:
    return palette[glyph_index(value, len(palette))]


def _grey(value: float) -> int:
    # Halves round up, matching how the preview renderer rounds
    return math.floor(value + 0.5)


def render_cell(r: int, g: int, b: int, a: int, palette: str, color_mode: str) -> RenderCell:
    """Render a single sampled pixel."""
    value = cell_luminance(r, g, b, a, color_mode)
    glyph = select_glyph(value, palette)
    if color_mode == "grayscale":
        grey = _grey(value)
        return RenderCell(glyph, (grey, grey, grey))
    if color_mode == "color" and a > 0:
        return RenderCell(glyph, (r, g, b))
    return RenderCell(glyph)


def render_band(samples: np.ndarray, palette: str, color_mode: str) -> list[tuple[RenderCell, ...]]:
    """Render an (rows, cols, 4) block of sampled pixels into rows of cells.

    blackwhite cells carry no colour. grayscale cells always carry an equal
    (g, g, g) triplet. color cells carry the sampled RGB unless alpha is 0.
    """
    values = band_luminance(samples, color_mode)
    clamped = np.clip(values, 0.0, 255.0)
    indices = np.floor(clamped / 255 * (len(palette) - 1)).astype(np.intp)
    glyphs = np.array(list(palette))[indices]

    if color_mode == "grayscale":
        greys = np.floor(values + 0.5).astype(int).tolist()
        return [
            tuple(RenderCell(glyph, (grey, grey, grey)) for glyph, grey in zip(glyph_row, grey_row))
            for glyph_row, grey_row in zip(glyphs.tolist(), greys)
        ]

    if color_mode == "color":
        rows = []
        for glyph_row, pixel_row in zip(glyphs.tolist(), samples.tolist()):
            rows.append(
                tuple(
                    RenderCell(glyph, (r, g, b)) if a > 0 else RenderCell(glyph)
                    for glyph, (r, g, b, a) in zip(glyph_row, pixel_row)
                )
            )
        return rows

    return [tuple(RenderCell(glyph) for glyph in glyph_row) for glyph_row in glyphs.tolist()]
