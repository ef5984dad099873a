from __future__ import annotations

import html
from dataclasses import dataclass

from glyphgrid.render import RenderCell


@dataclass(frozen=True)
class ConversionResult:
    rows: tuple[tuple[RenderCell, ...], ...]

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def glyphs(self) -> list[str]:
        """One string of bare glyphs per row."""
        return ["".join(cell.glyph for cell in row) for row in self.rows]

    def to_text(self) -> str:
        return "\n".join(self.glyphs())

    def to_markup(self) -> str:
        """HTML markup with a colour span around every annotated cell."""
        lines = []
        for row in self.rows:
            parts = []
            for cell in row:
                glyph = html.escape(cell.glyph, quote=False)
                if cell.color is None:
                    parts.append(glyph)
                else:
                    r, g, b = cell.color
                    parts.append(f'<span style="color:rgb({r},{g},{b})">{glyph}</span>')
            lines.append("".join(parts))
        return "\n".join(lines)

    def to_ansi(self) -> str:
        """Wrap each annotated cell in ANSI truecolor escape sequences."""
        out = []
        for row in self.rows:
            parts = []
            for cell in row:
                if cell.color is None:
                    parts.append(f"\033[39m{cell.glyph}")
                else:
                    r, g, b = cell.color
                    parts.append(f"\033[38;2;{r};{g};{b}m{cell.glyph}")
            parts.append("\033[0m")
            out.append("".join(parts))
        return "\n".join(out)
