from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Callable, Sequence


CHART_ROWS = 10
LEVELS_PER_ROW = 8
GLYPHS = " ▁▂▃▄▅▆▇█"
BORDER = "|"

_LEVEL_BY_GLYPH = {glyph: level for level, glyph in enumerate(GLYPHS)}


@dataclass(frozen=True)
class HistogramRenderer:
    """Text chart of the interior bins of a padded histogram.

    ``histogram`` is borrowed, not copied: it holds ``bins + 2`` counts with
    the underflow and overflow slots at either end, and must stay unchanged
    for the duration of a ``render`` or ``chart_levels`` call.
    """

    histogram: Sequence[int]
    min: float = 0.0
    stride: float = 1.0
    num_rows: int = CHART_ROWS

    @property
    def bins(self) -> int:
        return len(self.histogram) - 2

    def chart_levels(self) -> list[list[int]]:
        """Eighths fill level per cell, top row first."""
        most = max(self.histogram)
        assert most > 0, "cannot scale a histogram with no samples"

        rows = [[0] * self.bins for _ in range(self.num_rows)]
        for column in range(self.bins):
            # peak bin is exactly num_rows tall
            height = self.histogram[column + 1] * self.num_rows / most
            num_full = int(math.floor(height))
            assert num_full <= self.num_rows, "bin taller than the chart"

            for row in range(num_full):
                rows[self.num_rows - 1 - row][column] = LEVELS_PER_ROW
            if num_full < self.num_rows:
                partial = int(math.floor((height - num_full) * LEVELS_PER_ROW))
                rows[self.num_rows - 1 - num_full][column] = partial
        return rows

    def render(self) -> str:
        lines = [
            BORDER + "".join(GLYPHS[level] for level in row) + BORDER + "\n"
            for row in self.chart_levels()
        ]
        return "".join(lines)

    def axis(self, formatter: Callable[[float], str] | None = None) -> str:
        return format_axis(self.min, self.stride, self.bins, formatter)


def render_histogram(histogram: Sequence[int], *, num_rows: int = CHART_ROWS) -> str:
    return HistogramRenderer(histogram, num_rows=num_rows).render()


def parse_chart(text: str) -> list[list[int]]:
    rows: list[list[int]] = []
    for line in text.splitlines():
        if len(line) < 2 or not line.startswith(BORDER) or not line.endswith(BORDER):
            raise ValueError(f"chart row is missing its border: {line!r}")
        try:
            rows.append([_LEVEL_BY_GLYPH[glyph] for glyph in line[1:-1]])
        except KeyError as exc:
            raise ValueError(f"unknown chart glyph: {exc.args[0]!r}") from exc
    return rows


def format_axis(
    min_value: float,
    stride: float,
    bins: int,
    formatter: Callable[[float], str] | None = None,
) -> str:
    """Window edges under a chart of ``bins`` columns.

    The lower edge is left-aligned and the upper edge right-aligned within
    ``bins + 2`` characters; when the labels do not fit they are separated
    by a single space instead.
    """
    fmt = formatter or (lambda value: f"{value:.4g}")
    low = fmt(min_value)
    high = fmt(min_value + stride * bins)
    width = bins + 2
    gap = width - len(low) - len(high)
    if gap < 1:
        return f"{low} {high}"
    return low + " " * gap + high
