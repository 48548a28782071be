"""Greedy first-fit line breaking."""

import uuid
from typing import Optional

from layout.metrics import TextMetrics
from models.enums import Alignment
from models.render import TextFragment, TextLine, TextStyle


class LineBreaker:
    """Break text into lines no wider than ``max_width``.

    Words are added to the current line until the next one does not fit,
    then a new line starts. A word wider than ``max_width`` on its own is
    placed alone and overflows; words are never split.
    """

    def __init__(self, metrics: TextMetrics, max_width: float):
        self.metrics = metrics
        self.max_width = max_width

    def break_lines(
        self,
        text: str,
        style: TextStyle,
        source_block_id: Optional[uuid.UUID] = None,
    ) -> list[TextLine]:
        words = text.split()
        if not words:
            return []

        rows: list[str] = []
        current = ""
        for word in words:
            candidate = f"{current} {word}" if current else word
            if self.metrics.measure_text(candidate, style.font_size) <= self.max_width:
                current = candidate
            else:
                if current:
                    rows.append(current)
                current = word
        if current:
            rows.append(current)

        line_height = self.metrics.line_height(style.font_size, style.line_height)
        return [
            TextLine(
                y_offset=index * line_height,
                fragments=[
                    TextFragment(
                        text=row,
                        x_offset=self._x_offset(row, style),
                        style=style,
                        source_block_id=source_block_id,
                    )
                ],
            )
            for index, row in enumerate(rows)
        ]

    def _x_offset(self, row: str, style: TextStyle) -> float:
        if style.alignment in (Alignment.LEFT, Alignment.JUSTIFY):
            return 0.0
        slack = max(0.0, self.max_width - self.metrics.measure_text(row, style.font_size))
        if style.alignment == Alignment.CENTER:
            return slack / 2
        return slack


def break_lines(
    text: str,
    available_width: float,
    style: TextStyle,
    metrics: TextMetrics,
    source_block_id: Optional[uuid.UUID] = None,
) -> list[TextLine]:
    """Functional form of :meth:`LineBreaker.break_lines`."""
    return LineBreaker(metrics, available_width).break_lines(text, style, source_block_id)
