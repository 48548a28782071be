"""Text measurement capability used by the line breaker and paginator."""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class TextMetrics(Protocol):
    """Protocol for measuring text.

    Implementations must be pure: the result depends only on the arguments.
    """

    def measure_text(self, text: str, font_size: float) -> float:
        """Width of ``text`` at ``font_size``."""
        ...

    def measure_char(self, char: str, font_size: float) -> float:
        """Width of a single character at ``font_size``."""
        ...

    def line_height(self, font_size: float, multiplier: float) -> float:
        """Vertical advance of one line."""
        ...


@dataclass(frozen=True)
class SimpleTextMetrics:
    """Character-count approximation: every character is ``ratio`` ems wide."""
    avg_char_width_ratio: float = 0.6

    def measure_text(self, text: str, font_size: float) -> float:
        return len(text) * font_size * self.avg_char_width_ratio

    def measure_char(self, char: str, font_size: float) -> float:
        return font_size * self.avg_char_width_ratio

    def line_height(self, font_size: float, multiplier: float) -> float:
        return font_size * multiplier
