"""Layout package — text metrics, line breaking, and pagination."""

from typing import Optional

from layout.config import LayoutConfig, Margins, PageSize
from layout.line_breaker import LineBreaker, break_lines
from layout.metrics import SimpleTextMetrics, TextMetrics
from layout.paginator import Paginator, page_side
from models.book import Book
from models.render import RenderTree


def layout_book_with_metrics(book: Book, config: LayoutConfig, metrics: TextMetrics) -> RenderTree:
    """Lay out ``book`` using a custom text metrics implementation.

    Raises:
        TypeError: ``metrics`` does not provide the TextMetrics methods.
        LayoutConfigError: ``config`` cannot produce any page.
    """
    if not isinstance(metrics, TextMetrics):
        raise TypeError(f"{type(metrics).__name__} does not implement TextMetrics")
    return Paginator(config, metrics).paginate(book)


def layout_book(book: Book, config: Optional[LayoutConfig] = None) -> RenderTree:
    """Lay out ``book`` with the default character-count metrics."""
    return layout_book_with_metrics(book, config or LayoutConfig(), SimpleTextMetrics())


__all__ = [
    "LayoutConfig",
    "Margins",
    "PageSize",
    "LineBreaker",
    "break_lines",
    "SimpleTextMetrics",
    "TextMetrics",
    "Paginator",
    "page_side",
    "layout_book",
    "layout_book_with_metrics",
]
