"""Render tree data models produced by the paginator."""

import uuid
from dataclasses import dataclass, field
from typing import Optional

from models.enums import Alignment, FrameType, PageSide
from models.serialization import to_primitive


@dataclass(frozen=True)
class TextStyle:
    """Font size in points, line-height multiplier and alignment."""
    font_size: float = 12.0
    line_height: float = 1.5
    alignment: Alignment = Alignment.LEFT


@dataclass(frozen=True)
class Rectangle:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class TextFragment:
    """A run of text with styling.

    ``source_block_id`` points back at the block the text came from; it is
    for traceability only and is ``None`` for titles and page numbers.
    """
    text: str
    x_offset: float
    style: TextStyle
    source_block_id: Optional[uuid.UUID] = None


@dataclass(frozen=True)
class TextLine:
    y_offset: float  # relative to the containing frame
    fragments: list[TextFragment] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(fragment.text for fragment in self.fragments)


@dataclass(frozen=True)
class TextFrame:
    """A positioned text box on a page."""
    bounds: Rectangle
    frame_type: FrameType
    lines: list[TextLine] = field(default_factory=list)

    @property
    def height(self) -> float:
        return self.bounds.height


@dataclass(frozen=True)
class PageRender:
    page_number: int  # 1-indexed
    side: PageSide
    frames: list[TextFrame] = field(default_factory=list)

    @property
    def is_blank(self) -> bool:
        return not self.frames


@dataclass(frozen=True)
class RenderMetadata:
    total_pages: int
    total_chapters: int


@dataclass(frozen=True)
class RenderTree:
    """Complete paginated output for a book."""
    book_id: uuid.UUID
    metadata: RenderMetadata
    pages: list[PageRender] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Return a JSON-compatible, field-for-field representation."""
        return to_primitive(self)
