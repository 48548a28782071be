"""Models package — document tree, render tree, enums, and serialization."""

from models.book import Book, Chapter, Block, generate_chapter_id, generate_block_id
from models.render import (
    RenderTree,
    RenderMetadata,
    PageRender,
    TextFrame,
    TextLine,
    TextFragment,
    TextStyle,
    Rectangle,
)
from models.enums import BlockType, FrameType, PageSide, Alignment
from models.serialization import to_primitive, to_json

__all__ = [
    "Book",
    "Chapter",
    "Block",
    "generate_chapter_id",
    "generate_block_id",
    "RenderTree",
    "RenderMetadata",
    "PageRender",
    "TextFrame",
    "TextLine",
    "TextFragment",
    "TextStyle",
    "Rectangle",
    "BlockType",
    "FrameType",
    "PageSide",
    "Alignment",
    "to_primitive",
    "to_json",
]
