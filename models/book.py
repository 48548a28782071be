"""Book, chapter and block data models."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from models.enums import BlockType
from models.serialization import to_primitive


def generate_chapter_id(book_id: uuid.UUID, order: int, title: str) -> uuid.UUID:
    """Derive a chapter id from its book, position and title."""
    return uuid.uuid5(book_id, f"{order}-{title}")


def generate_block_id(chapter_id: uuid.UUID, order: int) -> uuid.UUID:
    """Derive a block id from its chapter and position."""
    return uuid.uuid5(chapter_id, str(order))


@dataclass(frozen=True)
class Block:
    """A unit of chapter content."""
    id: uuid.UUID
    content: str
    order: int
    block_type: BlockType = BlockType.PAGE


@dataclass(frozen=True)
class Chapter:
    """A titled, ordered sequence of blocks."""
    id: uuid.UUID
    title: str
    order: int
    created_at: datetime
    updated_at: datetime
    blocks: list[Block] = field(default_factory=list)

    def content(self) -> str:
        """Return every block's text joined by blank lines."""
        return "\n\n".join(block.content for block in self.blocks)

    def word_count(self) -> int:
        return sum(len(block.content.split()) for block in self.blocks)


@dataclass(frozen=True)
class Book:
    """Root of the document tree produced by the manuscript parser."""
    id: uuid.UUID
    title: str
    author: str
    created_at: datetime
    updated_at: datetime
    dedication: Optional[str] = None
    chapters: list[Chapter] = field(default_factory=list)

    @property
    def chapter_count(self) -> int:
        return len(self.chapters)

    @property
    def block_count(self) -> int:
        return sum(len(chapter.blocks) for chapter in self.chapters)

    def word_count(self) -> int:
        return sum(chapter.word_count() for chapter in self.chapters)

    def to_dict(self) -> dict:
        """Return a JSON-compatible, field-for-field representation."""
        return to_primitive(self)
