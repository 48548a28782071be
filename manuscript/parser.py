"""Line-oriented state-machine parser for the manuscript format.

A manuscript looks like::

    @title: The Way of Iron
    @author: Tej
    @dedication: To my family

    #chapter: Chapter One
    @page:
    The morning sun cracked over the horizon...

Metadata directives come first, then chapters, each holding ``@page:``
blocks. The parser scans every line once, collecting into private drafts,
and only builds the :class:`~models.book.Book` after the scan succeeds, so a
failing parse never leaves a partial tree behind.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from config.exceptions import (
    BlockBeforeChapterError,
    DuplicateMetadataError,
    EmptyChapterError,
    InvalidTimestampError,
    InvalidUuidError,
    MalformedMetadataError,
    MissingChapterTitleError,
    MissingMetadataError,
    NoChaptersError,
    UnknownMetadataError,
)
from models.book import Block, Book, Chapter, generate_block_id, generate_chapter_id
from models.enums import BlockType

logger = logging.getLogger(__name__)

CHAPTER_PREFIX = "#chapter:"
PAGE_PREFIX = "@page:"

METADATA_FIELDS = ("title", "author", "id", "dedication")
REQUIRED_FIELDS = ("title", "author")


class ParserState(Enum):
    READING_METADATA = "reading_metadata"
    EXPECTING_CHAPTER_OR_METADATA = "expecting_chapter_or_metadata"
    READING_CHAPTER_HEADER = "reading_chapter_header"
    READING_BLOCK = "reading_block"


# States in which no chapter has been opened yet
METADATA_STATES = (ParserState.READING_METADATA, ParserState.EXPECTING_CHAPTER_OR_METADATA)


@dataclass
class _ChapterDraft:
    title: str
    order: int
    blocks: list[str] = field(default_factory=list)


@dataclass
class _MetadataDraft:
    values: dict[str, str] = field(default_factory=dict)

    def get(self, name: str) -> Optional[str]:
        return self.values.get(name)


def coerce_timestamp(value) -> datetime:
    """Return ``value`` as a timezone-aware UTC datetime.

    Accepts datetimes (naive ones are taken as UTC) and ISO 8601 strings.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise InvalidTimestampError(value) from None
    else:
        raise InvalidTimestampError(repr(value))

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class ManuscriptParser:
    """Single-use parser; feed it lines, then call :meth:`finish`.

    In strict mode unknown metadata directives and chapters without blocks
    are reported instead of being tolerated.

    ``state`` drives line dispatch: metadata lines are only read before the
    first chapter opens, after which every line belongs to a chapter.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        self.state = ParserState.READING_METADATA
        self.line_number = 0
        self._metadata = _MetadataDraft()
        self._chapters: list[_ChapterDraft] = []
        self._current_chapter: Optional[_ChapterDraft] = None
        self._current_block: Optional[list[str]] = None

    @classmethod
    def parse(
        cls,
        source: str,
        created_at=None,
        updated_at=None,
        strict: bool = False,
    ) -> Book:
        """Parse a whole manuscript string into a Book."""
        now = datetime.now(timezone.utc)
        created = coerce_timestamp(created_at if created_at is not None else now)
        updated = coerce_timestamp(updated_at if updated_at is not None else now)

        parser = cls(strict=strict)
        if source.startswith("\ufeff"):
            source = source[1:]
        for line in source.split("\n"):
            parser.feed(line.rstrip("\r"))
        return parser.finish(created, updated)

    # ------------------------------------------------------------------
    # Line scan
    # ------------------------------------------------------------------

    def feed(self, line: str) -> None:
        """Consume one input line, raising on position-based errors."""
        self.line_number += 1
        stripped = line.strip()

        if stripped.startswith(CHAPTER_PREFIX):
            self._open_chapter(stripped)
        elif stripped.startswith(PAGE_PREFIX):
            self._open_block(stripped)
        elif self.state in METADATA_STATES:
            self._read_metadata_line(stripped)
        else:
            self._read_chapter_line(line, stripped)

    def _read_metadata_line(self, stripped: str) -> None:
        if not stripped:
            return
        if not stripped.startswith("@") or ":" not in stripped:
            raise MalformedMetadataError(self.line_number, "Expected format '@field: value'")

        name, value = stripped[1:].split(":", 1)
        name = name.strip()
        value = value.strip()

        if name in METADATA_FIELDS:
            if name in self._metadata.values:
                raise DuplicateMetadataError(name, self.line_number)
            self._metadata.values[name] = value
        elif self.strict:
            raise UnknownMetadataError(name, self.line_number)
        else:
            logger.debug("Ignoring unknown metadata field '%s' at line %d", name, self.line_number)

        self.state = ParserState.EXPECTING_CHAPTER_OR_METADATA

    def _read_chapter_line(self, line: str, stripped: str) -> None:
        if stripped.startswith("@") and ":" in stripped:
            name = stripped[1:].split(":", 1)[0].strip()
            if name in METADATA_FIELDS:
                raise MalformedMetadataError(
                    self.line_number,
                    f"'@{name}:' must appear before the first '{CHAPTER_PREFIX}'",
                )

        if self._current_block is None:
            if not stripped:
                return
            # Text right after a chapter header opens an implicit block
            self._current_block = []
            self.state = ParserState.READING_BLOCK

        self._current_block.append(line if stripped else "")

    def _open_chapter(self, stripped: str) -> None:
        title = stripped[len(CHAPTER_PREFIX):].strip()
        if not title:
            raise MissingChapterTitleError(self.line_number)

        self._finish_block()
        self._finish_chapter()
        self._current_chapter = _ChapterDraft(title=title, order=len(self._chapters))
        self.state = ParserState.READING_CHAPTER_HEADER

    def _open_block(self, stripped: str) -> None:
        if self.state in METADATA_STATES:
            raise BlockBeforeChapterError(self.line_number)

        self._finish_block()
        self._current_block = []
        remainder = stripped[len(PAGE_PREFIX):].strip()
        if remainder:
            self._current_block.append(remainder)
        self.state = ParserState.READING_BLOCK

    def _finish_block(self) -> None:
        if self._current_block is None:
            return
        content = "\n".join(self._current_block).strip()
        if content:
            self._current_chapter.blocks.append(content)
        self._current_block = None

    def _finish_chapter(self) -> None:
        if self._current_chapter is not None:
            self._chapters.append(self._current_chapter)
            self._current_chapter = None

    # ------------------------------------------------------------------
    # Post-scan validation and tree assembly
    # ------------------------------------------------------------------

    def finish(self, created_at: datetime, updated_at: datetime) -> Book:
        """Validate the collected drafts and assemble the Book."""
        self._finish_block()
        self._finish_chapter()

        for name in REQUIRED_FIELDS:
            if not self._metadata.get(name):
                raise MissingMetadataError(name)

        raw_id = self._metadata.get("id")
        if raw_id is not None:
            try:
                book_id = uuid.UUID(raw_id)
            except ValueError:
                raise InvalidUuidError(raw_id) from None
        else:
            book_id = uuid.uuid4()

        if not self._chapters:
            raise NoChaptersError()

        if self.strict:
            for draft in self._chapters:
                if not draft.blocks:
                    raise EmptyChapterError(draft.title)

        chapters = [self._build_chapter(book_id, draft, created_at, updated_at) for draft in self._chapters]

        book = Book(
            id=book_id,
            title=self._metadata.get("title"),
            author=self._metadata.get("author"),
            dedication=self._metadata.get("dedication") or None,
            created_at=created_at,
            updated_at=updated_at,
            chapters=chapters,
        )
        logger.debug(
            "Parsed manuscript '%s': %d chapters, %d blocks, %d lines",
            book.title, book.chapter_count, book.block_count, self.line_number,
        )
        return book

    @staticmethod
    def _build_chapter(
        book_id: uuid.UUID,
        draft: _ChapterDraft,
        created_at: datetime,
        updated_at: datetime,
    ) -> Chapter:
        chapter_id = generate_chapter_id(book_id, draft.order, draft.title)
        blocks = [
            Block(
                id=generate_block_id(chapter_id, index),
                content=content,
                order=index,
                block_type=BlockType.PAGE,
            )
            for index, content in enumerate(draft.blocks)
        ]
        return Chapter(
            id=chapter_id,
            title=draft.title,
            order=draft.order,
            created_at=created_at,
            updated_at=updated_at,
            blocks=blocks,
        )


def parse_manuscript(
    source: str,
    created_at=None,
    updated_at=None,
    strict: bool = False,
) -> Book:
    """Parse manuscript text into a Book.

    Args:
        source: The manuscript text.
        created_at: Creation timestamp (datetime or ISO 8601 string). Defaults to now.
        updated_at: Modification timestamp (datetime or ISO 8601 string). Defaults to now.
        strict: Report unknown metadata fields and empty chapters.

    Returns:
        The parsed Book.

    Raises:
        ManuscriptError: The first problem found, see :mod:`config.exceptions`.
    """
    return ManuscriptParser.parse(source, created_at, updated_at, strict=strict)
