"""Reading manuscripts from files and file-like sources."""

import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from config.exceptions import ManuscriptEncodingError, ManuscriptIOError
from manuscript.parser import parse_manuscript
from models.book import Book

logger = logging.getLogger(__name__)


def decode_manuscript(data: bytes) -> str:
    """Decode raw manuscript bytes as UTF-8."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ManuscriptEncodingError(e.start, e.reason) from e


def file_timestamps(path: str | Path) -> tuple[datetime, datetime]:
    """Return (created, modified) UTC timestamps from filesystem metadata.

    Uses the birth time where the platform records one, else the inode
    change time.
    """
    stat = os.stat(path)
    created = getattr(stat, "st_birthtime", None) or stat.st_ctime
    return (
        datetime.fromtimestamp(int(created), tz=timezone.utc),
        datetime.fromtimestamp(int(stat.st_mtime), tz=timezone.utc),
    )


def read_manuscript(stream, created_at=None, updated_at=None, strict: bool = False) -> Book:
    """Parse a manuscript from a file-like object returning str or bytes."""
    try:
        data = stream.read()
    except OSError as e:
        raise ManuscriptIOError(str(getattr(stream, "name", "<stream>")), str(e)) from e
    except UnicodeDecodeError as e:
        raise ManuscriptEncodingError(e.start, e.reason) from e

    if isinstance(data, bytes):
        data = decode_manuscript(data)
    return parse_manuscript(data, created_at, updated_at, strict=strict)


def load_manuscript(path: str | Path, strict: bool = False) -> Book:
    """Parse a manuscript file, taking timestamps from the filesystem.

    Args:
        path: Path to the manuscript file.
        strict: Report unknown metadata fields and empty chapters.

    Returns:
        The parsed Book.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
        created_at, updated_at = file_timestamps(path)
    except OSError as e:
        raise ManuscriptIOError(str(path), e.strerror or str(e)) from e

    logger.debug("Loaded manuscript %s (%d bytes)", path, len(data))
    return parse_manuscript(decode_manuscript(data), created_at, updated_at, strict=strict)
