"""Configuration package — settings, logging, and exceptions."""

from config.exceptions import (
    BookWriterError,
    ManuscriptError,
    MissingMetadataError,
    DuplicateMetadataError,
    MalformedMetadataError,
    UnknownMetadataError,
    InvalidUuidError,
    InvalidTimestampError,
    NoChaptersError,
    EmptyChapterError,
    MissingChapterTitleError,
    BlockBeforeChapterError,
    ManuscriptIOError,
    ManuscriptEncodingError,
    LayoutError,
    LayoutConfigError,
)
from config.logging_config import setup_logging
from config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "BookWriterError",
    "ManuscriptError",
    "MissingMetadataError",
    "DuplicateMetadataError",
    "MalformedMetadataError",
    "UnknownMetadataError",
    "InvalidUuidError",
    "InvalidTimestampError",
    "NoChaptersError",
    "EmptyChapterError",
    "MissingChapterTitleError",
    "BlockBeforeChapterError",
    "ManuscriptIOError",
    "ManuscriptEncodingError",
    "LayoutError",
    "LayoutConfigError",
]
