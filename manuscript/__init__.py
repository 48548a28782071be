"""Manuscript package — parser, loaders, and writer for the manuscript format."""

from manuscript.parser import ManuscriptParser, ParserState, parse_manuscript, coerce_timestamp
from manuscript.loader import load_manuscript, read_manuscript, decode_manuscript, file_timestamps
from manuscript.writer import format_manuscript

__all__ = [
    "ManuscriptParser",
    "ParserState",
    "parse_manuscript",
    "coerce_timestamp",
    "load_manuscript",
    "read_manuscript",
    "decode_manuscript",
    "file_timestamps",
    "format_manuscript",
]
