"""Shared pytest fixtures for the bookwriter test suite."""

from datetime import datetime, timezone

import pytest


CREATED_AT = datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc)
UPDATED_AT = datetime(2025, 12, 9, 14, 30, tzinfo=timezone.utc)
BOOK_ID = "550e8400-e29b-41d4-a009-426655440000"

SAMPLE_MANUSCRIPT = f"""
@title: The Way of Iron
@author: Tej
@id: {BOOK_ID}
@dedication: To my family...

#chapter: Chapter One
@page:
The morning sun cracked over the horizon...

@page:
Another day began.

It was colder than the last.

#chapter: Chapter Two
@page:
Now we're in chapter two. The story continues...
"""


# ---------------------------------------------------------------------------
# Manuscript fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_text():
    """Return a complete manuscript with metadata, two chapters and three blocks."""
    return SAMPLE_MANUSCRIPT


@pytest.fixture
def book(sample_text):
    """Return the sample manuscript parsed with fixed timestamps."""
    from manuscript.parser import parse_manuscript
    return parse_manuscript(sample_text, CREATED_AT, UPDATED_AT)


@pytest.fixture
def make_book():
    """Return a factory building a book from chapter bodies.

    Each entry of ``chapters`` is a list of block texts for one chapter.
    """
    from manuscript.parser import parse_manuscript

    def _make(chapters: list[list[str]], dedication: str | None = None):
        lines = ["@title: Test Book", "@author: Author", f"@id: {BOOK_ID}"]
        if dedication:
            lines.append(f"@dedication: {dedication}")
        for index, blocks in enumerate(chapters, start=1):
            lines.append(f"#chapter: Chapter {index}")
            for block in blocks:
                lines.append("@page:")
                lines.append(block)
        return parse_manuscript("\n".join(lines), CREATED_AT, UPDATED_AT)

    return _make


@pytest.fixture
def manuscript_file(tmp_path, sample_text):
    """Write the sample manuscript to disk and return its path."""
    path = tmp_path / "book.bk"
    path.write_text(sample_text, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Settings fixture
# ---------------------------------------------------------------------------

@pytest.fixture
def settings(tmp_path):
    """Return a Settings instance isolated from .env and the working directory."""
    from config.settings import Settings
    return Settings(_env_file=None, log_dir=tmp_path / "logs")
