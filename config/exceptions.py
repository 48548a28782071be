"""Custom exception hierarchy for manuscript parsing and layout."""

from typing import Optional


class BookWriterError(Exception):
    """Base exception for all bookwriter errors.

    Every error carries a terse ``message`` and a longer ``help`` string with
    concrete remediation steps; the editor shows both.
    """

    help_text = ""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message

    @property
    def help(self) -> str:
        return self.help_text


# ---- Manuscript Errors ----

class ManuscriptError(BookWriterError):
    """Base exception for manuscript parsing errors."""

    line: Optional[int] = None


class MissingMetadataError(ManuscriptError):
    """A required metadata field was never declared."""

    def __init__(self, field: str):
        super().__init__(f"Missing required metadata field: {field}", {"field": field})
        self.field = field

    @property
    def help(self) -> str:
        return f"Add the required '@{self.field}:' field at the top of your manuscript"


class DuplicateMetadataError(ManuscriptError):
    """A metadata field was declared twice."""

    def __init__(self, field: str, line: int):
        super().__init__(
            f"Duplicate metadata field: {field} at line {line}",
            {"field": field, "line": line},
        )
        self.field = field
        self.line = line

    @property
    def help(self) -> str:
        return f"Remove duplicate '@{self.field}:' field - it should only appear once"


class MalformedMetadataError(ManuscriptError):
    """A line in the metadata section does not follow '@field: value'."""

    def __init__(self, line: int, reason: str):
        super().__init__(
            f"Malformed metadata line at line {line}: {reason}",
            {"line": line},
        )
        self.line = line
        self.reason = reason

    @property
    def help(self) -> str:
        return (
            f"Check the metadata format: {self.reason}. Metadata lines look like "
            "'@title: My Book' and must come before the first '#chapter:'. A line inside a "
            "chapter that starts with @title:, @author:, @id: or @dedication: is read as "
            "a misplaced directive, so reword it if it is meant as text"
        )


class UnknownMetadataError(ManuscriptError):
    """An unrecognized '@field:' directive was found in strict mode."""

    def __init__(self, field: str, line: int):
        super().__init__(
            f"Unknown metadata field: {field} at line {line}",
            {"field": field, "line": line},
        )
        self.field = field
        self.line = line

    help_text = (
        "Recognized fields are @title:, @author:, @id: and @dedication:. "
        "Remove the field or parse without strict mode to ignore it"
    )


class InvalidUuidError(ManuscriptError):
    """The @id field is not a valid UUID."""

    def __init__(self, value: str):
        super().__init__(f"Invalid UUID format in @id field: {value!r}", {"value": value})
        self.value = value

    help_text = (
        "The @id field must be a valid UUID (e.g., 550e8400-e29b-41d4-a009-426655440000). "
        "You can omit @id to generate one automatically."
    )


class InvalidTimestampError(ManuscriptError):
    """A supplied creation/modification timestamp could not be read."""

    def __init__(self, value: str):
        super().__init__(f"Invalid timestamp: {value!r}", {"value": value})
        self.value = value

    help_text = (
        "Timestamps must be ISO 8601 / RFC 3339 strings such as "
        "2025-01-15T10:30:00Z, or omitted to use the current time"
    )


class NoChaptersError(ManuscriptError):
    """The manuscript declares no chapter."""

    def __init__(self, message: str = "Book has no chapters"):
        super().__init__(message)

    help_text = "Add at least one chapter using '#chapter: Chapter Title'"


class EmptyChapterError(ManuscriptError):
    """A chapter has no content blocks (strict mode only)."""

    def __init__(self, chapter_title: str):
        super().__init__(
            f"Chapter has no content: {chapter_title}",
            {"chapter": chapter_title},
        )
        self.chapter_title = chapter_title

    help_text = "Add at least one '@page:' block with text below the chapter declaration"


class MissingChapterTitleError(ManuscriptError):
    """A '#chapter:' declaration has no title."""

    def __init__(self, line: int):
        super().__init__(f"Chapter without title at line {line}", {"line": line})
        self.line = line

    help_text = "Chapter declaration must include a title: '#chapter: Your Title'"


class BlockBeforeChapterError(ManuscriptError):
    """A '@page:' block appears before any chapter."""

    def __init__(self, line: int):
        super().__init__(
            f"Page block defined before any chapter at line {line}",
            {"line": line},
        )
        self.line = line

    help_text = "Move @page: blocks inside a #chapter: section"


class ManuscriptIOError(ManuscriptError):
    """The manuscript could not be read from its source."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"IO error reading manuscript: {reason}", {"path": path})
        self.path = path
        self.reason = reason

    help_text = "Check that the file exists and that you have permission to read it"


class ManuscriptEncodingError(ManuscriptError):
    """The manuscript bytes are not valid UTF-8."""

    def __init__(self, position: int, reason: str):
        super().__init__(
            f"Manuscript is not valid UTF-8: {reason}",
            {"position": position},
        )
        self.position = position
        self.reason = reason

    help_text = "Save the manuscript with UTF-8 encoding and try again"


# ---- Layout Errors ----

class LayoutError(BookWriterError):
    """Base exception for layout/pagination errors."""


class LayoutConfigError(LayoutError):
    """Layout configuration value is unusable."""

    def __init__(self, field: str, value, reason: str = "must be positive"):
        super().__init__(
            f"Invalid layout configuration: {field} {reason}",
            {"field": field, "value": value},
        )
        self.field = field
        self.value = value

    help_text = (
        "Check page size, margins and text styles: margins must leave a positive "
        "content area and font sizes and line heights must be greater than zero"
    )
