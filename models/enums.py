"""Enumerations for the document and render trees."""

from enum import Enum


class BlockType(str, Enum):
    """Kind of content block. Only pages exist today; more variants may follow."""
    PAGE = "page"


class FrameType(str, Enum):
    CHAPTER_TITLE = "chapter_title"
    BODY_TEXT = "body_text"
    PAGE_NUMBER = "page_number"
    DEDICATION = "dedication"


class PageSide(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class Alignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"
