"""Page and frame composition for a parsed book."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from layout.config import LayoutConfig
from layout.line_breaker import LineBreaker
from layout.metrics import TextMetrics
from models.book import Block, Book, Chapter
from models.enums import Alignment, FrameType, PageSide
from models.render import (
    PageRender,
    Rectangle,
    RenderMetadata,
    RenderTree,
    TextFrame,
    TextLine,
    TextStyle,
)

logger = logging.getLogger(__name__)


def page_side(page_number: int) -> PageSide:
    """Odd pages are right-hand (recto) pages, even pages left-hand."""
    return PageSide.RIGHT if page_number % 2 else PageSide.LEFT


@dataclass
class _PageBuilder:
    """Frames collected for the page under construction."""
    max_y: float
    current_y: float = 0.0
    frames: list[TextFrame] = field(default_factory=list)

    @property
    def available_height(self) -> float:
        return self.max_y - self.current_y

    @property
    def has_content(self) -> bool:
        return bool(self.frames)

    @property
    def last_frame_type(self) -> Optional[FrameType]:
        return self.frames[-1].frame_type if self.frames else None

    def can_fit(self, height: float) -> bool:
        return self.available_height >= height

    def add_frame(self, frame: TextFrame, advance: float) -> None:
        self.frames.append(frame)
        self.current_y += advance


class Paginator:
    """Lays a book out onto pages.

    A Paginator holds per-call state only; :meth:`paginate` resets it, so
    the same instance gives identical output for identical input.
    """

    def __init__(self, config: LayoutConfig, metrics: TextMetrics):
        self.config = config
        self.metrics = metrics
        self._pages: list[PageRender] = []
        self._page = _PageBuilder(max_y=config.content_height)

    @property
    def _page_number(self) -> int:
        return len(self._pages) + 1

    @property
    def _side(self) -> PageSide:
        return page_side(self._page_number)

    def paginate(self, book: Book) -> RenderTree:
        self.config.validate()
        self._pages = []
        self._page = _PageBuilder(max_y=self.config.content_height)

        if self.config.dedication_page and book.dedication:
            self._add_dedication(book.dedication)
            self._finish_page()

        for index, chapter in enumerate(book.chapters):
            if index == 0:
                if self.config.first_chapter_on_odd_page:
                    self._advance_to_odd_page()
            elif self.config.chapter_starts_new_page and self._page.has_content:
                self._finish_page()
            self._add_chapter(chapter)

        if self._page.has_content:
            self._finish_page()

        logger.info(
            "Laid out '%s': %d pages, %d chapters",
            book.title, len(self._pages), len(book.chapters),
        )
        return RenderTree(
            book_id=book.id,
            metadata=RenderMetadata(
                total_pages=len(self._pages),
                total_chapters=len(book.chapters),
            ),
            pages=list(self._pages),
        )

    # ------------------------------------------------------------------
    # Chapters and blocks
    # ------------------------------------------------------------------

    def _add_chapter(self, chapter: Chapter) -> None:
        self._add_chapter_title(chapter.title)
        for block in chapter.blocks:
            self._add_block(block)

    def _add_chapter_title(self, title: str) -> None:
        style = self.config.chapter_title_style
        lines = self._breaker().break_lines(title, style)
        if not lines:
            return

        height = len(lines) * self._line_height(style)
        advance = height + style.font_size  # spacing below the title

        if self._page.has_content and not self._page.can_fit(advance):
            self._finish_page()
        if height > self._page.available_height:
            logger.warning(
                "Chapter title %r is taller than the page body (%.1f > %.1f); allowing overflow",
                title, height, self._page.available_height,
            )

        self._page.add_frame(self._frame(FrameType.CHAPTER_TITLE, lines, height), advance)

    def _add_block(self, block: Block) -> None:
        style = self.config.body_style
        remaining = self._breaker().break_lines(block.content, style, block.id)
        if not remaining:
            return

        line_height = self._line_height(style)
        spacing = self.config.block_spacing if self._page.last_frame_type == FrameType.BODY_TEXT else 0.0

        while remaining:
            fit = 0
            while fit < len(remaining) and self._page.can_fit(spacing + (fit + 1) * line_height):
                fit += 1

            if fit == 0:
                if self._page.has_content:
                    self._finish_page()
                    spacing = 0.0
                    continue
                # An empty page cannot hold a single line: place it anyway
                logger.warning(
                    "Line height %.1f exceeds page body height %.1f in block %s; allowing overflow",
                    line_height, self._page.available_height, block.id,
                )
                fit = 1

            self._page.current_y += spacing
            spacing = 0.0

            chunk, remaining = remaining[:fit], remaining[fit:]
            rebased = [
                TextLine(y_offset=i * line_height, fragments=line.fragments)
                for i, line in enumerate(chunk)
            ]
            height = fit * line_height
            self._page.add_frame(self._frame(FrameType.BODY_TEXT, rebased, height), height)

            if remaining:
                self._finish_page()

    def _add_dedication(self, dedication: str) -> None:
        body = self.config.body_style
        style = TextStyle(font_size=body.font_size, line_height=body.line_height, alignment=Alignment.CENTER)
        lines = self._breaker().break_lines(dedication, style)
        if not lines:
            return
        height = len(lines) * self._line_height(style)
        # Set the dedication a third of the way down the body area
        self._page.current_y = max(0.0, (self.config.content_height - height) / 3)
        self._page.add_frame(self._frame(FrameType.DEDICATION, lines, height), height)

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def _advance_to_odd_page(self) -> None:
        if self._page.has_content:
            self._finish_page()
        if self._page_number % 2 == 0:
            logger.debug("Inserting blank page %d so the first chapter starts on a right page", self._page_number)
            self._finish_page()

    def _finish_page(self) -> None:
        frames = list(self._page.frames)
        if frames and self.config.show_page_numbers:
            frames.append(self._page_number_frame())

        self._pages.append(PageRender(page_number=self._page_number, side=self._side, frames=frames))
        self._page = _PageBuilder(max_y=self.config.content_height)

    def _page_number_frame(self) -> TextFrame:
        style = self.config.page_number_style
        lines = self._breaker().break_lines(str(self._page_number), style)
        height = len(lines) * self._line_height(style)
        margins = self.config.margins
        y = self.config.page_size.height - margins.bottom + max(0.0, (margins.bottom - height) / 2)
        return TextFrame(
            bounds=Rectangle(
                x=self.config.left_margin(self._side),
                y=y,
                width=self.config.content_width,
                height=height,
            ),
            frame_type=FrameType.PAGE_NUMBER,
            lines=lines,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _breaker(self) -> LineBreaker:
        return LineBreaker(self.metrics, self.config.content_width)

    def _line_height(self, style: TextStyle) -> float:
        return self.metrics.line_height(style.font_size, style.line_height)

    def _frame(self, frame_type: FrameType, lines: list[TextLine], height: float) -> TextFrame:
        return TextFrame(
            bounds=Rectangle(
                x=self.config.left_margin(self._side),
                y=self.config.margins.top + self._page.current_y,
                width=self.config.content_width,
                height=height,
            ),
            frame_type=frame_type,
            lines=lines,
        )
