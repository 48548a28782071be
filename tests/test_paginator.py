"""Tests for book pagination."""

import copy
import logging

import pytest

from config.exceptions import LayoutConfigError
from layout import layout_book, layout_book_with_metrics
from layout.config import LayoutConfig, Margins, PageSize
from layout.metrics import SimpleTextMetrics
from layout.paginator import Paginator, page_side
from models.enums import FrameType, PageSide
from models.render import TextStyle


LONG_BLOCK = " ".join(["word"] * 1000)


def _frames(tree, frame_type):
    return [frame for page in tree.pages for frame in page.frames if frame.frame_type == frame_type]


class TestPageSide:
    def test_odd_pages_are_right(self):
        assert page_side(1) == PageSide.RIGHT
        assert page_side(3) == PageSide.RIGHT

    def test_even_pages_are_left(self):
        assert page_side(2) == PageSide.LEFT
        assert page_side(10) == PageSide.LEFT


class TestSingleChapter:
    def test_short_chapter_fits_one_page(self, make_book):
        tree = layout_book(make_book([["Hello world"]]))

        assert tree.metadata.total_pages == 1
        assert tree.metadata.total_chapters == 1
        page = tree.pages[0]
        assert page.page_number == 1
        assert page.side == PageSide.RIGHT
        assert [f.frame_type for f in page.frames] == [FrameType.CHAPTER_TITLE, FrameType.BODY_TEXT]

    def test_frame_positions(self, make_book):
        tree = layout_book(make_book([["Hello world"]]))
        title, body = tree.pages[0].frames

        assert title.bounds.x == 72.0
        assert title.bounds.y == pytest.approx(72.0)
        assert title.bounds.width == pytest.approx(468.0)
        assert title.height == pytest.approx(28.8)
        # title height plus one title font size of spacing
        assert body.bounds.y == pytest.approx(124.8)
        assert body.lines[0].text == "Hello world"

    def test_render_tree_carries_book_id(self, book):
        assert layout_book(book).book_id == book.id


class TestMultiPage:
    def test_long_block_spans_pages(self, make_book):
        tree = layout_book(make_book([[LONG_BLOCK]]))

        assert tree.metadata.total_pages == 3
        assert [p.page_number for p in tree.pages] == [1, 2, 3]
        assert [p.side for p in tree.pages] == [PageSide.RIGHT, PageSide.LEFT, PageSide.RIGHT]

    def test_frames_stay_inside_content_area(self, make_book):
        config = LayoutConfig()
        tree = layout_book(make_book([[LONG_BLOCK], [LONG_BLOCK]]), config)
        bottom = config.page_size.height - config.margins.bottom
        for frame in _frames(tree, FrameType.BODY_TEXT):
            assert frame.bounds.y >= config.margins.top
            assert frame.bounds.y + frame.height <= bottom + 1e-6

    def test_line_offsets_are_rebased_per_frame(self, make_book):
        tree = layout_book(make_book([[LONG_BLOCK]]))
        for frame in _frames(tree, FrameType.BODY_TEXT):
            assert frame.lines[0].y_offset == 0.0
            assert [line.y_offset for line in frame.lines] == [i * 18.0 for i in range(len(frame.lines))]

    def test_more_content_never_fewer_pages(self, make_book):
        counts = [
            layout_book(make_book([[" ".join(["word"] * n)]])).metadata.total_pages
            for n in (10, 500, 1000, 2000)
        ]
        assert counts == sorted(counts)

    def test_text_is_conserved(self, book):
        tree = layout_book(book)
        laid_out = " ".join(
            line.text for frame in _frames(tree, FrameType.BODY_TEXT) for line in frame.lines
        ).split()
        source = " ".join(b.content for c in book.chapters for b in c.blocks).split()
        assert laid_out == source

    def test_body_fragments_point_at_their_block(self, book):
        block_ids = {b.id for c in book.chapters for b in c.blocks}
        tree = layout_book(book)
        for frame in _frames(tree, FrameType.BODY_TEXT):
            for line in frame.lines:
                assert line.fragments[0].source_block_id in block_ids
        for frame in _frames(tree, FrameType.CHAPTER_TITLE):
            assert frame.lines[0].fragments[0].source_block_id is None


class TestChapterBreaks:
    def test_each_chapter_starts_new_page(self, make_book):
        tree = layout_book(make_book([["One"], ["Two"], ["Three"]]))
        assert tree.metadata.total_pages == 3
        for page in tree.pages:
            assert page.frames[0].frame_type == FrameType.CHAPTER_TITLE

    def test_chapters_flow_when_new_page_disabled(self, make_book):
        config = LayoutConfig(chapter_starts_new_page=False)
        tree = layout_book(make_book([["One"], ["Two"]]), config)

        assert tree.metadata.total_pages == 1
        frames = tree.pages[0].frames
        assert [f.frame_type for f in frames] == [
            FrameType.CHAPTER_TITLE, FrameType.BODY_TEXT,
            FrameType.CHAPTER_TITLE, FrameType.BODY_TEXT,
        ]
        assert frames[2].bounds.y == pytest.approx(72.0 + 52.8 + 18.0)

    def test_block_spacing_between_body_frames(self, make_book):
        config = LayoutConfig(block_spacing=10.0)
        tree = layout_book(make_book([["First block", "Second block"]]), config)
        first, second = tree.pages[0].frames[1:]
        assert second.bounds.y == pytest.approx(first.bounds.y + first.height + 10.0)

    def test_no_block_spacing_after_title(self, make_book):
        config = LayoutConfig(block_spacing=10.0)
        tree = layout_book(make_book([["Only block"]]), config)
        assert tree.pages[0].frames[1].bounds.y == pytest.approx(124.8)


class TestDedication:
    def test_dedication_page_then_blank_then_chapter(self, make_book):
        config = LayoutConfig(dedication_page=True)
        tree = layout_book(make_book([["Hello"]], dedication="For you"), config)

        assert tree.metadata.total_pages == 3
        dedication, blank, first = tree.pages
        assert [f.frame_type for f in dedication.frames] == [FrameType.DEDICATION]
        assert dedication.frames[0].lines[0].text == "For you"
        assert blank.is_blank
        assert first.side == PageSide.RIGHT
        assert first.frames[0].frame_type == FrameType.CHAPTER_TITLE

    def test_dedication_without_odd_page_rule(self, make_book):
        config = LayoutConfig(dedication_page=True, first_chapter_on_odd_page=False)
        tree = layout_book(make_book([["Hello"]], dedication="For you"), config)
        assert tree.metadata.total_pages == 2
        assert tree.pages[1].side == PageSide.LEFT

    def test_dedication_ignored_when_disabled(self, make_book):
        tree = layout_book(make_book([["Hello"]], dedication="For you"))
        assert tree.metadata.total_pages == 1
        assert not _frames(tree, FrameType.DEDICATION)

    def test_dedication_page_skipped_without_dedication(self, make_book):
        tree = layout_book(make_book([["Hello"]]), LayoutConfig(dedication_page=True))
        assert tree.metadata.total_pages == 1


class TestPageNumbers:
    def test_page_number_frames(self, make_book):
        config = LayoutConfig(show_page_numbers=True)
        tree = layout_book(make_book([["One"], ["Two"]]), config)

        for page in tree.pages:
            number = page.frames[-1]
            assert number.frame_type == FrameType.PAGE_NUMBER
            assert number.lines[0].text == str(page.page_number)
            assert number.bounds.y == pytest.approx(750.0)

    def test_blank_pages_stay_blank(self, make_book):
        config = LayoutConfig(show_page_numbers=True, dedication_page=True)
        tree = layout_book(make_book([["Hello"]], dedication="For you"), config)
        assert tree.pages[1].is_blank

    def test_no_page_numbers_by_default(self, book):
        assert not _frames(layout_book(book), FrameType.PAGE_NUMBER)


class TestMirroredMargins:
    def test_frames_use_inner_margin_on_right_pages(self, make_book):
        config = LayoutConfig(margins=Margins(top=72.0, bottom=72.0, inner=90.0, outer=54.0))
        tree = layout_book(make_book([["One"], ["Two"]]), config)

        right, left = tree.pages
        assert right.side == PageSide.RIGHT
        assert all(f.bounds.x == 90.0 for f in right.frames)
        assert left.side == PageSide.LEFT
        assert all(f.bounds.x == 54.0 for f in left.frames)


class TestDeterminism:
    def test_same_input_same_tree(self, book):
        assert layout_book(book) == layout_book(book)

    def test_paginator_is_reusable(self, book):
        paginator = Paginator(LayoutConfig(), SimpleTextMetrics())
        assert paginator.paginate(book) == paginator.paginate(book)

    def test_book_is_not_mutated(self, book):
        before = copy.deepcopy(book)
        layout_book(book)
        assert book == before


class TestOverflow:
    def test_oversized_lines_overflow_with_warning(self, make_book, caplog):
        config = LayoutConfig(
            page_size=PageSize(200.0, 200.0),
            margins=Margins.uniform(10.0),
            body_style=TextStyle(150.0, 1.5),
            chapter_title_style=TextStyle(10.0, 1.2),
        )
        with caplog.at_level(logging.WARNING, logger="layout.paginator"):
            tree = layout_book(make_book([["a b"]]), config)

        # title alone, then one overflowing line per page
        assert tree.metadata.total_pages == 3
        assert [f.frame_type for f in tree.pages[0].frames] == [FrameType.CHAPTER_TITLE]
        assert tree.pages[1].frames[0].lines[0].text == "a"
        assert tree.pages[2].frames[0].lines[0].text == "b"
        assert "overflow" in caplog.text


class TestInvalidInput:
    def test_invalid_config_raises(self, book):
        with pytest.raises(LayoutConfigError) as exc_info:
            layout_book(book, LayoutConfig(margins=Margins.uniform(400.0)))
        assert exc_info.value.field == "content_width"

    def test_zero_font_size_raises(self, book):
        with pytest.raises(LayoutConfigError):
            layout_book(book, LayoutConfig(body_style=TextStyle(0.0, 1.5)))

    def test_metrics_must_implement_protocol(self, book):
        with pytest.raises(TypeError):
            layout_book_with_metrics(book, LayoutConfig(), object())


class TestCustomMetrics:
    def test_wider_glyphs_give_more_lines(self, make_book):
        class MonospaceMetrics:
            def measure_text(self, text, font_size):
                return len(text) * font_size

            def measure_char(self, char, font_size):
                return font_size

            def line_height(self, font_size, multiplier):
                return font_size * multiplier

        text = " ".join(["word"] * 100)
        book = make_book([[text]])
        default = layout_book(book)
        wide = layout_book_with_metrics(book, LayoutConfig(), MonospaceMetrics())

        def body_lines(tree):
            return sum(len(f.lines) for f in _frames(tree, FrameType.BODY_TEXT))

        assert body_lines(wide) > body_lines(default)
