"""Page geometry and style configuration for the layout engine."""

from dataclasses import dataclass, field

from config.exceptions import LayoutConfigError
from models.enums import Alignment, PageSide
from models.render import TextStyle


@dataclass(frozen=True)
class PageSize:
    """Page dimensions in points."""
    width: float
    height: float

    @classmethod
    def from_name(cls, name: str) -> "PageSize":
        try:
            return _NAMED_SIZES[name.strip().lower()]
        except KeyError:
            raise LayoutConfigError("page_size", name, f"must be one of {sorted(_NAMED_SIZES)}") from None


PageSize.US_LETTER = PageSize(612.0, 792.0)  # 8.5" x 11"
PageSize.A4 = PageSize(595.0, 842.0)  # 210mm x 297mm

_NAMED_SIZES = {
    "letter": PageSize.US_LETTER,
    "us_letter": PageSize.US_LETTER,
    "a4": PageSize.A4,
}


@dataclass(frozen=True)
class Margins:
    """Page margins in points. Inner is the binding edge."""
    top: float
    bottom: float
    inner: float
    outer: float

    @classmethod
    def uniform(cls, margin: float) -> "Margins":
        return cls(top=margin, bottom=margin, inner=margin, outer=margin)

    @classmethod
    def symmetric(cls, vertical: float, horizontal: float) -> "Margins":
        return cls(top=vertical, bottom=vertical, inner=horizontal, outer=horizontal)


@dataclass(frozen=True)
class LayoutConfig:
    """Everything the paginator needs besides the book and the metrics."""
    page_size: PageSize = PageSize.US_LETTER
    margins: Margins = field(default_factory=lambda: Margins.uniform(72.0))  # 1 inch
    body_style: TextStyle = field(default_factory=lambda: TextStyle(12.0, 1.5, Alignment.LEFT))
    chapter_title_style: TextStyle = field(default_factory=lambda: TextStyle(24.0, 1.2, Alignment.LEFT))
    page_number_style: TextStyle = field(default_factory=lambda: TextStyle(10.0, 1.2, Alignment.CENTER))
    first_chapter_on_odd_page: bool = True
    chapter_starts_new_page: bool = True
    block_spacing: float = 0.0
    show_page_numbers: bool = False
    dedication_page: bool = False

    @property
    def content_width(self) -> float:
        return self.page_size.width - self.margins.inner - self.margins.outer

    @property
    def content_height(self) -> float:
        return self.page_size.height - self.margins.top - self.margins.bottom

    def left_margin(self, side: PageSide) -> float:
        """Margin on the physical left edge: inner on right pages, outer on left pages."""
        return self.margins.inner if side == PageSide.RIGHT else self.margins.outer

    def validate(self) -> None:
        """Raise LayoutConfigError if no page could ever be laid out."""
        if self.page_size.width <= 0:
            raise LayoutConfigError("page_size.width", self.page_size.width)
        if self.page_size.height <= 0:
            raise LayoutConfigError("page_size.height", self.page_size.height)

        for name in ("top", "bottom", "inner", "outer"):
            value = getattr(self.margins, name)
            if value < 0:
                raise LayoutConfigError(f"margins.{name}", value, "must not be negative")

        if self.content_width <= 0:
            raise LayoutConfigError("content_width", self.content_width, "must be positive; margins are wider than the page")
        if self.content_height <= 0:
            raise LayoutConfigError("content_height", self.content_height, "must be positive; margins are taller than the page")

        for name in ("body_style", "chapter_title_style", "page_number_style"):
            style = getattr(self, name)
            if style.font_size <= 0:
                raise LayoutConfigError(f"{name}.font_size", style.font_size)
            if style.line_height <= 0:
                raise LayoutConfigError(f"{name}.line_height", style.line_height)

        if self.block_spacing < 0:
            raise LayoutConfigError("block_spacing", self.block_spacing, "must not be negative")
