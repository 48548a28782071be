"""Configuration settings loaded from the environment and .env file."""

from pathlib import Path
from typing import Optional

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

from models.enums import Alignment
from models.render import TextStyle

PAGE_SIZE_NAMES = ("letter", "a4", "custom")


class Settings(BaseSettings):
    """Application settings, loaded from BOOKWRITER_* variables or .env."""

    # Page
    page_size: str = "letter"
    page_width: Optional[float] = None   # points, custom pages only
    page_height: Optional[float] = None  # points, custom pages only

    # Margins (points; inner is the binding edge)
    margin_top: float = 72.0
    margin_bottom: float = 72.0
    margin_inner: float = 72.0
    margin_outer: float = 72.0

    # Text styles
    body_font_size: float = 12.0
    body_line_height: float = 1.5
    title_font_size: float = 24.0
    title_line_height: float = 1.2

    # Pagination
    first_chapter_on_odd_page: bool = True
    chapter_starts_new_page: bool = True
    show_page_numbers: bool = False
    dedication_page: bool = False
    block_spacing: float = 0.0

    # Parsing
    strict_parsing: bool = False

    # Logging
    log_dir: Path = Path("./data/logs")

    model_config = {
        "env_prefix": "BOOKWRITER_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("page_size")
    @classmethod
    def validate_page_size(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in PAGE_SIZE_NAMES:
            raise ValueError(f"page_size must be one of {', '.join(PAGE_SIZE_NAMES)}")
        return v

    @field_validator("body_font_size", "body_line_height", "title_font_size", "title_line_height")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Font sizes and line heights must be positive")
        return v

    @field_validator("margin_top", "margin_bottom", "margin_inner", "margin_outer", "block_spacing")
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Margins and spacing must be non-negative")
        return v

    @field_validator("log_dir")
    @classmethod
    def ensure_parent_dirs(cls, v: Path) -> Path:
        v.parent.mkdir(parents=True, exist_ok=True)
        return v

    @model_validator(mode="after")
    def validate_custom_page(self) -> "Settings":
        if self.page_size == "custom":
            if not self.page_width or not self.page_height:
                raise ValueError("page_width and page_height are required when page_size is custom")
            if self.page_width <= 0 or self.page_height <= 0:
                raise ValueError("page_width and page_height must be positive")
        return self

    def layout_config(self):
        """Build the LayoutConfig described by these settings."""
        from layout.config import LayoutConfig, Margins, PageSize

        if self.page_size == "custom":
            page = PageSize(self.page_width, self.page_height)
        else:
            page = PageSize.from_name(self.page_size)

        return LayoutConfig(
            page_size=page,
            margins=Margins(
                top=self.margin_top,
                bottom=self.margin_bottom,
                inner=self.margin_inner,
                outer=self.margin_outer,
            ),
            body_style=TextStyle(self.body_font_size, self.body_line_height, Alignment.LEFT),
            chapter_title_style=TextStyle(self.title_font_size, self.title_line_height, Alignment.LEFT),
            first_chapter_on_odd_page=self.first_chapter_on_odd_page,
            chapter_starts_new_page=self.chapter_starts_new_page,
            show_page_numbers=self.show_page_numbers,
            dedication_page=self.dedication_page,
            block_spacing=self.block_spacing,
        )


_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
