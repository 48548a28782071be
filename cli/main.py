"""CLI entry point — bookwriter manuscript tools.

Usage:
  bookwriter parse book.bk            Show the parsed structure
  bookwriter parse book.bk --json     Print the serialized Book
  bookwriter layout book.bk           Paginate and show a page summary
  bookwriter format book.bk -o out.bk Write the canonical manuscript text
  bookwriter --help                   List all commands
"""

import logging
import sys
from dataclasses import replace
from pathlib import Path

import click

from cli.theme import (
    get_console,
    app_header,
    success_panel,
    error_panel,
    book_summary_panel,
    chapter_tree,
    page_table,
)
from config.exceptions import BookWriterError
from config.logging_config import setup_logging
from config.settings import Settings
from layout import layout_book
from layout.config import Margins, PageSize
from manuscript import format_manuscript, load_manuscript
from models.serialization import to_json

console = get_console()


def _init_logging(verbose: bool, settings: Settings):
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    setup_logging(level=level, log_dir=settings.log_dir)


def _load(path: str, strict: bool):
    """Load a manuscript, printing the error panel and exiting on failure."""
    try:
        return load_manuscript(path, strict=strict)
    except BookWriterError as e:
        console.print(error_panel(e))
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, verbose):
    """bookwriter — parse and paginate manuscripts."""
    settings = Settings()
    _init_logging(verbose, settings)
    ctx.obj = {"settings": settings}


# ---------------------------------------------------------------------------
# parse command
# ---------------------------------------------------------------------------

@cli.command()
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print the Book as JSON")
@click.option("--strict", is_flag=True, help="Report unknown fields and empty chapters")
@click.pass_obj
def parse(obj, path, as_json, strict):
    """Parse a manuscript and show its chapters."""
    settings = obj["settings"]
    book = _load(path, strict or settings.strict_parsing)

    if as_json:
        click.echo(to_json(book))
        return

    console.print(app_header())
    console.print(book_summary_panel(book))
    console.print(chapter_tree(book))


# ---------------------------------------------------------------------------
# layout command
# ---------------------------------------------------------------------------

@cli.command()
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print the RenderTree as JSON")
@click.option("--page-size", type=click.Choice(["letter", "a4"], case_sensitive=False), default=None,
              help="Named page size (overrides settings)")
@click.option("--margin", type=float, default=None, help="Uniform margin in points (overrides settings)")
@click.option("--page-numbers", is_flag=True, help="Add page number frames")
@click.pass_obj
def layout(obj, path, as_json, page_size, margin, page_numbers):
    """Paginate a manuscript and summarize the pages."""
    settings = obj["settings"]
    book = _load(path, settings.strict_parsing)

    config = settings.layout_config()
    overrides = {}
    if page_size:
        overrides["page_size"] = PageSize.from_name(page_size)
    if margin is not None:
        overrides["margins"] = Margins.uniform(margin)
    if page_numbers:
        overrides["show_page_numbers"] = True
    if overrides:
        config = replace(config, **overrides)

    try:
        tree = layout_book(book, config)
    except BookWriterError as e:
        console.print(error_panel(e))
        sys.exit(1)

    if as_json:
        click.echo(to_json(tree))
        return

    console.print(app_header())
    console.print(success_panel(
        book.title,
        f"{tree.metadata.total_pages} pages, {tree.metadata.total_chapters} chapters",
    ))
    console.print(page_table(tree))


# ---------------------------------------------------------------------------
# format command
# ---------------------------------------------------------------------------

@cli.command("format")
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None,
              help="Write to this file instead of stdout")
@click.pass_obj
def format_command(obj, path, output):
    """Rewrite a manuscript in canonical form, pinning its @id."""
    book = _load(path, obj["settings"].strict_parsing)
    text = format_manuscript(book)

    if output is None:
        click.echo(text, nl=False)
        return

    Path(output).write_text(text, encoding="utf-8")
    console.print(success_panel("Formatted", f"Wrote {output} ({book.chapter_count} chapters)"))


def main():
    cli()


if __name__ == "__main__":
    main()
