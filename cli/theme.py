"""Unified Rich theme and reusable UI helper functions for the CLI."""

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.theme import Theme
from rich.tree import Tree

from config.exceptions import BookWriterError
from models.book import Book
from models.enums import FrameType
from models.render import RenderTree

BOOK_THEME = Theme({
    "app.title": "bold",
    "success": "green",
    "warning": "yellow",
    "error": "red",
    "info": "blue",
    "muted": "dim",
    "accent": "cyan",
    "stat.label": "dim",
    "stat.value": "bold",
    "chapter.num": "blue",
    "chapter.title": "bold cyan",
})


def get_console() -> Console:
    """Return a Console instance with the book theme applied."""
    return Console(theme=BOOK_THEME)


def app_header(title: str = "bookwriter") -> Rule:
    """Return a Rule element for the application header banner."""
    return Rule(title=f"[bold]{title}[/]", style="dim")


def success_panel(title: str, body: str) -> Panel:
    """Return a green-bordered Panel for success results."""
    return Panel(body, title=f"[success]{escape(title)}[/]", box=box.ROUNDED, border_style="green", padding=(0, 2))


def error_panel(error: BookWriterError) -> Panel:
    """Return a red-bordered Panel with an error message and its help text."""
    body = f"[error]{escape(str(error))}[/]"
    if error.help:
        body += f"\n\n[stat.label]Help:[/] {escape(error.help)}"
    return Panel(body, title="[error]Error[/]", box=box.ROUNDED, border_style="red", padding=(0, 2))


def book_summary_panel(book: Book) -> Panel:
    """Return a Panel with the book's metadata and counts."""
    lines = [
        f"  [stat.label]Author:[/] [stat.value]{escape(book.author)}[/]",
        f"  [stat.label]Chapters:[/] [stat.value]{book.chapter_count}[/]  "
        f"[muted]|[/]  [stat.label]Blocks:[/] [stat.value]{book.block_count}[/]  "
        f"[muted]|[/]  [stat.label]Words:[/] [stat.value]{book.word_count()}[/]",
    ]
    if book.dedication:
        lines.append(f"  [stat.label]Dedication:[/] {escape(book.dedication)}")
    return Panel(
        "\n".join(lines),
        title=f"[bold]{escape(book.title)}[/] [muted](ID: {book.id})[/]",
        box=box.ROUNDED,
        border_style="dim",
        padding=(0, 2),
    )


def chapter_tree(book: Book) -> Tree:
    """Build a Rich Tree of chapters and their blocks."""
    tree = Tree("[bold]Chapters[/]")
    for chapter in book.chapters:
        branch = tree.add(f"[chapter.num]{chapter.order + 1}.[/] [chapter.title]{escape(chapter.title)}[/]")
        for block in chapter.blocks[:5]:
            first_line = block.content.splitlines()[0]
            short = (first_line[:40] + "...") if len(first_line) > 40 else first_line
            branch.add(f"[muted]{block.block_type.value} {block.order + 1}:[/] {escape(short)}")
        if len(chapter.blocks) > 5:
            branch.add(f"[muted]... ({len(chapter.blocks)} blocks)[/]")
    return tree


def page_table(tree: RenderTree, limit: int = 20) -> Table:
    """Build a Rich Table summarizing laid-out pages."""
    table = Table(box=box.ROUNDED, border_style="dim", show_header=True, padding=(0, 1))
    table.add_column("Page", style="chapter.num", justify="right")
    table.add_column("Side", style="muted")
    table.add_column("Frames", justify="right")
    table.add_column("Lines", justify="right")
    table.add_column("Starts with")

    for page in tree.pages[:limit]:
        body_lines = [
            line
            for frame in page.frames
            if frame.frame_type != FrameType.PAGE_NUMBER
            for line in frame.lines
        ]
        if body_lines:
            first = body_lines[0].text
            first = escape((first[:40] + "...") if len(first) > 40 else first)
        else:
            first = "[muted](blank)[/]"
        table.add_row(
            str(page.page_number),
            page.side.value,
            str(len(page.frames)),
            str(len(body_lines)),
            first,
        )

    if len(tree.pages) > limit:
        table.add_row(f"[muted]+{len(tree.pages) - limit}[/]", "", "", "", "")

    return table
