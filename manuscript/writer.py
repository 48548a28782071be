"""Render a Book back into manuscript text."""

from models.book import Book


def format_manuscript(book: Book) -> str:
    """Return the canonical manuscript text for ``book``.

    The book id is written out so that re-parsing the text reproduces the
    same chapter and block ids.
    """
    lines = [
        f"@id: {book.id}",
        f"@title: {book.title}",
        f"@author: {book.author}",
    ]
    if book.dedication:
        lines.append(f"@dedication: {book.dedication}")
    lines.append("")

    for chapter in book.chapters:
        lines.append(f"#chapter: {chapter.title}")
        lines.append("")
        for block in chapter.blocks:
            lines.append("@page:")
            lines.append(block.content)
            lines.append("")

    return "\n".join(lines)
