"""
Document host protocols.

The renderer is host-agnostic: it only talks to the capability set below. A
cursor is whatever the host hands back; the renderer passes it along without
looking inside. Hosts stage every mutation and apply them in one `commit()`.

Implementations:
    - `gdocs.docs_host.GoogleDocsHost` (Google Docs batchUpdate requests)
    - `word.docx_host.DocxHost` (python-docx document)
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from mdrender.styles import Alignment, BuiltinStyle, ParagraphFormat, RunStyle

Cursor = Any


@runtime_checkable
class ParagraphHandle(Protocol):
    """A paragraph that was just inserted and may still receive runs."""

    def add_run(self, text: str, style: RunStyle) -> None:
        """Append a styled run at the end of the paragraph."""
        ...

    def set_style(self, style: BuiltinStyle) -> None:
        """Apply a built-in paragraph style (normal text, heading levels)."""
        ...

    def set_format(self, fmt: ParagraphFormat) -> None:
        """Apply indentation, alignment and spacing."""
        ...

    def end_cursor(self) -> Cursor:
        """Cursor positioned immediately after this paragraph."""
        ...


@runtime_checkable
class TableHandle(Protocol):
    """A freshly inserted table with empty cells."""

    def set_cell(
        self,
        row: int,
        col: int,
        text: str,
        style: RunStyle | None = None,
        alignment: Alignment | None = None,
    ) -> None:
        """Set one cell's text, optionally styling it."""
        ...

    def end_cursor(self) -> Cursor:
        """Cursor positioned immediately after the table."""
        ...


@runtime_checkable
class DocumentHost(Protocol):
    """Capability set the renderer depends on."""

    def start_cursor(self) -> Cursor:
        """Cursor the host was opened at (where rendering starts by default)."""
        ...

    def insert_paragraph(self, cursor: Cursor, text: str = "") -> ParagraphHandle:
        """Insert a paragraph at `cursor`, optionally seeded with plain text."""
        ...

    def insert_table(self, cursor: Cursor, rows: int, cols: int) -> TableHandle:
        """Insert an empty `rows` x `cols` table at `cursor`."""
        ...

    def commit(self) -> Any:
        """Flush every staged mutation to the underlying document, once."""
        ...
