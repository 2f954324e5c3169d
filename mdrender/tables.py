"""
Table Renderer

Two phases: `extract_grid` reads a rectangular grid of cell strings out of the
table's thead/tbody token runs, then `render_table` materializes it as a host
table framed by two blank spacer paragraphs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mdrender.styles import Alignment, RunStyle
from mdrender.tokens import TokenKind, find_matching_close, next_inline, plain_text

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mdrender.host import Cursor, DocumentHost
    from mdrender.tokens import Token

logger = logging.getLogger(__name__)

HEADER_CELL_STYLE = RunStyle(bold=True)


@dataclass
class TableGrid:
    """
    Cell strings in row-major order.

    Attributes:
        rows: Collected rows; row 0 is the header row when `has_header` is set.
        has_header: Whether a header row was collected from the thead section.
    """

    rows: list[list[str]] = field(default_factory=list)
    has_header: bool = False

    @property
    def columns(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def normalized(self) -> list[list[str]]:
        """Every row cut or padded with empty strings to the width of row 0."""
        cols = self.columns
        return [(row + [""] * cols)[:cols] for row in self.rows]


def _collect_row(tokens: Sequence[Token], tr_index: int, cell_kind: TokenKind) -> tuple[list[str], int]:
    """Collect the cells of the row opened at `tr_index`; returns (cells, tr_close_index)."""
    tr_end = find_matching_close(tokens, tr_index)
    cells: list[str] = []
    for k in range(tr_index + 1, tr_end):
        if tokens[k].kind != cell_kind:
            continue
        inline = next_inline(tokens, k + 1, tr_end)
        if inline is not None:
            cells.append(plain_text(inline))
    return cells, tr_end


def _collect_section(
    tokens: Sequence[Token], section_index: int, cell_kind: TokenKind
) -> tuple[list[list[str]], int]:
    """Collect the non-empty rows of a thead/tbody section."""
    section_end = find_matching_close(tokens, section_index)
    rows: list[list[str]] = []
    k = section_index + 1
    while k < section_end:
        if tokens[k].kind == TokenKind.TR_OPEN:
            cells, k = _collect_row(tokens, k, cell_kind)
            if cells:
                rows.append(cells)
        k += 1
    return rows, section_end


def extract_grid(tokens: Sequence[Token], index: int, end: int | None = None) -> TableGrid:
    """
    Extract the cell grid of the table opened at `index`.

    Only the first header row is honoured; body rows follow it in source order.
    Rows without any collected cell are dropped.
    """
    if end is None:
        end = find_matching_close(tokens, index)

    grid = TableGrid()
    header: list[str] | None = None
    body: list[list[str]] = []

    j = index + 1
    while j < end:
        kind = tokens[j].kind
        if kind == TokenKind.THEAD_OPEN:
            header_rows, j = _collect_section(tokens, j, TokenKind.TH_OPEN)
            if header_rows and header is None:
                header = header_rows[0]
                if len(header_rows) > 1:
                    logger.debug(f"Table at {index}: ignoring {len(header_rows) - 1} extra header row(s)")
        elif kind == TokenKind.TBODY_OPEN:
            body_rows, j = _collect_section(tokens, j, TokenKind.TD_OPEN)
            body.extend(body_rows)
        j += 1

    if header is not None:
        grid.rows.append(header)
        grid.has_header = True
    grid.rows.extend(body)
    return grid


def render_table(host: DocumentHost, tokens: Sequence[Token], index: int, cursor: Cursor) -> Cursor:
    """
    Render the table opened at `index`.

    Returns:
        The cursor after the trailing spacer paragraph, or `cursor` unchanged
        when the table had no rows.
    """
    grid = extract_grid(tokens, index)
    if not grid.rows:
        logger.debug(f"Table at {index} has no rows, skipping")
        return cursor

    rows = grid.normalized()
    cols = grid.columns

    cursor = host.insert_paragraph(cursor).end_cursor()
    table = host.insert_table(cursor, len(rows), cols)
    for r, row in enumerate(rows):
        for c, text in enumerate(row):
            if r == 0 and grid.has_header:
                table.set_cell(r, c, text, HEADER_CELL_STYLE, Alignment.CENTER)
            else:
                table.set_cell(r, c, text)
    cursor = table.end_cursor()
    cursor = host.insert_paragraph(cursor).end_cursor()

    logger.debug(f"Rendered table at {index}: {len(rows)}x{cols}")
    return cursor
