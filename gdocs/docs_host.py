"""
Google Docs Document Host

Stages the renderer's mutations as Docs `batchUpdate` requests and submits
them in one call on `commit()`.

Requests are applied by the API in order, so every request is staged with the
index the document will have at that point:

- A paragraph is opened by inserting "\\n" at the cursor; runs are inserted
  just before that newline and the cursor after the paragraph is
  ``start + text_length + 1``. Lengths are counted in UTF-16 code units,
  as the API counts indices.
- Every new paragraph gets a NORMAL_TEXT reset and every run the full text
  style field mask, so nothing is inherited from neighbouring content.
- Tables follow the Docs table index math: cell (r, c) of an R x C table
  inserted at ``I`` starts at ``I + 3 + r * (2 * C + 1) + c * 2`` plus the
  text already inserted into earlier cells, and the table consumes
  ``2 + R * (2 * C + 1)`` indices plus its text.

Example:
    >>> host = GoogleDocsHost(service, "doc-id", start_index=1)
    >>> paragraph = host.insert_paragraph(host.start_cursor(), "Hello")
    >>> host.commit()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from googleapiclient.errors import HttpError

from core.errors import HostCommitError, HostStateError, ValidationError
from gdocs.docs_helpers import (
    NAMED_STYLE_TYPES,
    build_paragraph_style,
    create_insert_table_request,
    create_insert_text_request,
    create_paragraph_reset_request,
    create_update_paragraph_style_request,
    create_update_text_style_request,
    run_text_style,
    utf16_len,
)
from mdrender.styles import PLAIN, Alignment, BuiltinStyle, ParagraphFormat, RunStyle

logger = logging.getLogger(__name__)

# Offset of cell (0, 0) from the table's insertion index
TABLE_FIRST_CELL_OFFSET = 3
# Indices consumed by the table start and end markers
TABLE_STRUCTURE_OVERHEAD = 2


@dataclass(frozen=True)
class DocsCursor:
    """Insertion point: a 1-based index into the document body."""

    index: int


def table_cell_index(table_start: int, cols: int, row: int, col: int, text_offset: int = 0) -> int:
    """Index of the content start of cell (row, col) given text already inserted."""
    return table_start + TABLE_FIRST_CELL_OFFSET + row * (2 * cols + 1) + col * 2 + text_offset


def table_size(rows: int, cols: int, text_length: int = 0) -> int:
    """Number of document indices an inserted table occupies."""
    return TABLE_STRUCTURE_OVERHEAD + rows * (2 * cols + 1) + text_length


class DocsParagraph:
    """Handle on a staged paragraph; valid until the host stages the next element."""

    def __init__(self, host: GoogleDocsHost, start: int, generation: int):
        self._host = host
        self.start = start
        # UTF-16 code units, not code points
        self.length = 0
        self._generation = generation

    def _check_live(self) -> None:
        self._host._check_open()
        if self._generation != self._host._generation:
            raise HostStateError("Paragraph handle used after another element was inserted")

    def add_run(self, text: str, style: RunStyle) -> None:
        self._check_live()
        if not text:
            return

        index = self.start + self.length
        size = utf16_len(text)
        text_style, fields = run_text_style(style)
        self._host.requests.append(create_insert_text_request(index, text))
        self._host.requests.append(create_update_text_style_request(index, index + size, text_style, fields))
        self.length += size
        logger.debug(f"Run at {index}: {size} units, style={style}")

    def set_style(self, style: BuiltinStyle) -> None:
        self._check_live()
        self._host.requests.append(
            create_update_paragraph_style_request(
                self.start,
                self.start + self.length + 1,
                {"namedStyleType": NAMED_STYLE_TYPES[style]},
                "namedStyleType",
            )
        )

    def set_format(self, fmt: ParagraphFormat) -> None:
        self._check_live()
        paragraph_style, fields = build_paragraph_style(fmt)
        if not fields:
            return
        self._host.requests.append(
            create_update_paragraph_style_request(
                self.start,
                self.start + self.length + 1,
                paragraph_style,
                ",".join(fields),
            )
        )

    def end_cursor(self) -> DocsCursor:
        return DocsCursor(self.start + self.length + 1)


class DocsTable:
    """
    Handle on a staged table.

    Cell contents are buffered and turned into requests in row-major order
    when the host stages its next element or commits, since each cell's index
    depends on the text of every cell before it.
    """

    def __init__(self, host: GoogleDocsHost, start: int, rows: int, cols: int):
        self._host = host
        self.start = start
        self.rows = rows
        self.cols = cols
        self._cells: dict[tuple[int, int], tuple[str, RunStyle | None, Alignment | None]] = {}
        self._materialized = False

    def set_cell(
        self,
        row: int,
        col: int,
        text: str,
        style: RunStyle | None = None,
        alignment: Alignment | None = None,
    ) -> None:
        self._host._check_open()
        if self._materialized:
            raise HostStateError("Table handle used after another element was inserted")
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"Cell ({row}, {col}) is outside a {self.rows}x{self.cols} table")
        self._cells[(row, col)] = (text, style, alignment)

    def text_length(self) -> int:
        return sum(utf16_len(text) for text, _, _ in self._cells.values())

    def end_cursor(self) -> DocsCursor:
        return DocsCursor(self.start + table_size(self.rows, self.cols, self.text_length()))

    def materialize(self) -> None:
        """Stage the cell text requests; runs once."""
        if self._materialized:
            return
        self._materialized = True

        text_offset = 0
        for r in range(self.rows):
            for c in range(self.cols):
                text, style, alignment = self._cells.get((r, c), ("", None, None))
                if not text:
                    continue

                index = table_cell_index(self.start, self.cols, r, c, text_offset)
                size = utf16_len(text)
                end = index + size
                text_style, fields = run_text_style(style or PLAIN)
                self._host.requests.append(create_insert_text_request(index, text))
                self._host.requests.append(create_update_text_style_request(index, end, text_style, fields))
                if alignment is not None:
                    paragraph_style, para_fields = build_paragraph_style(ParagraphFormat(alignment=alignment))
                    self._host.requests.append(
                        create_update_paragraph_style_request(index, end, paragraph_style, ",".join(para_fields))
                    )

                logger.debug(f"Table cell ({r},{c}): {size} units at {index} (offset={text_offset})")
                text_offset += size


class GoogleDocsHost:
    """
    Document host that stages Google Docs API requests.

    Args:
        service: A `docs` v1 service resource.
        document_id: Target document.
        start_index: Body index rendering starts at (1 is the start of the body).
    """

    def __init__(self, service: Any, document_id: str, start_index: int = 1):
        if start_index < 1:
            raise ValidationError(f"start_index must be at least 1, got {start_index}")

        self.service = service
        self.document_id = document_id
        self.start_index = start_index
        self.requests: list[dict[str, Any]] = []
        self.committed = False
        self._generation = 0
        self._open_table: DocsTable | None = None

    def _check_open(self) -> None:
        if self.committed:
            raise HostStateError(f"Host for document {self.document_id} was already committed")

    def _index_of(self, cursor: Any) -> int:
        if not isinstance(cursor, DocsCursor):
            raise HostStateError(f"Not a Google Docs cursor: {cursor!r}")
        return cursor.index

    def _next_element(self) -> int:
        """Close the previous element; returns the new element's generation."""
        if self._open_table is not None:
            self._open_table.materialize()
            self._open_table = None
        self._generation += 1
        return self._generation

    def start_cursor(self) -> DocsCursor:
        return DocsCursor(self.start_index)

    def insert_paragraph(self, cursor: DocsCursor, text: str = "") -> DocsParagraph:
        self._check_open()
        index = self._index_of(cursor)
        generation = self._next_element()

        self.requests.append(create_insert_text_request(index, "\n"))
        self.requests.append(create_paragraph_reset_request(index, index + 1))

        paragraph = DocsParagraph(self, index, generation)
        if text:
            paragraph.add_run(text, PLAIN)
        return paragraph

    def insert_table(self, cursor: DocsCursor, rows: int, cols: int) -> DocsTable:
        self._check_open()
        if rows < 1 or cols < 1:
            raise ValueError(f"Table dimensions must be positive, got {rows}x{cols}")

        index = self._index_of(cursor)
        self._next_element()

        self.requests.append(create_insert_table_request(index, rows, cols))
        logger.debug(f"Table {rows}x{cols} at index {index}")

        self._open_table = DocsTable(self, index, rows, cols)
        return self._open_table

    def commit(self) -> dict[str, Any]:
        """
        Submit every staged request in a single batchUpdate.

        Returns:
            The batchUpdate response, or an empty dict when nothing was staged.

        Raises:
            HostStateError: If the host was already committed.
            HttpError: Propagated untouched for the tool layer to map.
            HostCommitError: For any other failure while submitting.
        """
        self._check_open()
        self._next_element()
        self.committed = True

        if not self.requests:
            logger.info(f"Nothing to commit for document {self.document_id}")
            return {}

        logger.info(f"Committing {len(self.requests)} requests to document {self.document_id}")
        try:
            return (
                self.service.documents()
                .batchUpdate(documentId=self.document_id, body={"requests": self.requests})
                .execute()
            )
        except HttpError:
            raise
        except Exception as e:
            raise HostCommitError(
                f"batchUpdate failed for document {self.document_id}: {e}",
                staged_count=len(self.requests),
            ) from e
