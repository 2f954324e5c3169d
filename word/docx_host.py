"""
Word Document Host

Renders into a python-docx `Document`. The cursor wraps the body element
(paragraph or table) the next element goes after; `DocxCursor(None)` appends
at the end of the body. `commit()` saves the document atomically when a path
was given.

Example:
    >>> host = DocxHost(path="out.docx")
    >>> render_markdown("# Title", host)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.opc.constants import RELATIONSHIP_TYPE
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, RGBColor
from docx.table import Table
from docx.text.paragraph import Paragraph

from core.errors import HostCommitError, HostStateError
from mdrender.styles import PLAIN, Alignment, BuiltinStyle, ParagraphFormat, RunStyle

logger = logging.getLogger(__name__)

STYLE_NAMES = {
    BuiltinStyle.NORMAL: "Normal",
    BuiltinStyle.HEADING_1: "Heading 1",
    BuiltinStyle.HEADING_2: "Heading 2",
    BuiltinStyle.HEADING_3: "Heading 3",
    BuiltinStyle.HEADING_4: "Heading 4",
}

ALIGNMENTS = {
    Alignment.START: WD_ALIGN_PARAGRAPH.LEFT,
    Alignment.CENTER: WD_ALIGN_PARAGRAPH.CENTER,
}

TABLE_STYLE = "Table Grid"


@dataclass(frozen=True)
class DocxCursor:
    """Body element the next element is inserted after; None means end of body."""

    element: Any = None


def _rgb(color: str) -> RGBColor:
    return RGBColor.from_string(color.lstrip("#").upper())


def _shade_run(run, fill: str) -> None:
    """Run background colour through w:shd (any RGB, unlike w:highlight)."""
    r_pr = run._r.get_or_add_rPr()
    shd = OxmlElement("w:shd")
    shd.set(qn("w:val"), "clear")
    shd.set(qn("w:color"), "auto")
    shd.set(qn("w:fill"), fill.lstrip("#").upper())
    r_pr.append(shd)


def _wrap_in_hyperlink(paragraph: Paragraph, run, url: str) -> None:
    """Move `run` into a w:hyperlink pointing at an external relationship."""
    rel_id = paragraph.part.relate_to(url, RELATIONSHIP_TYPE.HYPERLINK, is_external=True)
    hyperlink = OxmlElement("w:hyperlink")
    hyperlink.set(qn("r:id"), rel_id)
    paragraph._p.append(hyperlink)
    hyperlink.append(run._r)


def apply_run_style(run, style: RunStyle) -> None:
    """Apply a RunStyle through the python-docx font API."""
    run.bold = style.bold or None
    run.italic = style.italic or None
    run.underline = style.underline or None
    font = run.font
    font.strike = style.strikethrough or None
    if style.font_family:
        font.name = style.font_family
    if style.foreground:
        font.color.rgb = _rgb(style.foreground)
    if style.highlight:
        _shade_run(run, style.highlight)


class DocxParagraph:
    def __init__(self, host: DocxHost, paragraph: Paragraph):
        self._host = host
        self.paragraph = paragraph

    def add_run(self, text: str, style: RunStyle) -> None:
        self._host._check_open()
        if not text:
            return
        run = self.paragraph.add_run(text)
        apply_run_style(run, style)
        if style.link:
            _wrap_in_hyperlink(self.paragraph, run, style.link)

    def set_style(self, style: BuiltinStyle) -> None:
        self._host._check_open()
        name = STYLE_NAMES[style]
        try:
            self.paragraph.style = name
        except KeyError:
            logger.warning(f"Paragraph style {name!r} is not defined in this document, keeping current style")

    def set_format(self, fmt: ParagraphFormat) -> None:
        self._host._check_open()
        pf = self.paragraph.paragraph_format
        if fmt.indent_start_pt is not None:
            pf.left_indent = Pt(fmt.indent_start_pt)
        if fmt.alignment is not None:
            pf.alignment = ALIGNMENTS[fmt.alignment]
        if fmt.space_above_pt is not None:
            pf.space_before = Pt(fmt.space_above_pt)
        if fmt.space_below_pt is not None:
            pf.space_after = Pt(fmt.space_below_pt)

    def end_cursor(self) -> DocxCursor:
        return DocxCursor(self.paragraph._p)


class DocxTable:
    def __init__(self, host: DocxHost, table: Table):
        self._host = host
        self.table = table

    def set_cell(
        self,
        row: int,
        col: int,
        text: str,
        style: RunStyle | None = None,
        alignment: Alignment | None = None,
    ) -> None:
        self._host._check_open()
        paragraph = self.table.cell(row, col).paragraphs[0]
        if text:
            apply_run_style(paragraph.add_run(text), style or PLAIN)
        if alignment is not None:
            paragraph.alignment = ALIGNMENTS[alignment]

    def end_cursor(self) -> DocxCursor:
        return DocxCursor(self.table._tbl)


class DocxHost:
    """
    Document host backed by python-docx.

    Args:
        document: Document to render into; a new blank document when omitted.
        path: Where `commit()` saves the document. Without a path the document
            is only kept in memory.
        start_after: Paragraph to start inserting after; the end of the body
            when omitted.
    """

    def __init__(
        self,
        document: Any = None,
        path: str | Path | None = None,
        start_after: Paragraph | None = None,
    ):
        self.document = document if document is not None else Document()
        self.path = Path(path) if path is not None else None
        self.committed = False
        self._start = DocxCursor(start_after._p if start_after is not None else None)

    def _check_open(self) -> None:
        if self.committed:
            raise HostStateError("Word host was already committed")

    def _element_of(self, cursor: Any) -> Any:
        if not isinstance(cursor, DocxCursor):
            raise HostStateError(f"Not a Word cursor: {cursor!r}")
        return cursor.element

    def start_cursor(self) -> DocxCursor:
        return self._start

    def insert_paragraph(self, cursor: DocxCursor, text: str = "") -> DocxParagraph:
        self._check_open()
        anchor = self._element_of(cursor)
        if anchor is None:
            paragraph = self.document.add_paragraph()
        else:
            new_p = OxmlElement("w:p")
            anchor.addnext(new_p)
            paragraph = Paragraph(new_p, self.document._body)

        handle = DocxParagraph(self, paragraph)
        if text:
            handle.add_run(text, PLAIN)
        return handle

    def insert_table(self, cursor: DocxCursor, rows: int, cols: int) -> DocxTable:
        self._check_open()
        if rows < 1 or cols < 1:
            raise ValueError(f"Table dimensions must be positive, got {rows}x{cols}")

        anchor = self._element_of(cursor)
        table = self.document.add_table(rows=rows, cols=cols)
        try:
            table.style = TABLE_STYLE
        except KeyError:
            logger.debug(f"Table style {TABLE_STYLE!r} not available, using default")
        if anchor is not None:
            anchor.addnext(table._tbl)

        logger.debug(f"Table {rows}x{cols} inserted")
        return DocxTable(self, table)

    def commit(self, path: str | Path | None = None) -> Any:
        """
        Finish the document and save it to `path` (or the host's path).

        The file is written to a temporary sibling and moved into place, so a
        failed save never leaves a truncated document behind.

        Returns:
            The python-docx Document.
        """
        self._check_open()
        self.committed = True

        target = Path(path) if path is not None else self.path
        if target is None:
            logger.debug("Word host committed in memory")
            return self.document

        tmp_path = target.with_suffix(target.suffix + ".tmp")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            self.document.save(str(tmp_path))
            tmp_path.replace(target)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise HostCommitError(f"Could not save {target}: {e}") from e

        logger.info(f"Saved Word document to {target}")
        return self.document
