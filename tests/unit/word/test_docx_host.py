"""
Unit tests for DocxHost.

Tests cover:
- Body order of inserted paragraphs and tables
- Run styling through python-docx
- Hyperlink relationships and run shading
- Atomic save and host state
"""

import os

import pytest
from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml.ns import qn
from docx.shared import Pt, RGBColor

from core.errors import HostStateError
from mdrender import render_markdown
from mdrender.styles import PLAIN, Alignment, BuiltinStyle, ParagraphFormat, RunStyle
from word import DocxCursor, DocxHost


def _body_tags(document):
    return [child.tag.split("}")[1] for child in document.element.body.iterchildren() if not child.tag.endswith("sectPr")]


@pytest.fixture
def docx_host():
    return DocxHost()


class TestInsertion:
    def test_start_cursor_appends_at_end(self, docx_host):
        assert docx_host.start_cursor() == DocxCursor(None)
        paragraph = docx_host.insert_paragraph(docx_host.start_cursor(), "first")
        assert docx_host.document.paragraphs[-1].text == "first"
        assert paragraph.end_cursor().element is paragraph.paragraph._p

    def test_paragraphs_follow_cursor(self, docx_host):
        first = docx_host.insert_paragraph(docx_host.start_cursor(), "a")
        docx_host.insert_paragraph(first.end_cursor(), "c")
        docx_host.insert_paragraph(first.end_cursor(), "b")
        assert [p.text for p in docx_host.document.paragraphs] == ["a", "b", "c"]

    def test_start_after_existing_paragraph(self):
        document = Document()
        anchor = document.add_paragraph("anchor")
        document.add_paragraph("tail")
        host = DocxHost(document=document, start_after=anchor)
        host.insert_paragraph(host.start_cursor(), "inserted")
        assert [p.text for p in document.paragraphs] == ["anchor", "inserted", "tail"]

    def test_table_inserted_after_cursor(self, docx_host):
        before = docx_host.insert_paragraph(docx_host.start_cursor(), "before")
        docx_host.insert_paragraph(before.end_cursor(), "after")
        table = docx_host.insert_table(before.end_cursor(), 2, 2)
        table.set_cell(0, 0, "x")
        assert _body_tags(docx_host.document) == ["p", "tbl", "p"]
        assert table.end_cursor().element is table.table._tbl
        assert docx_host.document.tables[0].cell(0, 0).text == "x"

    def test_foreign_cursor(self, docx_host):
        with pytest.raises(HostStateError):
            docx_host.insert_paragraph(3)

    def test_invalid_table_dimensions(self, docx_host):
        with pytest.raises(ValueError):
            docx_host.insert_table(docx_host.start_cursor(), 0, 1)


class TestRunStyles:
    def test_bold_italic_strike(self, docx_host):
        paragraph = docx_host.insert_paragraph(docx_host.start_cursor())
        paragraph.add_run("x", RunStyle(bold=True, italic=True, strikethrough=True))
        run = paragraph.paragraph.runs[0]
        assert run.bold is True
        assert run.italic is True
        assert run.font.strike is True

    def test_plain_run_has_no_overrides(self, docx_host):
        paragraph = docx_host.insert_paragraph(docx_host.start_cursor(), "plain")
        run = paragraph.paragraph.runs[0]
        assert run.bold is None
        assert run.italic is None

    def test_code_font_color_and_shading(self, docx_host):
        paragraph = docx_host.insert_paragraph(docx_host.start_cursor())
        paragraph.add_run("code", RunStyle(font_family="Consolas", foreground="#C7254E", highlight="#F5F5F5"))
        run = paragraph.paragraph.runs[0]
        assert run.font.name == "Consolas"
        assert run.font.color.rgb == RGBColor(0xC7, 0x25, 0x4E)
        shd = run._r.rPr.find(qn("w:shd"))
        assert shd is not None
        assert shd.get(qn("w:fill")) == "F5F5F5"

    def test_link_becomes_hyperlink(self, docx_host):
        paragraph = docx_host.insert_paragraph(docx_host.start_cursor())
        paragraph.add_run("see ", PLAIN)
        paragraph.add_run("docs", RunStyle(underline=True, link="https://docs.io"))
        p = paragraph.paragraph._p
        hyperlink = p.find(qn("w:hyperlink"))
        assert hyperlink is not None
        rel_id = hyperlink.get(qn("r:id"))
        assert paragraph.paragraph.part.rels[rel_id].target_ref == "https://docs.io"
        assert "".join(t.text for t in hyperlink.iter(qn("w:t"))) == "docs"

    def test_empty_run_ignored(self, docx_host):
        paragraph = docx_host.insert_paragraph(docx_host.start_cursor())
        paragraph.add_run("", RunStyle(bold=True))
        assert paragraph.paragraph.runs == []


class TestParagraphStyles:
    def test_heading_style(self, docx_host):
        paragraph = docx_host.insert_paragraph(docx_host.start_cursor(), "Title")
        paragraph.set_style(BuiltinStyle.HEADING_2)
        assert paragraph.paragraph.style.name == "Heading 2"

    def test_format(self, docx_host):
        paragraph = docx_host.insert_paragraph(docx_host.start_cursor(), "q")
        paragraph.set_format(
            ParagraphFormat(indent_start_pt=36.0, alignment=Alignment.CENTER, space_above_pt=6.0, space_below_pt=4.0)
        )
        pf = paragraph.paragraph.paragraph_format
        assert pf.left_indent == Pt(36)
        assert pf.alignment == WD_ALIGN_PARAGRAPH.CENTER
        assert pf.space_before == Pt(6)
        assert pf.space_after == Pt(4)

    def test_header_cell_alignment(self, docx_host):
        table = docx_host.insert_table(docx_host.start_cursor(), 1, 1)
        table.set_cell(0, 0, "H", RunStyle(bold=True), Alignment.CENTER)
        cell_paragraph = table.table.cell(0, 0).paragraphs[0]
        assert cell_paragraph.alignment == WD_ALIGN_PARAGRAPH.CENTER
        assert cell_paragraph.runs[0].bold is True


class TestCommit:
    def test_in_memory_commit(self, docx_host):
        assert docx_host.commit() is docx_host.document
        with pytest.raises(HostStateError):
            docx_host.insert_paragraph(docx_host.start_cursor())

    def test_atomic_save(self, temp_dir):
        path = os.path.join(temp_dir, "out", "report.docx")
        host = DocxHost(path=path)
        host.insert_paragraph(host.start_cursor(), "saved")
        host.commit()
        assert os.path.isfile(path)
        assert not os.path.exists(path + ".tmp")
        assert Document(path).paragraphs[-1].text == "saved"

    def test_commit_path_argument(self, temp_dir, docx_host):
        path = os.path.join(temp_dir, "explicit.docx")
        docx_host.commit(path)
        assert os.path.isfile(path)

    def test_double_commit(self, docx_host):
        docx_host.commit()
        with pytest.raises(HostStateError):
            docx_host.commit()


class TestRenderIntoDocx:
    def test_full_document(self, temp_dir):
        path = os.path.join(temp_dir, "full.docx")
        markdown = "# Title\n\nIntro [link](https://a.io)\n\n- one\n- two\n\n| H | V |\n|---|---|\n| a | 1 |\n"
        render_markdown(markdown, DocxHost(path=path))

        document = Document(path)
        texts = [p.text for p in document.paragraphs]
        assert texts[:4] == ["Title", "Intro link", "• one", "• two"]
        assert document.paragraphs[0].style.name == "Heading 1"
        assert _body_tags(document) == ["p", "p", "p", "p", "p", "tbl", "p"]
        table = document.tables[0]
        assert [[c.text for c in row.cells] for row in table.rows] == [["H", "V"], ["a", "1"]]
