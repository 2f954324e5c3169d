"""Word (.docx) document host built on python-docx."""

from word.docx_host import DocxCursor, DocxHost, DocxParagraph, DocxTable

__all__ = ["DocxCursor", "DocxHost", "DocxParagraph", "DocxTable"]
