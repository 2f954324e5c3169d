"""Shared pytest fixtures for gws-markdown-render tests."""

import tempfile
from unittest.mock import MagicMock

import pytest

from core.config import reload_config
from core.container import reset_container
from mdrender.styles import PLAIN


class RecordedParagraph:
    """In-memory paragraph capturing runs, style and format."""

    def __init__(self, host, text=""):
        self.host = host
        self.runs = []
        self.style = None
        self.formats = []
        if text:
            self.runs.append((text, PLAIN))

    @property
    def text(self):
        return "".join(text for text, _ in self.runs)

    @property
    def format(self):
        return self.formats[-1] if self.formats else None

    def add_run(self, text, style):
        self.runs.append((text, style))

    def set_style(self, style):
        self.style = style

    def set_format(self, fmt):
        self.formats.append(fmt)

    def end_cursor(self):
        return self.host.elements.index(self) + 1


class RecordedTable:
    """In-memory table capturing cell text, style and alignment."""

    def __init__(self, host, rows, cols):
        self.host = host
        self.rows = rows
        self.cols = cols
        self.cells = [["" for _ in range(cols)] for _ in range(rows)]
        self.styles = {}
        self.alignments = {}

    def set_cell(self, row, col, text, style=None, alignment=None):
        self.cells[row][col] = text
        self.styles[(row, col)] = style
        self.alignments[(row, col)] = alignment

    def end_cursor(self):
        return self.host.elements.index(self) + 1


class RecordingHost:
    """
    Document host that records elements in an ordered list.

    The cursor is the list position the next element is inserted at, so tests
    can check that cursors are threaded in source order.
    """

    def __init__(self):
        self.elements = []
        self.commits = 0

    def start_cursor(self):
        return 0

    def insert_paragraph(self, cursor, text=""):
        paragraph = RecordedParagraph(self, text)
        self.elements.insert(cursor, paragraph)
        return paragraph

    def insert_table(self, cursor, rows, cols):
        table = RecordedTable(self, rows, cols)
        self.elements.insert(cursor, table)
        return table

    def commit(self):
        self.commits += 1

    @property
    def paragraphs(self):
        return [e for e in self.elements if isinstance(e, RecordedParagraph)]

    @property
    def tables(self):
        return [e for e in self.elements if isinstance(e, RecordedTable)]

    @property
    def texts(self):
        return [p.text for p in self.paragraphs]


@pytest.fixture
def host():
    """Create a fresh recording document host."""
    return RecordingHost()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def mock_docs_service():
    """Create a mock Google Docs service."""
    service = MagicMock()
    service.documents.return_value.batchUpdate.return_value.execute.return_value = {
        "documentId": "doc123",
        "replies": [],
    }
    service.documents.return_value.create.return_value.execute.return_value = {"documentId": "new-doc-456"}
    return service


@pytest.fixture
def env_override(monkeypatch):
    """Helper to override environment variables."""

    def _override(**kwargs):
        for key, value in kwargs.items():
            if value is None:
                monkeypatch.delenv(key, raising=False)
            else:
                monkeypatch.setenv(key, value)

    return _override


@pytest.fixture(autouse=True)
def clean_globals(monkeypatch):
    """Reset the global config and container so tests don't leak state."""
    for name in (
        "MDRENDER_LOG_LEVEL",
        "MDRENDER_CODE_FONT",
        "MDRENDER_LIST_INDENT_PT",
        "MDRENDER_QUOTE_INDENT_PT",
        "MDRENDER_MCP_TRANSPORT",
        "MDRENDER_MCP_PORT",
        "PORT",
    ):
        monkeypatch.delenv(name, raising=False)
    reload_config()
    reset_container()
    yield
    reset_container()
