"""
Google Docs host and MCP tools.

`GoogleDocsHost` stages the renderer's output as batchUpdate requests;
`gdocs.writing` exposes it as MCP tools.
"""

from gdocs.docs_host import DocsCursor, DocsParagraph, DocsTable, GoogleDocsHost

__all__ = [
    "DocsCursor",
    "DocsParagraph",
    "DocsTable",
    "GoogleDocsHost",
]
