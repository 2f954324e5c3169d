"""
Markdown token stream renderer.

This package turns a flat Markdown token stream into document mutations staged
on a `DocumentHost` (Google Docs, Word). It performs no I/O itself.
"""

from mdrender.dispatcher import BlockDispatcher, render, render_markdown
from mdrender.host import DocumentHost, ParagraphHandle, TableHandle
from mdrender.inline import InlineRunFormatter
from mdrender.styles import (
    DEFAULT_THEME,
    PLAIN,
    Alignment,
    BuiltinStyle,
    ParagraphFormat,
    RenderTheme,
    RunStyle,
)
from mdrender.tokens import Token, TokenKind, adapt_tokens, parse_markdown

__all__ = [
    "Alignment",
    "BlockDispatcher",
    "BuiltinStyle",
    "DEFAULT_THEME",
    "DocumentHost",
    "InlineRunFormatter",
    "PLAIN",
    "ParagraphFormat",
    "ParagraphHandle",
    "RenderTheme",
    "RunStyle",
    "TableHandle",
    "Token",
    "TokenKind",
    "adapt_tokens",
    "parse_markdown",
    "render",
    "render_markdown",
]
