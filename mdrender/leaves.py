"""
Leaf renderers: headings, blockquotes, code blocks, horizontal rules and the
raw-text fallback. Each one emits a fixed-style paragraph (or one per quoted
paragraph) and returns the cursor after what it inserted.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mdrender.styles import (
    DEFAULT_THEME,
    HEADING_STYLES,
    PLAIN,
    Alignment,
    ParagraphFormat,
    RenderTheme,
)
from mdrender.tokens import TokenKind, find_matching_close, next_inline, plain_text

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mdrender.host import Cursor, DocumentHost
    from mdrender.tokens import Token

logger = logging.getLogger(__name__)

FALLBACK_HEADING_LEVEL = 4


def heading_level(tag: str) -> int:
    """
    Derive the heading level from an ``h1``..``h6`` tag.

    Levels 1-3 are kept; anything deeper, and any tag without a trailing digit,
    collapses to level 4.
    """
    if tag and tag[-1].isdigit():
        level = int(tag[-1])
        if 1 <= level <= 3:
            return level
    return FALLBACK_HEADING_LEVEL


def render_heading(host: DocumentHost, tokens: Sequence[Token], index: int, cursor: Cursor) -> Cursor:
    """Render the heading opened at `index`; its text comes from ``tokens[index + 1]``."""
    inline = next_inline(tokens, index + 1)
    if inline is None or not inline.content:
        logger.debug(f"Heading at {index} has no content, skipping")
        return cursor

    level = heading_level(tokens[index].tag)
    paragraph = host.insert_paragraph(cursor, inline.content)
    paragraph.set_style(HEADING_STYLES[level])
    logger.debug(f"Rendered heading level {level}: {inline.content!r}")
    return paragraph.end_cursor()


def render_blockquote(
    host: DocumentHost,
    tokens: Sequence[Token],
    index: int,
    cursor: Cursor,
    theme: RenderTheme = DEFAULT_THEME,
) -> Cursor:
    """Render every paragraph inside the blockquote opened at `index` with quote styling."""
    end = find_matching_close(tokens, index)
    quote_format = ParagraphFormat(indent_start_pt=theme.blockquote_indent_pt)

    for j in range(index + 1, end):
        if tokens[j].kind != TokenKind.PARAGRAPH_OPEN:
            continue
        inline = next_inline(tokens, j + 1, end)
        if inline is None:
            continue
        text = plain_text(inline)
        if not text:
            continue
        paragraph = host.insert_paragraph(cursor)
        paragraph.add_run(text, theme.quote_run)
        paragraph.set_format(quote_format)
        cursor = paragraph.end_cursor()
        logger.debug(f"Rendered blockquote paragraph: {text!r}")

    return cursor


def render_code_block(host: DocumentHost, token: Token, cursor: Cursor, theme: RenderTheme = DEFAULT_THEME) -> Cursor:
    """Render a fenced or indented code block as one monospace paragraph."""
    content = token.content.rstrip("\n")
    if not content:
        return cursor

    paragraph = host.insert_paragraph(cursor)
    paragraph.add_run(content, theme.code_run)
    paragraph.set_format(
        ParagraphFormat(space_above_pt=theme.block_spacing_pt, space_below_pt=theme.block_spacing_pt)
    )
    logger.debug(f"Rendered code block: {len(content)} chars")
    return paragraph.end_cursor()


def render_horizontal_rule(host: DocumentHost, cursor: Cursor, theme: RenderTheme = DEFAULT_THEME) -> Cursor:
    """Render a horizontal rule as a centered line of rule glyphs."""
    paragraph = host.insert_paragraph(cursor)
    paragraph.add_run(theme.hr_text, PLAIN)
    paragraph.set_format(
        ParagraphFormat(
            alignment=Alignment.CENTER,
            space_above_pt=theme.block_spacing_pt,
            space_below_pt=theme.block_spacing_pt,
        )
    )
    return paragraph.end_cursor()


def render_raw_text(host: DocumentHost, token: Token, cursor: Cursor) -> Cursor:
    """Fallback for unknown block tokens: keep their content as a plain paragraph."""
    paragraph = host.insert_paragraph(cursor, token.content.rstrip("\n"))
    logger.debug(f"Rendered {token.kind.value!r} token as raw text")
    return paragraph.end_cursor()
