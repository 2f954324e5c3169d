"""
Block Dispatcher

Walks the flat token stream once, hands every block to its renderer and threads
the insertion cursor from one renderer to the next. Container blocks (lists,
blockquotes, tables) are skipped as a whole once rendered, using the depth
counter in `find_matching_close`, so a nested list's close token never ends the
outer list early.

Example:
    >>> host = GoogleDocsHost(service, document_id, start_index=1)
    >>> cursor = render(parse_markdown("# Title\\n\\n- a\\n- b"), host.start_cursor(), host)
    >>> host.commit()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mdrender.inline import InlineRunFormatter
from mdrender.leaves import (
    render_blockquote,
    render_code_block,
    render_heading,
    render_horizontal_rule,
    render_raw_text,
)
from mdrender.lists import render_list
from mdrender.styles import DEFAULT_THEME, RenderTheme
from mdrender.tables import render_table
from mdrender.tokens import TokenKind, find_matching_close, next_inline, parse_markdown

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mdrender.host import Cursor, DocumentHost
    from mdrender.tokens import Token

logger = logging.getLogger(__name__)


class BlockDispatcher:
    """
    Routes each top-level block of a token stream to its renderer.

    The dispatcher is either scanning top-level tokens or skipping the token
    range of a container it has just rendered; it keeps no other state.
    """

    def __init__(self, host: DocumentHost, theme: RenderTheme = DEFAULT_THEME) -> None:
        self.host = host
        self.theme = theme
        self.inline = InlineRunFormatter(host, theme)

    def render(self, tokens: Sequence[Token], cursor: Cursor) -> Cursor:
        """
        Render every block of `tokens` starting at `cursor`.

        Args:
            tokens: Flat renderer token stream.
            cursor: Insertion cursor for the first block.

        Returns:
            The cursor after the last inserted element.
        """
        i = 0
        while i < len(tokens):
            token = tokens[i]
            kind = token.kind
            logger.debug(f"Token {i}: kind={kind.value}, tag={token.tag}")

            if kind == TokenKind.HEADING_OPEN:
                cursor = render_heading(self.host, tokens, i, cursor)
                i += 2 if next_inline(tokens, i + 1) is not None else 1
            elif kind == TokenKind.PARAGRAPH_OPEN:
                inline = next_inline(tokens, i + 1)
                cursor = self.inline.render(cursor, inline)
                i += 2 if inline is not None else 1
            elif kind in (TokenKind.BULLET_LIST_OPEN, TokenKind.ORDERED_LIST_OPEN):
                cursor = render_list(self.host, tokens, i, cursor, self.theme)
                i = self._skip_container(tokens, i)
            elif kind == TokenKind.BLOCKQUOTE_OPEN:
                cursor = render_blockquote(self.host, tokens, i, cursor, self.theme)
                i = self._skip_container(tokens, i)
            elif kind == TokenKind.TABLE_OPEN:
                cursor = render_table(self.host, tokens, i, cursor)
                i = self._skip_container(tokens, i)
            elif kind == TokenKind.CODE_BLOCK:
                cursor = render_code_block(self.host, token, cursor, self.theme)
                i += 1
            elif kind == TokenKind.HR:
                cursor = render_horizontal_rule(self.host, cursor, self.theme)
                i += 1
            elif token.content:
                cursor = render_raw_text(self.host, token, cursor)
                i += 1
            else:
                i += 1

        return cursor

    @staticmethod
    def _skip_container(tokens: Sequence[Token], index: int) -> int:
        """Index of the first token after the container opened at `index`."""
        return find_matching_close(tokens, index) + 1


def render(
    tokens: Sequence[Token],
    cursor: Cursor,
    host: DocumentHost,
    theme: RenderTheme | None = None,
) -> Cursor:
    """Render `tokens` into `host` at `cursor`; returns the final cursor. Does not commit."""
    return BlockDispatcher(host, theme or DEFAULT_THEME).render(tokens, cursor)


def render_markdown(
    markdown_text: str,
    host: DocumentHost,
    cursor: Cursor | None = None,
    theme: RenderTheme | None = None,
) -> Cursor:
    """
    Parse `markdown_text`, render it into `host` and commit the staged batch once.

    Nothing is committed if parsing or rendering raises.
    """
    start = cursor if cursor is not None else host.start_cursor()
    tokens = parse_markdown(markdown_text)
    end = render(tokens, start, host, theme)
    host.commit()
    logger.info(f"Rendered {len(tokens)} tokens and committed")
    return end
