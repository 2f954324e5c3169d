"""
List Renderer

Bulleted and ordered lists become one indented paragraph per item, with a
literal prefix (``"• "`` or ``"<n>. "``) in front of the item's flat text.
Inline markup inside list items is not re-parsed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from mdrender.inline import checkbox_for
from mdrender.styles import BULLET_PREFIX, DEFAULT_THEME, ParagraphFormat, RenderTheme
from mdrender.tokens import TokenKind, find_matching_close, next_inline

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mdrender.host import Cursor, DocumentHost
    from mdrender.tokens import Token

logger = logging.getLogger(__name__)

LIST_OPEN_KINDS = (TokenKind.BULLET_LIST_OPEN, TokenKind.ORDERED_LIST_OPEN)
LIST_CLOSE_KINDS = (TokenKind.BULLET_LIST_CLOSE, TokenKind.ORDERED_LIST_CLOSE)

# Nested lists get one extra indentation step, never more
MAX_INDENT_LEVELS = 2


@dataclass
class _ListFrame:
    ordered: bool
    counter: int = 0

    def next_prefix(self) -> str:
        self.counter += 1
        if self.ordered:
            return f"{self.counter}. "
        return BULLET_PREFIX


def _task_checkbox(inline: Token) -> str | None:
    """Return the checkbox glyph if the task-list plugin marked this item."""
    if inline.children and inline.children[0].kind == TokenKind.HTML_INLINE:
        return checkbox_for(inline.children[0].content)
    return None


def render_list(
    host: DocumentHost,
    tokens: Sequence[Token],
    index: int,
    cursor: Cursor,
    theme: RenderTheme = DEFAULT_THEME,
) -> Cursor:
    """
    Render the list opened at `index`.

    Args:
        host: Document host receiving the paragraphs.
        tokens: The full flat token stream.
        index: Index of the bullet/ordered list open token.
        cursor: Insertion cursor.
        theme: Styling values (indent step).

    Returns:
        The cursor after the last emitted item, or `cursor` unchanged when the
        list had nothing renderable.
    """
    end = find_matching_close(tokens, index)
    stack = [_ListFrame(ordered=tokens[index].kind == TokenKind.ORDERED_LIST_OPEN)]
    emitted = 0

    j = index + 1
    while j < end:
        kind = tokens[j].kind
        if kind in LIST_OPEN_KINDS:
            stack.append(_ListFrame(ordered=kind == TokenKind.ORDERED_LIST_OPEN))
        elif kind in LIST_CLOSE_KINDS:
            if len(stack) > 1:
                stack.pop()
        elif kind == TokenKind.LIST_ITEM_OPEN:
            inline = None
            if j + 1 < end and tokens[j + 1].kind == TokenKind.PARAGRAPH_OPEN:
                inline = next_inline(tokens, j + 2, end)
            if inline is None or not inline.content.strip():
                logger.debug(f"List item at {j} has no inline content, skipping")
                j += 1
                continue

            frame = stack[-1]
            # soft wraps join with a space, as in paragraphs
            content = inline.content.replace("\n", " ")
            checkbox = _task_checkbox(inline)
            if checkbox is not None:
                text = f"{checkbox} {content.lstrip()}"
            else:
                text = frame.next_prefix() + content

            depth = min(len(stack), MAX_INDENT_LEVELS)
            paragraph = host.insert_paragraph(cursor, text)
            paragraph.set_format(ParagraphFormat(indent_start_pt=theme.list_indent_pt * depth))
            cursor = paragraph.end_cursor()
            emitted += 1
            j += 3
            continue
        j += 1

    logger.debug(f"Rendered list at {index}: {emitted} item(s)")
    return cursor
