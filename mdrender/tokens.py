"""
Token model for the renderer.

The renderer never walks markdown-it-py tokens directly. Instead every parsed
token is adapted into a frozen `Token` with a closed `TokenKind`, so the
dispatcher and sub-renderers work against one small, read-only vocabulary.

The stream stays flat: block-open and block-close tokens are siblings, and only
`inline` tokens carry children.

Example:
    >>> tokens = parse_markdown("# Title\\n\\nSome **bold** text")
    >>> [t.kind.value for t in tokens][:3]
    ['heading_open', 'inline', 'other']
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from markdown_it import MarkdownIt
from mdit_py_plugins.tasklists import tasklists_plugin

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

logger = logging.getLogger(__name__)


class TokenKind(str, Enum):
    """Closed set of token kinds understood by the renderer."""

    HEADING_OPEN = "heading_open"
    PARAGRAPH_OPEN = "paragraph_open"
    INLINE = "inline"
    BULLET_LIST_OPEN = "bullet_list_open"
    BULLET_LIST_CLOSE = "bullet_list_close"
    ORDERED_LIST_OPEN = "ordered_list_open"
    ORDERED_LIST_CLOSE = "ordered_list_close"
    LIST_ITEM_OPEN = "list_item_open"
    LIST_ITEM_CLOSE = "list_item_close"
    BLOCKQUOTE_OPEN = "blockquote_open"
    BLOCKQUOTE_CLOSE = "blockquote_close"
    CODE_BLOCK = "code_block"
    HR = "hr"
    TABLE_OPEN = "table_open"
    TABLE_CLOSE = "table_close"
    THEAD_OPEN = "thead_open"
    THEAD_CLOSE = "thead_close"
    TBODY_OPEN = "tbody_open"
    TBODY_CLOSE = "tbody_close"
    TR_OPEN = "tr_open"
    TR_CLOSE = "tr_close"
    TH_OPEN = "th_open"
    TH_CLOSE = "th_close"
    TD_OPEN = "td_open"
    TD_CLOSE = "td_close"
    STRONG_OPEN = "strong_open"
    STRONG_CLOSE = "strong_close"
    EM_OPEN = "em_open"
    EM_CLOSE = "em_close"
    S_OPEN = "s_open"
    S_CLOSE = "s_close"
    CODE_INLINE = "code_inline"
    LINK_OPEN = "link_open"
    LINK_CLOSE = "link_close"
    SOFTBREAK = "softbreak"
    HARDBREAK = "hardbreak"
    HTML_INLINE = "html_inline"
    TEXT = "text"
    OTHER = "other"


# markdown-it type names that do not map 1:1 onto a TokenKind value
_TYPE_ALIASES: dict[str, TokenKind] = {
    "fence": TokenKind.CODE_BLOCK,
    "code_block": TokenKind.CODE_BLOCK,
}

_KIND_BY_VALUE: dict[str, TokenKind] = {kind.value: kind for kind in TokenKind}


def kind_for_type(token_type: str) -> TokenKind:
    """Map a markdown-it token type name onto a TokenKind (OTHER if unknown)."""
    if token_type in _TYPE_ALIASES:
        return _TYPE_ALIASES[token_type]
    return _KIND_BY_VALUE.get(token_type, TokenKind.OTHER)


@dataclass(frozen=True)
class Token:
    """
    One read-only unit of parsed source structure.

    Attributes:
        kind: The token kind.
        tag: HTML-ish tag name (``h1``..``h6`` for headings, ``th``/``td`` for cells).
        content: Literal text content, empty when the token carries none.
        attrs: Ordered ``(key, value)`` pairs, e.g. ``(("href", "https://..."),)``.
        children: Child tokens; only inline tokens have them.
    """

    kind: TokenKind
    tag: str = ""
    content: str = ""
    attrs: tuple[tuple[str, str], ...] = ()
    children: tuple[Token, ...] = ()

    def attr(self, name: str) -> str | None:
        """Return the value of the first attribute pair named `name`, or None."""
        for key, value in self.attrs:
            if key == name:
                return value
        return None

    @classmethod
    def from_markdown_it(cls, token: Any) -> Token:
        """Adapt a markdown-it-py token (and its children) into a Token."""
        raw_attrs = token.attrs or {}
        if isinstance(raw_attrs, dict):
            pairs = raw_attrs.items()
        else:
            # older markdown-it releases use a list of [key, value] pairs
            pairs = raw_attrs
        attrs = tuple((str(key), str(value)) for key, value in pairs)
        children = tuple(cls.from_markdown_it(child) for child in token.children or ())
        return cls(
            kind=kind_for_type(token.type),
            tag=token.tag or "",
            content=token.content or "",
            attrs=attrs,
            children=children,
        )


# Container open kind -> matching close kind
CONTAINER_PAIRS: dict[TokenKind, TokenKind] = {
    TokenKind.BULLET_LIST_OPEN: TokenKind.BULLET_LIST_CLOSE,
    TokenKind.ORDERED_LIST_OPEN: TokenKind.ORDERED_LIST_CLOSE,
    TokenKind.BLOCKQUOTE_OPEN: TokenKind.BLOCKQUOTE_CLOSE,
    TokenKind.TABLE_OPEN: TokenKind.TABLE_CLOSE,
    TokenKind.THEAD_OPEN: TokenKind.THEAD_CLOSE,
    TokenKind.TBODY_OPEN: TokenKind.TBODY_CLOSE,
    TokenKind.TR_OPEN: TokenKind.TR_CLOSE,
}


def find_matching_close(tokens: Sequence[Token], start: int) -> int:
    """
    Find the index of the close token matching the container opened at `start`.

    The depth counter starts at 1 on the open token, goes up on every further
    open of the same kind and down on every matching close; the scan stops when
    it returns to 0. An unterminated container runs to the end of the stream, so
    the returned index is then ``len(tokens)``.
    """
    open_kind = tokens[start].kind
    close_kind = CONTAINER_PAIRS[open_kind]
    depth = 1
    j = start + 1
    while j < len(tokens):
        kind = tokens[j].kind
        if kind == open_kind:
            depth += 1
        elif kind == close_kind:
            depth -= 1
            if depth == 0:
                return j
        j += 1
    logger.warning(f"{open_kind.value} at {start} has no matching {close_kind.value}")
    return len(tokens)


def next_inline(tokens: Sequence[Token], index: int, end: int | None = None) -> Token | None:
    """Return ``tokens[index]`` if it is an inline token before `end`, else None."""
    limit = len(tokens) if end is None else min(end, len(tokens))
    if index < limit and tokens[index].kind == TokenKind.INLINE:
        return tokens[index]
    return None


def plain_text(inline: Token) -> str:
    """Concatenate the text-bearing children of an inline token, dropping markup."""
    if not inline.children:
        return inline.content
    parts: list[str] = []
    for child in inline.children:
        if child.kind == TokenKind.SOFTBREAK:
            parts.append(" ")
        elif child.kind == TokenKind.HARDBREAK:
            parts.append("\n")
        elif child.kind in (TokenKind.TEXT, TokenKind.CODE_INLINE):
            parts.append(child.content)
    return "".join(parts)


def adapt_tokens(raw_tokens: Iterable[Any]) -> list[Token]:
    """Adapt a sequence of markdown-it-py tokens into renderer tokens."""
    return [Token.from_markdown_it(token) for token in raw_tokens]


def create_parser() -> MarkdownIt:
    """Build the CommonMark parser with GFM tables, strikethrough and task lists."""
    return MarkdownIt("commonmark").enable("table").enable("strikethrough").use(tasklists_plugin)


def parse_markdown(markdown_text: str, parser: MarkdownIt | None = None) -> list[Token]:
    """
    Parse Markdown source into the flat renderer token stream.

    Args:
        markdown_text: The Markdown source.
        parser: Optional pre-built parser; defaults to `create_parser()`.

    Returns:
        The adapted, flat token list.
    """
    md = parser or create_parser()
    tokens = adapt_tokens(md.parse(markdown_text))
    logger.debug(f"Parsed markdown into {len(tokens)} tokens")
    return tokens
