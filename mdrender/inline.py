"""
Inline Run Formatter

Turns the children of one inline token into styled runs inside a single
paragraph. Plain text is buffered; the buffer is flushed as one run, under the
style it was typed in, right before any style transition and once more at the
end of the children.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mdrender.styles import (
    CHECKBOX_CHECKED,
    CHECKBOX_UNCHECKED,
    DEFAULT_THEME,
    RenderTheme,
    StyleState,
)
from mdrender.tokens import Token, TokenKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mdrender.host import Cursor, DocumentHost, ParagraphHandle

logger = logging.getLogger(__name__)

TASK_CHECKBOX_CLASS = 'class="task-list-item-checkbox"'

# open/close kind -> (StyleState attribute, value while open)
_TOGGLES: dict[TokenKind, tuple[str, bool]] = {
    TokenKind.STRONG_OPEN: ("bold", True),
    TokenKind.STRONG_CLOSE: ("bold", False),
    TokenKind.EM_OPEN: ("italic", True),
    TokenKind.EM_CLOSE: ("italic", False),
    TokenKind.S_OPEN: ("strikethrough", True),
    TokenKind.S_CLOSE: ("strikethrough", False),
}


def checkbox_for(html: str) -> str | None:
    """Return the checkbox glyph for task-list checkbox markup, else None."""
    if TASK_CHECKBOX_CLASS not in html:
        return None
    return CHECKBOX_CHECKED if 'checked="checked"' in html else CHECKBOX_UNCHECKED


class RunAccumulator:
    """
    Pending text buffer plus style state for one paragraph.

    Every style change goes through `transition()`, which flushes first, so a
    run can never pick up a style that was applied after its text arrived.
    """

    def __init__(self, paragraph: ParagraphHandle, theme: RenderTheme = DEFAULT_THEME) -> None:
        self.paragraph = paragraph
        self.state = StyleState(theme=theme)
        self.buffer: list[str] = []
        self.runs_emitted = 0

    def append(self, text: str) -> None:
        if text:
            self.buffer.append(text)

    def flush(self) -> None:
        """Emit the buffered text as one run; a no-op when nothing is buffered."""
        if not self.buffer:
            return
        text = "".join(self.buffer)
        self.buffer = []
        style = self.state.run_style()
        self.paragraph.add_run(text, style)
        self.runs_emitted += 1
        logger.debug(f"Flushed run: {text!r}, style={style}")

    def transition(self, **changes: object) -> None:
        self.flush()
        for name, value in changes.items():
            setattr(self.state, name, value)

    def emit_code(self, text: str) -> None:
        """Emit an inline code span as its own atomic run."""
        self.flush()
        if not text:
            return
        self.state.code = True
        self.buffer.append(text)
        self.flush()
        self.state.code = False


class InlineRunFormatter:
    """
    Renders one inline token into one paragraph of styled runs.

    Example:
        >>> formatter = InlineRunFormatter(host)
        >>> cursor = formatter.render(cursor, inline_token)
    """

    def __init__(self, host: DocumentHost, theme: RenderTheme = DEFAULT_THEME) -> None:
        self.host = host
        self.theme = theme

    def render(self, cursor: Cursor, inline: Token | None) -> Cursor:
        """
        Insert one paragraph for `inline` at `cursor`.

        Args:
            cursor: Where the paragraph goes.
            inline: The inline token; None (or one without children) yields an
                empty paragraph.

        Returns:
            The cursor after the new paragraph.
        """
        paragraph = self.host.insert_paragraph(cursor)
        children = inline.children if inline is not None else ()
        self.format_into(paragraph, children)
        return paragraph.end_cursor()

    def format_into(self, paragraph: ParagraphHandle, children: Sequence[Token]) -> int:
        """Append runs for `children` to an existing paragraph; returns the run count."""
        acc = RunAccumulator(paragraph, self.theme)

        for child in children:
            kind = child.kind
            if kind == TokenKind.TEXT:
                acc.append(child.content)
            elif kind in _TOGGLES:
                name, value = _TOGGLES[kind]
                acc.transition(**{name: value})
            elif kind == TokenKind.CODE_INLINE:
                acc.emit_code(child.content)
            elif kind == TokenKind.LINK_OPEN:
                acc.transition(link=child.attr("href"))
            elif kind == TokenKind.LINK_CLOSE:
                acc.transition(link=None)
            elif kind == TokenKind.SOFTBREAK:
                acc.append(" ")
            elif kind == TokenKind.HARDBREAK:
                acc.append("\n")
            elif kind == TokenKind.HTML_INLINE:
                acc.append(checkbox_for(child.content) or child.content)
            elif child.content:
                logger.debug(f"Unrecognized inline child {kind.value!r}, keeping its text")
                acc.append(child.content)

        acc.flush()
        return acc.runs_emitted
