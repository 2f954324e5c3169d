"""
Styling vocabulary shared by the renderer and the document hosts.

`StyleState` is the mutable per-inline-token emphasis tracker; `RunStyle` is the
immutable style actually applied to one emitted run, computed fresh from the
state at every flush. Hosts only ever see `RunStyle`, `ParagraphFormat`,
`BuiltinStyle` and `Alignment`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# Inline code styling constants
CODE_FONT_FAMILY = "Consolas"
CODE_FOREGROUND_COLOR = "#C7254E"
CODE_BACKGROUND_COLOR = "#F5F5F5"

# Link styling constants
LINK_COLOR = "#1155CC"

# Blockquote styling constants
BLOCKQUOTE_COLOR = "#666666"
BLOCKQUOTE_INDENT_PT = 36.0

# List styling constants
LIST_INDENT_PT = 18.0
BULLET_PREFIX = "• "
CHECKBOX_UNCHECKED = "☐"  # U+2610 BALLOT BOX
CHECKBOX_CHECKED = "☑"  # U+2611 BALLOT BOX WITH CHECK

# Code block and horizontal rule spacing
BLOCK_SPACING_PT = 6.0
HR_TEXT = "─" * 40  # BOX DRAWINGS LIGHT HORIZONTAL


class Alignment(str, Enum):
    START = "START"
    CENTER = "CENTER"


class BuiltinStyle(str, Enum):
    """Host-independent paragraph styles; each host maps them to its own ids."""

    NORMAL = "NORMAL"
    HEADING_1 = "HEADING_1"
    HEADING_2 = "HEADING_2"
    HEADING_3 = "HEADING_3"
    HEADING_4 = "HEADING_4"


HEADING_STYLES: dict[int, BuiltinStyle] = {
    1: BuiltinStyle.HEADING_1,
    2: BuiltinStyle.HEADING_2,
    3: BuiltinStyle.HEADING_3,
    4: BuiltinStyle.HEADING_4,
}


@dataclass(frozen=True)
class RunStyle:
    """
    Immutable text style of one run.

    Colours are ``#RRGGBB`` hex strings; `None` leaves the host default.
    """

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    font_family: str | None = None
    foreground: str | None = None
    highlight: str | None = None
    link: str | None = None


PLAIN = RunStyle()


@dataclass(frozen=True)
class ParagraphFormat:
    """Paragraph-level indentation, alignment and spacing (points)."""

    indent_start_pt: float | None = None
    alignment: Alignment | None = None
    space_above_pt: float | None = None
    space_below_pt: float | None = None


@dataclass(frozen=True)
class RenderTheme:
    """Tunable styling values; defaults mirror the module constants."""

    code_font_family: str = CODE_FONT_FAMILY
    code_foreground: str = CODE_FOREGROUND_COLOR
    code_background: str = CODE_BACKGROUND_COLOR
    link_color: str = LINK_COLOR
    blockquote_color: str = BLOCKQUOTE_COLOR
    blockquote_indent_pt: float = BLOCKQUOTE_INDENT_PT
    list_indent_pt: float = LIST_INDENT_PT
    block_spacing_pt: float = BLOCK_SPACING_PT
    hr_text: str = HR_TEXT

    @property
    def code_run(self) -> RunStyle:
        return RunStyle(
            font_family=self.code_font_family,
            foreground=self.code_foreground,
            highlight=self.code_background,
        )

    @property
    def quote_run(self) -> RunStyle:
        return RunStyle(italic=True, foreground=self.blockquote_color)


DEFAULT_THEME = RenderTheme()


@dataclass
class StyleState:
    """
    Active inline emphasis while one inline token's children are walked.

    Only the Inline Run Formatter mutates it, and only after flushing the
    pending buffer, so text already buffered keeps the style it was typed in.
    """

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    code: bool = False
    link: str | None = None
    theme: RenderTheme = field(default=DEFAULT_THEME, repr=False)

    def run_style(self) -> RunStyle:
        """Compute the immutable style for text buffered under this state."""
        if self.code:
            # code spans keep fixed styling; only an enclosing link survives
            base = self.theme.code_run
            return RunStyle(
                underline=self.link is not None,
                font_family=base.font_family,
                foreground=base.foreground,
                highlight=base.highlight,
                link=self.link,
            )
        return RunStyle(
            bold=self.bold,
            italic=self.italic,
            strikethrough=self.strikethrough,
            underline=self.link is not None,
            foreground=self.theme.link_color if self.link is not None else None,
            link=self.link,
        )
