"""
Google Docs Helper Functions

Request builders for the Docs `batchUpdate` API. Each helper returns one
request dictionary; callers stage them in order.
"""

import logging
from typing import Any

from mdrender.styles import Alignment, BuiltinStyle, ParagraphFormat, RunStyle

logger = logging.getLogger(__name__)

# Every text-style field a rendered run owns. Sending the full mask with each
# run resets whatever the inserted text inherited from its neighbour.
RUN_STYLE_FIELDS = [
    "bold",
    "italic",
    "underline",
    "strikethrough",
    "weightedFontFamily",
    "foregroundColor",
    "backgroundColor",
    "link",
]

# Paragraph-style fields reset on every new paragraph
PARAGRAPH_RESET_FIELDS = [
    "namedStyleType",
    "alignment",
    "indentStart",
    "indentFirstLine",
    "spaceAbove",
    "spaceBelow",
]

NAMED_STYLE_TYPES = {
    BuiltinStyle.NORMAL: "NORMAL_TEXT",
    BuiltinStyle.HEADING_1: "HEADING_1",
    BuiltinStyle.HEADING_2: "HEADING_2",
    BuiltinStyle.HEADING_3: "HEADING_3",
    BuiltinStyle.HEADING_4: "HEADING_4",
}

ALIGNMENTS = {
    Alignment.START: "START",
    Alignment.CENTER: "CENTER",
}


def utf16_len(text: str) -> int:
    """Length of text in UTF-16 code units, the unit Docs body indices count in."""
    return len(text.encode("utf-16-le")) // 2


def _normalize_color(color: str | None, param_name: str) -> dict[str, float] | None:
    """
    Normalize a "#RRGGBB" color string to the Docs API rgbColor dict.

    Returns:
        {"red", "green", "blue"} floats in [0, 1], or None when color is None.
    """
    if color is None:
        return None

    if not isinstance(color, str) or len(color) != 7 or not color.startswith("#"):
        raise ValueError(f"{param_name} must be a hex string like '#RRGGBB'")

    try:
        red = int(color[1:3], 16)
        green = int(color[3:5], 16)
        blue = int(color[5:7], 16)
    except ValueError as e:
        raise ValueError(f"{param_name} must be a hex string like '#RRGGBB'") from e

    return {"red": red / 255, "green": green / 255, "blue": blue / 255}


def _pt(value: float) -> dict[str, Any]:
    return {"magnitude": value, "unit": "PT"}


def build_text_style(
    bold: bool | None = None,
    italic: bool | None = None,
    underline: bool | None = None,
    strikethrough: bool | None = None,
    font_size: int | None = None,
    font_family: str | None = None,
    text_color: str | None = None,
    background_color: str | None = None,
    link_url: str | None = None,
) -> tuple[dict[str, Any], list[str]]:
    """
    Build a textStyle dict and the matching fields list from the values given.

    Returns:
        Tuple of (text_style_dict, list_of_field_names)
    """
    text_style: dict[str, Any] = {}
    fields: list[str] = []

    if bold is not None:
        text_style["bold"] = bold
        fields.append("bold")

    if italic is not None:
        text_style["italic"] = italic
        fields.append("italic")

    if underline is not None:
        text_style["underline"] = underline
        fields.append("underline")

    if strikethrough is not None:
        text_style["strikethrough"] = strikethrough
        fields.append("strikethrough")

    if font_size is not None:
        text_style["fontSize"] = _pt(font_size)
        fields.append("fontSize")

    if font_family is not None:
        text_style["weightedFontFamily"] = {"fontFamily": font_family}
        fields.append("weightedFontFamily")

    if text_color is not None:
        rgb = _normalize_color(text_color, "text_color")
        text_style["foregroundColor"] = {"color": {"rgbColor": rgb}}
        fields.append("foregroundColor")

    if background_color is not None:
        rgb = _normalize_color(background_color, "background_color")
        text_style["backgroundColor"] = {"color": {"rgbColor": rgb}}
        fields.append("backgroundColor")

    if link_url is not None:
        text_style["link"] = {"url": link_url}
        fields.append("link")

    return text_style, fields


def run_text_style(style: RunStyle) -> tuple[dict[str, Any], str]:
    """
    Translate a RunStyle into a textStyle dict plus the full run field mask.

    Fields absent from the dict but present in the mask are reset to the
    document default by the API.
    """
    text_style, _ = build_text_style(
        bold=style.bold or None,
        italic=style.italic or None,
        underline=style.underline or None,
        strikethrough=style.strikethrough or None,
        font_family=style.font_family,
        text_color=style.foreground,
        background_color=style.highlight,
        link_url=style.link,
    )
    return text_style, ",".join(RUN_STYLE_FIELDS)


def build_paragraph_style(fmt: ParagraphFormat) -> tuple[dict[str, Any], list[str]]:
    """Build a paragraphStyle dict and fields list from a ParagraphFormat."""
    paragraph_style: dict[str, Any] = {}
    fields: list[str] = []

    if fmt.indent_start_pt is not None:
        paragraph_style["indentStart"] = _pt(fmt.indent_start_pt)
        paragraph_style["indentFirstLine"] = _pt(fmt.indent_start_pt)
        fields.extend(["indentStart", "indentFirstLine"])

    if fmt.alignment is not None:
        paragraph_style["alignment"] = ALIGNMENTS[fmt.alignment]
        fields.append("alignment")

    if fmt.space_above_pt is not None:
        paragraph_style["spaceAbove"] = _pt(fmt.space_above_pt)
        fields.append("spaceAbove")

    if fmt.space_below_pt is not None:
        paragraph_style["spaceBelow"] = _pt(fmt.space_below_pt)
        fields.append("spaceBelow")

    return paragraph_style, fields


def create_insert_text_request(index: int, text: str) -> dict[str, Any]:
    """
    Create an insertText request for Google Docs API.

    Args:
        index: Position to insert text
        text: Text to insert

    Returns:
        Dictionary representing the insertText request
    """
    return {"insertText": {"location": {"index": index}, "text": text}}


def create_update_text_style_request(
    start_index: int, end_index: int, text_style: dict[str, Any], fields: str
) -> dict[str, Any]:
    """Create an updateTextStyle request over [start_index, end_index)."""
    return {
        "updateTextStyle": {
            "range": {"startIndex": start_index, "endIndex": end_index},
            "textStyle": text_style,
            "fields": fields,
        }
    }


def create_update_paragraph_style_request(
    start_index: int, end_index: int, paragraph_style: dict[str, Any], fields: str
) -> dict[str, Any]:
    """Create an updateParagraphStyle request for paragraphs overlapping the range."""
    return {
        "updateParagraphStyle": {
            "range": {"startIndex": start_index, "endIndex": end_index},
            "paragraphStyle": paragraph_style,
            "fields": fields,
        }
    }


def create_paragraph_reset_request(start_index: int, end_index: int) -> dict[str, Any]:
    """Reset a paragraph to plain NORMAL_TEXT with no indent, alignment or spacing."""
    return create_update_paragraph_style_request(
        start_index,
        end_index,
        {"namedStyleType": NAMED_STYLE_TYPES[BuiltinStyle.NORMAL]},
        ",".join(PARAGRAPH_RESET_FIELDS),
    )


def create_insert_table_request(index: int, rows: int, columns: int) -> dict[str, Any]:
    """
    Create an insertTable request for Google Docs API.

    Args:
        index: Position to insert table
        rows: Number of rows
        columns: Number of columns

    Returns:
        Dictionary representing the insertTable request
    """
    return {"insertTable": {"location": {"index": index}, "rows": rows, "columns": columns}}
