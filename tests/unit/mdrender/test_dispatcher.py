"""
Unit tests for the Block Dispatcher.

Tests cover:
- Source order of mixed blocks
- Nested containers not ending the walk early
- Unknown tokens rendered as raw text
- render_markdown committing exactly once
"""

import pytest

from mdrender import BlockDispatcher, render, render_markdown
from mdrender.styles import BuiltinStyle, RenderTheme
from mdrender.tokens import Token, TokenKind, parse_markdown

DOCUMENT = """# Report

Intro with **bold**.

- one
- two

> quoted

| H |
|---|
| v |

```
code
```

---

Closing line.
"""


class TestSourceOrder:
    def test_mixed_document(self, host):
        cursor = render(parse_markdown(DOCUMENT), 0, host)
        texts = [getattr(e, "text", "<table>") for e in host.elements]
        assert texts == [
            "Report",
            "Intro with bold.",
            "• one",
            "• two",
            "quoted",
            "",
            "<table>",
            "",
            "code",
            "─" * 40,
            "Closing line.",
        ]
        assert cursor == len(host.elements)

    def test_heading_style_applied(self, host):
        render(parse_markdown("# A\n\n## B"), 0, host)
        assert [p.style for p in host.paragraphs] == [BuiltinStyle.HEADING_1, BuiltinStyle.HEADING_2]

    def test_renders_at_given_cursor(self, host):
        host.insert_paragraph(0, "existing-before")
        host.insert_paragraph(1, "existing-after")
        render(parse_markdown("new"), 1, host)
        assert host.texts == ["existing-before", "new", "existing-after"]

    def test_empty_stream(self, host):
        assert render([], 4, host) == 4
        assert host.elements == []


class TestNesting:
    def test_nested_list_does_not_stop_dispatch(self, host):
        render(parse_markdown("- a\n  - b\n    - c\n- d\n\nafter"), 0, host)
        assert host.texts == ["• a", "• b", "• c", "• d", "after"]

    def test_list_inside_blockquote(self, host):
        render(parse_markdown("> quote\n>\n> - item\n\nafter"), 0, host)
        assert host.texts[0] == "quote"
        assert host.texts[-1] == "after"

    def test_unterminated_container_consumes_rest(self, host):
        tokens = [
            Token(kind=TokenKind.BLOCKQUOTE_OPEN),
            Token(kind=TokenKind.PARAGRAPH_OPEN),
            Token(kind=TokenKind.INLINE, content="q", children=(Token(kind=TokenKind.TEXT, content="q"),)),
        ]
        render(tokens, 0, host)
        assert host.texts == ["q"]


class TestFallbacks:
    def test_unknown_block_token_is_raw_text(self, host):
        tokens = [Token(kind=TokenKind.OTHER, content="<div>hi</div>\n")]
        render(tokens, 0, host)
        assert host.texts == ["<div>hi</div>"]

    def test_html_block_from_parser(self, host):
        render(parse_markdown("<div>hi</div>"), 0, host)
        assert host.texts == ["<div>hi</div>"]

    def test_close_tokens_are_ignored(self, host):
        tokens = [Token(kind=TokenKind.BULLET_LIST_CLOSE), Token(kind=TokenKind.TABLE_CLOSE)]
        assert render(tokens, 0, host) == 0

    def test_paragraph_without_inline_is_empty_paragraph(self, host):
        render([Token(kind=TokenKind.PARAGRAPH_OPEN)], 0, host)
        assert host.texts == [""]


class TestRenderMarkdown:
    def test_commits_once(self, host):
        render_markdown("hello", host)
        assert host.commits == 1
        assert host.texts == ["hello"]

    def test_uses_start_cursor_by_default(self, host):
        host.start_cursor = lambda: 0
        host.insert_paragraph(0, "tail")
        render_markdown("head", host)
        assert host.texts == ["head", "tail"]

    def test_nothing_committed_when_render_raises(self, host):
        def boom(cursor, text=""):
            raise RuntimeError("host failure")

        host.insert_paragraph = boom
        with pytest.raises(RuntimeError, match="host failure"):
            render_markdown("x", host)
        assert host.commits == 0

    def test_theme_is_applied(self, host):
        theme = RenderTheme(list_indent_pt=10.0)
        render_markdown("- a", host, theme=theme)
        assert host.paragraphs[0].format.indent_start_pt == 10.0


class TestBlockDispatcher:
    def test_dispatcher_is_reusable(self, host):
        dispatcher = BlockDispatcher(host)
        cursor = dispatcher.render(parse_markdown("a"), 0)
        dispatcher.render(parse_markdown("b"), cursor)
        assert host.texts == ["a", "b"]
