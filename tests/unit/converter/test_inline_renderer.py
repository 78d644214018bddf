"""Tests for inline_renderer.py: canonical tokens to Markdown strings."""

import pytest

from logseqify.converter.ast_normalizer import ASTNormalizer
from logseqify.converter.inline_renderer import extract_text, render_children, render_node


def _text(raw):
    return {"type": "text", "raw": raw}


def _para(*children):
    return {"type": "paragraph", "children": list(children)}


def _render_md(md):
    """Parse *md* and render its first top-level token."""
    return render_node(ASTNormalizer().parse(md)[0])


# =========================================================================
# Inline marks
# =========================================================================

class TestInlineMarks:

    def test_text(self):
        assert render_node(_text("hello")) == "hello"

    def test_strong(self):
        assert render_node({"type": "strong", "children": [_text("b")]}) == "**b**"

    def test_emphasis(self):
        assert render_node({"type": "emphasis", "children": [_text("i")]}) == "*i*"

    def test_strikethrough(self):
        token = {"type": "strikethrough", "children": [_text("gone")]}
        assert render_node(token) == "~~gone~~"

    def test_codespan(self):
        assert render_node({"type": "codespan", "raw": "x = 1"}) == "`x = 1`"

    def test_link(self):
        token = {"type": "link", "attrs": {"url": "https://a.io"}, "children": [_text("a")]}
        assert render_node(token) == "[a](https://a.io)"

    def test_link_with_marked_label(self):
        token = {
            "type": "link",
            "attrs": {"url": "u"},
            "children": [{"type": "strong", "children": [_text("bold")]}],
        }
        assert render_node(token) == "[**bold**](u)"

    def test_image_alt_is_plain_text(self):
        token = {
            "type": "image",
            "attrs": {"url": "pic.png"},
            "children": [{"type": "emphasis", "children": [_text("alt")]}],
        }
        assert render_node(token) == "![alt](pic.png)"

    def test_inline_math(self):
        assert render_node({"type": "inline_math", "raw": "a^2"}) == "$a^2$"

    @pytest.mark.parametrize("kind", ["softbreak", "linebreak"])
    def test_breaks_render_newline(self, kind):
        assert render_node({"type": kind}) == "\n"

    def test_inline_html_tags_stripped(self):
        assert render_node({"type": "html_inline", "raw": "<b>"}) == ""

    def test_nested_marks_from_parser(self):
        assert _render_md("a **b *c* d** e") == "a **b *c* d** e"


# =========================================================================
# Block-level rendering
# =========================================================================

class TestBlockRendering:

    def test_paragraph_concatenates_children(self):
        assert render_node(_para(_text("a"), _text("b"))) == "ab"

    def test_paragraph_with_softbreak(self):
        assert _render_md("line one\nline two") == "line one\nline two"

    def test_code_block_with_language(self):
        token = {"type": "block_code", "raw": "print(1)", "attrs": {"info": "python"}}
        assert render_node(token) == "```python\nprint(1)\n```"

    def test_code_block_uses_first_info_word(self):
        token = {"type": "block_code", "raw": "x", "attrs": {"info": "js title=demo"}}
        assert render_node(token) == "```js\nx\n```"

    def test_code_block_without_language(self):
        assert render_node({"type": "block_code", "raw": "x"}) == "```\nx\n```"

    def test_code_block_from_parser(self):
        assert _render_md("```python\nprint(1)\n```") == "```python\nprint(1)\n```"

    def test_block_quote_prefixes_each_line(self):
        assert _render_md("> one\n> two") == "> one\n> two"

    def test_block_quote_multiple_paragraphs(self):
        token = {"type": "block_quote", "children": [_para(_text("a")), _para(_text("b"))]}
        assert render_node(token) == "> a\n> b"

    def test_thematic_break(self):
        assert render_node({"type": "thematic_break"}) == "---"

    def test_block_math(self):
        assert render_node({"type": "block_math", "raw": "x^2"}) == "$$\nx^2\n$$"

    def test_html_block_tags_stripped(self):
        token = {"type": "html_block", "raw": "<div>hi <em>there</em></div>\n"}
        assert render_node(token) == "hi there\n"


# =========================================================================
# Tables
# =========================================================================

class TestTables:

    def test_header_and_body(self):
        md = "| a | b |\n|---|---|\n| 1 | 2 |"
        assert _render_md(md) == "| a | b |\n| --- | --- |\n| 1 | 2 |"

    def test_separator_matches_header_width(self):
        md = "| a | b | c |\n|---|---|---|\n| 1 | 2 | 3 |\n| 4 | 5 | 6 |"
        lines = _render_md(md).split("\n")
        assert lines[1] == "| --- | --- | --- |"
        assert len(lines) == 4

    def test_header_only_table_has_no_separator(self):
        token = {
            "type": "table",
            "children": [{"type": "table_head", "children": [
                {"type": "table_cell", "children": [_text("only")]},
            ]}],
        }
        assert render_node(token) == "| only |"

    def test_cell_marks_preserved(self):
        md = "| **a** |\n|---|\n| `b` |"
        assert _render_md(md) == "| **a** |\n| --- |\n| `b` |"


# =========================================================================
# Fallback
# =========================================================================

class TestFallback:

    def test_unknown_token_with_children(self):
        token = {"type": "mystery", "children": [_text("a"), _text("b")]}
        assert render_node(token) == "ab"

    def test_unknown_leaf_uses_raw(self):
        assert render_node({"type": "mystery", "raw": "r"}) == "r"

    def test_unknown_empty_token(self):
        assert render_node({"type": "mystery"}) == ""

    def test_render_children_separator(self):
        token = {"children": [_text("a"), _text("b")]}
        assert render_children(token, separator="|") == "a|b"

    def test_extract_text_ignores_marks(self):
        tokens = [_text("a "), {"type": "strong", "children": [_text("b")]},
                  {"type": "codespan", "raw": "c"}]
        assert extract_text(tokens) == "a bc"
