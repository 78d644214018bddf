"""Inline rendering: canonical AST tokens to Markdown strings.

:func:`render_node` turns a token and its subtree into the flat content
string stored on a block.  Inline syntax is preserved (emphasis, links,
images, code spans, math); container blocks are flattened to text:

* fenced code is re-wrapped in a ```` ``` ```` fence with its language,
* block quotes are re-prefixed with ``> `` on every line,
* tables become pipe-delimited rows with a ``---`` separator row.

Rendering is a pure function of the subtree.  Token kinds outside
:class:`NodeKind` go to the fallback arm: children concatenated without a
separator, or the token's ``raw`` value for a leaf.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from logseqify.converter.ast_normalizer import NodeKind, node_kind

_HTML_TAG_RE = re.compile(r"<[^>]+>")


def render_node(token: dict) -> str:
    """Render a single canonical AST token to its inline Markdown text."""
    kind = node_kind(token)
    handler = _RENDERERS.get(kind) if kind is not None else None
    if handler is not None:
        return handler(token)
    return _render_fallback(token)


def render_children(token: dict, separator: str = "") -> str:
    """Render every child of *token* and join the results with *separator*."""
    return separator.join(render_node(child) for child in token.get("children", []))


def extract_text(tokens: list[dict]) -> str:
    """Recursively extract plain text (no markup) from inline tokens."""
    parts: list[str] = []
    for token in tokens:
        if token.get("type") == NodeKind.TEXT.value:
            parts.append(token.get("raw", ""))
        elif "children" in token:
            parts.append(extract_text(token["children"]))
        elif "raw" in token:
            parts.append(token["raw"])
    return "".join(parts)


# ---------------------------------------------------------------------------
# Per-kind renderers
# ---------------------------------------------------------------------------

def _render_text(token: dict) -> str:
    return token.get("raw", "")


def _render_block_code(token: dict) -> str:
    info = token.get("attrs", {}).get("info") or ""
    # Only the first word of the info string names the language
    words = info.split()
    lang = words[0] if words else ""
    return f"```{lang}\n{token.get('raw', '')}\n```"


def _render_codespan(token: dict) -> str:
    return f"`{token.get('raw', '')}`"


def _render_emphasis(token: dict) -> str:
    return f"*{render_children(token)}*"


def _render_strong(token: dict) -> str:
    return f"**{render_children(token)}**"


def _render_strikethrough(token: dict) -> str:
    return f"~~{render_children(token)}~~"


def _render_link(token: dict) -> str:
    url = token.get("attrs", {}).get("url", "")
    return f"[{render_children(token)}]({url})"


def _render_image(token: dict) -> str:
    url = token.get("attrs", {}).get("url", "")
    alt = extract_text(token.get("children", []))
    return f"![{alt}]({url})"


def _render_block_quote(token: dict) -> str:
    body = render_children(token, separator="\n")
    return "\n".join(f"> {line}" for line in body.split("\n"))


def _render_thematic_break(token: dict) -> str:
    return "---"


def _render_break(token: dict) -> str:
    return "\n"


def _render_block_math(token: dict) -> str:
    return f"$$\n{token.get('raw', '')}\n$$"


def _render_inline_math(token: dict) -> str:
    return f"${token.get('raw', '')}$"


def _render_html(token: dict) -> str:
    return _HTML_TAG_RE.sub("", token.get("raw", ""))


def _render_fallback(token: dict) -> str:
    if "children" in token:
        return render_children(token)
    return token.get("raw", "")


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

def _table_rows(token: dict) -> list[list[dict]]:
    """Collect the cell lists of a table, header row first."""
    rows: list[list[dict]] = []
    for child in token.get("children", []):
        kind = node_kind(child)
        if kind is NodeKind.TABLE_HEAD:
            # mistune puts the header cells directly under table_head
            rows.append(child.get("children", []))
        elif kind is NodeKind.TABLE_BODY:
            for row in child.get("children", []):
                rows.append(row.get("children", []))
        elif kind is NodeKind.TABLE_ROW:
            rows.append(child.get("children", []))
    return rows


def _format_row(cells: list[str]) -> str:
    return f"| {' | '.join(cells)} |"


def _render_table(token: dict) -> str:
    rows = _table_rows(token)
    lines = [_format_row([render_children(cell) for cell in row]) for row in rows]
    if len(lines) > 1:
        separator = _format_row(["---"] * len(rows[0]))
        lines.insert(1, separator)
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Dispatch table
# ---------------------------------------------------------------------------

_Renderer = Callable[[dict], str]

_RENDERERS: dict[NodeKind, _Renderer] = {
    NodeKind.TEXT: _render_text,
    NodeKind.BLOCK_CODE: _render_block_code,
    NodeKind.CODESPAN: _render_codespan,
    NodeKind.EMPHASIS: _render_emphasis,
    NodeKind.STRONG: _render_strong,
    NodeKind.STRIKETHROUGH: _render_strikethrough,
    NodeKind.LINK: _render_link,
    NodeKind.IMAGE: _render_image,
    NodeKind.BLOCK_QUOTE: _render_block_quote,
    NodeKind.TABLE: _render_table,
    NodeKind.THEMATIC_BREAK: _render_thematic_break,
    NodeKind.SOFTBREAK: _render_break,
    NodeKind.LINEBREAK: _render_break,
    NodeKind.BLOCK_MATH: _render_block_math,
    NodeKind.INLINE_MATH: _render_inline_math,
    NodeKind.HTML_BLOCK: _render_html,
    NodeKind.HTML_INLINE: _render_html,
    # Containers whose text is simply their children's text
    NodeKind.HEADING: _render_fallback,
    NodeKind.PARAGRAPH: _render_fallback,
    NodeKind.LIST: _render_fallback,
    NodeKind.LIST_ITEM: _render_fallback,
    NodeKind.TASK_LIST_ITEM: _render_fallback,
    NodeKind.TABLE_HEAD: _render_fallback,
    NodeKind.TABLE_BODY: _render_fallback,
    NodeKind.TABLE_ROW: _render_fallback,
    NodeKind.TABLE_CELL: _render_fallback,
}
