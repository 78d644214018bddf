"""Parse Markdown and normalize to canonical AST tokens.

This module wraps mistune v3's AST renderer and normalises the raw token
stream into the closed set of kinds listed in :class:`NodeKind`.  Tokens
of any other type are kept with their original ``type`` string so the
inline renderer's fallback can still render their children.

Canonical block tokens:
    heading, paragraph, block_quote, list, list_item, task_list_item,
    block_code, table, thematic_break, block_math, html_block

Canonical inline tokens:
    text, strong, emphasis, codespan, strikethrough, link, image,
    inline_math, softbreak, linebreak, html_inline
"""

from __future__ import annotations

from enum import Enum

import mistune
from mistune.util import unescape

from logseqify.errors import LogseqifyParseError


class NodeKind(str, Enum):
    """Every token kind the converter handles explicitly."""

    # Block kinds
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    BLOCK_QUOTE = "block_quote"
    LIST = "list"
    LIST_ITEM = "list_item"
    TASK_LIST_ITEM = "task_list_item"
    BLOCK_CODE = "block_code"
    TABLE = "table"
    TABLE_HEAD = "table_head"
    TABLE_BODY = "table_body"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    THEMATIC_BREAK = "thematic_break"
    BLOCK_MATH = "block_math"
    HTML_BLOCK = "html_block"

    # Inline kinds
    TEXT = "text"
    STRONG = "strong"
    EMPHASIS = "emphasis"
    CODESPAN = "codespan"
    STRIKETHROUGH = "strikethrough"
    LINK = "link"
    IMAGE = "image"
    INLINE_MATH = "inline_math"
    SOFTBREAK = "softbreak"
    LINEBREAK = "linebreak"
    HTML_INLINE = "html_inline"


_KINDS_BY_VALUE: dict[str, NodeKind] = {kind.value: kind for kind in NodeKind}


def node_kind(token: dict) -> NodeKind | None:
    """Return the :class:`NodeKind` of *token*, or ``None`` if it has none."""
    return _KINDS_BY_VALUE.get(token.get("type", ""))


# ---------------------------------------------------------------------------
# Mistune-to-canonical type mapping
# ---------------------------------------------------------------------------

_TYPE_MAP: dict[str, NodeKind] = {
    "heading": NodeKind.HEADING,
    "paragraph": NodeKind.PARAGRAPH,
    # Tight list items wrap their text in block_text
    "block_text": NodeKind.PARAGRAPH,
    "block_quote": NodeKind.BLOCK_QUOTE,
    "list": NodeKind.LIST,
    "list_item": NodeKind.LIST_ITEM,
    "task_list_item": NodeKind.TASK_LIST_ITEM,
    "block_code": NodeKind.BLOCK_CODE,
    "table": NodeKind.TABLE,
    "table_head": NodeKind.TABLE_HEAD,
    "table_body": NodeKind.TABLE_BODY,
    "table_row": NodeKind.TABLE_ROW,
    "table_cell": NodeKind.TABLE_CELL,
    "thematic_break": NodeKind.THEMATIC_BREAK,
    "block_math": NodeKind.BLOCK_MATH,
    "block_html": NodeKind.HTML_BLOCK,
    "text": NodeKind.TEXT,
    "raw": NodeKind.TEXT,
    "strong": NodeKind.STRONG,
    "emphasis": NodeKind.EMPHASIS,
    "codespan": NodeKind.CODESPAN,
    "strikethrough": NodeKind.STRIKETHROUGH,
    "link": NodeKind.LINK,
    "image": NodeKind.IMAGE,
    "inline_math": NodeKind.INLINE_MATH,
    "softbreak": NodeKind.SOFTBREAK,
    "linebreak": NodeKind.LINEBREAK,
    "inline_html": NodeKind.HTML_INLINE,
}

# Kinds whose payload lives in "raw" rather than in children
_RAW_KINDS: frozenset[NodeKind] = frozenset({
    NodeKind.TEXT,
    NodeKind.BLOCK_CODE,
    NodeKind.CODESPAN,
    NodeKind.BLOCK_MATH,
    NodeKind.INLINE_MATH,
    NodeKind.HTML_BLOCK,
    NodeKind.HTML_INLINE,
})

_SKIP_TYPES: frozenset[str] = frozenset({
    "blank_line",
})


class ASTNormalizer:
    """Parse Markdown and normalize to canonical AST tokens.

    Parameters
    ----------
    enable_math:
        Load mistune's ``math`` plugin so ``$...$`` and ``$$...$$`` parse
        as ``inline_math`` / ``block_math``.
    """

    def __init__(self, *, enable_math: bool = True) -> None:
        plugins = ["strikethrough", "table", "task_lists"]
        if enable_math:
            plugins.append("math")
        self._parser = mistune.create_markdown(renderer="ast", plugins=plugins)

    def parse(self, markdown: str) -> list[dict]:
        """Parse *markdown* and return the normalized top-level token list.

        Raises
        ------
        LogseqifyParseError
            If mistune fails on the input.
        """
        try:
            raw_tokens = self._parser(markdown)
        except Exception as exc:
            raise LogseqifyParseError(
                message=f"Markdown parsing failed: {exc}",
                context={"length": len(markdown)},
                cause=exc,
            ) from exc
        if isinstance(raw_tokens, str):
            return []
        return self._normalize_tokens(raw_tokens)

    def _normalize_tokens(self, tokens: list[dict]) -> list[dict]:
        result: list[dict] = []
        for token in tokens:
            normalized = self._normalize_token(token)
            if normalized is not None:
                result.append(normalized)
        return result

    def _normalize_token(self, token: dict) -> dict | None:
        """Normalize a single token, returning None if it should be skipped."""
        raw_type = token.get("type", "")
        if raw_type in _SKIP_TYPES:
            return None

        kind = _TYPE_MAP.get(raw_type)
        result: dict = {"type": kind.value if kind is not None else raw_type}

        attrs = token.get("attrs")
        if attrs:
            result["attrs"] = dict(attrs)

        if kind is NodeKind.BLOCK_CODE:
            code = token.get("raw", "")
            # mistune keeps the newline before the closing fence
            if code.endswith("\n"):
                code = code[:-1]
            result["raw"] = code
            return result

        if kind is NodeKind.TEXT:
            # mistune leaves character references such as "&amp;" encoded
            result["raw"] = unescape(token.get("raw", ""))
        elif kind in _RAW_KINDS or (kind is None and "raw" in token):
            result["raw"] = token.get("raw", "")

        children = token.get("children")
        if children:
            result["children"] = self._normalize_tokens(children)

        return result
