"""logseqify -- Markdown to outline-block conversion.

Public re-exports
-----------------

* **Entry points:** :func:`parse_markdown_to_blocks`, :func:`render`,
  :func:`blocks_to_flat_strings`, :func:`blocks_to_tree` and friends
* **Converter:** :class:`MarkdownToBlocksConverter`
* **Configuration:** :class:`LogseqifyConfig`
* **Errors:** Every :class:`LogseqifyError` subclass and :class:`ErrorCode`
* **Models:** :class:`Block`, :class:`BlockNode`, result and warning types

Usage::

    from logseqify import blocks_to_flat_strings, parse_markdown_to_blocks

    blocks = parse_markdown_to_blocks("# Groceries\\n- [ ] milk\\n- [x] eggs")
    blocks_to_flat_strings(blocks)
    # ['# Groceries', 'TODO milk', 'DONE eggs']
"""

from __future__ import annotations

# ── Configuration ───────────────────────────────────────────────────────
from logseqify.config import LogseqifyConfig

# ── Converter & entry points ────────────────────────────────────────────
from logseqify.converter.md_to_blocks import (
    MarkdownToBlocksConverter,
    markdown_to_tree,
    parse_markdown_to_blocks,
    parse_markdown_to_parsed_blocks,
    parse_markdown_to_string_blocks,
    render,
)
from logseqify.converter.serializer import (
    blocks_to_flat_strings,
    blocks_to_parsed_blocks,
    blocks_to_tree,
    compact_blocks,
    tree_to_blocks,
)

# ── Errors ──────────────────────────────────────────────────────────────
from logseqify.errors import (
    ErrorCode,
    LogseqifyConversionError,
    LogseqifyError,
    LogseqifyParseError,
    LogseqifyValidationError,
)

# ── Models ──────────────────────────────────────────────────────────────
from logseqify.models import (
    TASK_KEYWORDS,
    Block,
    BlockNode,
    ContentAnalysis,
    ConversionResult,
    ConversionWarning,
    OutlineSyntax,
    ParsedBlock,
    RenderMode,
    TaskState,
)

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    # Entry points
    "parse_markdown_to_blocks",
    "parse_markdown_to_string_blocks",
    "parse_markdown_to_parsed_blocks",
    "markdown_to_tree",
    "render",
    "blocks_to_flat_strings",
    "blocks_to_tree",
    "blocks_to_parsed_blocks",
    "tree_to_blocks",
    "compact_blocks",
    # Converter
    "MarkdownToBlocksConverter",
    # Configuration
    "LogseqifyConfig",
    # Errors
    "LogseqifyError",
    "ErrorCode",
    "LogseqifyParseError",
    "LogseqifyConversionError",
    "LogseqifyValidationError",
    # Models
    "Block",
    "BlockNode",
    "ParsedBlock",
    "RenderMode",
    "TaskState",
    "TASK_KEYWORDS",
    "ConversionResult",
    "ConversionWarning",
    "OutlineSyntax",
    "ContentAnalysis",
]
