"""Markdown to outline-block conversion pipeline.

Public API:

- :class:`MarkdownToBlocksConverter` -- Markdown -> block forest.
- :class:`ASTNormalizer` -- parse and normalize Markdown to canonical AST.
- :func:`build_blocks` -- convert normalized AST to blocks.
- :func:`render_node` -- render one AST token to inline Markdown.
- :func:`split_tasks_recursively` -- split multi-task blocks.
- :func:`blocks_to_flat_strings` / :func:`blocks_to_tree` -- projections.
"""

from logseqify.converter.ast_normalizer import ASTNormalizer, NodeKind
from logseqify.converter.block_builder import build_blocks
from logseqify.converter.fallback_parser import parse_markdown_lines
from logseqify.converter.inline_renderer import render_node
from logseqify.converter.md_to_blocks import MarkdownToBlocksConverter
from logseqify.converter.serializer import blocks_to_flat_strings, blocks_to_tree
from logseqify.converter.tasks import split_tasks_recursively

__all__ = [
    "ASTNormalizer",
    "MarkdownToBlocksConverter",
    "NodeKind",
    "blocks_to_flat_strings",
    "blocks_to_tree",
    "build_blocks",
    "parse_markdown_lines",
    "render_node",
    "split_tasks_recursively",
]
