"""Read-only projections of a block forest.

None of these functions modify their input, and calling any of them twice
on the same forest yields equal results.
"""

from __future__ import annotations

import re

from logseqify.models import Block, BlockNode, ParsedBlock

_HEADING_RE = re.compile(r"^(#{1,6})\s")


def blocks_to_flat_strings(blocks: list[Block]) -> list[str]:
    """Flatten *blocks* depth-first, parent before children.

    Strings that are blank after trimming are dropped.
    """
    result: list[str] = []

    def _walk(block: Block) -> None:
        result.append(block.content)
        for child in block.children:
            _walk(child)

    for block in blocks:
        _walk(block)
    return [s for s in result if s.strip()]


def blocks_to_tree(blocks: list[Block]) -> list[BlockNode]:
    """Relabel *blocks* as ``{"text", "children"}`` dicts of the same shape."""
    return [
        {"text": block.content, "children": blocks_to_tree(block.children)}
        for block in blocks
    ]


def tree_to_blocks(nodes: list[BlockNode]) -> list[Block]:
    """Inverse of :func:`blocks_to_tree`."""
    return [
        Block(content=node.get("text", ""), children=tree_to_blocks(node.get("children", [])))
        for node in nodes
    ]


def compact_blocks(blocks: list[Block]) -> list[Block]:
    """Collapse *blocks* into a single block of newline-joined lines.

    An empty (or all-blank) forest yields an empty list.
    """
    lines = blocks_to_flat_strings(blocks)
    if not lines:
        return []
    return [Block(content="\n".join(lines))]


def blocks_to_parsed_blocks(blocks: list[Block]) -> list[ParsedBlock]:
    """Project *blocks* to typed :class:`ParsedBlock` records.

    Top-level blocks are classified by their content; their children are
    emitted one level deep as ``type="list"`` entries, since only list
    items nest.
    """
    result: list[ParsedBlock] = []
    for block in blocks:
        parsed = _classify(block.content)
        if block.children:
            parsed.children = [
                ParsedBlock(content=child.content, type="list")
                for child in block.children
            ]
        result.append(parsed)
    return result


def _classify(content: str) -> ParsedBlock:
    m = _HEADING_RE.match(content)
    if m:
        return ParsedBlock(content=content, type="heading", level=len(m.group(1)))
    if content.startswith("```"):
        return ParsedBlock(content=content, type="code")
    if content.startswith(">"):
        return ParsedBlock(content=content, type="quote")
    return ParsedBlock(content=content, type="text")
