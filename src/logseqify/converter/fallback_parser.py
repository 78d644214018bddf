"""Line-based Markdown scanner used when AST conversion fails.

This parser needs no AST library and cannot fail on any input.  It
recognises only the structure that matters most for outlines and follows
the same accumulator rules as :mod:`logseqify.converter.block_builder`:

- fenced code blocks (kept verbatim, language preserved)
- ATX headings, which start a new top-level block
- list items (``-``, ``*``, ``+``, ``1.``), nested by indentation under
  the open block, with checkboxes rewritten to task keywords
- ``---`` thematic breaks
- everything else joined into paragraphs separated by blank lines
"""

from __future__ import annotations

import re

from logseqify.converter.block_builder import flush_into, merge_into
from logseqify.converter.tasks import normalize_task_marker
from logseqify.models import Block

_HEADING_RE = re.compile(r"^#{1,6}\s+\S")
_LIST_ITEM_RE = re.compile(r"^(\s*)(?:[-*+]|\d+\.)\s+(\S.*)$")
_FENCE = "```"
_TAB_WIDTH = 4


def parse_markdown_lines(markdown: str) -> list[Block]:
    """Parse *markdown* line by line into a block forest."""
    forest: list[Block] = []
    current: Block | None = None
    paragraph: list[str] = []
    # (indent, block) pairs for the open list items, outermost first
    open_items: list[tuple[int, Block]] = []
    fence_lines: list[str] | None = None
    fence_lang = ""

    def _end_paragraph() -> None:
        nonlocal current
        if paragraph:
            current = merge_into(current, "\n".join(paragraph))
            paragraph.clear()

    for line in markdown.splitlines():
        stripped = line.strip()

        if fence_lines is not None:
            if stripped.startswith(_FENCE):
                current = merge_into(current, _fenced(fence_lang, fence_lines))
                fence_lines = None
            else:
                fence_lines.append(line)
            continue

        if stripped.startswith(_FENCE):
            _end_paragraph()
            open_items.clear()
            fence_lines = []
            fence_lang = stripped[len(_FENCE):].strip()
            continue

        if not stripped:
            _end_paragraph()
            continue

        if _HEADING_RE.match(stripped):
            _end_paragraph()
            open_items.clear()
            flush_into(current, forest)
            current = Block(content=stripped)
            continue

        item = _LIST_ITEM_RE.match(line)
        if item:
            _end_paragraph()
            indent = len(item.group(1).expandtabs(_TAB_WIDTH))
            block = Block(content=normalize_task_marker(item.group(2).strip()))
            while open_items and open_items[-1][0] >= indent:
                open_items.pop()
            if open_items:
                open_items[-1][1].children.append(block)
            elif current is not None:
                current.children.append(block)
            else:
                forest.append(block)
            open_items.append((indent, block))
            continue

        open_items.clear()
        if stripped == "---":
            _end_paragraph()
            current = merge_into(current, stripped)
            continue

        paragraph.append(stripped)

    # An unterminated fence still keeps its content
    if fence_lines is not None:
        current = merge_into(current, _fenced(fence_lang, fence_lines))
    _end_paragraph()
    flush_into(current, forest)
    return forest


def _fenced(lang: str, lines: list[str]) -> str:
    return f"{_FENCE}{lang}\n" + "\n".join(lines) + f"\n{_FENCE}"
