"""Convert Markdown list tokens to nested blocks.

Each ``list_item`` / ``task_list_item`` becomes one :class:`Block` whose
content is the item's rendered paragraph text and whose children are the
blocks of any nested lists, in document order.  Items with no usable text
are dropped rather than emitted as empty placeholders.
"""

from __future__ import annotations

import re

from logseqify.converter.ast_normalizer import NodeKind, node_kind
from logseqify.converter.inline_renderer import render_node
from logseqify.converter.tasks import normalize_task_marker
from logseqify.models import Block, ConversionWarning, TaskState

_INLINE_CHECKBOX_RE = re.compile(r"^\s*(?:[*_`]+)?\[(?:\s|x|X)?\](?:[*_`]+)?\s*")

_ITEM_KINDS: frozenset[NodeKind] = frozenset({NodeKind.LIST_ITEM, NodeKind.TASK_LIST_ITEM})


class BuildContext:
    """Mutable accumulator for warnings raised during one conversion."""

    __slots__ = ("warnings",)

    def __init__(self) -> None:
        self.warnings: list[ConversionWarning] = []

    def add_warning(self, code: str, message: str, **context: object) -> None:
        self.warnings.append(ConversionWarning(
            code=code, message=message, context=dict(context),
        ))


def convert_list(token: dict, ctx: BuildContext) -> list[Block]:
    """Convert a ``list`` token into one block per non-empty item."""
    blocks: list[Block] = []
    for item in token.get("children", []):
        if node_kind(item) not in _ITEM_KINDS:
            continue
        block = convert_list_item(item, ctx)
        if block is not None:
            blocks.append(block)
    return blocks


def convert_list_item(item: dict, ctx: BuildContext) -> Block | None:
    """Convert a single list item, or return ``None`` if it has no text.

    The item's own content comes from its direct paragraph children (the
    last one wins); direct sub-lists become children.  Items that carry a
    checked state lose their inline checkbox and gain ``DONE``/``TODO``;
    other items only have an existing task keyword canonicalized.
    """
    content = ""
    children: list[Block] = []

    for child in item.get("children", []):
        kind = node_kind(child)
        if kind is NodeKind.PARAGRAPH:
            content = render_node(child)
        elif kind is NodeKind.LIST:
            children.extend(convert_list(child, ctx))

    if not content.strip():
        ctx.add_warning(
            "EMPTY_LIST_ITEM",
            "List item without text was dropped.",
            dropped_children=len(children),
        )
        return None

    checked = item.get("attrs", {}).get("checked")
    if checked is not None:
        status = TaskState.DONE if checked else TaskState.TODO
        content = f"{status.value} {_INLINE_CHECKBOX_RE.sub('', content, count=1)}"
    else:
        content = normalize_task_marker(content)

    return Block(content=content, children=children)
