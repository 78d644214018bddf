"""Public data models for logseqify.

This module contains the block type produced by the converter, the
generic tree shape consumed by block-creation callers, and the result
and warning types returned by :class:`MarkdownToBlocksConverter`.  All
types are plain dataclasses with no behaviour beyond what is needed for
structural equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, TypedDict

# ---------------------------------------------------------------------------
# Enums and constants
# ---------------------------------------------------------------------------

class TaskState(str, Enum):
    """Task-state keywords recognised at the start of a block."""

    TODO = "TODO"
    DOING = "DOING"
    DONE = "DONE"
    WAITING = "WAITING"
    LATER = "LATER"
    NOW = "NOW"
    CANCELED = "CANCELED"


TASK_KEYWORDS: tuple[str, ...] = tuple(state.value for state in TaskState)
"""The fixed keyword set, in declaration order."""

RenderMode = Literal["readable", "compact"]

ParsedBlockType = Literal["text", "list", "heading", "code", "quote"]


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

@dataclass
class Block:
    """A single outline block.

    Attributes
    ----------
    content:
        The block's own rendered text.  Never includes descendant text.
    children:
        Nested blocks in document order.
    """

    content: str
    children: list[Block] = field(default_factory=list)


class BlockNode(TypedDict):
    """Generic ``{text, children}`` tree node decoupled from :class:`Block`."""

    text: str
    children: list[BlockNode]


@dataclass
class ParsedBlock:
    """A typed, one-level-deep projection of a :class:`Block`.

    ``level`` carries the heading depth for ``type="heading"`` and is
    ``None`` otherwise.
    """

    content: str
    type: ParsedBlockType = "text"
    level: int | None = None
    children: list[ParsedBlock] | None = None


# ---------------------------------------------------------------------------
# Conversion results
# ---------------------------------------------------------------------------

@dataclass
class ConversionWarning:
    """A non-fatal issue encountered during conversion.

    Attributes
    ----------
    code:
        A machine-readable warning code (e.g. ``"PARSE_FALLBACK"``).
    message:
        A human-readable description of the issue.
    context:
        Arbitrary structured data for diagnostics.
    """

    code: str
    message: str
    context: dict = field(default_factory=dict)


@dataclass
class ConversionResult:
    """Output of :meth:`MarkdownToBlocksConverter.convert`.

    Attributes
    ----------
    blocks:
        The block forest, in document order.
    warnings:
        Non-fatal issues collected along the way.
    fallback_used:
        ``True`` when parsing or conversion failed and the configured
        fallback produced :attr:`blocks`.
    """

    blocks: list[Block] = field(default_factory=list)
    warnings: list[ConversionWarning] = field(default_factory=list)
    fallback_used: bool = False


# ---------------------------------------------------------------------------
# Outline syntax analysis
# ---------------------------------------------------------------------------

@dataclass
class OutlineSyntax:
    """Outline-specific markup found in a piece of text."""

    page_links: list[str] = field(default_factory=list)
    block_refs: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    properties: dict[str, str] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not (self.page_links or self.block_refs or self.tags or self.properties)


@dataclass
class ContentAnalysis:
    """Summary of the outline markup used in a piece of content."""

    has_page_links: bool
    has_block_refs: bool
    has_tags: bool
    has_properties: bool
    is_outline_formatted: bool
    page_links: list[str] = field(default_factory=list)
    block_refs: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    properties: dict[str, str] = field(default_factory=dict)
