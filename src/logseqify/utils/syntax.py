"""Detect outline-specific markup in block content.

Outline notes extend Markdown with page links (``[[Page]]``), block
references (``((uuid))``), tags (``#tag``) and block properties
(``key:: value`` on a line of its own).  These helpers report which of
them a piece of text uses.
"""

from __future__ import annotations

import re

from logseqify.models import ContentAnalysis, OutlineSyntax

_PAGE_LINK_RE = re.compile(r"\[\[([^\]]+)\]\]")
_BLOCK_REF_RE = re.compile(r"\(\(([^)]+)\)\)")
# "# Heading" has a space after the hash and is not a tag
_TAG_RE = re.compile(r"#([\w-]+)")
_PROPERTY_RE = re.compile(r"^([\w-]+)::\s*(.+)$", re.MULTILINE)


def extract_outline_syntax(text: str) -> OutlineSyntax:
    """Collect page links, block refs, tags and properties from *text*.

    A property key that appears more than once keeps its last value.
    """
    properties = {m.group(1): m.group(2).strip() for m in _PROPERTY_RE.finditer(text)}
    return OutlineSyntax(
        page_links=_PAGE_LINK_RE.findall(text),
        block_refs=_BLOCK_REF_RE.findall(text),
        tags=_TAG_RE.findall(text),
        properties=properties,
    )


def analyze_content(text: str) -> ContentAnalysis:
    """Summarize which outline features *text* uses."""
    syntax = extract_outline_syntax(text)
    return ContentAnalysis(
        has_page_links=bool(syntax.page_links),
        has_block_refs=bool(syntax.block_refs),
        has_tags=bool(syntax.tags),
        has_properties=bool(syntax.properties),
        is_outline_formatted=not syntax.is_empty(),
        page_links=syntax.page_links,
        block_refs=syntax.block_refs,
        tags=syntax.tags,
        properties=syntax.properties,
    )
