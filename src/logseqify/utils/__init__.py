"""Text utilities: outline syntax detection and Markdown sanitisation."""

from logseqify.utils.sanitize import sanitize_markdown
from logseqify.utils.syntax import analyze_content, extract_outline_syntax

__all__ = [
    "analyze_content",
    "extract_outline_syntax",
    "sanitize_markdown",
]
