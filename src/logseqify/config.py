"""Configuration for logseqify.

:class:`LogseqifyConfig` is a dataclass that captures every tuneable knob
of the Markdown-to-block pipeline.  Instances are passed to
:class:`~logseqify.converter.md_to_blocks.MarkdownToBlocksConverter`; the
module-level entry points use the defaults.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

_FALLBACK_STRATEGIES: tuple[str, ...] = ("single_block", "line_parser")


@dataclass
class LogseqifyConfig:
    """Complete configuration for a Markdown-to-block converter.

    Parameters
    ----------
    fallback_strategy:
        What to return when AST parsing or conversion fails.

        * ``"single_block"`` -- one block holding the trimmed input.
        * ``"line_parser"`` -- run the line-based fallback parser, which
          keeps headings, lists and code fences as separate blocks.
    preprocess_tasks:
        Rewrite checkbox syntax at line starts to ``TODO``/``DONE``
        before parsing.
    split_tasks:
        Split blocks holding several task lines into sibling blocks.
    sanitize_html:
        Strip ``<script>``/``<iframe>`` elements and inline event
        handlers, normalise line endings and collapse runs of blank
        lines before parsing.
    enable_math:
        Parse ``$...$`` and ``$$...$$`` as math (mistune math plugin).
    metrics:
        Optional :class:`~logseqify.observability.MetricsHook` backend.
    debug_dump_ast:
        Write the normalized mistune AST to *stderr* on each conversion.
    debug_dump_blocks:
        Write the resulting block tree to *stderr* on each conversion.
    """

    # ── Fallback ────────────────────────────────────────────────────────
    fallback_strategy: Literal["single_block", "line_parser"] = "single_block"

    # ── Tasks ───────────────────────────────────────────────────────────
    preprocess_tasks: bool = True

    split_tasks: bool = True

    # ── Input ───────────────────────────────────────────────────────────
    sanitize_html: bool = False

    enable_math: bool = True

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_ast: bool = False

    debug_dump_blocks: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.fallback_strategy not in _FALLBACK_STRATEGIES:
            raise ValueError(
                f"fallback_strategy must be one of {_FALLBACK_STRATEGIES}, "
                f"got {self.fallback_strategy!r}"
            )
