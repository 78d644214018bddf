"""Full Markdown-to-block conversion pipeline.

:class:`MarkdownToBlocksConverter` orchestrates the pipeline:

1. **Prepare** -- optional sanitisation, then checkbox rewriting at line
   starts (:func:`preprocess_task_markers`).
2. **Parse** -- :class:`ASTNormalizer` runs mistune and maps tokens to
   canonical kinds.
3. **Build** -- :func:`build_blocks` turns the tokens into a block forest.
4. **Split** -- :func:`split_forest` breaks multi-task blocks apart.

A failure in stages 2-4 never reaches the caller: the configured fallback
produces the blocks instead and the result is flagged
``fallback_used=True``.

The module-level functions below are the stateless entry points used by
block-creation callers; they share one default-configured converter, built
on first use, since a converter keeps no state between calls.
"""

from __future__ import annotations

import functools
import json
import sys
import time

from logseqify.config import LogseqifyConfig
from logseqify.converter.ast_normalizer import ASTNormalizer
from logseqify.converter.block_builder import build_blocks
from logseqify.converter.fallback_parser import parse_markdown_lines
from logseqify.converter.serializer import (
    blocks_to_flat_strings,
    blocks_to_parsed_blocks,
    blocks_to_tree,
    compact_blocks,
)
from logseqify.converter.tasks import preprocess_task_markers, split_forest
from logseqify.errors import (
    ErrorCode,
    LogseqifyConversionError,
    LogseqifyError,
    LogseqifyValidationError,
)
from logseqify.models import (
    Block,
    BlockNode,
    ConversionResult,
    ConversionWarning,
    ParsedBlock,
    RenderMode,
)
from logseqify.observability import NoopMetricsHook, get_logger
from logseqify.utils.sanitize import sanitize_markdown

log = get_logger("logseqify.converter")

_RENDER_MODES: tuple[str, ...] = ("readable", "compact")


class MarkdownToBlocksConverter:
    """Convert Markdown text to an outline block forest.

    Parameters
    ----------
    config:
        Pipeline configuration.  Defaults to :class:`LogseqifyConfig()`.

    Examples
    --------
    >>> converter = MarkdownToBlocksConverter()
    >>> result = converter.convert("# Title\\n- a\\n- b")
    >>> result.blocks[0].content
    '# Title'
    >>> [child.content for child in result.blocks[0].children]
    ['a', 'b']
    """

    def __init__(self, config: LogseqifyConfig | None = None) -> None:
        self._config = config or LogseqifyConfig()
        self._normalizer = ASTNormalizer(enable_math=self._config.enable_math)
        self._metrics = self._config.metrics or NoopMetricsHook()

    def convert(self, markdown: str) -> ConversionResult:
        """Run the full pipeline on *markdown*.

        Blank input yields an empty result.  Non-blank input always yields
        a result; parse or conversion errors switch to the fallback.
        """
        if not markdown or not markdown.strip():
            return ConversionResult()

        t0 = time.monotonic()
        text = sanitize_markdown(markdown) if self._config.sanitize_html else markdown
        if not text.strip():
            return ConversionResult()

        try:
            blocks, warnings = self._run_pipeline(text)
            result = ConversionResult(blocks=blocks, warnings=warnings)
        except LogseqifyError as exc:
            result = self._fallback(text, exc)

        elapsed_ms = (time.monotonic() - t0) * 1000
        self._record(result, elapsed_ms)
        self._dump_blocks(result.blocks)
        return result

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------

    def _run_pipeline(self, text: str) -> tuple[list[Block], list[ConversionWarning]]:
        if self._config.preprocess_tasks:
            text = preprocess_task_markers(text)

        tokens = self._normalizer.parse(text)
        self._dump_ast(tokens)

        blocks, warnings = build_blocks(tokens)
        if self._config.split_tasks:
            try:
                blocks = split_forest(blocks)
            except RecursionError as exc:
                raise LogseqifyConversionError(
                    message="Block tree is too deep to split task lines.",
                    cause=exc,
                ) from exc
        return blocks, warnings

    def _fallback(self, text: str, exc: LogseqifyError) -> ConversionResult:
        strategy = self._config.fallback_strategy
        log.warning(
            "Markdown conversion fell back",
            exc_info=exc,
            extra={
                "extra_fields": {
                    "op": "convert",
                    "strategy": strategy,
                    "length": len(text),
                    "excerpt": text,
                }
            },
        )
        self._metrics.increment(
            "logseqify.conversion_fallbacks_total",
            tags={"strategy": strategy, "error_code": _error_code(exc)},
        )

        blocks: list[Block] = []
        if strategy == "line_parser":
            blocks = parse_markdown_lines(text)
            if self._config.split_tasks:
                blocks = split_forest(blocks)
        if not blocks:
            blocks = [Block(content=text.strip())]

        warning = ConversionWarning(
            code="PARSE_FALLBACK",
            message=f"Markdown could not be converted; used '{strategy}' fallback.",
            context={"error_code": _error_code(exc), "error": exc.message},
        )
        return ConversionResult(blocks=blocks, warnings=[warning], fallback_used=True)

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    def _record(self, result: ConversionResult, elapsed_ms: float) -> None:
        outcome = "fallback" if result.fallback_used else "ok"
        block_count = _count_blocks(result.blocks)
        self._metrics.increment("logseqify.conversions_total", tags={"outcome": outcome})
        self._metrics.increment("logseqify.blocks_produced_total", value=block_count)
        self._metrics.timing(
            "logseqify.conversion_duration_ms", elapsed_ms, tags={"outcome": outcome},
        )
        self._metrics.gauge("logseqify.forest_depth", float(_forest_depth(result.blocks)))
        log.debug(
            "Markdown converted",
            extra={
                "extra_fields": {
                    "op": "convert",
                    "outcome": outcome,
                    "blocks": block_count,
                    "warnings": len(result.warnings),
                    "duration_ms": round(elapsed_ms, 3),
                }
            },
        )

    def _dump_ast(self, tokens: list[dict]) -> None:
        if self._config.debug_dump_ast:
            print(
                "[logseqify] Normalized AST:",
                json.dumps(tokens, indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

    def _dump_blocks(self, blocks: list[Block]) -> None:
        if self._config.debug_dump_blocks:
            print(
                "[logseqify] Block tree:",
                json.dumps(blocks_to_tree(blocks), indent=2, ensure_ascii=False),
                file=sys.stderr,
            )


def _error_code(exc: LogseqifyError) -> str:
    return exc.code.value if isinstance(exc.code, ErrorCode) else str(exc.code)


def _count_blocks(blocks: list[Block]) -> int:
    return sum(1 + _count_blocks(block.children) for block in blocks)


def _forest_depth(blocks: list[Block]) -> int:
    return max((1 + _forest_depth(block.children) for block in blocks), default=0)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

@functools.lru_cache(maxsize=1)
def _default_converter() -> MarkdownToBlocksConverter:
    return MarkdownToBlocksConverter()


def parse_markdown_to_blocks(markdown: str) -> list[Block]:
    """Parse *markdown* into a block forest.  Never raises on bad Markdown."""
    return _default_converter().convert(markdown).blocks


def parse_markdown_to_string_blocks(markdown: str) -> list[str]:
    """Parse *markdown* and flatten the forest to content strings."""
    return blocks_to_flat_strings(parse_markdown_to_blocks(markdown))


def markdown_to_tree(markdown: str) -> list[BlockNode]:
    """Parse *markdown* into ``{"text", "children"}`` nodes."""
    return blocks_to_tree(parse_markdown_to_blocks(markdown))


def parse_markdown_to_parsed_blocks(markdown: str) -> list[ParsedBlock]:
    """Parse *markdown* into typed :class:`ParsedBlock` records."""
    return blocks_to_parsed_blocks(parse_markdown_to_blocks(markdown))


def render(markdown: str, mode: RenderMode = "readable") -> list[Block]:
    """Parse *markdown* and shape the forest for the given render *mode*.

    ``"readable"`` returns the block forest as parsed.  ``"compact"``
    returns a single block holding every non-blank content string, one
    per line, in depth-first order.

    Raises
    ------
    LogseqifyValidationError
        If *mode* is not ``"readable"`` or ``"compact"``.
    """
    if mode not in _RENDER_MODES:
        raise LogseqifyValidationError(
            message=f"Unknown render mode {mode!r}.",
            context={"field": "mode", "value": mode, "allowed": list(_RENDER_MODES)},
        )
    blocks = parse_markdown_to_blocks(markdown)
    if mode == "compact":
        return compact_blocks(blocks)
    return blocks
