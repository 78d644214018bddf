"""Convert normalized AST tokens to a forest of outline blocks.

The top-level token sequence is scanned once with a single piece of
state, the *accumulator*: the block currently being filled.

- heading -> flushes the accumulator and opens a new one holding
  ``"#" * level + " " + text`` (level clamped to 1-6)
- paragraph / block_code / block_quote / thematic_break -> rendered and
  merged into the accumulator, separated by a blank line
- list -> its items become children of the accumulator, or top-level
  blocks when no accumulator is open
- anything else -> rendered, and merged like a paragraph if non-blank

A paragraph followed by a list therefore becomes one block with the list
items as children, while two adjacent lists stay two sibling runs.
"""

from __future__ import annotations

from collections.abc import Callable

from logseqify.converter.ast_normalizer import NodeKind, node_kind
from logseqify.converter.inline_renderer import render_children, render_node
from logseqify.converter.list_converter import BuildContext, convert_list
from logseqify.errors import LogseqifyConversionError
from logseqify.models import Block, ConversionWarning

_MIN_HEADING_LEVEL = 1
_MAX_HEADING_LEVEL = 6

# Errors that indicate a token shape the builder cannot handle
_STRUCTURAL_ERRORS = (
    KeyError,
    TypeError,
    AttributeError,
    IndexError,
    ValueError,
    RecursionError,
)


def build_blocks(tokens: list[dict]) -> tuple[list[Block], list[ConversionWarning]]:
    """Convert normalized top-level AST tokens to a block forest.

    Parameters
    ----------
    tokens:
        List of canonical AST tokens from :class:`ASTNormalizer`.

    Returns
    -------
    tuple[list[Block], list[ConversionWarning]]
        (blocks, warnings)

    Raises
    ------
    LogseqifyConversionError
        If a token is malformed in a way the builder cannot default around.
    """
    ctx = BuildContext()
    forest: list[Block] = []
    current: Block | None = None

    for token in tokens:
        try:
            current = _process_token(token, current, forest, ctx)
        except _STRUCTURAL_ERRORS as exc:
            raise LogseqifyConversionError(
                message=f"Could not convert '{token.get('type', '?')}' token: {exc}",
                context={"token_type": token.get("type")},
                cause=exc,
            ) from exc

    flush_into(current, forest)
    return forest, ctx.warnings


# ---------------------------------------------------------------------------
# Accumulator helpers
# ---------------------------------------------------------------------------

def flush_into(current: Block | None, forest: list[Block]) -> None:
    """Emit the accumulator if it holds any non-blank text."""
    if current is not None and current.content.strip():
        forest.append(current)


def merge_into(current: Block | None, text: str) -> Block:
    """Append *text* to the accumulator, opening one if needed."""
    if current is None:
        return Block(content=text)
    if current.content.strip():
        current.content += "\n\n" + text
    else:
        current.content += text
    return current


# ---------------------------------------------------------------------------
# Token handlers
# ---------------------------------------------------------------------------

_TokenHandler = Callable[[dict, Block | None, list[Block], BuildContext], Block | None]


def _process_token(
    token: dict,
    current: Block | None,
    forest: list[Block],
    ctx: BuildContext,
) -> Block | None:
    """Feed one token to the scan and return the new accumulator."""
    kind = node_kind(token)
    handler = _TOKEN_HANDLERS.get(kind) if kind is not None else None
    if handler is not None:
        return handler(token, current, forest, ctx)
    if kind is None:
        ctx.add_warning(
            "UNKNOWN_TOKEN",
            f"Unknown token type '{token.get('type', '')}' was rendered as text.",
            token_type=token.get("type", ""),
        )
    return _handle_other(token, current, forest, ctx)


def _handle_heading(
    token: dict, current: Block | None, forest: list[Block], ctx: BuildContext,
) -> Block | None:
    flush_into(current, forest)
    level = token.get("attrs", {}).get("level", 1)
    level = max(_MIN_HEADING_LEVEL, min(_MAX_HEADING_LEVEL, int(level)))
    return Block(content=f"{'#' * level} {render_children(token)}")


def _handle_content(
    token: dict, current: Block | None, forest: list[Block], ctx: BuildContext,
) -> Block | None:
    return merge_into(current, render_node(token))


def _handle_list(
    token: dict, current: Block | None, forest: list[Block], ctx: BuildContext,
) -> Block | None:
    items = convert_list(token, ctx)
    if current is not None:
        current.children.extend(items)
    else:
        forest.extend(items)
    return current


def _handle_other(
    token: dict, current: Block | None, forest: list[Block], ctx: BuildContext,
) -> Block | None:
    text = render_node(token)
    if not text.strip():
        return current
    return merge_into(current, text)


_TOKEN_HANDLERS: dict[NodeKind, _TokenHandler] = {
    NodeKind.HEADING: _handle_heading,
    NodeKind.PARAGRAPH: _handle_content,
    NodeKind.BLOCK_CODE: _handle_content,
    NodeKind.BLOCK_QUOTE: _handle_content,
    NodeKind.THEMATIC_BREAK: _handle_content,
    NodeKind.LIST: _handle_list,
    NodeKind.TABLE: _handle_other,
    NodeKind.BLOCK_MATH: _handle_other,
    NodeKind.HTML_BLOCK: _handle_other,
}
