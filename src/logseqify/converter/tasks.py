"""Task markers: checkbox rewriting, keyword casing and task splitting.

Outline blocks mark tasks with a leading keyword (``TODO``, ``DONE``,
...).  Markdown marks them with checkboxes.  This module bridges the two:

* :func:`preprocess_task_markers` rewrites checkboxes at line starts in
  raw Markdown before it reaches the parser.
* :func:`normalize_checkbox` and :func:`normalize_task_marker` rewrite the
  start of a single rendered content string.
* :func:`split_tasks_recursively` breaks a block holding several task
  lines into sibling blocks, one per task.
"""

from __future__ import annotations

import re

from logseqify.models import TASK_KEYWORDS, Block, TaskState

# A checkbox, optionally wrapped in emphasis or code markers.  A bracket
# pair followed by "(", ":" or "[" is a link or reference, not a task.
_CHECKBOX = r"(?:[*_`]+)?\[(\s|x|X)?\](?![(:\[])(?:[*_`]+)?"

_LIST_MARKER = r"(?:[-*+]|\d+[.)])"

_LIST_CHECKBOX_LINE_RE = re.compile(rf"^(\s*{_LIST_MARKER}\s+){_CHECKBOX}\s*(.*)$")
_CHECKBOX_LINE_RE = re.compile(rf"^(\s*){_CHECKBOX}\s*(.*)$")

_LIST_CHECKBOX_PREFIX_RE = re.compile(rf"^\s*{_LIST_MARKER}\s+?{_CHECKBOX}\s*")
_CHECKBOX_PREFIX_RE = re.compile(rf"^\s*{_CHECKBOX}\s*")

_KEYWORD_PREFIX_RE = re.compile(
    rf"^(\s*)({'|'.join(TASK_KEYWORDS)})(?=\s)",
    re.IGNORECASE,
)
_TASK_LINE_RE = re.compile(rf"^(?:{'|'.join(TASK_KEYWORDS)})\s+.+")

_FENCE_RE = re.compile(r"^\s*(```|~~~)")
_LINE_SPLIT_RE = re.compile(r"\r?\n")


def checkbox_state(marker: str | None) -> TaskState:
    """Map the character inside a checkbox to ``DONE`` or ``TODO``."""
    return TaskState.DONE if (marker or "").lower() == "x" else TaskState.TODO


# ---------------------------------------------------------------------------
# Pre-parse normalization
# ---------------------------------------------------------------------------

def preprocess_task_markers(markdown: str) -> str:
    """Rewrite checkbox syntax at line starts to task keywords.

    ``- [x] done`` becomes ``- DONE done``; a bare ``[ ] call`` line
    becomes ``TODO call``, separated from a preceding non-blank line by a
    blank line so it parses as its own paragraph.  Indentation and list
    markers are kept.  Lines inside fenced code blocks are left alone.
    Running the function on its own output returns it unchanged.
    """
    out: list[str] = []
    in_fence = False
    for line in _LINE_SPLIT_RE.split(markdown):
        if _FENCE_RE.match(line):
            in_fence = not in_fence
            out.append(line)
            continue
        if in_fence:
            out.append(line)
            continue

        m = _LIST_CHECKBOX_LINE_RE.match(line)
        if m:
            status = checkbox_state(m.group(2)).value
            out.append(f"{m.group(1)}{status} {m.group(3)}".rstrip())
            continue

        m = _CHECKBOX_LINE_RE.match(line)
        if m:
            status = checkbox_state(m.group(2)).value
            if out and out[-1].strip():
                out.append("")
            out.append(f"{m.group(1)}{status} {m.group(3)}".rstrip())
            continue

        out.append(line)
    return "\n".join(out)


# ---------------------------------------------------------------------------
# Content-level normalization
# ---------------------------------------------------------------------------

def normalize_checkbox(text: str) -> str:
    """Replace a leading checkbox (with or without list marker) by its keyword."""
    m = _LIST_CHECKBOX_PREFIX_RE.match(text) or _CHECKBOX_PREFIX_RE.match(text)
    if not m:
        return text
    status = checkbox_state(m.group(1)).value
    return f"{status} {text[m.end():]}"


def normalize_task_marker(text: str) -> str:
    """Canonicalize the task marker at the start of *text*.

    A leading checkbox becomes ``TODO``/``DONE``; a leading task keyword in
    any casing is upper-cased.  Text that starts with neither is returned
    unchanged.
    """
    text = normalize_checkbox(text)
    return _KEYWORD_PREFIX_RE.sub(
        lambda m: m.group(1) + m.group(2).upper(), text, count=1,
    )


def is_task_line(line: str) -> bool:
    """Return ``True`` if *line* is a keyword, whitespace, then some text."""
    return _TASK_LINE_RE.match(line.strip()) is not None


# ---------------------------------------------------------------------------
# Recursive splitting
# ---------------------------------------------------------------------------

def split_tasks_recursively(block: Block) -> list[Block]:
    """Split *block* into one sibling per embedded task line.

    Children are split first.  When the block's content holds fewer than
    two task lines it is returned as a single block.  Otherwise each task
    line opens a new sibling, following non-task lines stay with it, and
    lines before the first task form a leading sibling.  The block's
    children attach to the last sibling, since they followed the last line
    in the source.  Lines inside fenced code never count as task lines, so a
    fence is never cut apart.  The input block is not modified.
    """
    children = split_forest(block.children)
    content = normalize_checkbox(block.content)

    lines = [line.strip() for line in _LINE_SPLIT_RE.split(content)]
    lines = [line for line in lines if line]
    starts = _task_line_flags(lines)
    if sum(starts) < 2:
        return [Block(content=content, children=children)]

    groups: list[list[str]] = []
    for line, starts_task in zip(lines, starts):
        if starts_task or not groups:
            groups.append([line])
        else:
            groups[-1].append(line)

    siblings = [Block(content="\n".join(group)) for group in groups]
    siblings[-1].children = children
    return siblings


def _task_line_flags(lines: list[str]) -> list[bool]:
    """Flag the task lines of *lines*; fenced code never holds one."""
    flags: list[bool] = []
    in_fence = False
    for line in lines:
        if _FENCE_RE.match(line):
            in_fence = not in_fence
            flags.append(False)
        else:
            flags.append(not in_fence and is_task_line(line))
    return flags


def split_forest(blocks: list[Block]) -> list[Block]:
    """Apply :func:`split_tasks_recursively` to every block of a forest."""
    result: list[Block] = []
    for block in blocks:
        result.extend(split_tasks_recursively(block))
    return result
