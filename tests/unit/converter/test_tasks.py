"""Tests for converter/tasks.py: checkbox rewriting and task splitting."""

import copy

import pytest

from logseqify.converter.tasks import (
    checkbox_state,
    is_task_line,
    normalize_checkbox,
    normalize_task_marker,
    preprocess_task_markers,
    split_forest,
    split_tasks_recursively,
)
from logseqify.models import Block, TaskState


# =========================================================================
# Checkbox state
# =========================================================================

class TestCheckboxState:

    @pytest.mark.parametrize("marker", ["x", "X"])
    def test_checked(self, marker):
        assert checkbox_state(marker) is TaskState.DONE

    @pytest.mark.parametrize("marker", [" ", "", None])
    def test_unchecked(self, marker):
        assert checkbox_state(marker) is TaskState.TODO


# =========================================================================
# Pre-parse rewriting
# =========================================================================

class TestPreprocessTaskMarkers:

    def test_checked_list_item(self):
        assert preprocess_task_markers("- [x] buy milk") == "- DONE buy milk"

    def test_unchecked_list_item(self):
        assert preprocess_task_markers("- [ ] call mom") == "- TODO call mom"

    def test_indent_and_marker_kept(self):
        md = "- parent\n  * [X] nested\n1. [ ] first"
        assert preprocess_task_markers(md) == "- parent\n  * DONE nested\n1. TODO first"

    def test_standalone_checkbox_gets_blank_line(self):
        md = "Some text\n[x] finished"
        assert preprocess_task_markers(md) == "Some text\n\nDONE finished"

    def test_standalone_checkbox_at_start(self):
        assert preprocess_task_markers("[ ] first") == "TODO first"

    def test_standalone_after_blank_line_not_doubled(self):
        md = "para\n\n[ ] next"
        assert preprocess_task_markers(md) == "para\n\nTODO next"

    def test_emphasized_checkbox(self):
        assert preprocess_task_markers("- **[x]** bold done") == "- DONE bold done"

    def test_link_not_rewritten(self):
        md = "- [x](https://example.com) is a link"
        assert preprocess_task_markers(md) == md

    def test_reference_definition_not_rewritten(self):
        md = "[x]: https://example.com"
        assert preprocess_task_markers(md) == md

    def test_fenced_code_untouched(self):
        md = "```\n- [ ] inside code\n```\n- [ ] outside"
        assert preprocess_task_markers(md) == "```\n- [ ] inside code\n```\n- TODO outside"

    def test_tilde_fence_untouched(self):
        md = "~~~\n[x] raw\n~~~"
        assert preprocess_task_markers(md) == md

    def test_crlf_input(self):
        assert preprocess_task_markers("- [x] a\r\n- [ ] b") == "- DONE a\n- TODO b"

    def test_plain_text_unchanged(self):
        md = "# Title\n\nJust a paragraph."
        assert preprocess_task_markers(md) == md

    def test_idempotent(self):
        md = "intro\n[ ] a\n- [x] b\n  - [ ] c"
        once = preprocess_task_markers(md)
        assert preprocess_task_markers(once) == once


# =========================================================================
# Content-level normalization
# =========================================================================

class TestNormalizeCheckbox:

    def test_bare_checkbox(self):
        assert normalize_checkbox("[x] done") == "DONE done"

    def test_list_checkbox(self):
        assert normalize_checkbox("- [ ] item") == "TODO item"

    def test_code_wrapped_checkbox(self):
        assert normalize_checkbox("`[ ]` item") == "TODO item"

    def test_only_leading_checkbox(self):
        assert normalize_checkbox("see [x] later") == "see [x] later"

    def test_no_checkbox(self):
        assert normalize_checkbox("plain") == "plain"


class TestNormalizeTaskMarker:

    @pytest.mark.parametrize(("text", "expected"), [
        ("todo buy milk", "TODO buy milk"),
        ("Doing the thing", "DOING the thing"),
        ("  later maybe", "  LATER maybe"),
        ("canceled\tplan", "CANCELED\tplan"),
        ("[x] done", "DONE done"),
        ("TODO already", "TODO already"),
    ])
    def test_markers_canonicalized(self, text, expected):
        assert normalize_task_marker(text) == expected

    @pytest.mark.parametrize("text", [
        "todolist item",
        "todo",
        "nowhere to go",
        "a todo in the middle",
    ])
    def test_non_markers_untouched(self, text):
        assert normalize_task_marker(text) == text


class TestIsTaskLine:

    @pytest.mark.parametrize("line", ["TODO a", "DONE b", "  NOW c  ", "WAITING x y"])
    def test_task_lines(self, line):
        assert is_task_line(line)

    @pytest.mark.parametrize("line", ["todo a", "TODO", "TODOS a", "note TODO a", ""])
    def test_non_task_lines(self, line):
        assert not is_task_line(line)


# =========================================================================
# Recursive splitting
# =========================================================================

class TestSplitTasksRecursively:

    def test_two_tasks_split(self):
        result = split_tasks_recursively(Block("TODO a\nDONE b"))
        assert result == [Block("TODO a"), Block("DONE b")]

    def test_single_task_kept(self):
        assert split_tasks_recursively(Block("TODO a")) == [Block("TODO a")]

    def test_plain_block_kept(self):
        block = Block("line one\nline two", [Block("child")])
        assert split_tasks_recursively(block) == [block]

    def test_leading_and_trailing_lines_grouped(self):
        block = Block("intro\nTODO a\nnote\nDONE b", [Block("c")])
        assert split_tasks_recursively(block) == [
            Block("intro"),
            Block("TODO a\nnote"),
            Block("DONE b", [Block("c")]),
        ]

    def test_children_attach_to_last_sibling(self):
        block = Block("TODO a\nTODO b", [Block("x"), Block("y")])
        first, last = split_tasks_recursively(block)
        assert first.children == []
        assert [c.content for c in last.children] == ["x", "y"]

    def test_blank_lines_ignored(self):
        result = split_tasks_recursively(Block("TODO a\n\n  \nTODO b"))
        assert [b.content for b in result] == ["TODO a", "TODO b"]

    def test_children_split_first(self):
        block = Block("parent", [Block("TODO x\nTODO y")])
        assert split_tasks_recursively(block) == [
            Block("parent", [Block("TODO x"), Block("TODO y")]),
        ]

    def test_fenced_task_lines_not_split(self):
        block = Block("```\nTODO a\nTODO b\n```")
        assert split_tasks_recursively(block) == [block]

    def test_fence_stays_with_preceding_task(self):
        result = split_tasks_recursively(Block("TODO a\n```\nTODO x\n```\nTODO b"))
        assert result == [Block("TODO a\n```\nTODO x\n```"), Block("TODO b")]

    def test_tilde_fence_not_split(self):
        block = Block("~~~\nDONE a\nLATER b\n~~~")
        assert split_tasks_recursively(block) == [block]

    def test_leading_checkbox_normalized(self):
        assert split_tasks_recursively(Block("[x] done")) == [Block("DONE done")]

    def test_input_not_modified(self):
        block = Block("TODO a\nTODO b", [Block("TODO c\nTODO d")])
        before = copy.deepcopy(block)
        split_tasks_recursively(block)
        assert block == before

    def test_split_forest(self):
        forest = [Block("TODO a\nTODO b"), Block("plain")]
        assert split_forest(forest) == [Block("TODO a"), Block("TODO b"), Block("plain")]

    def test_split_forest_empty(self):
        assert split_forest([]) == []
