"""Unit tests for single-line classification and fenced code block detection."""

# pylint: disable=missing-class-docstring,missing-function-docstring

from pipetable.tables.classifiers import (
    _closes_fence,
    classify_line,
    find_code_block_ranges,
    is_box_drawing_row,
    is_line_in_code_block,
    is_table_row,
    is_table_separator,
)
from pipetable.tables.schema import LineKind

# ===========================================================================
# is_table_row tests
# ===========================================================================


class TestIsTableRow:

    def test_padded_row(self):
        assert is_table_row("| cell1 | cell2 |") is True

    def test_unpadded_row(self):
        assert is_table_row("|cell1|cell2|") is True

    def test_surrounding_whitespace(self):
        assert is_table_row("  | cell1 | cell2 |  ") is True

    def test_plain_text(self):
        assert is_table_row("not a table row") is False

    def test_missing_end_pipe(self):
        assert is_table_row("| missing end") is False

    def test_missing_start_pipe(self):
        assert is_table_row("missing start |") is False

    def test_empty_line(self):
        assert is_table_row("") is False


# ===========================================================================
# is_table_separator tests
# ===========================================================================


class TestIsTableSeparator:

    def test_plain_dashes(self):
        assert is_table_separator("|---|---|") is True

    def test_padded_dashes(self):
        assert is_table_separator("| --- | --- |") is True

    def test_alignment_colons(self):
        assert is_table_separator("|:---|---:|") is True
        assert is_table_separator("|:---:|:---:|") is True

    def test_long_dashes(self):
        assert is_table_separator("|---------|---------|") is True

    def test_single_dash(self):
        assert is_table_separator("|-|") is True

    def test_content_row(self):
        assert is_table_separator("| cell | cell |") is False

    def test_letters(self):
        assert is_table_separator("|abc|def|") is False

    def test_mixed_row(self):
        assert is_table_separator("| --- | text |") is False

    def test_not_a_row(self):
        assert is_table_separator("not a separator") is False

    def test_lone_pipe(self):
        assert is_table_separator("|") is False

    def test_empty_cells(self):
        assert is_table_separator("||") is False


# ===========================================================================
# is_box_drawing_row tests
# ===========================================================================


class TestIsBoxDrawingRow:

    def test_vertical_bars(self):
        assert is_box_drawing_row("│ a │ b │") is True

    def test_top_border(self):
        assert is_box_drawing_row("┌───┬───┐") is True

    def test_double_line_border(self):
        assert is_box_drawing_row("  ╔═══╗  ") is True

    def test_pipe_row_is_not_box(self):
        assert is_box_drawing_row("| a | b |") is False

    def test_blank(self):
        assert is_box_drawing_row("   ") is False


# ===========================================================================
# classify_line tests
# ===========================================================================


class TestClassifyLine:

    def test_separator_wins_over_row(self):
        assert classify_line("| --- | :---: |") == LineKind.SEPARATOR

    def test_table_row(self):
        assert classify_line("| a | b |") == LineKind.TABLE_ROW

    def test_box_drawing(self):
        assert classify_line("│ a │") == LineKind.BOX_DRAWING

    def test_text(self):
        assert classify_line("Some prose.") == LineKind.TEXT


# ===========================================================================
# Fenced code block tests
# ===========================================================================


class TestClosesFence:

    def test_same_fence(self):
        assert _closes_fence("```", "`") is True

    def test_longer_fence(self):
        assert _closes_fence("  ````  ", "`") is True

    def test_other_fence_char(self):
        assert _closes_fence("~~~", "`") is False

    def test_info_string_does_not_close(self):
        assert _closes_fence("```python", "`") is False


class TestFindCodeBlockRanges:

    def test_single_block(self):
        lines = ["text", "```", "| a |", "```", "after"]
        assert find_code_block_ranges(lines) == [(1, 3)]

    def test_info_string_opens(self):
        lines = ["```python", "x = 1", "```"]
        assert find_code_block_ranges(lines) == [(0, 2)]

    def test_tilde_fence(self):
        lines = ["~~~", "| a |", "~~~"]
        assert find_code_block_ranges(lines) == [(0, 2)]

    def test_backtick_block_not_closed_by_tildes(self):
        lines = ["```", "~~~", "```"]
        assert find_code_block_ranges(lines) == [(0, 2)]

    def test_unclosed_fence_runs_to_end(self):
        lines = ["intro", "```", "| a |", "|---|"]
        assert find_code_block_ranges(lines) == [(1, 3)]

    def test_multiple_blocks(self):
        lines = ["```", "a", "```", "text", "~~~", "b", "~~~"]
        assert find_code_block_ranges(lines) == [(0, 2), (4, 6)]

    def test_no_blocks(self):
        assert find_code_block_ranges(["| a |", "|---|"]) == []


class TestIsLineInCodeBlock:

    def test_inside_and_on_fences(self):
        ranges = [(2, 5)]
        assert is_line_in_code_block(2, ranges) is True
        assert is_line_in_code_block(4, ranges) is True
        assert is_line_in_code_block(5, ranges) is True

    def test_outside(self):
        ranges = [(2, 5)]
        assert is_line_in_code_block(1, ranges) is False
        assert is_line_in_code_block(6, ranges) is False

    def test_no_ranges(self):
        assert is_line_in_code_block(0, []) is False
