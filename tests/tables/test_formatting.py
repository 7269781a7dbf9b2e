"""Unit tests for aligned (max-width) rendering."""

# pylint: disable=missing-class-docstring,missing-function-docstring

from pipetable.tables.detection import find_tables
from pipetable.tables.formatting import _content_widths, _find_break_column, _fitting_width, format_table
from pipetable.tables.schema import FormatOptions, Table


def make_table(lines: list[str]) -> Table:
    """Parse the first table out of *lines*."""
    return find_tables(lines)[0]


def long_cell_table() -> Table:
    """Three columns where the last one holds one very long cell."""
    return Table(
        start_line=0,
        end_line=3,
        rows=[
            ["ID", "Name", "Description"],
            ["---", "---", "---"],
            ["1", "Alice", "Short"],
            ["2", "Bob", "x" * 100],
        ],
    )


ALIGNED_LINES = ["| Item | Qty |", "|:---|---:|", "| apple | 3 |", "| kiwi | 12 |"]

# ===========================================================================
# Width planning tests
# ===========================================================================


class TestContentWidths:

    def test_ignores_separator_row(self):
        table = make_table(["| a | b |", "|----------|---|", "| ccccc | d |"])
        assert _content_widths(table) == [5, 3]


class TestFindBreakColumn:

    def test_unlimited(self):
        assert _find_break_column([10, 20, 30], 0, 2) == (3, 1)

    def test_everything_fits(self):
        assert _find_break_column([3, 3], 80, 2) == (2, 13)

    def test_third_column_breaks(self):
        assert _find_break_column([3, 5, 100], 40, 2) == (2, 15)

    def test_first_column_breaks(self):
        assert _find_break_column([50], 20, 2) == (0, 1)


class TestFittingWidth:

    def test_widest_cell_that_fits(self):
        assert _fitting_width(long_cell_table(), 2, 22) == 11

    def test_minimum_three(self):
        assert _fitting_width(long_cell_table(), 2, 1) == 3


# ===========================================================================
# format_table tests
# ===========================================================================


class TestFormatTable:

    def test_unlimited_width(self, padded_lines):
        assert format_table(make_table(padded_lines)) == [
            "| Name     | Age | City     |",
            "| -------- | --- | -------- |",
            "| John Doe | 30  | New York |",
        ]

    def test_unlimited_width_lines_equal_length(self, padded_lines):
        lines = format_table(make_table(padded_lines))
        assert len({len(line) for line in lines}) == 1

    def test_alignment_preserved(self):
        assert format_table(make_table(ALIGNED_LINES)) == [
            "| Item  | Qty |",
            "| :---- | --: |",
            "| apple |   3 |",
            "| kiwi  |  12 |",
        ]

    def test_center_alignment(self):
        lines = ["| Title |", "|:---:|", "| ab |"]
        assert format_table(make_table(lines)) == ["| Title |", "| :---: |", "|  ab   |"]

    def test_alignment_not_preserved(self):
        options = FormatOptions(preserve_alignment=False)
        assert format_table(make_table(ALIGNED_LINES), options) == [
            "| Item  | Qty |",
            "| ----- | --- |",
            "| apple | 3   |",
            "| kiwi  | 12  |",
        ]

    def test_without_cell_padding(self):
        options = FormatOptions(cell_padding=False)
        assert format_table(make_table(ALIGNED_LINES), options) == [
            "|Item |Qty|",
            "|:----|--:|",
            "|apple|  3|",
            "|kiwi | 12|",
        ]

    def test_unpadded_separator_spans_cell_padding(self):
        options = FormatOptions(separator_padding=False)
        lines = format_table(make_table(ALIGNED_LINES), options)
        assert lines[1] == "|:------|----:|"
        assert len({len(line) for line in lines}) == 1

    def test_ragged_rows_filled(self):
        lines = ["| a | b |", "|---|---|", "| 1 |"]
        assert format_table(make_table(lines)) == ["| a   | b   |", "| --- | --- |", "| 1   |     |"]

    def test_max_width_breaks_at_long_column(self):
        lines = format_table(long_cell_table(), FormatOptions(max_width=40))
        assert lines[0] == "| ID  | Name  | Description |"
        assert lines[1] == "| --- | ----- | ----------- |"
        assert lines[2] == "| 1   | Alice | Short       |"
        assert lines[3] == "| 2   | Bob   | " + "x" * 100 + " |"

    def test_max_width_never_truncates(self):
        lines = format_table(long_cell_table(), FormatOptions(max_width=40))
        assert "x" * 100 in lines[3]
        assert len(lines[3]) > 40
        assert all(len(line) <= 40 for line in lines[:3])

    def test_generous_max_width_matches_unlimited(self, padded_lines):
        table = make_table(padded_lines)
        assert format_table(table, FormatOptions(max_width=1000)) == format_table(table)

    def test_keep_separator_ratios(self, padded_lines):
        options = FormatOptions(keep_separator_ratios=True)
        assert format_table(make_table(padded_lines), options)[1] == "| ------ | ----- | -------- |"

    def test_unpadded_ratio_separator_spans_cell_padding(self, padded_lines):
        options = FormatOptions(keep_separator_ratios=True, separator_padding=False)
        lines = format_table(make_table(padded_lines), options)
        assert lines[0] == "| Name     | Age | City     |"
        assert lines[1] == "|--------|-------|----------|"
        assert len(lines[1]) == len(lines[0])

    def test_unpadded_separator_past_break_column(self):
        table = Table(end_line=2, rows=[["ID", "LongDescriptionHeader"], ["---", "---"], ["1", "x"]])
        lines = format_table(table, FormatOptions(max_width=20, separator_padding=False))
        assert lines[0] == "| ID  | LongDescriptionHeader |"
        assert lines[1] == "|-----|" + "-" * 23 + "|"
        assert len(lines[1]) == len(lines[0])

    def test_idempotent(self, padded_lines):
        once = format_table(make_table(padded_lines))
        assert format_table(make_table(once)) == once
