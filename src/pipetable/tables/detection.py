"""Table discovery, row parsing and cursor-position helpers.

Operates on the document as a list of lines: finds maximal runs of pipe
rows, keeps the runs that form a valid table (header row immediately
followed by a separator row), and parses each row into trimmed cells and
per-column alignments.  Also answers the position questions a host editor
asks (which table, which row, which column) and whether a table is currently
written in formatted or compact mode.
"""

import logging

from pipetable.tables.classifiers import (
    find_code_block_ranges,
    is_line_in_code_block,
    is_table_row,
    is_table_separator,
)
from pipetable.tables.schema import ColumnAlignment, Table

logger = logging.getLogger(__name__)


# ─── Row Parsing ─────────────────────────────────────────────────────────────


def _split_raw_cells(line: str) -> list[str]:
    """Strip the outer pipes and split on "|" without trimming the cells."""
    trimmed = line.strip()
    return trimmed[1:-1].split("|")


def parse_table_row(line: str) -> list[str]:
    """Split a table line into trimmed cells.

    Literal pipes inside a cell are not supported: there is no escape syntax,
    so ``a \\| b`` splits into two cells.
    """
    return [cell.strip() for cell in _split_raw_cells(line)]


def get_alignment_from_separator(cell: str) -> ColumnAlignment:
    """Read the alignment encoded by one separator cell's colons."""
    trimmed = cell.strip()
    left = trimmed.startswith(":")
    right = trimmed.endswith(":")
    if left and right:
        return ColumnAlignment.CENTER
    if left:
        return ColumnAlignment.LEFT
    if right:
        return ColumnAlignment.RIGHT
    return ColumnAlignment.NONE


def parse_alignments(row: list[str]) -> list[ColumnAlignment]:
    """Map each separator cell of *row* to its ColumnAlignment."""
    return [get_alignment_from_separator(cell) for cell in row]


def _column_alignments(rows: list[list[str]], separator_index: int) -> list[ColumnAlignment]:
    """Alignments for every header column; missing separator cells read as NONE."""
    alignments = parse_alignments(rows[separator_index])
    n_cols = len(rows[0])
    if len(alignments) < n_cols:
        alignments += [ColumnAlignment.NONE] * (n_cols - len(alignments))
    return alignments[:n_cols]


# ─── Table Discovery ─────────────────────────────────────────────────────────


def find_tables(lines: list[str], ignore_code_blocks: bool = False) -> list[Table]:
    """Return every table in the document in ascending start_line order.

    A maximal run of consecutive table rows qualifies when it has at least two
    rows and its second row is the separator.  With *ignore_code_blocks*, rows
    inside fenced code blocks do not count as table rows.
    """
    code_ranges = find_code_block_ranges(lines) if ignore_code_blocks else []

    def _is_candidate(idx: int) -> bool:
        return is_table_row(lines[idx]) and not is_line_in_code_block(idx, code_ranges)

    tables: list[Table] = []
    n = len(lines)
    i = 0
    while i < n:
        if not _is_candidate(i):
            i += 1
            continue

        # Consume the whole run so runs never overlap
        start = i
        rows: list[list[str]] = []
        separator_index = -1
        while i < n and _is_candidate(i):
            rows.append(parse_table_row(lines[i]))
            if separator_index == -1 and is_table_separator(lines[i]):
                separator_index = len(rows) - 1
            i += 1

        if len(rows) >= 2 and separator_index == 1:
            tables.append(
                Table(
                    start_line=start,
                    end_line=i - 1,
                    rows=rows,
                    separator_index=separator_index,
                    alignments=_column_alignments(rows, separator_index),
                )
            )
        else:
            logger.debug("Discarded pipe-row run at lines %d-%d (separator index %d)", start, i - 1, separator_index)

    return tables


def find_table_at_position(lines: list[str], line_number: int, ignore_code_blocks: bool = False) -> Table | None:
    """Return the table whose line span contains *line_number*, or None."""
    for table in find_tables(lines, ignore_code_blocks):
        if table.start_line <= line_number <= table.end_line:
            return table
    return None


# ─── Cursor Helpers ──────────────────────────────────────────────────────────


def get_column_at_position(line: str, char_index: int) -> int:
    """Return the 0-based column under a cursor at *char_index* in *line*."""
    pipes_before = line[:char_index].count("|")
    return max(0, pipes_before - 1)


def get_row_index_in_table(table: Table, line_number: int) -> int:
    return line_number - table.start_line


def get_column_span(line: str, column_index: int) -> tuple[int, int]:
    """Return (start, end) character offsets of a column's content in *line*.

    ``start`` is just after the pipe opening the column and ``end`` is the
    offset of the pipe closing it, or the line length if there is none.
    """
    start = 0
    end = len(line)
    pipe_count = 0
    for offset, char in enumerate(line):
        if char != "|":
            continue
        if pipe_count == column_index:
            start = offset + 1
        elif pipe_count == column_index + 1:
            end = offset
            break
        pipe_count += 1
    return start, end


# ─── Mode Detection ──────────────────────────────────────────────────────────


def _has_extended_separator(separator_line: str) -> bool:
    """Return True if any separator cell carries more than three dashes."""
    for cell in _split_raw_cells(separator_line):
        dashes = cell.replace(":", "").replace(" ", "").replace("\t", "")
        if len(dashes) > 3:
            return True
    return False


def is_table_formatted(table: Table, lines: list[str]) -> bool:
    """Heuristic: return True if the table is written in formatted (aligned) mode.

    Formatted tables pad every cell of a column to the same width, so the raw
    cell widths (whitespace included) agree within one character across rows.
    Compact tables use natural widths.  Tables with a single non-separator row
    fall back to checking for separators longer than the compact three dashes.
    """
    table_lines = lines[table.start_line : table.end_line + 1]
    raw_cells = [_split_raw_cells(line) if is_table_row(line) else [] for line in table_lines]
    if len(raw_cells) < 2:
        return False

    row_indices = [i for i in range(len(raw_cells)) if i != table.separator_index]
    if len(row_indices) < 2:
        return _has_extended_separator(table_lines[table.separator_index])

    column_count = max(len(cells) for cells in raw_cells)
    consistent_columns = 0
    has_any_padding = False
    for col in range(column_count):
        widths = [len(raw_cells[r][col]) if col < len(raw_cells[r]) else 0 for r in row_indices]
        if max(widths) - min(widths) <= 1:
            consistent_columns += 1
        if any(col < len(raw_cells[r]) and raw_cells[r][col].endswith(" ") for r in row_indices):
            has_any_padding = True

    # At least 70% of columns must line up, plus some trailing-space padding
    consistency_ratio = consistent_columns / column_count if column_count else 0.0
    if consistency_ratio >= 0.7 and has_any_padding:
        return True

    # Two or more trailing spaces anywhere is padding no compact table would carry
    return any(len(cell) - len(cell.rstrip()) >= 2 for r in row_indices for cell in raw_cells[r])
