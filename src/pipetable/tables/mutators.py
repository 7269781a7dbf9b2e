"""Structural edits on a Table: rows, columns, alignment, row numbers, sort, transpose.

Every function returns a new Table and leaves its input untouched.  Edits
that are not allowed (touching the header or separator row, moving past
the table edge) return a ``Rejection`` carrying a human-readable reason
instead of raising.
"""

import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Callable, Literal

from pyuca import Collator

from pipetable.tables.patterns import DATE_FORMATS, DIGITS_RE, NUMERIC_RUN_RE, ROW_NUMBER_HEADERS
from pipetable.tables.schema import ColumnAlignment, Rejection, RowNumberOptions, SortOptions, Table
from pipetable.tables.widths import separator_cell_for

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1)


def _reject(reason: str) -> Rejection:
    logger.debug("Rejected table edit: %s", reason)
    return Rejection(reason=reason)


def _copy_rows(table: Table) -> list[list[str]]:
    return [list(row) for row in table.rows]


def _padded(values: list, length: int, fill) -> list:
    """Return a copy of *values* extended with *fill* up to *length* items."""
    return list(values) + [fill] * (length - len(values))


def _is_data_row(table: Table, index: int) -> bool:
    return 0 < index < len(table.rows) and index != table.separator_index


# ─── Row Edits ───────────────────────────────────────────────────────────────


def insert_row(table: Table, index: int, cells: list[str] | None = None) -> Table | Rejection:
    """Insert a row so that it ends up at *index* (default: all empty cells).

    Valid positions are just below the separator through one past the last
    row.
    """
    if index <= table.separator_index or index > len(table.rows):
        return _reject(f"Cannot insert a row at position {index}; insert below the separator row")

    new_row = _padded(cells or [], table.column_count, "")
    rows = _copy_rows(table)
    rows.insert(index, new_row)
    return table.model_copy(update={"rows": rows, "end_line": table.end_line + 1})


def remove_row(table: Table, index: int) -> Table | Rejection:
    if not _is_data_row(table, index):
        return _reject("Cannot remove the header row, the separator row, or a row outside the table")

    rows = _copy_rows(table)
    del rows[index]
    return table.model_copy(update={"rows": rows, "end_line": table.end_line - 1})


def move_row(table: Table, index: int, direction: Literal["up", "down"]) -> Table | Rejection:
    """Swap a data row with its neighbour above or below."""
    target = index - 1 if direction == "up" else index + 1
    if not _is_data_row(table, index) or not _is_data_row(table, target):
        return _reject(f"Cannot move row {index} {direction}")

    rows = _copy_rows(table)
    rows[index], rows[target] = rows[target], rows[index]
    return table.model_copy(update={"rows": rows})


def duplicate_row(table: Table, index: int) -> Table | Rejection:
    """Insert a copy of a data row directly below it."""
    if not _is_data_row(table, index):
        return _reject("Cannot duplicate the header row, the separator row, or a row outside the table")

    rows = _copy_rows(table)
    rows.insert(index + 1, list(rows[index]))
    return table.model_copy(update={"rows": rows, "end_line": table.end_line + 1})


# ─── Column Edits ────────────────────────────────────────────────────────────


def insert_column(
    table: Table,
    index: int,
    header: str = "",
    fill: str = "",
    alignment: ColumnAlignment = ColumnAlignment.NONE,
) -> Table:
    """Insert a column at *index* (clamped to the table edges)."""
    index = max(0, min(index, table.column_count))
    rows: list[list[str]] = []
    for r, row in enumerate(table.rows):
        new_row = _padded(row, index, "")
        if r == 0:
            new_row.insert(index, header)
        elif r == table.separator_index:
            new_row.insert(index, separator_cell_for(alignment))
        else:
            new_row.insert(index, fill)
        rows.append(new_row)

    alignments = _padded(table.alignments, index, ColumnAlignment.NONE)
    alignments.insert(index, alignment)
    return table.model_copy(update={"rows": rows, "alignments": alignments})


def remove_column(table: Table, index: int) -> Table | Rejection:
    n_cols = table.column_count
    if not 0 <= index < n_cols:
        return _reject(f"Column {index} is outside the table")
    if n_cols == 1:
        return _reject("Cannot remove the only column of a table")

    rows = [[cell for i, cell in enumerate(row) if i != index] for row in table.rows]
    alignments = [a for i, a in enumerate(table.alignments) if i != index]
    return table.model_copy(update={"rows": rows, "alignments": alignments})


def move_column(table: Table, index: int, direction: Literal["left", "right"]) -> Table | Rejection:
    """Swap a column with its neighbour to the left or right."""
    n_cols = table.column_count
    target = index - 1 if direction == "left" else index + 1
    if not 0 <= index < n_cols or not 0 <= target < n_cols:
        return _reject(f"Cannot move column {index} {direction}")

    span = max(index, target) + 1
    alignments = _padded(table.alignments, n_cols, ColumnAlignment.NONE)
    alignments[index], alignments[target] = alignments[target], alignments[index]

    rows: list[list[str]] = []
    for r, row in enumerate(table.rows):
        new_row = _padded(row, span, "")
        new_row[index], new_row[target] = new_row[target], new_row[index]
        if r == table.separator_index:
            new_row[index] = separator_cell_for(alignments[index])
            new_row[target] = separator_cell_for(alignments[target])
        rows.append(new_row)
    return table.model_copy(update={"rows": rows, "alignments": alignments})


def set_column_alignment(table: Table, index: int, alignment: ColumnAlignment) -> Table | Rejection:
    """Set a column's alignment and rewrite its separator cell to match."""
    n_cols = table.column_count
    if not 0 <= index < n_cols:
        return _reject(f"Column {index} is outside the table")

    alignments = _padded(table.alignments, n_cols, ColumnAlignment.NONE)
    alignments[index] = alignment

    rows = _copy_rows(table)
    separator = _padded(rows[table.separator_index], index + 1, "---")
    separator[index] = separator_cell_for(alignment)
    rows[table.separator_index] = separator
    return table.model_copy(update={"rows": rows, "alignments": alignments})


# ─── Row Numbers ─────────────────────────────────────────────────────────────


def has_row_numbers(table: Table, options: RowNumberOptions | None = None) -> bool:
    """Return True if the first column already holds row numbers.

    The header must be one of the usual row-number labels (or the configured
    header text) and every data cell must be a plain digit string.
    """
    options = options or RowNumberOptions()
    known_headers = {*ROW_NUMBER_HEADERS, options.header_text.strip().lower()}
    if table.cell(0, 0).strip().lower() not in known_headers:
        return False
    return all(DIGITS_RE.match(table.cell(r, 0)) for r in table.data_row_indices)


def add_row_numbers(table: Table, options: RowNumberOptions | None = None) -> Table:
    """Number the data rows, reusing an existing row-number column if there is one."""
    options = options or RowNumberOptions()
    if not has_row_numbers(table, options):
        table = insert_column(table, 0, options.header_text, "", options.alignment)

    rows = _copy_rows(table)
    for number, r in enumerate(table.data_row_indices, start=options.start_number):
        rows[r] = _padded(rows[r], 1, "")
        rows[r][0] = str(number)
    return table.model_copy(update={"rows": rows})


def remove_row_numbers(table: Table, options: RowNumberOptions | None = None) -> Table | None:
    """Strip the row-number column, or return None if the table has none."""
    if not has_row_numbers(table, options):
        return None
    result = remove_column(table, 0)
    return None if isinstance(result, Rejection) else result


# ─── Sort ────────────────────────────────────────────────────────────────────


def _numeric_key(cell: str) -> float:
    """First signed/decimal number in the cell, 0 when there is none."""
    match = NUMERIC_RUN_RE.search(cell)
    return float(match.group()) if match else 0.0


def _parse_date(text: str) -> datetime | None:
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _date_key(cell: str) -> float:
    """Seconds since the epoch, 0 when the cell is not a recognisable date."""
    parsed = _parse_date(cell.strip())
    if parsed is None:
        return 0.0
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return (parsed - _EPOCH).total_seconds()


@lru_cache(maxsize=1)
def _collator() -> Collator:
    """Unicode Collation Algorithm collator over the default DUCET table, built once."""
    return Collator()


def _sort_key(options: SortOptions) -> Callable[[str], object]:
    if options.sort_type == "numeric":
        return _numeric_key
    if options.sort_type == "date":
        return _date_key
    if options.case_sensitive:
        return _collator().sort_key
    return lambda cell: _collator().sort_key(cell.casefold())


def sort_table(table: Table, options: SortOptions | None = None) -> Table:
    """Sort the data rows by one column; header and separator always stay on top.

    The sort is stable, including in descending order.  ``keep_header_row``
    is accepted but currently has no effect: the header and separator rows
    are never sorted.
    """
    options = options or SortOptions()
    if not options.keep_header_row:
        logger.debug("keep_header_row=False has no effect; header and separator rows stay in place")

    cell_key = _sort_key(options)
    column = options.column_index
    fixed = table.rows[: table.separator_index + 1]
    data = table.rows[table.separator_index + 1 :]
    ordered = sorted(
        data,
        key=lambda row: cell_key(row[column] if column < len(row) else ""),
        reverse=options.direction == "descending",
    )
    return table.model_copy(update={"rows": [list(row) for row in fixed + ordered]})


# ─── Transpose ───────────────────────────────────────────────────────────────


def transpose_table(table: Table) -> Table:
    """Swap rows and columns.

    The header's first cell stays in the corner; the other header cells become
    the first column and the data rows become columns.  The separator row is
    regenerated without alignment markers.
    """
    header = table.header
    data = [table.rows[r] for r in table.data_row_indices]

    def _at(row: list[str], column: int) -> str:
        return row[column] if column < len(row) else ""

    new_header = [_at(header, 0)] + [_at(row, 0) for row in data]
    new_data = [[header[c]] + [_at(row, c) for row in data] for c in range(1, len(header))]
    separator = ["---"] * len(new_header)

    rows = [new_header, separator, *new_data]
    return Table(
        start_line=table.start_line,
        end_line=table.start_line + len(rows) - 1,
        rows=rows,
        separator_index=1,
        alignments=[ColumnAlignment.NONE] * len(new_header),
    )


# ─── Row / Column Text ───────────────────────────────────────────────────────


def extract_row(table: Table, row_index: int, separator: str = ",") -> str | Rejection:
    """Join one row's cells with *separator* (e.g. for a clipboard copy)."""
    if row_index == table.separator_index or not 0 <= row_index < len(table.rows):
        return _reject("Cannot copy the separator row or a row outside the table")
    return separator.join(table.rows[row_index])


def extract_column(table: Table, column_index: int, separator: str = ",") -> str | Rejection:
    """Join one column's cells over every non-separator row."""
    if not 0 <= column_index < table.column_count:
        return _reject(f"Column {column_index} is outside the table")
    values = [table.cell(r, column_index) for r in range(len(table.rows)) if r != table.separator_index]
    return separator.join(values)
