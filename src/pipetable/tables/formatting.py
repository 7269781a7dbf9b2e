"""Aligned rendering with an optional maximum line width.

With ``max_width == 0`` every column is padded to its widest cell on every
row.  With a positive ``max_width`` the columns are walked left to right and
the first one that would push the line past the limit becomes the *break
column*:

  * columns before it are fully aligned on every row;
  * the break column is padded to the widest cell that still fits in the
    remaining budget, and rows whose cell is longer keep it at natural width
    (the line then exceeds the limit rather than losing content);
  * columns after it are rendered compactly.

Cell content is never truncated.
"""

import logging

from pipetable.tables.compact import compact_cell
from pipetable.tables.patterns import MIN_COLUMN_WIDTH
from pipetable.tables.schema import ColumnAlignment, FormatOptions, Table
from pipetable.tables.widths import build_separator_cell, calculate_separator_ratios, pad_cell

logger = logging.getLogger(__name__)


# ─── Width Planning ──────────────────────────────────────────────────────────


def _content_widths(table: Table) -> list[int]:
    """Widest non-separator cell per column, floored at the minimum width."""
    rows = [i for i in range(len(table.rows)) if i != table.separator_index]
    return [
        max(MIN_COLUMN_WIDTH, max(len(table.cell(r, c)) for r in rows)) for c in range(table.column_count)
    ]


def _find_break_column(column_widths: list[int], max_width: int, padding_per_cell: int) -> tuple[int, int]:
    """Return (break_column_index, line width accumulated before it).

    The break index equals the column count when every column fits.
    """
    width = 1  # leading pipe
    if max_width == 0:
        return len(column_widths), width
    for i, column_width in enumerate(column_widths):
        cell_width = column_width + padding_per_cell + 1
        if width + cell_width > max_width:
            return i, width
        width += cell_width
    return len(column_widths), width


def _fitting_width(table: Table, column: int, available_width: int) -> int:
    """Widest cell of *column* that fits in *available_width* (minimum 3)."""
    fitting = [
        len(table.cell(r, column))
        for r in range(len(table.rows))
        if r != table.separator_index and len(table.cell(r, column)) <= available_width
    ]
    return max([MIN_COLUMN_WIDTH, *fitting])


# ─── Rendering ───────────────────────────────────────────────────────────────


def _render_row(
    table: Table,
    row_index: int,
    widths: list[int],
    break_index: int,
    alignments: list[ColumnAlignment],
    options: FormatOptions,
) -> str:
    """Render a header or data row; *widths* holds the padded width per column."""
    cells: list[str] = []
    for c in range(table.column_count):
        content = table.cell(row_index, c)
        if c < break_index or (c == break_index and len(content) <= widths[c]):
            content = pad_cell(content, widths[c], alignments[c])
        cells.append(compact_cell(content, options))
    return "|" + "|".join(cells) + "|"


def _render_separator(
    table: Table,
    widths: list[int],
    break_index: int,
    alignments: list[ColumnAlignment],
    options: FormatOptions,
) -> str:
    """Render the separator row under the same width plan as the other rows."""
    n_cols = table.column_count
    header_widths = [max(MIN_COLUMN_WIDTH, len(table.cell(0, c))) for c in range(n_cols)]
    # Unpadded dashes must span the padding spaces to line up with padded cells
    extra = 2 if options.cell_padding and not options.separator_padding else 0
    # Ratios override the break-column plan, scaled to the full content widths
    if options.keep_separator_ratios:
        original_lengths = [len(table.cell(table.separator_index, c).strip()) for c in range(n_cols)]
        ratio_widths = calculate_separator_ratios(original_lengths, sum(_content_widths(table)))
        cells = [build_separator_cell("", ratio_widths[c] + extra, options, alignments[c]) for c in range(n_cols)]
        return "|" + "|".join(cells) + "|"

    cells = []
    for c in range(n_cols):
        aligned = c < break_index or (c == break_index and len(table.cell(0, c)) <= widths[c])
        if aligned:
            cells.append(build_separator_cell("", widths[c] + extra, options, alignments[c]))
        else:
            cells.append(build_separator_cell("", header_widths[c] + extra, options, alignments[c]))
    return "|" + "|".join(cells) + "|"


def format_table(table: Table, options: FormatOptions | None = None) -> list[str]:
    """Render *table* with aligned columns under the options' width budget."""
    options = options or FormatOptions()
    n_cols = table.column_count
    padding_per_cell = 2 if options.cell_padding else 0

    column_widths = _content_widths(table)
    break_index, width_before_break = _find_break_column(column_widths, options.max_width, padding_per_cell)

    # Padded width per column: full width before the break, fitting width at it
    widths = list(column_widths)
    if break_index < n_cols:
        available_width = options.max_width - width_before_break - padding_per_cell - 1
        widths[break_index] = _fitting_width(table, break_index, available_width)
        logger.debug(
            "Break column %d (available %d, fitting %d) at max width %d",
            break_index,
            available_width,
            widths[break_index],
            options.max_width,
        )

    if options.preserve_alignment:
        alignments = [table.alignment(c) for c in range(n_cols)]
    else:
        alignments = [ColumnAlignment.NONE] * n_cols

    lines: list[str] = []
    for row_index in range(len(table.rows)):
        if row_index == table.separator_index:
            lines.append(_render_separator(table, widths, break_index, alignments, options))
        else:
            lines.append(_render_row(table, row_index, widths, break_index, alignments, options))
    return lines
