"""Compact rendering: minimal, configurable whitespace.

Cells keep their natural width (no alignment padding).  Separator cells are
three dashes wide, or as wide as the header cell above them when
``align_separator_with_header`` is set, or proportional to the original
separator when ``keep_separator_ratios`` is set.
"""

from pipetable.tables.patterns import MIN_COLUMN_WIDTH
from pipetable.tables.schema import CompactOptions, PaddingOptions, Table
from pipetable.tables.widths import build_separator_cell, calculate_separator_ratios


def compact_cell(cell: str, options: PaddingOptions) -> str:
    return f" {cell} " if options.cell_padding else cell


def compact_table_row(
    cells: list[str],
    is_separator: bool,
    options: CompactOptions | None = None,
    separator_widths: list[int] | None = None,
) -> str:
    """Render one row in compact form.

    *separator_widths* gives the target width per separator cell; columns
    without an entry use the three-dash minimum.
    """
    options = options or CompactOptions()
    if is_separator:
        widths = separator_widths or []
        rendered = [
            build_separator_cell(cell, widths[i] if i < len(widths) else MIN_COLUMN_WIDTH, options)
            for i, cell in enumerate(cells)
        ]
    else:
        rendered = [compact_cell(cell, options) for cell in cells]
    return "|" + "|".join(rendered) + "|"


def _separator_target_widths(table: Table, options: CompactOptions) -> list[int]:
    """Width each separator cell should have before any ratio scaling."""
    separator = table.rows[table.separator_index]
    if not options.align_separator_with_header:
        return [MIN_COLUMN_WIDTH] * len(separator)
    return [len(table.cell(0, i)) or MIN_COLUMN_WIDTH for i in range(len(separator))]


def compact_table(table: Table, options: CompactOptions | None = None) -> list[str]:
    """Render every row of *table* compactly and return the new lines."""
    options = options or CompactOptions()
    separator_widths = _separator_target_widths(table, options)

    if options.keep_separator_ratios:
        original_lengths = [len(cell.strip()) for cell in table.rows[table.separator_index]]
        separator_widths = calculate_separator_ratios(original_lengths, sum(separator_widths))

    return [
        compact_table_row(row, index == table.separator_index, options, separator_widths)
        for index, row in enumerate(table.rows)
    ]
