"""Column widths, cell padding and separator-cell construction.

Shared by the compact renderer (compact.py) and the max-width renderer
(formatting.py).  Widths are plain character counts of the trimmed cell
text.
"""

import math

from pipetable.tables.patterns import MIN_COLUMN_WIDTH, SEPARATOR_MARKERS
from pipetable.tables.schema import ColumnAlignment, PaddingOptions, Table


def calculate_column_widths(table: Table) -> list[int]:
    """Return the longest cell length per column over every row."""
    widths = [0] * table.column_count
    for row in table.rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))
    return widths


def pad_cell(content: str, width: int, alignment: ColumnAlignment = ColumnAlignment.NONE) -> str:
    """Pad *content* with spaces to *width* according to *alignment*.

    Content already at or beyond the width is returned unchanged.  Centered
    content gets the odd space on the right.
    """
    padding = width - len(content)
    if padding <= 0:
        return content
    if alignment == ColumnAlignment.RIGHT:
        return " " * padding + content
    if alignment == ColumnAlignment.CENTER:
        left = padding // 2
        return " " * left + content + " " * (padding - left)
    return content + " " * padding


def separator_cell_for(alignment: ColumnAlignment) -> str:
    """Return the canonical three-dash separator cell for an alignment."""
    return SEPARATOR_MARKERS[alignment.value]


def build_separator_cell(
    cell: str,
    width: int,
    options: PaddingOptions,
    alignment: ColumnAlignment | None = None,
) -> str:
    """Build one separator cell of (at least) *width* characters.

    Colons come from *alignment* when given, otherwise from the existing
    *cell*.  Each colon takes the place of one dash; at least one dash is
    always kept.  A space is added on both sides only when both cell and
    separator padding are enabled.
    """
    if alignment is None:
        trimmed = cell.strip()
        left = trimmed.startswith(":")
        right = trimmed.endswith(":")
    else:
        left = alignment in (ColumnAlignment.LEFT, ColumnAlignment.CENTER)
        right = alignment in (ColumnAlignment.RIGHT, ColumnAlignment.CENTER)

    dash_count = max(MIN_COLUMN_WIDTH, width) - int(left) - int(right)
    dashes = "-" * max(1, dash_count)
    separator = f"{':' if left else ''}{dashes}{':' if right else ''}"

    if options.cell_padding and options.separator_padding:
        return f" {separator} "
    return separator


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def calculate_separator_ratios(original_lengths: list[int], target_total: int) -> list[int]:
    """Scale separator widths to *target_total* while keeping their proportions.

    Each column gets ``round(length / sum(lengths) * target_total)`` floored at
    3.  When every original length is zero the total is split evenly.
    """
    if not original_lengths:
        return []
    original_total = sum(original_lengths)
    if original_total == 0:
        equal = target_total // len(original_lengths)
        return [max(MIN_COLUMN_WIDTH, equal)] * len(original_lengths)
    return [
        max(MIN_COLUMN_WIDTH, _round_half_up(length / original_total * target_total)) for length in original_lengths
    ]
