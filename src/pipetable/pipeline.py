"""Document-level table rewrites.

Splices rendered tables back into the document's line list.  When several
tables are rewritten in one pass they are applied from the highest
``start_line`` to the lowest, so a rewrite that changes a table's line count
never shifts the spans of the tables above it.

Edits keep the table in the mode it was written in: a table that was
formatted (aligned) is re-rendered with ``format_table``, a compact one with
``compact_table``.
"""

import logging
from typing import Callable

from pipetable.tables.compact import compact_table
from pipetable.tables.detection import find_table_at_position, find_tables, is_table_formatted
from pipetable.tables.formatting import format_table
from pipetable.tables.schema import CompactOptions, FormatOptions, Rejection, Table

logger = logging.getLogger(__name__)

TableEdit = Callable[[Table], Table | Rejection | None]


# ─── Splicing ────────────────────────────────────────────────────────────────


def replace_table_lines(lines: list[str], table: Table, new_lines: list[str]) -> list[str]:
    """Return a new document with the table's [start_line, end_line] span replaced."""
    return lines[: table.start_line] + list(new_lines) + lines[table.end_line + 1 :]


def apply_rewrites(lines: list[str], rewrites: list[tuple[Table, list[str]]]) -> list[str]:
    """Apply several (table, new_lines) rewrites, bottom-most table first."""
    result = list(lines)
    for table, new_lines in sorted(rewrites, key=lambda item: item[0].start_line, reverse=True):
        result = replace_table_lines(result, table, new_lines)
    return result


# ─── Rendering ───────────────────────────────────────────────────────────────


def render_table(
    table: Table,
    was_formatted: bool,
    compact_options: CompactOptions | None = None,
    format_options: FormatOptions | None = None,
) -> list[str]:
    """Render *table* in formatted mode or compact mode."""
    if was_formatted:
        return format_table(table, format_options)
    return compact_table(table, compact_options)


def compact_all_tables(
    lines: list[str],
    options: CompactOptions | None = None,
    ignore_code_blocks: bool = False,
) -> list[str]:
    tables = find_tables(lines, ignore_code_blocks)
    logger.info("Compacting %d table(s)", len(tables))
    return apply_rewrites(lines, [(table, compact_table(table, options)) for table in tables])


def format_all_tables(
    lines: list[str],
    options: FormatOptions | None = None,
    ignore_code_blocks: bool = False,
) -> list[str]:
    tables = find_tables(lines, ignore_code_blocks)
    logger.info("Formatting %d table(s)", len(tables))
    return apply_rewrites(lines, [(table, format_table(table, options)) for table in tables])


def reformat_all_tables(
    lines: list[str],
    compact_options: CompactOptions | None = None,
    format_options: FormatOptions | None = None,
    ignore_code_blocks: bool = False,
) -> list[str]:
    """Re-render every table in the mode it is currently written in."""
    tables = find_tables(lines, ignore_code_blocks)
    rewrites = []
    for table in tables:
        was_formatted = is_table_formatted(table, lines)
        rewrites.append((table, render_table(table, was_formatted, compact_options, format_options)))
    logger.info("Reformatted %d table(s)", len(tables))
    return apply_rewrites(lines, rewrites)


# ─── Positional Edits ────────────────────────────────────────────────────────


def edit_table_at(
    lines: list[str],
    line_number: int,
    edit: TableEdit,
    compact_options: CompactOptions | None = None,
    format_options: FormatOptions | None = None,
    ignore_code_blocks: bool = False,
) -> list[str] | Rejection | None:
    """Apply *edit* to the table at *line_number* and splice the result back.

    Returns the new document, ``None`` when there is no table at that line
    (or the edit found nothing to do), or the edit's ``Rejection``.
    """
    table = find_table_at_position(lines, line_number, ignore_code_blocks)
    if table is None:
        logger.debug("No table at line %d", line_number)
        return None

    result = edit(table)
    if result is None or isinstance(result, Rejection):
        return result

    was_formatted = is_table_formatted(table, lines)
    return replace_table_lines(lines, table, render_table(result, was_formatted, compact_options, format_options))
