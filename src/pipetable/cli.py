"""Command-line front end for the pipe-table engine.

Reads a text file, applies one table operation and writes the result to
stdout (or back to the file with ``--in-place``).  Options come from the
``PIPETABLE_*`` environment / ``.env`` settings, with a few command-line
overrides.

Usage:
    pipetable format README.md --max-width 100 --in-place
    pipetable sort notes.md --line 12 --column 2 --numeric --descending
    pipetable to-csv notes.md --line 12
    pipetable from-csv data.csv
"""

import argparse
import logging
import sys
from pathlib import Path

from pipetable.config import Settings, load_settings
from pipetable.pipeline import (
    compact_all_tables,
    edit_table_at,
    format_all_tables,
    reformat_all_tables,
    render_table,
    replace_table_lines,
)
from pipetable.tables.compact import compact_table
from pipetable.tables.detection import find_table_at_position, find_tables, is_table_formatted
from pipetable.tables.formatting import format_table
from pipetable.tables.interchange import parse_csv, table_to_csv, table_to_html
from pipetable.tables.mutators import add_row_numbers, remove_row_numbers, sort_table, transpose_table
from pipetable.tables.schema import Rejection, SortOptions, Table

logger = logging.getLogger(__name__)


# ─── Helpers ─────────────────────────────────────────────────────────────────


def _read_lines(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8").split("\n")


def _emit(lines: list[str], args: argparse.Namespace) -> None:
    text = "\n".join(lines)
    if args.in_place:
        args.file.write_text(text, encoding="utf-8")
        logger.info("Wrote %s", args.file)
    else:
        sys.stdout.write(text if text.endswith("\n") else text + "\n")


def _locate(lines: list[str], line: int | None, settings: Settings) -> Table | None:
    """Table at *line*, or the first table in the document when no line is given."""
    if line is not None:
        return find_table_at_position(lines, line, settings.ignore_code_blocks)
    tables = find_tables(lines, settings.ignore_code_blocks)
    return tables[0] if tables else None


def _sort_options(args: argparse.Namespace, settings: Settings) -> SortOptions:
    sort_type = "numeric" if args.numeric else "date" if args.date else "text"
    return SortOptions(
        column_index=args.column,
        direction="descending" if args.descending else "ascending",
        sort_type=sort_type,
        case_sensitive=args.case_sensitive,
        keep_header_row=settings.sort.keep_header_row,
    )


# ─── Commands ────────────────────────────────────────────────────────────────


def _run_document(args: argparse.Namespace, settings: Settings) -> int:
    """compact / format / reformat, for one table or the whole document."""
    lines = _read_lines(args.file)
    format_options = settings.formatting
    if getattr(args, "max_width", None) is not None:
        format_options = format_options.model_copy(update={"max_width": args.max_width})

    if args.line is None:
        if args.command == "compact":
            _emit(compact_all_tables(lines, settings.compact, settings.ignore_code_blocks), args)
        elif args.command == "format":
            _emit(format_all_tables(lines, format_options, settings.ignore_code_blocks), args)
        else:
            _emit(reformat_all_tables(lines, settings.compact, format_options, settings.ignore_code_blocks), args)
        return 0

    table = find_table_at_position(lines, args.line, settings.ignore_code_blocks)
    if table is None:
        logger.warning("No table found at line %d", args.line)
        return 1

    if args.command == "compact":
        new_lines = compact_table(table, settings.compact)
    elif args.command == "format":
        new_lines = format_table(table, format_options)
    else:
        new_lines = render_table(table, is_table_formatted(table, lines), settings.compact, format_options)
    _emit(replace_table_lines(lines, table, new_lines), args)
    return 0


def _run_edit(args: argparse.Namespace, settings: Settings) -> int:
    """Structural edits on the table at --line, re-rendered in its current mode."""
    edits = {
        "sort": lambda table: sort_table(table, _sort_options(args, settings)),
        "transpose": transpose_table,
        "add-row-numbers": lambda table: add_row_numbers(table, settings.row_numbers),
        "remove-row-numbers": lambda table: remove_row_numbers(table, settings.row_numbers),
    }
    lines = _read_lines(args.file)
    result = edit_table_at(
        lines,
        args.line,
        edits[args.command],
        settings.compact,
        settings.formatting,
        settings.ignore_code_blocks,
    )
    if isinstance(result, Rejection):
        logger.warning("%s", result.reason)
        return 1
    if result is None:
        logger.warning("Nothing to do: no table (or no row numbers) at line %d", args.line)
        return 1
    _emit(result, args)
    return 0


def _run_export(args: argparse.Namespace, settings: Settings) -> int:
    """to-csv / to-html for one table; the document itself is left alone."""
    lines = _read_lines(args.file)
    table = _locate(lines, args.line, settings)
    if table is None:
        logger.warning("No table found in %s", args.file)
        return 1
    text = table_to_csv(table, settings.csv) if args.command == "to-csv" else table_to_html(table, settings.html)
    sys.stdout.write(text + "\n")
    return 0


def _run_import(args: argparse.Namespace, settings: Settings) -> int:
    """from-csv: render delimited text as a formatted pipe table."""
    csv_options = settings.csv.model_copy(update={"delimiter": args.delimiter or "auto"})
    table = parse_csv(args.file.read_text(encoding="utf-8"), csv_options)
    if table is None:
        logger.warning("No rows found in %s", args.file)
        return 1
    sys.stdout.write("\n".join(format_table(table, settings.formatting)) + "\n")
    return 0


# ─── Argument Parsing ────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pipetable", description="Reformat, edit and convert pipe tables")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("compact", "Compact tables (minimal whitespace)"),
        ("format", "Format tables (aligned columns)"),
        ("reformat", "Re-render tables in the mode they are written in"),
    ):
        cmd = commands.add_parser(name, help=help_text)
        cmd.add_argument("file", type=Path)
        cmd.add_argument("--line", type=int, help="Only the table containing this 0-based line")
        cmd.add_argument("--in-place", action="store_true", help="Rewrite the file instead of printing")
        if name != "compact":
            cmd.add_argument("--max-width", type=int, help="Maximum line width for formatting (0 = unlimited)")
        cmd.set_defaults(handler=_run_document)

    for name, help_text in (
        ("sort", "Sort the data rows by a column"),
        ("transpose", "Swap rows and columns"),
        ("add-row-numbers", "Add or refresh a leading row-number column"),
        ("remove-row-numbers", "Remove the leading row-number column"),
    ):
        cmd = commands.add_parser(name, help=help_text)
        cmd.add_argument("file", type=Path)
        cmd.add_argument("--line", type=int, required=True, help="A 0-based line inside the table")
        cmd.add_argument("--in-place", action="store_true", help="Rewrite the file instead of printing")
        if name == "sort":
            cmd.add_argument("--column", type=int, default=0, help="0-based column to sort by (default: 0)")
            cmd.add_argument("--descending", action="store_true")
            cmd.add_argument("--case-sensitive", action="store_true")
            kind = cmd.add_mutually_exclusive_group()
            kind.add_argument("--numeric", action="store_true", help="Compare the first number in each cell")
            kind.add_argument("--date", action="store_true", help="Compare cells as calendar dates")
        cmd.set_defaults(handler=_run_edit)

    for name, help_text in (("to-csv", "Print a table as CSV"), ("to-html", "Print a table as HTML")):
        cmd = commands.add_parser(name, help=help_text)
        cmd.add_argument("file", type=Path)
        cmd.add_argument("--line", type=int, help="A 0-based line inside the table (default: first table)")
        cmd.set_defaults(handler=_run_export)

    cmd = commands.add_parser("from-csv", help="Print CSV/TSV text as a formatted pipe table")
    cmd.add_argument("file", type=Path)
    cmd.add_argument("--delimiter", help="Field delimiter (default: detect tab / semicolon / comma)")
    cmd.set_defaults(handler=_run_import)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    return args.handler(args, load_settings())


if __name__ == "__main__":
    sys.exit(main())
