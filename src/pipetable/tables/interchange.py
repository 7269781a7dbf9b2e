"""CSV and HTML conversion, plus the empty-table scaffold.

CSV fields are scanned with an explicit two-state (inside / outside quotes)
loop so that doubled quotes inside a quoted field come out as one literal
quote.  Lines are split first, so a quoted field cannot span lines.
"""

import html
import logging
import re

from pipetable.tables.schema import ColumnAlignment, CsvOptions, HtmlOptions, Table
from pipetable.tables.widths import separator_cell_for

logger = logging.getLogger(__name__)

_LINE_BREAK_RE = re.compile(r"\r?\n")


# ─── CSV Parsing ─────────────────────────────────────────────────────────────


def detect_delimiter(text: str) -> str:
    """Guess the delimiter from raw counts: tab, then semicolon, then comma."""
    tabs = text.count("\t")
    semicolons = text.count(";")
    commas = text.count(",")
    if tabs > semicolons and tabs > commas:
        return "\t"
    if semicolons > commas:
        return ";"
    return ","


def parse_csv_line(line: str, delimiter: str = ",") -> list[str]:
    """Split one CSV line into raw (untrimmed) field values."""
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    while i < len(line):
        char = line[i]
        if char == '"':
            if in_quotes and line[i + 1 : i + 2] == '"':
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1
    fields.append("".join(current))
    return fields


def parse_csv(text: str, options: CsvOptions | None = None) -> Table | None:
    """Parse delimited text into a Table, or return None if there are no rows.

    With ``has_header`` the first line is the header and a plain separator row
    is inserted under it.  Without a header, ``Column 1``..``Column N`` header
    cells are generated so the result is still a valid pipe table.
    """
    options = options or CsvOptions()
    delimiter = detect_delimiter(text) if options.delimiter == "auto" else options.delimiter
    logger.debug("Parsing CSV with delimiter %r", delimiter)

    records: list[list[str]] = []
    for line in _LINE_BREAK_RE.split(text):
        if not line.strip():
            continue
        fields = parse_csv_line(line, delimiter)
        records.append([field.strip() for field in fields] if options.trim_cells else fields)
    if not records:
        return None

    n_cols = max(len(record) for record in records)
    records = [record + [""] * (n_cols - len(record)) for record in records]
    if options.has_header:
        header, data = records[0], records[1:]
    else:
        header, data = [f"Column {i + 1}" for i in range(n_cols)], records

    rows = [header, ["---"] * n_cols, *data]
    return Table(
        start_line=0,
        end_line=len(rows) - 1,
        rows=rows,
        separator_index=1,
        alignments=[ColumnAlignment.NONE] * n_cols,
    )


# ─── CSV Emitting ────────────────────────────────────────────────────────────


def _quote_csv_field(cell: str, delimiter: str, policy: str) -> str:
    needs_quotes = policy == "always" or (
        policy == "auto" and (delimiter in cell or "\n" in cell or '"' in cell)
    )
    if not needs_quotes:
        return cell
    return '"' + cell.replace('"', '""') + '"'


def table_to_csv(table: Table, options: CsvOptions | None = None) -> str:
    """Render the table as delimited text; the separator row is never emitted."""
    options = options or CsvOptions()
    delimiter = "," if options.delimiter == "auto" else options.delimiter

    lines: list[str] = []
    for r, row in enumerate(table.rows):
        if r == table.separator_index or (r == 0 and not options.include_header):
            continue
        lines.append(delimiter.join(_quote_csv_field(cell, delimiter, options.quote_strings) for cell in row))
    return "\n".join(lines)


# ─── HTML ────────────────────────────────────────────────────────────────────


def _style_attr(table: Table, column: int, options: HtmlOptions) -> str:
    alignment = table.alignment(column)
    if not options.inline_styles or alignment in (ColumnAlignment.NONE, ColumnAlignment.LEFT):
        return ""
    return f' style="text-align: {alignment.value}"'


def _html_row(table: Table, row_index: int, tag: str, options: HtmlOptions, depth: int) -> list[tuple[int, str]]:
    """Return (depth, markup) pairs for one <tr> element nested at *depth*."""
    cells = [
        (depth + 1, f"<{tag}{_style_attr(table, c, options)}>{html.escape(cell, quote=True)}</{tag}>")
        for c, cell in enumerate(table.rows[row_index])
    ]
    return [(depth, "<tr>"), *cells, (depth, "</tr>")]


def table_to_html(table: Table, options: HtmlOptions | None = None) -> str:
    """Render the table as an HTML <table> element.

    With ``indent == 0`` the markup is emitted on a single line.
    """
    options = options or HtmlOptions()
    data_rows = table.data_row_indices

    parts = [(0, "<table>")]
    if options.semantic_tags:
        parts += [(1, "<thead>"), *_html_row(table, 0, "th", options, 2), (1, "</thead>")]
        if data_rows:
            parts.append((1, "<tbody>"))
            for r in data_rows:
                parts += _html_row(table, r, "td", options, 2)
            parts.append((1, "</tbody>"))
    else:
        parts += _html_row(table, 0, "th", options, 1)
        for r in data_rows:
            parts += _html_row(table, r, "td", options, 1)
    parts.append((0, "</table>"))

    if options.indent == 0:
        return "".join(text for _, text in parts)
    return "\n".join(" " * (options.indent * depth) + text for depth, text in parts)


# ─── Scaffold ────────────────────────────────────────────────────────────────


def create_empty_table(
    rows: int,
    columns: int,
    alignment: ColumnAlignment = ColumnAlignment.LEFT,
) -> Table:
    """Build a header of ``Column 1``..``Column N`` over *rows* blank data rows."""
    columns = max(1, columns)
    header = [f"Column {i + 1}" for i in range(columns)]
    separator = [separator_cell_for(alignment)] * columns
    data = [[""] * columns for _ in range(max(0, rows))]
    all_rows = [header, separator, *data]
    return Table(
        start_line=0,
        end_line=len(all_rows) - 1,
        rows=all_rows,
        separator_index=1,
        alignments=[alignment] * columns,
    )
