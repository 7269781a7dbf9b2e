"""Line classification helpers for pipe-table detection.

Each ``is_*`` function takes one line of text and returns True/False to
classify it as a table row, a separator row or a box-drawing row.  Fenced
code blocks are located over the whole line list so the locator can skip
tables that are only examples inside code.
"""

from pipetable.tables.patterns import BOX_DRAWING_CHARS, FENCE_OPEN_RE, SEPARATOR_CELL_RE
from pipetable.tables.schema import LineKind


def is_table_row(line: str) -> bool:
    """Return True if the trimmed line starts and ends with a pipe."""
    trimmed = line.strip()
    return trimmed.startswith("|") and trimmed.endswith("|")


def is_table_separator(line: str) -> bool:
    """Return True for an alignment row such as ``|:---|---:|``."""
    if not is_table_row(line):
        return False
    trimmed = line.strip()
    # A lone "|" has no inner content to check
    if len(trimmed) < 2:
        return False
    cells = trimmed[1:-1].split("|")
    return all(SEPARATOR_CELL_RE.match(cell) for cell in cells)


def is_box_drawing_row(line: str) -> bool:
    """Return True if the line is bounded by Unicode box-drawing characters.

    Such rows are recognized so they are not mistaken for prose, but they are
    never parsed into a Table or reformatted.
    """
    trimmed = line.strip()
    if not trimmed:
        return False
    return trimmed[0] in BOX_DRAWING_CHARS and trimmed[-1] in BOX_DRAWING_CHARS


def classify_line(line: str) -> LineKind:
    """Return the LineKind of a single line (separator wins over plain row)."""
    if is_table_separator(line):
        return LineKind.SEPARATOR
    if is_table_row(line):
        return LineKind.TABLE_ROW
    if is_box_drawing_row(line):
        return LineKind.BOX_DRAWING
    return LineKind.TEXT


# ─── Fenced Code Blocks ──────────────────────────────────────────────────────


def _closes_fence(line: str, fence_char: str) -> bool:
    """Return True if the line consists only of the fence character."""
    trimmed = line.strip()
    return bool(trimmed) and trimmed.startswith(fence_char) and not trimmed.replace(fence_char, "")


def find_code_block_ranges(lines: list[str]) -> list[tuple[int, int]]:
    """Return inclusive (start, end) line ranges of fenced code blocks.

    A block opens on three or more backticks or tildes and closes on the next
    line made only of the same fence character.  An unclosed fence runs to
    the end of the document.
    """
    ranges: list[tuple[int, int]] = []
    i = 0
    n = len(lines)
    while i < n:
        match = FENCE_OPEN_RE.match(lines[i])
        if not match:
            i += 1
            continue
        fence_char = match.group(1)[0]
        start = i
        i += 1
        while i < n and not _closes_fence(lines[i], fence_char):
            i += 1
        end = min(i, n - 1)
        ranges.append((start, end))
        i = end + 1
    return ranges


def is_line_in_code_block(line_number: int, ranges: list[tuple[int, int]]) -> bool:
    """Return True if *line_number* falls inside any inclusive (start, end) range."""
    return any(start <= line_number <= end for start, end in ranges)
