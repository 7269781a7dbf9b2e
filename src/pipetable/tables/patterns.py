"""Compiled regex patterns and constant tuples for pipe-table handling.

These patterns identify the structural pieces of a plain-text document that
the table engine cares about: table rows, separator cells, fenced code
blocks, box-drawing rows, and the numeric / row-number tokens used by the
mutators.  Used by classifiers.py, detection.py and mutators.py.
"""

import re

# ─── Table Row Patterns ───────────────────────────────────────────────────────

# One separator segment between pipes: optional colons around one or more dashes
SEPARATOR_CELL_RE = re.compile(r"^\s*:?-+:?\s*$")

# Opening fence of a code block: three or more backticks or tildes
FENCE_OPEN_RE = re.compile(r"^\s*(`{3,}|~{3,})")

# Box-drawing characters that can bound a rendered (non-pipe) table row
BOX_DRAWING_CHARS = frozenset("│┃┌┐└┘├┤┬┴┼─━╔╗╚╝║═╠╣╦╩╬")


# ─── Cell Content Patterns ────────────────────────────────────────────────────

# First signed / decimal numeric run inside a cell, e.g. "-12.5" in "€ -12.5 net"
NUMERIC_RUN_RE = re.compile(r"[-+]?\d*\.?\d+")

# Row-number cell: digits only
DIGITS_RE = re.compile(r"^\d+$")


# ─── String-Match Constants ───────────────────────────────────────────────────

# Header texts (lowercase) that mark an existing row-number column
ROW_NUMBER_HEADERS = ("#", "no", "no.", "nr", "nr.", "num", "row")

# Calendar formats tried, in order, when sorting a column by date
DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%d.%m.%Y",
    "%m/%d/%Y",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%b %d %Y",
    "%B %d %Y",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
)

# Default separator cell per alignment
SEPARATOR_MARKERS = {
    "left": ":---",
    "center": ":---:",
    "right": "---:",
    "none": "---",
}

# Smallest width a column or separator cell is ever rendered at
MIN_COLUMN_WIDTH = 3
