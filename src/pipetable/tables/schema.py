"""Pydantic models for pipe-delimited tables and the options that drive them.

A ``Table`` is produced fresh from a line snapshot on every request and is
never mutated: every mutator returns a new instance (or a ``Rejection``).
Option records are frozen value objects handed in by the caller.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ColumnAlignment(str, Enum):
    """Per-column alignment encoded by the colons of a separator cell."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    NONE = "none"


class LineKind(str, Enum):
    """Classification of a single document line."""

    SEPARATOR = "separator"
    TABLE_ROW = "table_row"
    BOX_DRAWING = "box_drawing"
    TEXT = "text"


class Table(BaseModel):
    """A pipe table located in a document.

    ``start_line`` / ``end_line`` are inclusive line offsets into the source
    document.  ``rows`` holds trimmed cell text, separator row included, and
    may be ragged: a row shorter than the header is read as empty cells at the
    missing indices.
    """

    model_config = ConfigDict(frozen=True)

    start_line: int = 0
    end_line: int = 0
    rows: list[list[str]]
    separator_index: int = 1
    alignments: list[ColumnAlignment] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_shape(self) -> "Table":
        """Ensure there is a header plus separator and the indices are in range."""
        if len(self.rows) < 2:
            raise ValueError(f"A table needs at least 2 rows, got {len(self.rows)}")
        if not 0 <= self.separator_index < len(self.rows):
            raise ValueError(f"separator_index {self.separator_index} outside 0..{len(self.rows) - 1}")
        if self.end_line < self.start_line:
            raise ValueError(f"end_line {self.end_line} precedes start_line {self.start_line}")
        return self

    @property
    def header(self) -> list[str]:
        """The header row."""
        return self.rows[0]

    @property
    def column_count(self) -> int:
        """Length of the widest row; shorter rows read as padded with empty cells."""
        return max(len(row) for row in self.rows)

    @property
    def data_row_indices(self) -> list[int]:
        """Indices of every row that is neither the header nor the separator."""
        return [i for i in range(1, len(self.rows)) if i != self.separator_index]

    def cell(self, row_index: int, column_index: int) -> str:
        """Return the cell text, or an empty string where a ragged row has none."""
        row = self.rows[row_index]
        return row[column_index] if column_index < len(row) else ""

    def alignment(self, column_index: int) -> ColumnAlignment:
        """Return the column alignment, or NONE past the recorded alignments."""
        if column_index < len(self.alignments):
            return self.alignments[column_index]
        return ColumnAlignment.NONE


class Rejection(BaseModel):
    """Returned instead of a Table when a mutation is not allowed."""

    model_config = ConfigDict(frozen=True)

    reason: str


# ─── Option Records ───────────────────────────────────────────────────────────


class PaddingOptions(BaseModel):
    """Whitespace settings shared by the compact and max-width renderers."""

    model_config = ConfigDict(frozen=True)

    cell_padding: bool = True
    separator_padding: bool = True
    keep_separator_ratios: bool = False


class CompactOptions(PaddingOptions):
    """Minimal-whitespace rendering."""

    align_separator_with_header: bool = True


class FormatOptions(PaddingOptions):
    """Aligned rendering; ``max_width`` 0 means unlimited."""

    max_width: int = Field(default=0, ge=0)
    preserve_alignment: bool = True


class RowNumberOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_number: int = 1
    header_text: str = "#"
    alignment: ColumnAlignment = ColumnAlignment.RIGHT


class SortOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    column_index: int = Field(default=0, ge=0)
    direction: Literal["ascending", "descending"] = "ascending"
    sort_type: Literal["text", "numeric", "date"] = "text"
    case_sensitive: bool = False
    keep_header_row: bool = True


class CsvOptions(BaseModel):
    """CSV parse/emit settings.  ``delimiter="auto"`` asks parse_csv to detect it."""

    model_config = ConfigDict(frozen=True)

    delimiter: str = ","
    has_header: bool = True
    trim_cells: bool = True
    quote_strings: Literal["always", "auto", "never"] = "auto"
    include_header: bool = True


class HtmlOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    inline_styles: bool = True
    semantic_tags: bool = True
    indent: int = Field(default=2, ge=0)
