"""Environment-driven configuration for the table engine.

Every option record can be set through ``PIPETABLE_*`` environment
variables, optionally from a ``.env`` file in the project root.  Unset or
unparseable values fall back to the record's default.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pipetable.tables.schema import (
    CompactOptions,
    CsvOptions,
    FormatOptions,
    HtmlOptions,
    RowNumberOptions,
    SortOptions,
)

logger = logging.getLogger(__name__)

ROOT = Path(__file__).parent.parent.parent.resolve()

ENV_PREFIX = "PIPETABLE_"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


class Settings(BaseModel):
    """Every option record plus the locator's code-block flag."""

    model_config = ConfigDict(frozen=True)

    compact: CompactOptions = Field(default_factory=CompactOptions)
    formatting: FormatOptions = Field(default_factory=FormatOptions)
    row_numbers: RowNumberOptions = Field(default_factory=RowNumberOptions)
    sort: SortOptions = Field(default_factory=SortOptions)
    csv: CsvOptions = Field(default_factory=CsvOptions)
    html: HtmlOptions = Field(default_factory=HtmlOptions)
    ignore_code_blocks: bool = True


# ─── Raw Value Parsing ───────────────────────────────────────────────────────


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logger.warning("Ignoring %s%s=%r: expected a boolean", ENV_PREFIX, name, raw)
    return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning("Ignoring %s%s=%r: expected an integer", ENV_PREFIX, name, raw)
        return default


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(ENV_PREFIX + name)
    # Delimiters such as a tab are whitespace, so only an empty value means unset
    return default if raw is None or raw == "" else raw


def _env_delimiter(name: str, default: str) -> str:
    raw = _env_str(name, default)
    # Allow the escape sequence, since a literal tab is awkward in .env files
    return "\t" if raw in ("\\t", "tab") else raw


# ─── Option Records ──────────────────────────────────────────────────────────


def _build(model: type[BaseModel], values: dict) -> BaseModel:
    """Construct an option record, falling back to its defaults on invalid values."""
    try:
        return model(**values)
    except ValidationError as exc:
        logger.warning("Invalid %s settings, using defaults: %s", model.__name__, exc)
        return model()


def load_settings(env_file: Path | None = None) -> Settings:
    """Read every option record from the environment (and .env file)."""
    load_dotenv(env_file or ROOT / ".env")

    compact_defaults = CompactOptions()
    compact = _build(
        CompactOptions,
        {
            "cell_padding": _env_bool("COMPACT_CELL_PADDING", compact_defaults.cell_padding),
            "separator_padding": _env_bool("COMPACT_SEPARATOR_PADDING", compact_defaults.separator_padding),
            "align_separator_with_header": _env_bool(
                "COMPACT_ALIGN_SEPARATOR_WITH_HEADER", compact_defaults.align_separator_with_header
            ),
            "keep_separator_ratios": _env_bool("COMPACT_KEEP_SEPARATOR_RATIOS", compact_defaults.keep_separator_ratios),
        },
    )

    format_defaults = FormatOptions()
    format_options = _build(
        FormatOptions,
        {
            "max_width": _env_int("FORMAT_MAX_WIDTH", format_defaults.max_width),
            "cell_padding": _env_bool("FORMAT_CELL_PADDING", format_defaults.cell_padding),
            "separator_padding": _env_bool("FORMAT_SEPARATOR_PADDING", format_defaults.separator_padding),
            "preserve_alignment": _env_bool("FORMAT_PRESERVE_ALIGNMENT", format_defaults.preserve_alignment),
            "keep_separator_ratios": _env_bool("FORMAT_KEEP_SEPARATOR_RATIOS", format_defaults.keep_separator_ratios),
        },
    )

    row_number_defaults = RowNumberOptions()
    row_numbers = _build(
        RowNumberOptions,
        {
            "start_number": _env_int("ROW_NUMBERS_START", row_number_defaults.start_number),
            "header_text": _env_str("ROW_NUMBERS_HEADER", row_number_defaults.header_text),
            "alignment": _env_str("ROW_NUMBERS_ALIGNMENT", row_number_defaults.alignment.value),
        },
    )

    sort = _build(SortOptions, {"keep_header_row": _env_bool("SORT_KEEP_HEADER_ROW", True)})

    csv_defaults = CsvOptions()
    csv = _build(
        CsvOptions,
        {
            "delimiter": _env_delimiter("CSV_DELIMITER", csv_defaults.delimiter),
            "has_header": _env_bool("CSV_HAS_HEADER", csv_defaults.has_header),
            "trim_cells": _env_bool("CSV_TRIM_CELLS", csv_defaults.trim_cells),
            "quote_strings": _env_str("CSV_QUOTE_STRINGS", csv_defaults.quote_strings),
            "include_header": _env_bool("CSV_INCLUDE_HEADER", csv_defaults.include_header),
        },
    )

    html_defaults = HtmlOptions()
    html = _build(
        HtmlOptions,
        {
            "inline_styles": _env_bool("HTML_INLINE_STYLES", html_defaults.inline_styles),
            "semantic_tags": _env_bool("HTML_SEMANTIC_TAGS", html_defaults.semantic_tags),
            "indent": _env_int("HTML_INDENT", html_defaults.indent),
        },
    )

    return Settings(
        compact=compact,
        formatting=format_options,
        row_numbers=row_numbers,
        sort=sort,
        csv=csv,
        html=html,
        ignore_code_blocks=_env_bool("IGNORE_CODE_BLOCKS", True),
    )
