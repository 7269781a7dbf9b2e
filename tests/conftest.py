"""Shared test configuration and fixtures."""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from pipetable.config import ENV_PREFIX
from pipetable.tables.detection import find_tables

# Load .env from project root for all tests
root = Path(__file__).parent.parent.resolve()
load_dotenv(root / ".env")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every PIPETABLE_* variable so settings fall back to their defaults."""
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def padded_lines() -> list[str]:
    """A three-column table written with uneven padding."""
    return [
        "| Name       |   Age   |    City        |",
        "|------------|---------|----------------|",
        "| John Doe   |   30    | New York       |",
    ]


@pytest.fixture
def document_lines() -> list[str]:
    """Prose around two tables, the second one inside a fenced code block."""
    return [
        "# Inventory",
        "",
        "| Item | Qty |",
        "| :--- | ---: |",
        "| apple | 3 |",
        "| kiwi | 12 |",
        "",
        "```markdown",
        "| a | b |",
        "|---|---|",
        "| 1 | 2 |",
        "```",
        "done",
    ]


@pytest.fixture
def small_table():
    """Two data rows under a two-column header, starting at line 10."""
    lines = [""] * 10 + ["| a | b |", "|---|---|", "| 1 | 2 |", "| 3 | 4 |"]
    return find_tables(lines)[0]
