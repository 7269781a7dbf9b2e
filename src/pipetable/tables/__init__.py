"""Pipe-table parsing, layout and conversion engine.

Submodules:
  patterns     -- compiled regex patterns and constant tuples
  classifiers  -- line classification and fenced code-block ranges
  schema       -- Table, Rejection and option-record Pydantic models
  detection    -- table discovery, row parsing, cursor helpers, mode detection
  widths       -- column widths, cell padding, separator cells and ratios
  compact      -- minimal-whitespace rendering
  formatting   -- aligned rendering with the max-width break-column policy
  mutators     -- row/column edits, row numbers, sort, transpose
  interchange  -- CSV and HTML conversion, empty-table scaffold
"""
