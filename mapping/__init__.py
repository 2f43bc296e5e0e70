"""
mapping - Column-position configuration for BOM CSV files.

Public API:
    ColumnMapping              → immutable column layout
    load(path) / save(path, m) → whole-document JSON read/write
    load_or_reset(path)        → load, regenerating defaults on bad data
    ConfigError                → malformed stored mapping
"""

from mapping.column_mapping import (                # noqa: F401
    ColumnMapping,
    ConfigError,
    FIELD_LABELS,
    load,
    load_or_reset,
    save,
)
