"""
csv_bridge - Line-oriented BOM CSV reading and the export merge.

Public API:
    read_first_data_line(path)          → first line, verbatim
    mark_columns(line)                  → "tok(1),tok(2),…" display aid
    iter_part_rows(mapping, sep, path)  → parsed rows for import
    export_merge(mapping, sep, src, out_dir, store) → merged file path
"""

from csv_bridge.csv_parser import (      # noqa: F401
    ColumnIndexError,
    iter_part_rows,
    mark_columns,
    read_first_data_line,
    split_line,
)
from csv_bridge.exporter import export_merge, output_path_for   # noqa: F401
from csv_bridge.report import ImportReport                      # noqa: F401
