"""
csv_bridge.exporter - Merge a source BOM with stored part attributes.

Each data line of the source file is looked up by part number.  Hits are
rewritten from the store (keeping the drawing reference of the source
line); misses and lines without a part number are copied through as-is.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import config
from csv_bridge.csv_parser import field_at, iter_data_lines, split_line
from db.records import PartRecord
from mapping import FIELD_LABELS, ColumnMapping

logger = logging.getLogger(__name__)


class PartLookup(Protocol):
    def get(self, part_number: str) -> PartRecord | None: ...


def output_path_for(source_path: str | Path, output_dir: str | Path) -> Path:
    """``<output_dir>/<source file name>.bom.csv``"""
    return Path(output_dir) / (Path(source_path).name + config.EXPORT_SUFFIX)


def header_line(mapping: ColumnMapping, separator: str) -> str:
    cells = _layout(mapping, {name: label for name, (_attr, label) in FIELD_LABELS.items()})
    return separator.join(cells)


def merged_line(mapping: ColumnMapping, separator: str,
                drawing_reference: str, record: PartRecord) -> str:
    values = {"drawing_reference": drawing_reference, "part_number": record.part_number}
    values.update(record.attributes())
    return separator.join(_layout(mapping, values))


def export_merge(
    mapping: ColumnMapping,
    separator: str,
    source_path: str | Path,
    output_dir: str | Path,
    store: PartLookup,
) -> Path:
    """
    Write the merged copy of *source_path* into *output_dir*.

    Returns the path written.  An existing file of the same name is
    overwritten.  OSError propagates unchanged for an unreadable source
    or an unwritable directory.
    """
    out_lines = [header_line(mapping, separator)]
    merged = echoed = 0

    for line_no, line in iter_data_lines(mapping, source_path):
        fields = split_line(line, separator)
        part_number = field_at(fields, mapping.part_number_column,
                               "part_number", line_no, source_path)
        record = store.get(part_number) if part_number else None
        if record is None:
            out_lines.append(line)
            echoed += 1
            continue

        drawing_reference = field_at(fields, mapping.drawing_reference_column,
                                     "drawing_reference", line_no, source_path)
        out_lines.append(merged_line(mapping, separator, drawing_reference, record))
        merged += 1

    out_path = output_path_for(source_path, output_dir)
    with open(out_path, "w", encoding="utf-8", newline="") as fh:
        fh.writelines(line + "\n" for line in out_lines)

    logger.info("Exported %s: %d merged, %d copied through", out_path, merged, echoed)
    return out_path


def _layout(mapping: ColumnMapping, values: dict[str, str]) -> list[str]:
    """
    Place *values* at their mapped columns and return them in column
    order, leaving out unmapped fields.  When two fields share a column
    the later one in FIELD_LABELS wins.
    """
    by_column: dict[int, str] = {}
    for name in FIELD_LABELS:
        column = mapping.column_for(name)
        if column is not None:
            by_column[column] = values[name]
    return [by_column[col] for col in sorted(by_column)]
