"""
csv_bridge.csv_parser - Low-level line reading and field extraction.

Responsibilities:
  • BOM removal (UTF-8 / UTF-8-SIG)
  • Splitting delimited lines into whitespace-trimmed fields
  • Resolving 1-based mapped columns, failing loudly when out of range
  • Iterating the data lines of a file after the skipped header rows

The files are plain "split on the separator" text, not RFC 4180 CSV:
quoted separators are not special.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Iterator

from mapping import ColumnMapping

# Fields read from a line for each stored part
PART_FIELDS: tuple[str, ...] = (
    "part_number",
    "device_type",
    "device_name",
    "value",
    "positive_tolerance",
    "negative_tolerance",
    "case_name",
    "case_identifier",
)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class ColumnIndexError(IndexError):
    """A mapped column lies beyond the last field of a line."""

    def __init__(self, field_name: str, column: int, field_count: int,
                 line_no: int | None = None, source: str | Path | None = None):
        self.field_name = field_name
        self.column = column
        self.field_count = field_count
        self.line_no = line_no
        self.source = source
        where = ""
        if source is not None:
            where = f"{Path(source).name}"
        if line_no is not None:
            where = f"{where}:{line_no}" if where else f"line {line_no}"
        prefix = f"{where}: " if where else ""
        super().__init__(
            f"{prefix}{field_name} column {column} out of range "
            f"(line has {field_count} fields)"
        )


def read_lines(path: str | Path) -> list[str]:
    """Return every line of *path* without terminators."""
    text = _decode(Path(path).read_bytes())
    if not text:
        return []
    lines = _LINE_BREAK.split(text)
    if lines and lines[-1] == "":
        lines.pop()   # trailing newline, not an extra line
    return lines


def read_first_data_line(path: str | Path) -> str:
    """The first line of *path* verbatim, or "" for an empty file."""
    lines = read_lines(path)
    return lines[0] if lines else ""


def mark_columns(line: str, separator: str = ",") -> str:
    """
    Suffix each token of *line* with its 1-based column number so a user
    can pick positions for the mapping, e.g. ``"Ref(1),PN(2)"``.
    """
    tokens = split_line(line, separator)
    return separator.join(f"{tok}({i})" for i, tok in enumerate(tokens, start=1))


def split_line(line: str, separator: str) -> list[str]:
    if not separator:
        raise ValueError("field separator must not be empty")
    return [f.strip() for f in line.split(separator)]


def is_blank(line: str) -> bool:
    return not line.strip()


def field_at(fields: list[str], column: int | None, field_name: str = "field",
             line_no: int | None = None, source: str | Path | None = None) -> str:
    """Value at 1-based *column*, or ColumnIndexError.  An unmapped column reads as ""."""
    if column is None:
        return ""
    if column < 1 or column > len(fields):
        raise ColumnIndexError(field_name, column, len(fields), line_no, source)
    return fields[column - 1]


def extract_fields(fields: list[str], mapping: ColumnMapping,
                   names: Iterable[str] = PART_FIELDS,
                   line_no: int | None = None,
                   source: str | Path | None = None) -> dict[str, str]:
    """Pick the mapped *names* out of an already-split line."""
    return {
        name: field_at(fields, mapping.column_for(name), name, line_no, source)
        for name in names
    }


def iter_data_lines(mapping: ColumnMapping, path: str | Path) -> Iterator[tuple[int, str]]:
    """
    Yield ``(line_no, line)`` for the lines after the skipped header rows,
    ignoring blank ones.  Line numbers are 1-based file positions.
    """
    lines = read_lines(path)
    for idx in range(mapping.skipped_row_count, len(lines)):
        line = lines[idx]
        if is_blank(line):
            continue
        yield idx + 1, line


def iter_part_rows(mapping: ColumnMapping, separator: str,
                   path: str | Path) -> Iterator[tuple[int, dict[str, str]]]:
    """
    Yield ``(line_no, fields)`` for every data line of *path*, where
    *fields* holds the eight stored part attributes.  For a line with a
    blank part number only ``{"part_number": ""}`` is yielded and the
    other columns are not resolved.
    """
    for line_no, line in iter_data_lines(mapping, path):
        fields = split_line(line, separator)
        part_number = field_at(fields, mapping.part_number_column,
                               "part_number", line_no, path)
        if not part_number:
            yield line_no, {"part_number": ""}
            continue
        yield line_no, extract_fields(fields, mapping, PART_FIELDS, line_no, path)


def _decode(raw: bytes) -> str:
    # Strip UTF-8 BOM
    if raw.startswith(b"\xef\xbb\xbf"):
        raw = raw[3:]
    return raw.decode("utf-8", errors="replace")
