"""
mapping.column_mapping - Which 1-based column holds which part field.

The mapping is stored as one small JSON document.  It is always read and
written whole; there are no partial updates.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a stored column mapping cannot be used."""
    pass


# Semantic field → (mapping attribute, export header label).
# Order here is the order fields are laid out when columns collide.
FIELD_LABELS: dict[str, tuple[str, str]] = {
    "drawing_reference":  ("drawing_reference_column", "Drawing Reference"),
    "part_number":        ("part_number_column",       "Part Number"),
    "device_type":        ("device_type_column",       "Device Type"),
    "device_name":        ("device_name_column",       "Device Name"),
    "value":              ("value_column",             "Value"),
    "positive_tolerance": ("positive_tolerance_column", "Tol+"),
    "negative_tolerance": ("negative_tolerance_column", "Tol-"),
    "case_name":          ("case_column",              "Case"),
    "case_identifier":    ("case_identifier_column",   "CaseIdentifier"),
}

_REQUIRED = frozenset({"part_number_column", "skipped_row_count"})


@dataclass(frozen=True)
class ColumnMapping:
    """
    1-based column positions.  Every column except the part number may be
    None, meaning the file has no such column: it imports as "" and is
    left out of exported lines.
    """
    drawing_reference_column: Optional[int] = 1
    part_number_column: int = 2
    device_type_column: Optional[int] = 3
    device_name_column: Optional[int] = 4
    value_column: Optional[int] = 5
    positive_tolerance_column: Optional[int] = 6
    negative_tolerance_column: Optional[int] = 7
    case_column: Optional[int] = 8
    case_identifier_column: Optional[int] = 9
    skipped_row_count: int = 1

    def __post_init__(self):
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if val is None and f.name not in _REQUIRED:
                continue
            if not isinstance(val, int) or isinstance(val, bool):
                raise ConfigError(f"{f.name} must be an integer, got {val!r}")
            low = 0 if f.name == "skipped_row_count" else 1
            if val < low:
                raise ConfigError(f"{f.name} must be >= {low}, got {val}")

    # ── Lookups ────────────────────────────────────────────────────────

    def column_for(self, field_name: str) -> Optional[int]:
        """1-based column of a semantic field such as ``"part_number"``."""
        attr, _label = FIELD_LABELS[field_name]
        return getattr(self, attr)

    # ── Serialisation ──────────────────────────────────────────────────

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data) -> "ColumnMapping":
        """
        Build a mapping from a decoded JSON document.

        Missing keys take their default.  Unknown keys, non-integer values
        and out-of-range values raise ConfigError.
        """
        if not isinstance(data, dict):
            raise ConfigError("column mapping must be a JSON object")
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown column mapping keys: {', '.join(unknown)}")
        return cls(**data)


def load(path: str | Path) -> ColumnMapping:
    """
    Read the mapping at *path*.

    When the file does not exist the defaults are written there first,
    so the next session finds a complete document.
    """
    path = Path(path)
    if not path.exists():
        mapping = ColumnMapping()
        save(path, mapping)
        logger.info("Created default column mapping at %s", path)
        return mapping

    try:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
    except ValueError as exc:   # JSONDecodeError, UnicodeDecodeError
        raise ConfigError(f"{path.name} is not valid UTF-8 JSON: {exc}") from exc
    return ColumnMapping.from_dict(data)


def save(path: str | Path, mapping: ColumnMapping) -> None:
    """Overwrite *path* with the full mapping."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(mapping.to_dict(), fh, indent=2)
        fh.write("\n")


def load_or_reset(path: str | Path) -> ColumnMapping:
    """Like load(), but a malformed document is replaced by the defaults."""
    try:
        return load(path)
    except ConfigError as exc:
        logger.warning("Column mapping %s unusable (%s); regenerating defaults", path, exc)
        mapping = ColumnMapping()
        save(path, mapping)
        return mapping
