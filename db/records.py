"""
db.records - Plain value objects handed between the store and its callers.

PartRecord is detached from any session, so the front end can edit it
freely.  QueryResults keeps the "as queried" snapshot next to the edited
copies so a write-back only touches rows that actually changed.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field


class KeyMismatchError(ValueError):
    """Two records with different part numbers were compared."""
    pass


class MissingRecordError(LookupError):
    """A queried part number has no counterpart in the working set."""
    pass


# Attribute → store column / JSON key
JSON_KEYS: dict[str, str] = {
    "part_number":        "partNumber",
    "device_type":        "deviceType",
    "device_name":        "deviceName",
    "value":              "value",
    "positive_tolerance": "positiveTolerance",
    "negative_tolerance": "negativeTolerance",
    "case_name":          "caseName",
    "case_identifier":    "caseIdentifier",
}

ATTRIBUTE_FIELDS: tuple[str, ...] = tuple(k for k in JSON_KEYS if k != "part_number")


@dataclass
class PartRecord:
    part_number: str
    device_type: str = ""
    device_name: str = ""
    value: str = ""
    positive_tolerance: str = ""
    negative_tolerance: str = ""
    case_name: str = ""
    case_identifier: str = ""

    def attributes(self) -> dict[str, str]:
        """Every non-key field, keyed by attribute name."""
        return {name: getattr(self, name) for name in ATTRIBUTE_FIELDS}

    def to_dict(self) -> dict:
        return {key: getattr(self, attr) for attr, key in JSON_KEYS.items()}

    @classmethod
    def from_dict(cls, data: dict) -> "PartRecord":
        """Accepts either the JSON keys (partNumber) or attribute names."""
        values = {}
        for attr, key in JSON_KEYS.items():
            raw = data.get(key, data.get(attr, ""))
            values[attr] = "" if raw is None else str(raw)
        if not values["part_number"]:
            raise ValueError("partNumber is required")
        return cls(**values)


def changed(original: PartRecord, working: PartRecord) -> bool:
    """True when any non-key attribute differs between the two records."""
    if original.part_number != working.part_number:
        raise KeyMismatchError(
            f"Part number mismatch: {original.part_number!r} vs {working.part_number!r}"
        )
    return original.attributes() != working.attributes()


def copy(record: PartRecord) -> PartRecord:
    # Every field is a str, so a shallow replace shares nothing mutable.
    return dataclasses.replace(record)


@dataclass
class QueryResults:
    """
    The two parallel sequences behind one search: ``original`` is the
    snapshot taken when the query ran, ``working`` is what the user edits.
    """
    original: list[PartRecord] = field(default_factory=list)
    working: list[PartRecord] = field(default_factory=list)

    @classmethod
    def from_records(cls, records: list[PartRecord]) -> "QueryResults":
        return cls(original=[copy(r) for r in records], working=list(records))

    def __len__(self) -> int:
        return len(self.working)

    def write_back(self, store) -> int:
        """
        Persist edits in ``working`` through *store*.  After a write that
        touched at least one row the snapshot is refreshed, so the next
        write-back diffs against what is now stored.
        """
        updated = store.apply_updates(self.original, self.working)
        if updated > 0:
            self.original = [copy(r) for r in self.working]
        return updated
