"""
csv_bridge.report - Structured result of a CSV import run.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ImportReport:
    files: list[str] = field(default_factory=list)
    total_rows: int = 0          # data lines read after the skipped rows
    inserted: int = 0
    duplicates: int = 0          # part number already stored → ignored
    blank_part_numbers: int = 0

    def add_file(self, path):
        self.files.append(str(path))

    def to_dict(self) -> dict:
        return {
            "files": self.files,
            "total_rows": self.total_rows,
            "inserted": self.inserted,
            "duplicates": self.duplicates,
            "blank_part_numbers": self.blank_part_numbers,
        }

    def summary(self) -> str:
        if self.inserted == 0:
            return "No records imported from your csv file..."
        return f"Successfully imported {self.inserted} records."
