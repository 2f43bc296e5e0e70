"""
services.part_store - Import, query and write-back against the parts table.

Every public method opens its own session and closes it before
returning.  Import and update run as a single transaction each: either
every row change of the call is committed, or the whole call is rolled
back and the error re-raised.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Sequence

from sqlalchemy import func, or_, update
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from csv_bridge.csv_parser import iter_part_rows
from csv_bridge.report import ImportReport
from db.engine import ensure_schema, get_session
from db.models import Part
from db.records import MissingRecordError, PartRecord, changed
from mapping import ColumnMapping

logger = logging.getLogger(__name__)

parts_table = Part.__table__


class CsvImportError(Exception):
    """An import was rolled back.  The original failure is ``__cause__``."""
    pass


class PartStore:

    def __init__(self, session_factory: Callable[[], Session] = get_session):
        self._session_factory = session_factory

    # ── Schema ─────────────────────────────────────────────────────────

    @staticmethod
    def initialize_schema() -> None:
        ensure_schema()

    # ── Import ─────────────────────────────────────────────────────────

    def import_from(
        self,
        mapping: ColumnMapping,
        separator: str,
        file_paths: Iterable[str | Path],
    ) -> int:
        """Insert-or-ignore every row of *file_paths*; returns rows inserted."""
        return self.import_report(mapping, separator, file_paths).inserted

    def import_report(
        self,
        mapping: ColumnMapping,
        separator: str,
        file_paths: Iterable[str | Path],
    ) -> ImportReport:
        """
        Same as import_from(), returning the full ImportReport.

        Rows whose part number already exists (in the store, or earlier
        in this same call) are left untouched and counted as duplicates.
        """
        report = ImportReport()
        session = self._session_factory()

        try:
            for path in file_paths:
                report.add_file(path)
                for _line_no, fields in iter_part_rows(mapping, separator, path):
                    report.total_rows += 1
                    if not fields["part_number"]:
                        report.blank_part_numbers += 1
                        continue

                    stmt = (
                        sqlite_insert(parts_table)
                        .values(**fields)
                        .on_conflict_do_nothing(index_elements=[parts_table.c.part_number])
                    )
                    if session.execute(stmt).rowcount:
                        report.inserted += 1
                    else:
                        report.duplicates += 1

            session.commit()
        except Exception as exc:
            session.rollback()
            logger.error("Import rolled back: %s", exc)
            raise CsvImportError(f"Import failed, nothing was imported: {exc}") from exc
        finally:
            session.close()

        logger.info("Imported %d of %d rows from %d file(s) (%d duplicates)",
                    report.inserted, report.total_rows, len(report.files),
                    report.duplicates)
        return report

    # ── Read ───────────────────────────────────────────────────────────

    def query_by_patterns(self, patterns: Sequence[str]) -> list[PartRecord]:
        """
        Records whose part number contains any of *patterns*.

        Matching is a case-sensitive literal substring test, so an empty
        pattern matches everything.  Ordered by part number.
        """
        if not patterns:
            return []

        session = self._session_factory()
        try:
            query = (
                session.query(Part)
                .filter(or_(*(func.instr(Part.part_number, p) > 0 for p in patterns)))
                .order_by(Part.part_number)
            )
            return [part.to_record() for part in query.all()]
        finally:
            session.close()

    def get(self, part_number: str) -> PartRecord | None:
        session = self._session_factory()
        try:
            part = session.get(Part, part_number)
            return part.to_record() if part else None
        finally:
            session.close()

    def count(self) -> int:
        session = self._session_factory()
        try:
            return session.query(Part).count()
        finally:
            session.close()

    # ── Update ─────────────────────────────────────────────────────────

    def apply_updates(
        self,
        original_results: Sequence[PartRecord],
        working_results: Sequence[PartRecord],
    ) -> int:
        """
        Write back every working record that differs from its original.

        Returns the number of rows rewritten.  Unchanged records are not
        written at all.
        """
        working_by_key = {rec.part_number: rec for rec in working_results}

        session = self._session_factory()
        try:
            updated = 0
            for original in original_results:
                working = working_by_key.get(original.part_number)
                if working is None:
                    raise MissingRecordError(
                        f"Part {original.part_number!r} missing from working results"
                    )
                if not changed(original, working):
                    continue

                stmt = (
                    update(parts_table)
                    .where(parts_table.c.part_number == original.part_number)
                    .values(**working.attributes())
                )
                updated += session.execute(stmt).rowcount

            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

        logger.info("Updated %d record(s)", updated)
        return updated
