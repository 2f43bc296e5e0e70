"""
services.workflows - The user-facing sequences built from the core
operations: import with backup, single-file export, pattern search.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import config
from csv_bridge.exporter import export_merge
from csv_bridge.report import ImportReport
from mapping import ColumnMapping
from services.backup_service import backup_before_import
from services.part_store import PartStore
from services.staging import StagingError, clear_staging, stage_files


def parse_patterns(text: str) -> list[str]:
    """``"R1, C2"`` → ``["R1", "C2"]``.  Empty input is rejected."""
    if not text:
        raise ValueError("Search pattern cannot be empty!")
    return [p.strip() for p in text.split(",")]


def import_files(
    store: PartStore,
    mapping: ColumnMapping,
    file_paths: Iterable[str | Path],
    *,
    separator: str = config.FIELD_SEPARATOR,
    db_path: str | Path = config.DB_PATH,
    backup_path: str | Path = config.BACKUP_DB_PATH,
    staging_dir: str | Path = config.STAGING_DIR,
) -> ImportReport:
    """
    Stage the files, refresh the backup, then import the staged copies.
    The staging directory is emptied whatever the outcome.
    """
    try:
        staged = stage_files(file_paths, staging_dir)
        backup_before_import(db_path, backup_path)
        return store.import_report(mapping, separator, staged)
    finally:
        clear_staging(staging_dir)


def export_file(
    store: PartStore,
    mapping: ColumnMapping,
    file_paths: Iterable[str | Path],
    output_dir: str | Path,
    *,
    separator: str = config.FIELD_SEPARATOR,
    staging_dir: str | Path = config.STAGING_DIR,
) -> Path:
    """Export exactly one selected file; returns the written path."""
    file_paths = list(file_paths)
    if not file_paths:
        raise StagingError("Please select one file to export.")
    if len(file_paths) > 1:
        raise StagingError("Export operation only supports one file.")

    try:
        staged = stage_files(file_paths, staging_dir)
        return export_merge(mapping, separator, staged[0], output_dir, store)
    finally:
        clear_staging(staging_dir)
