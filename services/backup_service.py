"""
services.backup_service - Single-slot backup of the database file.

A backup is taken right before every import.  Restoring is an explicit
user action and is skipped when the live file already matches the
backup byte for byte.
"""

from __future__ import annotations

import enum
import hashlib
import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

_CHUNK = 1 << 16


class RestoreOutcome(enum.Enum):
    RESTORED = "restored"
    NO_BACKUP = "no_backup"
    ALREADY_UP_TO_DATE = "already_up_to_date"

    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    RestoreOutcome.RESTORED: "Restored successfully.",
    RestoreOutcome.NO_BACKUP: "There is no backup available...",
    RestoreOutcome.ALREADY_UP_TO_DATE:
        "Current database is the same as the backup. No need to restore...",
}


def file_digest(path: str | Path) -> str:
    """SHA-256 of the whole file, hex encoded."""
    hasher = hashlib.sha256()
    with open(path, "rb") as fh:
        for chunk in iter(lambda: fh.read(_CHUNK), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


def backup_before_import(current_path: str | Path, backup_path: str | Path) -> Path:
    """Copy the live database over the backup slot, unconditionally."""
    backup_path = Path(backup_path)
    backup_path.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(current_path, backup_path)
    logger.info("Backed up %s → %s", current_path, backup_path)
    return backup_path


def restore(current_path: str | Path, backup_path: str | Path) -> RestoreOutcome:
    """
    Copy the backup over the live database unless there is nothing to
    restore.  Callers must have the user's confirmation before calling.
    """
    current_path, backup_path = Path(current_path), Path(backup_path)

    if not backup_path.is_file():
        return RestoreOutcome.NO_BACKUP

    if current_path.is_file() and file_digest(current_path) == file_digest(backup_path):
        return RestoreOutcome.ALREADY_UP_TO_DATE

    shutil.copyfile(backup_path, current_path)
    logger.warning("Restored %s from backup %s", current_path, backup_path)
    return RestoreOutcome.RESTORED
