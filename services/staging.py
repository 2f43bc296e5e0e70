"""
services.staging - Private copies of the CSV files a user picked.

Import and export read the staged copies, never the user's originals,
so a file still open in a spreadsheet program cannot block or be
touched by the engine.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable

import config

logger = logging.getLogger(__name__)


class StagingError(ValueError):
    """Raised when a selection cannot be staged."""
    pass


def _ensure_staging_dir(staging_dir: Path):
    """Ensure staging directory exists."""
    staging_dir.mkdir(parents=True, exist_ok=True)


def stage_files(paths: Iterable[str | Path], staging_dir: str | Path = config.STAGING_DIR) -> list[Path]:
    """
    Copy every selected file into *staging_dir* and return the copies.

    The whole selection is rejected, before anything is copied, if any
    entry is not a ``.csv`` file or two entries share a file name.
    """
    paths = [Path(p) for p in paths]
    if not paths:
        raise StagingError("Please select filename first")
    if any(p.suffix.lower() != ".csv" for p in paths):
        raise StagingError("Please select only csv files.")
    names = [p.name.lower() for p in paths]
    if len(set(names)) != len(names):
        raise StagingError("Selected files must have distinct names.")

    staging_dir = Path(staging_dir)
    _ensure_staging_dir(staging_dir)

    staged = []
    for src in paths:
        dest = staging_dir / src.name
        shutil.copyfile(src, dest)
        staged.append(dest)

    logger.debug("Staged %d file(s) in %s", len(staged), staging_dir)
    return staged


def clear_staging(staging_dir: str | Path = config.STAGING_DIR) -> None:
    """Delete every staged file."""
    staging_dir = Path(staging_dir)
    if not staging_dir.exists():
        return
    for item in staging_dir.iterdir():
        if item.is_file():
            item.unlink()
