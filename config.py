"""
BOMDB - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR        = Path(__file__).resolve().parent
DATA_DIR        = Path(os.environ.get("BOMDB_DATA_DIR", BASE_DIR / "data"))
BACKUP_DIR      = Path(os.environ.get("BOMDB_BACKUP_DIR", DATA_DIR / "backup"))
STAGING_DIR     = Path(os.environ.get("BOMDB_STAGING_DIR", BASE_DIR / "temp"))

# ── Database ───────────────────────────────────────────────────────────
DB_FILENAME     = "part_library.db"
DB_PATH         = Path(os.environ.get("BOMDB_DB", DATA_DIR / DB_FILENAME))
BACKUP_DB_PATH  = BACKUP_DIR / DB_FILENAME

# ── Column mapping ─────────────────────────────────────────────────────
COLUMN_CONFIG_PATH = Path(os.environ.get("BOMDB_COLUMN_CONFIG",
                                         DATA_DIR / "part_column_config.json"))

# ── CSV ────────────────────────────────────────────────────────────────
FIELD_SEPARATOR = os.environ.get("BOMDB_FIELD_SEPARATOR", ",")
EXPORT_SUFFIX   = ".bom.csv"

# ── Server ─────────────────────────────────────────────────────────────
HOST   = os.environ.get("BOMDB_HOST", "127.0.0.1")
PORT   = int(os.environ.get("BOMDB_PORT", "5000"))
DEBUG  = os.environ.get("BOMDB_DEBUG", "0") == "1"
