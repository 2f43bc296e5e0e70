"""
services - Business-logic layer sitting between the API and the DB.
"""

from services.part_store import PartStore, CsvImportError             # noqa: F401
from services.backup_service import (                                 # noqa: F401
    RestoreOutcome,
    backup_before_import,
    file_digest,
    restore,
)
from services.staging import StagingError, stage_files, clear_staging  # noqa: F401
from services.workflows import export_file, import_files, parse_patterns  # noqa: F401
