"""
db - Database layer.

Public API:
    init_db()       → create engine + tables
    get_session()   → new Session
    Part            → ORM model
    PartRecord      → detached value object (+ changed / copy)
"""

from db.engine import init_db, ensure_schema, get_engine, get_session   # noqa: F401
from db.models import Base, Part                                       # noqa: F401
from db.records import (                                               # noqa: F401
    KeyMismatchError,
    MissingRecordError,
    PartRecord,
    QueryResults,
    changed,
    copy,
)
