"""
db.engine - Engine bootstrap and session factory.

The store is a single SQLite file that BackupGuard copies byte for byte,
so connections are not pooled and the rollback journal is used instead
of WAL: once a session closes, everything lives in the one file.
"""

from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool

from db.models import Base

_engine: Engine | None = None
_SessionLocal: sessionmaker | None = None


def init_db(db_url: str, *, create_schema: bool = True) -> None:
    """Create the engine, apply SQLite pragmas, and optionally emit CREATE TABLE."""
    global _engine, _SessionLocal

    if _engine is not None:
        _engine.dispose()

    _engine = create_engine(db_url, echo=False, future=True, poolclass=NullPool)

    if "sqlite" in db_url:
        @event.listens_for(_engine, "connect")
        def _sqlite_pragmas(dbapi_conn, _rec):
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA journal_mode=DELETE")
            cur.execute("PRAGMA synchronous=FULL")
            cur.close()

    _SessionLocal = sessionmaker(bind=_engine, expire_on_commit=False)

    if create_schema:
        ensure_schema()


def ensure_schema() -> None:
    """CREATE TABLE IF NOT EXISTS for every model.  Safe on every startup."""
    Base.metadata.create_all(get_engine())


def get_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("Database not initialised - call init_db() first")
    return _engine


def get_session() -> Session:
    """Return a new session.  Caller is responsible for .close()."""
    if _SessionLocal is None:
        raise RuntimeError("Database not initialised - call init_db() first")
    return _SessionLocal()
