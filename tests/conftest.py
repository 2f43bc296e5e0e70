import pytest

from db import init_db
from mapping import ColumnMapping
from services import PartStore


@pytest.fixture
def db_path(tmp_path):
    """A fresh SQLite parts library for each test."""
    path = tmp_path / "data" / "part_library.db"
    path.parent.mkdir(parents=True)
    init_db(f"sqlite:///{path}")
    return path


@pytest.fixture
def store(db_path):
    return PartStore()


@pytest.fixture
def mapping():
    """Default layout: Ref, PN, Type, Name, Value, Tol+, Tol-, Case, CaseId."""
    return ColumnMapping()


@pytest.fixture
def write_csv(tmp_path):
    """Write lines to a CSV file under tmp_path and return its path."""
    def _write(name, lines, newline="\n"):
        path = tmp_path / name
        path.write_bytes((newline.join(lines) + newline).encode("utf-8"))
        return path
    return _write
