from services import RestoreOutcome, backup_before_import, file_digest, restore
from tests.factories import HEADER, PartRecordFactory, bom_line


def test_backup_is_byte_identical(tmp_path):
    current = tmp_path / "part_library.db"
    current.write_bytes(b"\x00sqlite\x01" * 100)
    backup = tmp_path / "backup" / "part_library.db"

    backup_before_import(current, backup)

    assert backup.read_bytes() == current.read_bytes()


def test_backup_overwrites_previous_backup(tmp_path):
    current = tmp_path / "cur.db"
    backup = tmp_path / "bak.db"
    backup.write_bytes(b"old")
    current.write_bytes(b"new")

    backup_before_import(current, backup)

    assert backup.read_bytes() == b"new"


def test_restore_without_backup(tmp_path):
    current = tmp_path / "cur.db"
    current.write_bytes(b"live")

    assert restore(current, tmp_path / "missing.db") is RestoreOutcome.NO_BACKUP
    assert current.read_bytes() == b"live"


def test_restore_when_identical_leaves_file_untouched(tmp_path):
    current = tmp_path / "cur.db"
    backup = tmp_path / "bak.db"
    current.write_bytes(b"same")
    backup.write_bytes(b"same")
    mtime = current.stat().st_mtime_ns

    assert restore(current, backup) is RestoreOutcome.ALREADY_UP_TO_DATE
    assert current.read_bytes() == b"same"
    assert current.stat().st_mtime_ns == mtime


def test_restore_copies_backup_over_current(tmp_path):
    current = tmp_path / "cur.db"
    backup = tmp_path / "bak.db"
    current.write_bytes(b"after import")
    backup.write_bytes(b"before import")

    assert restore(current, backup) is RestoreOutcome.RESTORED
    assert current.read_bytes() == b"before import"


def test_digest_is_content_based(tmp_path):
    a, b = tmp_path / "a", tmp_path / "b"
    a.write_bytes(b"x" * 200_000)
    b.write_bytes(b"x" * 200_000)
    assert file_digest(a) == file_digest(b)
    b.write_bytes(b"x" * 199_999 + b"y")
    assert file_digest(a) != file_digest(b)


def test_restore_undoes_an_import(store, mapping, db_path, write_csv, tmp_path):
    """Round trip through a real database file."""
    backup = tmp_path / "backup" / "part_library.db"
    backup_before_import(db_path, backup)
    path = write_csv("bom.csv", [HEADER, bom_line(PartRecordFactory())])
    store.import_from(mapping, ",", [path])
    assert store.count() == 1

    assert restore(db_path, backup) is RestoreOutcome.RESTORED
    assert store.count() == 0
    assert restore(db_path, backup) is RestoreOutcome.ALREADY_UP_TO_DATE
