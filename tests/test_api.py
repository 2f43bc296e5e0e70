import pytest

from main import create_app
from tests.factories import HEADER, PartRecordFactory, bom_line


@pytest.fixture
def app(tmp_path):
    data = tmp_path / "data"
    return create_app({
        "TESTING": True,
        "DB_PATH": data / "part_library.db",
        "BACKUP_DB_PATH": data / "backup" / "part_library.db",
        "COLUMN_CONFIG_PATH": data / "part_column_config.json",
        "STAGING_DIR": tmp_path / "temp",
        "FIELD_SEPARATOR": ",",
    })


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def imported(client, write_csv):
    records = PartRecordFactory.build_batch(3)
    path = write_csv("bom.csv", [HEADER] + [bom_line(r) for r in records])
    response = client.post("/api/v1/import", json={"files": [str(path)]})
    assert response.status_code == 200
    return records


def test_startup_creates_default_mapping(app, client):
    assert app.config["COLUMN_CONFIG_PATH"].exists()
    response = client.get("/api/v1/mapping")
    assert response.status_code == 200
    assert response.json["part_number_column"] == 2


def test_put_mapping_replaces_document(client):
    response = client.put("/api/v1/mapping", json={"part_number_column": 4, "skipped_row_count": 0})
    assert response.status_code == 200
    assert client.get("/api/v1/mapping").json["part_number_column"] == 4
    assert client.get("/api/v1/mapping").json["value_column"] == 5


def test_put_bad_mapping_is_rejected(client):
    response = client.put("/api/v1/mapping", json={"value_column": -2})
    assert response.status_code == 400
    assert response.json["kind"] == "ConfigError"


def test_first_line_preview(client, write_csv):
    path = write_csv("bom.csv", ["Ref,PN,Value", "R1,X,1"])
    response = client.post("/api/v1/first-line", json={"path": str(path)})
    assert response.json == {"line": "Ref,PN,Value", "marked": "Ref(1),PN(2),Value(3)"}


def test_import_reports_counts_and_backs_up(app, client, imported):
    assert app.config["BACKUP_DB_PATH"].exists()
    assert client.get("/api/v1/parts", query_string={"q": imported[0].part_number}).json["count"] == 1


def test_import_rejects_non_csv(client, tmp_path):
    other = tmp_path / "bom.txt"
    other.write_text(HEADER)
    response = client.post("/api/v1/import", json={"files": [str(other)]})
    assert response.status_code == 400
    assert "csv" in response.json["error"]


def test_search_requires_pattern(client):
    assert client.get("/api/v1/parts").status_code == 400


def test_edit_cycle(client, imported):
    found = client.get("/api/v1/parts", query_string={"q": ",".join(r.part_number for r in imported)}).json
    assert found["count"] == 3

    original = found["parts"]
    working = [dict(p) for p in original]
    working[2]["value"] = "330R"

    response = client.post("/api/v1/parts/update", json={"original": original, "working": working})

    assert response.json["updated"] == 1
    assert response.json["original"] == working
    again = client.get("/api/v1/parts", query_string={"q": working[2]["partNumber"]}).json
    assert again["parts"][0]["value"] == "330R"


def test_update_with_missing_working_record(client, imported):
    original = client.get("/api/v1/parts", query_string={"q": imported[0].part_number}).json["parts"]
    response = client.post("/api/v1/parts/update", json={"original": original, "working": []})
    assert response.status_code == 400
    assert response.json["kind"] == "MissingRecordError"


def test_export(client, imported, write_csv, tmp_path):
    src = write_csv("board.csv", [HEADER, bom_line(imported[0], drawing_reference="U1")])
    out_dir = tmp_path / "out"
    out_dir.mkdir()

    response = client.post("/api/v1/export", json={"files": [str(src)], "output_dir": str(out_dir)})

    assert response.status_code == 200
    out = out_dir / "board.csv.bom.csv"
    assert response.json["output"] == str(out)
    assert out.read_text().splitlines()[1] == bom_line(imported[0], drawing_reference="U1")


def test_restore_needs_confirmation(client):
    assert client.post("/api/v1/restore", json={}).status_code == 400


def test_restore_outcomes(client, imported):
    response = client.post("/api/v1/restore", json={"confirm": True})
    assert response.json["outcome"] == "restored"
    assert client.get("/api/v1/parts", query_string={"q": imported[0].part_number}).json["count"] == 0

    response = client.post("/api/v1/restore", json={"confirm": True})
    assert response.json["outcome"] == "already_up_to_date"


def test_restore_without_backup(client):
    response = client.post("/api/v1/restore", json={"confirm": True})
    assert response.json["outcome"] == "no_backup"


def test_first_line_requires_path(client):
    response = client.post("/api/v1/first-line", json={})
    assert response.status_code == 400
    assert "path" in response.json["error"]


def test_export_requires_output_dir(client, write_csv):
    src = write_csv("board.csv", [HEADER])
    response = client.post("/api/v1/export", json={"files": [str(src)]})
    assert response.status_code == 400
    assert "output_dir" in response.json["error"]


def test_startup_recovers_from_undecodable_mapping(tmp_path):
    data = tmp_path / "data"
    data.mkdir()
    cfg_path = data / "part_column_config.json"
    cfg_path.write_bytes(b"\xff\xfe{}")

    app = create_app({
        "TESTING": True,
        "DB_PATH": data / "part_library.db",
        "BACKUP_DB_PATH": data / "backup" / "part_library.db",
        "COLUMN_CONFIG_PATH": cfg_path,
        "STAGING_DIR": tmp_path / "temp",
    })

    assert app.test_client().get("/api/v1/mapping").json["part_number_column"] == 2
