"""
api.routes_import - /api/v1 import, export and column preview endpoints.

File arguments are paths on the machine running the server.
"""

from flask import current_app, jsonify, request

from api import api_bp
from csv_bridge import mark_columns, read_first_data_line
from mapping import load
from services import PartStore, export_file, import_files


def _files_arg(data: dict) -> list[str]:
    files = data.get("files") or []
    if isinstance(files, str):
        files = [f for f in files.split(";") if f]
    return files


@api_bp.route("/first-line", methods=["POST"])
def first_line():
    """
    POST /api/v1/first-line   JSON body: {path}

    The first line of a CSV, raw and with 1-based column markers, for
    choosing the column mapping.
    """
    data = request.get_json(force=True)
    path = data.get("path")
    if not path:
        raise ValueError("path is required")
    line = read_first_data_line(path)
    return jsonify({"line": line, "marked": mark_columns(line)})


@api_bp.route("/import", methods=["POST"])
def api_import_csv():
    """
    POST /api/v1/import   JSON body: {files: [path, …]}

    Backs up the database, then imports every file in one transaction.
    """
    data = request.get_json(force=True)
    cfg = current_app.config
    report = import_files(
        PartStore(),
        load(cfg["COLUMN_CONFIG_PATH"]),
        _files_arg(data),
        separator=cfg["FIELD_SEPARATOR"],
        db_path=cfg["DB_PATH"],
        backup_path=cfg["BACKUP_DB_PATH"],
        staging_dir=cfg["STAGING_DIR"],
    )
    return jsonify({**report.to_dict(), "message": report.summary()})


@api_bp.route("/export", methods=["POST"])
def api_export_csv():
    """
    POST /api/v1/export   JSON body: {files: [path], output_dir}
    """
    data = request.get_json(force=True)
    output_dir = data.get("output_dir")
    if not output_dir:
        raise ValueError("output_dir is required")
    cfg = current_app.config
    out = export_file(
        PartStore(),
        load(cfg["COLUMN_CONFIG_PATH"]),
        _files_arg(data),
        output_dir,
        separator=cfg["FIELD_SEPARATOR"],
        staging_dir=cfg["STAGING_DIR"],
    )
    return jsonify({"output": str(out)})
