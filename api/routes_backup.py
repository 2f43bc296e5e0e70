"""
api.routes_backup - /api/v1/restore
"""

from flask import current_app, jsonify, request

from api import api_bp
from services import restore


@api_bp.route("/restore", methods=["POST"])
def api_restore():
    """
    POST /api/v1/restore   JSON body: {confirm: true}

    Not recoverable, so the client must confirm explicitly.
    """
    data = request.get_json(silent=True) or {}
    if data.get("confirm") is not True:
        return jsonify({"error": "restore must be confirmed"}), 400

    outcome = restore(current_app.config["DB_PATH"], current_app.config["BACKUP_DB_PATH"])
    return jsonify({"outcome": outcome.value, "message": outcome.message()})
