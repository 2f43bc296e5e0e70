"""
api.routes_mapping - /api/v1/mapping read and replace.
"""

from flask import current_app, jsonify, request

from api import api_bp
from mapping import ColumnMapping, load, save


@api_bp.route("/mapping")
def get_mapping():
    """GET /api/v1/mapping"""
    mapping = load(current_app.config["COLUMN_CONFIG_PATH"])
    return jsonify(mapping.to_dict())


@api_bp.route("/mapping", methods=["PUT"])
def put_mapping():
    """
    PUT /api/v1/mapping

    JSON body: the whole mapping document.  Omitted keys fall back to
    their defaults; the stored document is always rewritten in full.
    """
    data = request.get_json(force=True)
    mapping = ColumnMapping.from_dict(data)
    save(current_app.config["COLUMN_CONFIG_PATH"], mapping)
    return jsonify(mapping.to_dict())
