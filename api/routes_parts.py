"""
api.routes_parts - /api/v1/parts search and write-back endpoints.
"""

from flask import jsonify, request

from api import api_bp
from db import PartRecord, QueryResults
from services import PartStore, parse_patterns


@api_bp.route("/parts")
def list_parts():
    """
    GET /api/v1/parts?q=R1,C2

    Comma-separated part-number fragments; a part matches if its number
    contains any of them.
    """
    patterns = parse_patterns(request.args.get("q", ""))
    records = PartStore().query_by_patterns(patterns)
    return jsonify({
        "count": len(records),
        "parts": [r.to_dict() for r in records],
    })


@api_bp.route("/parts/update", methods=["POST"])
def update_parts():
    """
    POST /api/v1/parts/update

    JSON body: {original: [...], working: [...]} as returned by a search,
    with edits applied to ``working``.  The response carries the snapshot
    the client should diff against next time.
    """
    data = request.get_json(force=True)
    results = QueryResults(
        original=[PartRecord.from_dict(d) for d in data.get("original", [])],
        working=[PartRecord.from_dict(d) for d in data.get("working", [])],
    )
    updated = results.write_back(PartStore())
    return jsonify({
        "updated": updated,
        "original": [r.to_dict() for r in results.original],
    })
