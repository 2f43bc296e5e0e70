"""
api.errors - JSON error handlers for the API blueprint.

Engine failures are caller-visible outcomes, reported as 400 with the
message of the exception that caused them.
"""

import logging

from flask import jsonify

from api import api_bp
from csv_bridge import ColumnIndexError
from db import MissingRecordError
from services import CsvImportError

logger = logging.getLogger(__name__)


@api_bp.errorhandler(ValueError)          # ConfigError, StagingError, KeyMismatchError
@api_bp.errorhandler(CsvImportError)
@api_bp.errorhandler(ColumnIndexError)
@api_bp.errorhandler(MissingRecordError)
@api_bp.errorhandler(OSError)
def api_engine_error(exc):
    logger.warning("%s: %s", type(exc).__name__, exc)
    return jsonify({"error": str(exc), "kind": type(exc).__name__}), 400


@api_bp.errorhandler(404)
def api_not_found(_e):
    return jsonify({"error": "not found"}), 404


@api_bp.errorhandler(400)
def api_bad_request(_e):
    return jsonify({"error": "bad request"}), 400


@api_bp.errorhandler(500)
def api_server_error(_e):
    return jsonify({"error": "internal server error"}), 500
