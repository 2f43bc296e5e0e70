#!/usr/bin/env python3
"""
BOMDB - BOM import / export engine with a JSON front end
========================================================

Single-command run:  python main.py

See config.py for all environment-variable tunables.
"""

import logging
from pathlib import Path

from flask import Flask, jsonify

import config
import mapping
from db import init_db
from services import PartStore
from api import api_bp


def create_app(overrides: dict | None = None) -> Flask:
    """Flask application factory."""

    app = Flask(__name__)
    app.config.update(
        DB_PATH=config.DB_PATH,
        BACKUP_DB_PATH=config.BACKUP_DB_PATH,
        COLUMN_CONFIG_PATH=config.COLUMN_CONFIG_PATH,
        STAGING_DIR=config.STAGING_DIR,
        FIELD_SEPARATOR=config.FIELD_SEPARATOR,
    )
    if overrides:
        app.config.update(overrides)

    # ── Data directories ────────────────────────────────────────────
    for key in ("DB_PATH", "BACKUP_DB_PATH"):
        Path(app.config[key]).parent.mkdir(parents=True, exist_ok=True)
    Path(app.config["STAGING_DIR"]).mkdir(parents=True, exist_ok=True)

    # ── Initialise database ─────────────────────────────────────────
    init_db(f"sqlite:///{app.config['DB_PATH']}", create_schema=False)
    PartStore.initialize_schema()

    # ── Column mapping (regenerated if unreadable) ──────────────────
    mapping.load_or_reset(app.config["COLUMN_CONFIG_PATH"])

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)

    # ── Error handlers ──────────────────────────────────────────────
    @app.errorhandler(404)
    def _404(e):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(500)
    def _500(e):
        return jsonify({"error": "internal server error"}), 500

    return app


def main():
    logging.basicConfig(level=logging.DEBUG if config.DEBUG else logging.INFO,
                        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s")

    print("=" * 56)
    print("  BOMDB - BOM Parts Library")
    print("=" * 56)

    app = create_app()
    print(f"  Database: {config.DB_PATH}")
    print(f"  Column mapping: {config.COLUMN_CONFIG_PATH}")
    print(f"  Database has {PartStore().count()} parts.")

    print(f"\n  http://{config.HOST}:{config.PORT}/api/v1")
    print("=" * 56)

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
