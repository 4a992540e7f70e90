from __future__ import annotations

import logging

from flask import Flask, Response, request

from .config import ConfigStore


logger = logging.getLogger(__name__)


def create_app(store: ConfigStore) -> Flask:
    """Build the Flask app serving config lookups from ``store``."""
    app = Flask(__name__)

    @app.get("/config")
    def get_config():
        key = request.args.get("key", "")
        value = store.get(key)
        return Response(f"{key}: {value}", mimetype="text/plain")

    return app


def serve(store: ConfigStore, host: str = "127.0.0.1", port: int = 8080) -> None:
    logger.info(f"Starting HTTP server on {host}:{port}")
    create_app(store).run(host=host, port=port)
