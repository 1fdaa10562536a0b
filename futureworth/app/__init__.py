"""Application factory and app-wide configuration."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Mapping, Optional

from flask import Flask, current_app, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from futureworth.app.api.routes import api_bp
from futureworth.config import Config


def create_app(overrides: Optional[Mapping[str, Any]] = None, config_object: object = Config) -> Flask:
    """Build the Flask app instance."""
    app = Flask(__name__)
    app.config.from_object(config_object)
    if overrides:
        app.config.update(overrides)

    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("futureworth").setLevel(app.config["LOG_LEVEL"])
    app.logger.setLevel(app.config["LOG_LEVEL"])

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    _register_error_handlers(app)
    return app


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(404)
    def _not_found(exc: HTTPException):
        if request.path.startswith("/api/"):
            return jsonify({"error": "API endpoint not found"}), HTTPStatus.NOT_FOUND
        return exc

    @app.errorhandler(Exception)
    def _unhandled(exc: Exception):
        if isinstance(exc, HTTPException):
            return jsonify({"error": exc.description}), exc.code
        current_app.logger.exception("unhandled error on %s", request.path)
        detail = "Internal server error" if current_app.config["ENV_NAME"] == "production" else str(exc)
        return jsonify({"error": detail}), HTTPStatus.INTERNAL_SERVER_ERROR
