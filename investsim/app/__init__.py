"""Application factory and app-wide configuration."""

from typing import Any, Mapping, Optional
from uuid import uuid4

from flask import Flask, request
from flask_cors import CORS

from investsim.app.api.routes import api_bp
from investsim.app.config import Config
from investsim.app.logging_setup import set_request_id, setup_logging
from investsim.core.scenarios import ScenarioBook


def create_app(test_config: Optional[Mapping[str, Any]] = None) -> Flask:
    """Build the Flask app instance."""
    app = Flask(__name__)
    app.config.from_object(Config)
    app.config.from_prefixed_env("INVESTSIM")
    if test_config:
        app.config.update(test_config)

    setup_logging(app.config["LOG_LEVEL"])

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    # saved scenarios live as long as this app instance
    app.extensions["scenario_book"] = ScenarioBook()

    @app.before_request
    def _tag_request() -> None:
        set_request_id(request.headers.get("X-Request-ID") or uuid4().hex[:12])

    app.register_blueprint(api_bp, url_prefix="/api")
    app.logger.info("investsim api ready")
    return app
