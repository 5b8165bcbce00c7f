"""Application factory and app-wide configuration."""

import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS

from backend.app.api.routes import api_bp
from backend.config import Settings, get_global_settings


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Build the Flask app instance."""
    settings = settings or get_global_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.config["APP_ENV"] = settings.app_env
    app.config["DEBUG"] = settings.app_env == "development"
    app.config["TESTING"] = settings.app_env == "testing"
    app.config["MAX_PROJECTION_YEARS"] = settings.max_projection_years

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_origins}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
