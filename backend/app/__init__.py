"""Application factory and app-wide configuration."""

import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS

from backend.app.api.routes import api_bp
from backend.config import Settings, get_settings
from backend.core.storage import MemStorage, storage as default_storage


def create_app(settings: Optional[Settings] = None, storage: Optional[MemStorage] = None) -> Flask:
    """Build the Flask app instance."""
    settings = settings or get_settings()

    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.extensions["storage"] = storage if storage is not None else default_storage

    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("backend").setLevel(settings.log_level)

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_origins}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
