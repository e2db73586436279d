# backend/boutique_pos/__init__.py
import logging

from flask import Flask

from .config import Config
from .extensions import db


def create_app(config_overrides: dict | None = None, verifier=None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    logging.getLogger(__name__).setLevel(app.config["LOG_LEVEL"])

    # Initialize extensions
    db.init_app(app)

    # Import models so the storage table is registered on the metadata
    from . import models  # noqa: F401
    from .container import EXTENSION_KEY, build_services

    with app.app_context():
        db.create_all()
        services = build_services(app, verifier=verifier)
        services.load()

    app.extensions[EXTENSION_KEY] = services
    return app


def shutdown_app(app: Flask) -> None:
    """Release in-memory service state; persisted blobs are kept."""
    from .container import EXTENSION_KEY

    services = app.extensions.pop(EXTENSION_KEY, None)
    if services is not None:
        services.close()
