"""
EASi persistence layer
Flask Application Factory.

Usage:
    from easi import create_app
    app = create_app()           # defaults to "development"
    app = create_app("testing")  # explicit config
"""

import logging
import os

from flask import Flask
from sqlalchemy import engine as _sa_engine
from sqlalchemy import event as _sa_event

from easi.config import config
from easi.middleware.logging_config import configure_logging
from easi.models import db
from easi.storage import init_store
from easi.utils.errors import register_error_handlers

logger = logging.getLogger(__name__)


# ── SQLite FK enforcement (global engine event) ─────────────────────────
@_sa_event.listens_for(_sa_engine.Engine, "connect")
def _enable_sqlite_fk(dbapi_conn, connection_record):
    """Enable foreign key enforcement for SQLite connections."""
    if "sqlite" in type(dbapi_conn).__module__:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_app(config_name=None, clock=None):
    """
    Create and configure the Flask application.

    Args:
        config_name: Configuration environment name.
                     One of: "development", "testing", "production".
                     Defaults to APP_ENV env var, or "development" if unset.
        clock:       Optional zero-argument callable handed to the Store
                     for timestamps. Defaults to UTC now.

    Returns:
        Configured Flask application instance.
    """
    if config_name is None:
        config_name = os.getenv("APP_ENV", "development")

    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config[config_name]())

    # ── Structured logging (must be first) ───────────────────────────────
    configure_logging(app)

    # ── Extensions ───────────────────────────────────────────────────────
    db.init_app(app)

    # ── Import all models so create_all() sees every table ───────────────
    from easi.models import system_intake as _system_intake_models  # noqa: F401
    from easi.models import accessibility_request as _accessibility_request_models  # noqa: F401
    from easi.models import business_case as _business_case_models  # noqa: F401

    # ── Create tables (CREATE IF NOT EXISTS) ─────────────────────────────
    with app.app_context():
        db.create_all()
        app.logger.info("db.create_all() completed successfully")

    # ── Store (session + clock injected, no module globals) ──────────────
    init_store(app, db.session, clock=clock)

    # ── Blueprints ───────────────────────────────────────────────────────
    from easi.blueprints.health_bp import health_bp

    app.register_blueprint(health_bp)

    # ── Error handlers ───────────────────────────────────────────────────
    register_error_handlers(app)

    @app.errorhandler(404)
    def not_found(e):
        from flask import request
        return {"error": "Not found", "path": request.path}, 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return {"error": "Method not allowed"}, 405

    return app
