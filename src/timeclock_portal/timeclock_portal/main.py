from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module, load_settings

from .admin.controller import register as register_admin
from .clock.controller import register as register_clock
from .container import Container, build_container
from .core.exceptions import (
    AuthenticationError,
    ConflictError,
    DomainError,
    EmptyInputError,
    NotFoundError,
    PersistenceError,
    SchemaError,
    ValidationError,
)
from .database.bootstrap import apply_schema, list_tables
from .employees.controller import register as register_employees
from .reporting.controller import register as register_reporting

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (SchemaError, 400),
    (EmptyInputError, 400),
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(PersistenceError)
    def handle_persistence_error(e: PersistenceError):
        logger.exception("Store failure: %s", e)
        return jsonify({"error": "The service is temporarily unavailable. Please try again.", "retryable": True}), 503

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(e, error_type):
                return jsonify({"error": str(e), "kind": type(e).__name__}), status
        logger.error("Unmapped domain error: %r", e)
        return jsonify({"error": str(e), "kind": type(e).__name__}), 400


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = load_settings()
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            admin_password_hash=getattr(settings, "ADMIN_PASSWORD_HASH"),
            geo_lookup_url=getattr(settings, "GEO_LOOKUP_URL", None),
            geo_lookup_timeout=float(getattr(settings, "GEO_LOOKUP_TIMEOUT", 5.0)),
        )

    _register_error_handlers(app)
    register_clock(app, container)
    register_admin(app, container)
    register_employees(app, container)
    register_reporting(app, container)

    return app
