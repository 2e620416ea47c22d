from __future__ import annotations

import atexit
import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .attendance.controller import register as register_attendance
from .common.datetime_utils import isoformat_z, now_utc
from .container import build_container
from .database.store import RecordStore, open_record_store
from .members.controller import register as register_members
from .reports.controller import register as register_reports
from .sessions.controller import register as register_sessions
from .settings import get_settings_module

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(debug: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO, format=LOG_FORMAT)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        return jsonify({"error": e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def unhandled_error(e: Exception):
        app.logger.exception("unhandled error")
        body = {"error": "Internal server error"}
        if app.config.get("DEBUG"):
            body["details"] = str(e)
        return jsonify(body), 500


def create_app(settings_module: Optional[str] = None, *, store: Optional[RecordStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["ENVIRONMENT"] = getattr(settings, "ENVIRONMENT", "development")
    app.config["PUBLIC_BASE_URL"] = getattr(settings, "PUBLIC_BASE_URL", "")
    app.config["HOST"] = getattr(settings, "HOST", "0.0.0.0")
    app.config["PORT"] = int(getattr(settings, "PORT", 5000))

    configure_logging(app.config["DEBUG"])

    if store is None:
        store = open_record_store(
            backend=getattr(settings, "STORE_BACKEND", "mysql"),
            db_config=dict(getattr(settings, "DB_CONFIG")),
            auto_init_db=bool(getattr(settings, "AUTO_INIT_DB", False)),
        )
        atexit.register(store.close)
    app.logger.info("settings=%s store=%s", settings_module, store.backend.value)

    container = build_container(store=store, public_base_url=app.config["PUBLIC_BASE_URL"])
    app.extensions["container"] = container

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify(
            {
                "status": "OK",
                "timestamp": isoformat_z(now_utc()),
                "database": container.store.backend.value,
                "environment": app.config["ENVIRONMENT"],
            }
        )

    register_members(app, container)
    register_sessions(app, container)
    register_attendance(app, container)
    register_reports(app, container)
    register_error_handlers(app)

    return app


def run() -> None:
    app = create_app()
    app.run(host=app.config["HOST"], port=app.config["PORT"], debug=app.config["DEBUG"])


if __name__ == "__main__":
    run()
