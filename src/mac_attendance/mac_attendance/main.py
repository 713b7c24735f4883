from __future__ import annotations

import atexit
import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables

logger = logging.getLogger(__name__)

_SETTING_KEYS = (
    "MARK_WINDOW_MINUTES",
    "RECENT_WINDOW_MINUTES",
    "STORE_TIMEOUT_SECONDS",
    "MAX_WORKERS",
    "MARK_GUARD_ENABLED",
    "DISPLAY_TIMEZONE",
    "DB_POOL_SIZE",
    "DB_CONNECT_TIMEOUT",
)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def load_settings():
    load_dotenv(override=False)
    return importlib.import_module(get_settings_module())


def create_app(container: Optional[Container] = None, settings=None) -> Flask:
    settings = settings or load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config)

        options = {key: getattr(settings, key) for key in _SETTING_KEYS if hasattr(settings, key)}
        container = build_container(db_config=db_config, options=options)
        container.conn.check()
        atexit.register(container.close)

    app.extensions["container"] = container
    register_attendance(app, container)
    return app


def run() -> None:
    settings = load_settings()
    app = create_app(settings=settings)
    app.run(
        host=str(getattr(settings, "HOST", "0.0.0.0")),
        port=int(getattr(settings, "PORT", 3000)),
        debug=bool(getattr(settings, "DEBUG", False)),
    )


if __name__ == "__main__":
    run()
