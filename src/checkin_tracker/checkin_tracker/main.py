from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .checkins.controller import register as register_checkins
from .container import build_container
from .core.constants import DEFAULT_CHECKIN_CAP, DEFAULT_WEEKLY_GOAL
from .core.enums import StorageBackend
from .database.bootstrap import apply_schema, list_tables

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    # Keep the dev server's per-request lines out of the way.
    logging.getLogger("werkzeug").setLevel(logging.WARNING)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    backend = getattr(settings, "STORAGE_BACKEND", StorageBackend.MEMORY.value)
    logger.info("settings=%s storage=%s", settings_module, backend)

    container = build_container(
        backend=backend,
        db_config=getattr(settings, "DB_CONFIG", None),
        csv_data_dir=getattr(settings, "CSV_DATA_DIR", None),
        checkin_cap=int(getattr(settings, "CHECKIN_CAP", DEFAULT_CHECKIN_CAP)),
        weekly_goal=int(getattr(settings, "WEEKLY_GOAL", DEFAULT_WEEKLY_GOAL)),
    )

    if container.conn is not None and bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(container.conn, schema_path=schema_path)
        logger.info("schema ready (tables=%d)", len(list_tables(container.conn)))

    app.extensions["checkin_container"] = container
    register_checkins(app, container)

    return app
