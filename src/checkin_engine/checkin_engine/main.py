from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .checkin.controller import register as register_checkin
from .container import build_container
from .database.bootstrap import apply_schema, list_tables

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    container = build_container(settings=settings)
    db = container.conn.config
    logger.info("settings=%s db=%s@%s:%s/%s", settings_module, db.user, db.host, db.port, db.database)

    schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
    if getattr(settings, "AUTO_INIT_DB", False):
        apply_schema(container.conn, schema_path=schema_path)
        logger.info("schema ready (tables=%s)", len(list_tables(container.conn)))
    if getattr(settings, "AUTO_SEED_DB", False):
        container.settings_service.initialize_defaults()
        logger.info("default settings seeded")

    register_checkin(app, container)

    return app
