from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.checkin_engine.checkin_engine.database.bootstrap import apply_schema, list_tables
from src.checkin_engine.checkin_engine.database.connection import DBConfig, DatabaseConnection
from src.checkin_engine.checkin_engine.settings.mysql_settings_repository import MySQLSettingsRepository
from src.checkin_engine.checkin_engine.settings.service import SystemSettingsService

logger = logging.getLogger("init_db")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection(DBConfig.from_mapping(settings.DB_CONFIG))

    apply_schema(conn, schema_path=REPO_ROOT / "database" / "schema.sql")
    SystemSettingsService(MySQLSettingsRepository(conn)).initialize_defaults()
    cfg = conn.config
    logger.info(
        "OK: applied schema.sql -> %s@%s:%s/%s (tables=%s)",
        cfg.user, cfg.host, cfg.port, cfg.database, len(list_tables(conn)),
    )


if __name__ == "__main__":
    main()
