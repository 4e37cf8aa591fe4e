from __future__ import annotations

import importlib

from dotenv import load_dotenv
from loguru import logger

from config import get_settings_module
from ministry_admin.common.logging_setup import configure_logging
from ministry_admin.database.bootstrap import SCHEMA_PATH, apply_schema, list_tables


def main() -> None:
    load_dotenv(override=False)
    configure_logging()
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=SCHEMA_PATH)
    tables = list_tables(db_config)
    logger.info(
        f"Applied schema.sql -> {db_config.get('user')}@{db_config.get('host')}:"
        f"{db_config.get('port', 3306)}/{db_config.get('database')} (tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
