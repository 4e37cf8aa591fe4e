from __future__ import annotations

import argparse
import getpass
import importlib

from dotenv import load_dotenv
from loguru import logger

from config import get_settings_module
from ministry_admin.common.logging_setup import configure_logging
from ministry_admin.database.bootstrap import ensure_admin


def main() -> None:
    parser = argparse.ArgumentParser(description="Create or reset a bootstrap admin account.")
    parser.add_argument("--name", default="Ministry Admin")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", help="prompted for when omitted")
    args = parser.parse_args()

    load_dotenv(override=False)
    configure_logging()
    settings = importlib.import_module(get_settings_module())

    password = args.password or getpass.getpass("Password: ")
    code = ensure_admin(dict(settings.DB_CONFIG), name=args.name, email=args.email, password=password)
    logger.info(f"Admin {code} <{args.email.strip().lower()}> is ready")


if __name__ == "__main__":
    main()
