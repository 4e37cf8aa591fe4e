from __future__ import annotations

import importlib
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from loguru import logger

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .birthdays.controller import register as register_birthdays
from .common.logging_setup import configure_logging
from .common.web import error_response
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS, MEMBER_EMAIL_DOMAIN
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, list_tables
from .dues.controller import register as register_dues
from .events.controller import register as register_events
from .groups.controller import register as register_groups
from .members.controller import register as register_members
from .notifications.controller import register as register_notifications
from .schedules.controller import register as register_schedules
from .users.controller import register as register_users


def create_app(container: Optional[Container] = None) -> Flask:
    """App factory. Pass ``container`` to run against pre-wired (e.g. in-memory) repositories."""

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(days=int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS)))
    app.json.sort_keys = False

    if container is None:
        db_config = dict(getattr(settings, "DB_CONFIG"))
        logger.info(
            f"settings={settings_module} db={db_config.get('user')}@{db_config.get('host')}:"
            f"{db_config.get('port', 3306)}/{db_config.get('database')}"
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info(f"schema ready (tables={len(list_tables(db_config))})")

        container = build_container(
            db_config=db_config,
            pool_size=int(getattr(settings, "DB_POOL_SIZE", 5)),
            member_email_domain=getattr(settings, "MEMBER_EMAIL_DOMAIN", MEMBER_EMAIL_DOMAIN),
        )

    app.extensions["container"] = container

    register_users(app, container)
    register_members(app, container)
    register_attendance(app, container)
    register_dues(app, container)
    register_events(app, container)
    register_notifications(app, container)
    register_schedules(app, container)
    register_groups(app, container)
    register_birthdays(app, container)
    register_dashboard(app, container)

    @app.errorhandler(404)
    def not_found(_e):
        return error_response("Not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(_e):
        return error_response("Method not allowed", 405)

    return app
