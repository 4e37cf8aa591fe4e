from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import (
    admin_required,
    current_identity,
    domain_error_response,
    int_arg,
    login_required,
    server_error_response,
    to_json,
)
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.birthday_service

    @app.route("/api/birthdays", methods=["GET"], endpoint="birthdays_list")
    @login_required
    def birthdays_list():
        try:
            people = service.list_birthdays(current_identity(), month=int_arg("month"))
            return jsonify(to_json(people)), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("fetch birthdays")

    @app.route("/api/birthdays/announce", methods=["POST"], endpoint="birthdays_announce")
    @admin_required
    def birthdays_announce():
        try:
            posted = service.announce_today(current_identity())
            return jsonify({"announced": len(posted), "notifications": to_json(posted)}), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("announce birthdays")
