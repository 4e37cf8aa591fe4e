from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import (
    current_identity,
    domain_error_response,
    int_arg,
    member_required,
    server_error_response,
    to_json,
)
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.schedule_service

    @app.route("/api/member/duties", methods=["GET"], endpoint="member_duties")
    @member_required
    def member_duties():
        try:
            duties = service.duties_for_month(current_identity(), int_arg("year"), int_arg("month"))
            return jsonify(to_json(duties)), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("fetch duties")

    @app.route("/api/member/calendar", methods=["GET"], endpoint="member_calendar")
    @member_required
    def member_calendar():
        try:
            grid = service.calendar(current_identity(), int_arg("year"), int_arg("month"))
            return jsonify(to_json(grid)), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("build calendar")

    @app.route("/api/member/schedule", methods=["GET"], endpoint="member_schedule")
    @member_required
    def member_schedule():
        try:
            return jsonify(to_json(service.upcoming_schedule(current_identity()))), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("fetch schedule")
