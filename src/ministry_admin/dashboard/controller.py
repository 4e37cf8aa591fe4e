from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import (
    admin_required,
    current_identity,
    domain_error_response,
    member_required,
    server_error_response,
    to_json,
)
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.dashboard_service

    @app.route("/api/admin/dashboard", methods=["GET"], endpoint="admin_dashboard")
    @admin_required
    def admin_dashboard():
        try:
            return jsonify(to_json(service.admin_dashboard(current_identity()))), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("load dashboard")

    @app.route("/api/member/dashboard", methods=["GET"], endpoint="member_dashboard")
    @member_required
    def member_dashboard():
        try:
            board = service.member_dashboard(current_identity())
            return jsonify(
                {
                    "profile": board.profile.as_dict(),
                    "serviceLevel": board.profile.service_level.value,
                    "groupName": board.group_name,
                    "unreadNotifications": board.unread_notifications,
                    "upcomingEvents": to_json(board.upcoming_events),
                }
            ), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("load dashboard")
