from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import (
    admin_required,
    current_identity,
    domain_error_response,
    int_arg,
    json_body,
    login_required,
    server_error_response,
    to_json,
)
from ..core.constants import DEFAULT_NOTIFICATION_LIMIT
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.notification_service

    @app.route("/api/notifications", methods=["GET"], endpoint="notifications_list")
    @login_required
    def notifications_list():
        try:
            items = service.list_for(current_identity(), limit=int_arg("limit", DEFAULT_NOTIFICATION_LIMIT))
            return jsonify(to_json(items)), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("fetch notifications")

    @app.route("/api/notifications", methods=["POST"], endpoint="notifications_create")
    @admin_required
    def notifications_create():
        body = json_body()
        try:
            notification = service.announce(
                current_identity(),
                title=body.get("title", ""),
                message=body.get("message", ""),
                priority=body.get("priority"),
                target_type=body.get("targetType"),
                target_id=body.get("targetId"),
            )
            return jsonify(to_json(notification)), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("create notification")

    @app.route("/api/notifications/<int:notification_id>", methods=["PATCH"], endpoint="notifications_update")
    @login_required
    def notifications_update(notification_id: int):
        body = json_body()
        try:
            notification = service.set_read(
                current_identity(), notification_id, is_read=bool(body.get("isRead", True))
            )
            return jsonify(to_json(notification)), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("update notification")

    @app.route("/api/notifications/mark-all-read", methods=["POST"], endpoint="notifications_mark_all_read")
    @login_required
    def notifications_mark_all_read():
        try:
            updated = service.mark_all_read(current_identity())
            return jsonify({"message": "All notifications marked as read", "updated": updated}), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("mark notifications as read")

    @app.route("/api/notifications/unread-count", methods=["GET"], endpoint="notifications_unread_count")
    @login_required
    def notifications_unread_count():
        try:
            return jsonify({"count": service.unread_count(current_identity())}), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("count notifications")
