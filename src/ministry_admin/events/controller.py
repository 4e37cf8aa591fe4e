from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import (
    admin_required,
    current_identity,
    domain_error_response,
    json_body,
    login_required,
    server_error_response,
    to_json,
)
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.event_service

    @app.route("/api/events", methods=["GET"], endpoint="events_list")
    @login_required
    def events_list():
        try:
            return jsonify(to_json(service.list_events(current_identity()))), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("fetch events")

    @app.route("/api/events", methods=["POST"], endpoint="events_create")
    @admin_required
    def events_create():
        body = json_body()
        try:
            event = service.create_event(
                current_identity(),
                title=body.get("title", ""),
                event_date=body.get("date", ""),
                event_time=body.get("time", ""),
                conductor=body.get("conductor", ""),
                purpose=body.get("purpose", ""),
                location=body.get("location"),
            )
            return jsonify(to_json(event)), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("create event")

    @app.route("/api/events/<int:event_id>", methods=["PATCH"], endpoint="events_update")
    @admin_required
    def events_update(event_id: int):
        try:
            return jsonify(to_json(service.update_event(current_identity(), event_id, json_body()))), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("update event")

    @app.route("/api/events/<int:event_id>", methods=["DELETE"], endpoint="events_cancel")
    @admin_required
    def events_cancel(event_id: int):
        try:
            event = service.cancel_event(current_identity(), event_id)
            return jsonify({"success": True, "event": to_json(event)}), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("cancel event")
