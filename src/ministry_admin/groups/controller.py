from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import (
    admin_required,
    current_identity,
    domain_error_response,
    json_body,
    member_required,
    server_error_response,
    to_json,
)
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.group_service

    @app.route("/api/groups", methods=["GET"], endpoint="groups_list")
    @admin_required
    def groups_list():
        try:
            return jsonify(to_json(service.list_groups(current_identity()))), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("fetch groups")

    @app.route("/api/groups", methods=["POST"], endpoint="groups_create")
    @admin_required
    def groups_create():
        body = json_body()
        try:
            group = service.create_group(
                current_identity(),
                name=body.get("name", ""),
                description=body.get("description"),
                leader_member_id=body.get("leaderId"),
                meeting_time=body.get("meetingTime"),
                location=body.get("location"),
            )
            return jsonify(to_json(group)), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("create group")

    @app.route("/api/groups/<int:group_id>", methods=["DELETE"], endpoint="groups_delete")
    @admin_required
    def groups_delete(group_id: int):
        try:
            service.delete_group(current_identity(), group_id)
            return jsonify({"success": True, "id": group_id}), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("delete group")

    @app.route("/api/groups/<int:group_id>/members", methods=["POST"], endpoint="groups_add_member")
    @admin_required
    def groups_add_member(group_id: int):
        try:
            group = service.add_member(current_identity(), group_id, json_body().get("memberId"))
            return jsonify(to_json(group)), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("add group member")

    @app.route(
        "/api/groups/<int:group_id>/members/<int:member_id>", methods=["DELETE"], endpoint="groups_remove_member"
    )
    @admin_required
    def groups_remove_member(group_id: int, member_id: int):
        try:
            return jsonify(to_json(service.remove_member(current_identity(), group_id, member_id))), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("remove group member")

    @app.route("/api/member/group", methods=["GET"], endpoint="member_group")
    @member_required
    def member_group():
        try:
            return jsonify({"groupName": service.my_group_name(current_identity())}), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("fetch group")

    @app.route("/api/member/groups", methods=["GET"], endpoint="member_groups")
    @member_required
    def member_groups():
        try:
            return jsonify(to_json(service.member_groups(current_identity()))), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("fetch groups")
