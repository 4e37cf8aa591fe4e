from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import (
    admin_required,
    current_identity,
    domain_error_response,
    json_body,
    member_required,
    server_error_response,
)
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/members", methods=["GET"], endpoint="members_list")
    @admin_required
    def members_list():
        try:
            views = container.member_service.list_members(current_identity(), status=request.args.get("status"))
            return jsonify([v.as_dict() for v in views]), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("fetch members")

    @app.route("/api/members", methods=["POST"], endpoint="members_create")
    @admin_required
    def members_create():
        body = json_body()
        try:
            view = container.member_service.create_member(
                current_identity(),
                surname=body.get("surname", ""),
                given_name=body.get("givenName", ""),
                birthday=body.get("birthday", ""),
                address=body.get("address", ""),
                parent_contact=body.get("parentContact", ""),
                date_of_investiture=body.get("dateOfInvestiture", ""),
                username=body.get("username", ""),
                password=body.get("password", ""),
                email=body.get("email") or None,
                contact_number=body.get("contactNumber") or None,
            )
            return jsonify({"message": "Member created successfully", "member": view.as_dict()}), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("create member")

    @app.route("/api/members/<int:member_id>", methods=["GET"], endpoint="members_get")
    @admin_required
    def members_get(member_id: int):
        try:
            return jsonify(container.member_service.get_member(current_identity(), member_id).as_dict()), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("fetch member")

    @app.route("/api/members/<int:member_id>", methods=["PUT"], endpoint="members_update")
    @admin_required
    def members_update(member_id: int):
        try:
            view = container.member_service.update_member(current_identity(), member_id, json_body())
            return jsonify(view.as_dict()), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("update member")

    @app.route("/api/members/<int:member_id>", methods=["DELETE"], endpoint="members_deactivate")
    @admin_required
    def members_deactivate(member_id: int):
        try:
            view = container.member_service.deactivate_member(current_identity(), member_id)
            return jsonify({"message": "Member deactivated successfully", "member": view.as_dict()}), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("deactivate member")

    @app.route("/api/member/profile", methods=["GET"], endpoint="member_profile")
    @member_required
    def member_profile():
        try:
            return jsonify(container.member_service.get_profile(current_identity()).as_dict()), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("fetch profile")
