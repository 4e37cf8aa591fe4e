from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import (
    admin_required,
    current_identity,
    domain_error_response,
    json_body,
    server_error_response,
    to_json,
)
from ..core.exceptions import DomainError
from ..core.identity import identity_to_claims
from ..container import Container


def _status_json(status) -> dict:
    return {
        "hasAdmin": status.has_admin,
        "registrationDisabled": status.registration_disabled,
        "registrationOpen": status.is_open,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        body = json_body()
        try:
            identity = container.auth_service.authenticate(body.get("email", ""), body.get("password", ""))
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("log in")

        session.clear()
        session.permanent = True
        session.update(identity_to_claims(identity))
        return jsonify({"message": "Login successful", "user": identity_to_claims(identity)}), 200

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def auth_logout():
        session.clear()
        return jsonify({"message": "Logged out"}), 200

    @app.route("/api/auth/session", methods=["GET"], endpoint="auth_session")
    def auth_session():
        caller = current_identity()
        if caller is None:
            return jsonify({"authenticated": False, "user": None}), 200
        return jsonify({"authenticated": True, "user": identity_to_claims(caller)}), 200

    @app.route("/api/auth/register", methods=["GET"], endpoint="auth_registration_status")
    def auth_registration_status():
        try:
            return jsonify(_status_json(container.registration_service.status())), 200
        except Exception:
            return server_error_response("check registration status")

    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        body = json_body()
        try:
            admin = container.registration_service.register_first_admin(
                name=body.get("name", ""),
                email=body.get("email", ""),
                password=body.get("password", ""),
                position=body.get("position"),
                contact_number=body.get("contactNumber"),
            )
            return jsonify({"message": "Admin account created successfully", "admin": to_json(admin)}), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("register admin")

    @app.route("/api/admin/register", methods=["POST"], endpoint="admin_register")
    @admin_required
    def admin_register():
        body = json_body()
        try:
            admin = container.registration_service.register_admin(
                current_identity(),
                name=body.get("name", ""),
                email=body.get("email", ""),
                password=body.get("password", ""),
                position=body.get("position"),
                contact_number=body.get("contactNumber"),
            )
            return jsonify({"message": "Admin account created successfully", "admin": to_json(admin)}), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("register admin")

    @app.route("/api/auth/disable-registration", methods=["POST"], endpoint="auth_disable_registration")
    @admin_required
    def auth_disable_registration():
        try:
            status = container.registration_service.disable_registration(current_identity())
            return jsonify({"message": "Registration disabled", **_status_json(status)}), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("disable registration")
