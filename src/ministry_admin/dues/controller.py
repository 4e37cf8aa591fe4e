from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import (
    admin_required,
    current_identity,
    domain_error_response,
    int_arg,
    json_body,
    member_required,
    server_error_response,
    to_json,
)
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.dues_service

    @app.route("/api/dues", methods=["GET"], endpoint="dues_list")
    @admin_required
    def dues_list():
        try:
            listing = service.list_dues(
                current_identity(),
                member_id=int_arg("memberId"),
                status=request.args.get("status") or None,
                search=request.args.get("search") or None,
            )
            return jsonify({"dues": to_json(listing.records), "totals": to_json(listing.totals)}), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("fetch dues")

    @app.route("/api/dues", methods=["POST"], endpoint="dues_create")
    @admin_required
    def dues_create():
        body = json_body()
        try:
            created = service.create_dues(
                current_identity(),
                member_id=body.get("memberId", ""),
                title=body.get("title", ""),
                amount=body.get("amount"),
                due_date=body.get("dueDate", ""),
                description=body.get("description"),
                category=body.get("category"),
            )
            return jsonify({"message": f"Created {len(created)} due(s)", "dues": to_json(created)}), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("create dues")

    @app.route("/api/dues/<int:record_id>/pay", methods=["POST"], endpoint="dues_pay")
    @admin_required
    def dues_pay(record_id: int):
        body = json_body()
        try:
            record = service.mark_paid(
                current_identity(),
                record_id,
                paid_date=body.get("paidDate"),
                payment_method=body.get("paymentMethod"),
                reference=body.get("reference"),
                notes=body.get("notes"),
            )
            return jsonify(to_json(record)), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("mark due as paid")

    @app.route("/api/dues/<int:record_id>/waive", methods=["POST"], endpoint="dues_waive")
    @admin_required
    def dues_waive(record_id: int):
        try:
            return jsonify(to_json(service.waive(current_identity(), record_id))), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("waive due")

    @app.route("/api/dues/<int:record_id>/overdue", methods=["POST"], endpoint="dues_overdue")
    @admin_required
    def dues_overdue(record_id: int):
        try:
            return jsonify(to_json(service.mark_overdue(current_identity(), record_id))), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("mark due as overdue")

    @app.route("/api/financial/dues", methods=["GET"], endpoint="financial_dues")
    @admin_required
    def financial_dues():
        try:
            year, results = service.yearly_dues(current_identity(), int_arg("year"))
            return jsonify({"year": year, "results": to_json(results)}), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("fetch dues")

    @app.route("/api/member/expenses", methods=["GET"], endpoint="member_expenses")
    @member_required
    def member_expenses():
        try:
            return jsonify(to_json(service.member_expenses(current_identity()))), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("fetch expenses")

    @app.route("/api/member/expenses", methods=["POST"], endpoint="member_expenses_create")
    @member_required
    def member_expenses_create():
        body = json_body()
        try:
            item = service.request_expense(
                current_identity(),
                description=body.get("description", ""),
                amount=body.get("amount"),
                category=body.get("category"),
            )
            return jsonify(to_json(item)), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("create expense request")
