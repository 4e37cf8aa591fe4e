from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import (
    admin_required,
    current_identity,
    domain_error_response,
    error_response,
    int_arg,
    json_body,
    server_error_response,
    to_json,
)
from ..core.exceptions import DomainError
from ..container import Container
from .service import parse_occasion, sheet_row_from_dict


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_mark")
    @admin_required
    def attendance_mark():
        body = json_body()
        try:
            occasion = parse_occasion(body.get("eventType", ""), body.get("eventDate", ""), body.get("serviceTime"))
            if "records" in body:
                records = service.mark_occasion(current_identity(), occasion=occasion, entries=body.get("records") or [])
                return jsonify({"message": "Attendance saved successfully", "records": to_json(records)}), 200

            record = service.mark_attendance(
                current_identity(),
                member_id=body.get("memberId") or 0,
                occasion=occasion,
                status=body.get("status", ""),
                notes=body.get("notes"),
            )
            return jsonify(to_json(record)), 200
        except DomainError as e:
            return domain_error_response(e)
        except (TypeError, ValueError):
            return error_response("Invalid attendance data", 400)
        except Exception:
            return server_error_response("save attendance")

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    @admin_required
    def attendance_summary():
        try:
            occasion = parse_occasion(
                request.args.get("eventType", ""),
                request.args.get("eventDate", ""),
                request.args.get("serviceTime") or None,
            )
            report = service.summarize_occasion(current_identity(), occasion)
            return jsonify(to_json(report)), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("summarize attendance")

    @app.route("/api/attendance/monthly", methods=["GET"], endpoint="attendance_monthly")
    @admin_required
    def attendance_monthly():
        year = int_arg("year")
        month = int_arg("month")
        if not year or not month:
            return error_response("Month and year are required", 400)
        try:
            rows = service.get_monthly_meeting(current_identity(), year, month)
            return jsonify([{**to_json(r), "absent": r.absent} for r in rows]), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return server_error_response("fetch attendance")

    @app.route("/api/attendance/monthly", methods=["POST"], endpoint="attendance_monthly_save")
    @admin_required
    def attendance_monthly_save():
        body = json_body()
        sheet = body.get("attendance")
        if not body.get("year") or not body.get("month") or sheet is None:
            return error_response("Month, year, and attendance data are required", 400)
        if isinstance(sheet, dict):
            sheet = list(sheet.values())
        try:
            result = service.save_monthly_meeting(
                current_identity(),
                int(body["year"]),
                int(body["month"]),
                [sheet_row_from_dict(row) for row in sheet],
            )
            return jsonify({"message": "Attendance saved successfully", **to_json(result)}), 200
        except DomainError as e:
            return domain_error_response(e)
        except (TypeError, ValueError):
            return error_response("Invalid attendance data", 400)
        except Exception:
            return server_error_response("save attendance")
