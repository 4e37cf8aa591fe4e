"""Shared helpers for the JSON controllers."""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from functools import wraps
from typing import Any, Optional

from flask import g, jsonify, request, session
from loguru import logger

from ..core.exceptions import DomainError
from ..core.identity import (
    AdminIdentity,
    Identity,
    MemberIdentity,
    identity_from_claims,
)


def current_identity() -> Optional[Identity]:
    """Identity of the caller, resolved once per request from the signed session."""

    if "identity" not in g:
        g.identity = identity_from_claims(dict(session))
    return g.identity


def error_response(message: str, status: int):
    return jsonify({"error": message}), status


def domain_error_response(e: DomainError):
    return error_response(str(e), e.status_code)


def server_error_response(action: str):
    logger.exception(f"Failed to {action}")
    return error_response(f"Failed to {action}", 500)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_identity() is None:
            return error_response("Unauthorized", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        caller = current_identity()
        if caller is None:
            return error_response("Unauthorized", 401)
        if not isinstance(caller, AdminIdentity):
            return error_response("Admin access required", 403)
        return view(*args, **kwargs)

    return wrapper


def member_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        caller = current_identity()
        if caller is None:
            return error_response("Unauthorized", 401)
        if not isinstance(caller, MemberIdentity):
            return error_response("Member access required", 403)
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def int_arg(name: str, default: Optional[int] = None) -> Optional[int]:
    value = request.args.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


def to_json(value: Any) -> Any:
    """Convert dataclasses/enums/dates/decimals into JSON-friendly values."""

    if hasattr(value, "__dataclass_fields__"):
        hidden = getattr(value, "__json_exclude__", ())
        out = {k: to_json(getattr(value, k)) for k in value.__dataclass_fields__ if k not in hidden}
        for extra in getattr(value, "__json_extra__", ()):
            out[extra] = to_json(getattr(value, extra))
        return out
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, dict):
        return {str(k): to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_json(v) for v in value]
    return value
