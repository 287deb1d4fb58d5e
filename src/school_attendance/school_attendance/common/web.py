"""Flask helpers shared by the feature controllers."""
from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    DuplicateError,
    LowConfidenceError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (DuplicateError, 409),
    (LowConfidenceError, 422),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (DomainError, 400),
)


def error_response(e: DomainError):
    status = next(code for cls, code in STATUS_BY_ERROR if isinstance(e, cls))
    return jsonify({"success": False, "message": str(e), "reason": e.reason}), status


def handle_errors(fallback_message: str):
    """Turn domain errors into JSON rejections and log anything unexpected."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except DomainError as e:
                return error_response(e)
            except Exception:
                logger.exception("%s %s failed", request.method, request.path)
                return jsonify({"success": False, "message": fallback_message, "reason": "error"}), 500

        return wrapper

    return decorator


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response(AuthenticationError("Please log in to continue"))
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response(AuthenticationError("Please log in to continue"))
        if session.get("role") != Role.ADMIN.value:
            return error_response(AuthorizationError("Administrator access required"))
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> Optional[str]:
    return session.get("user_id")


def current_role() -> Role:
    return Role(session.get("role"))


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
