from __future__ import annotations

import logging
from functools import wraps
from typing import Any

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.actor import Actor
from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    ConflictError,
    DomainError,
    InternalError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (InternalError, 500),
)


def status_for(error: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def error_response(error: DomainError):
    return jsonify({"error": error.to_dict()}), status_for(error)


def login_required(view):
    """The credential layer stores the verified principal in the session."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session or "role" not in session:
            return jsonify({"error": {"kind": "authentication_required", "reason": "Login required"}}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        current_actor().require_admin()
        return view(*args, **kwargs)

    return login_required(wrapper)


def current_actor() -> Actor:
    try:
        return Actor(principal_id=int(session["user_id"]), role=Role(session["role"]))
    except (KeyError, TypeError, ValueError):
        raise AuthorizationError("Unknown principal")


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        return error_response(error)

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        # Let Flask render routing errors (404/405) as usual.
        if isinstance(error, HTTPException):
            return error
        logger.error("Unhandled error on %s %s", request.method, request.path, exc_info=error)
        return error_response(InternalError("Server error"))
