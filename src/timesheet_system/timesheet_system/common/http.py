from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, session

from ..core.exceptions import (
    DomainError,
    DuplicateClockInError,
    NotClockedInError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Something went wrong. Please try again."


def login_required(view):
    """Reject requests without an identity in the session.

    The session is filled in by the external login system; handlers read it
    through ``current_identity`` and pass it on explicitly.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "employee_id" not in session:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def current_identity() -> tuple[str, str]:
    employee_id = str(session["employee_id"])
    return employee_id, str(session.get("employee_name") or employee_id)


def error_response(e: DomainError):
    if isinstance(e, (DuplicateClockInError, NotClockedInError)):
        status = 409
    elif isinstance(e, ValidationError):
        status = 400
    elif isinstance(e, NotFoundError):
        status = 404
    elif isinstance(e, PersistenceError):
        logger.error("Storage failure: %s", e)
        return jsonify({"success": False, "message": GENERIC_FAILURE}), 503
    else:
        logger.exception("Unhandled domain error")
        return jsonify({"success": False, "message": GENERIC_FAILURE}), 500

    return jsonify({"success": False, "error": type(e).__name__, "message": str(e)}), status
