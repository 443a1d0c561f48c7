"""
Error taxonomy for admin operations and its mapping to HTTP responses.
"""

from __future__ import annotations

import logging
from typing import Iterable

logger = logging.getLogger(__name__)

INTERNAL_ERROR_DETAILS = "Internal error"


class AdminError(Exception):
    """Base class for every failure an admin operation reports to callers."""

    status_code = 400
    # When set, used as the envelope's top-level `error` instead of the
    # operation's generic failure title.
    public_message: str | None = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AdminError):
    status_code = 400


class AuthenticationError(AdminError):
    status_code = 401


class AuthorizationError(AdminError):
    status_code = 401


class NotFoundError(AdminError):
    status_code = 404

    def __init__(self, message: str):
        super().__init__(message)
        self.public_message = message


class ConflictError(AdminError):
    status_code = 403

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.public_message = message
        if status_code:
            self.status_code = status_code


class UnavailableError(AdminError):
    status_code = 503


def error_envelope(error: Exception, title: str) -> tuple[int, dict]:
    """
    Maps an exception raised by an admin operation to (status, JSON body).

    Admin errors keep their message as `details`; anything else is logged
    with its traceback and reported as a 500 without internals.
    """
    if isinstance(error, AdminError):
        logger.warning(f"{title}: {type(error).__name__}: {error.message}")
        body = {"error": error.public_message or title, "details": error.message}
        return error.status_code, body

    logger.exception(f"{title}: unexpected error", exc_info=error)
    return 500, {"error": title, "details": INTERNAL_ERROR_DETAILS}


def describe_validation_errors(errors: Iterable[dict]) -> str:
    """Joins pydantic error dicts into `field: message; ...`."""
    parts = []
    for err in errors:
        location = ".".join(str(part) for part in err.get("loc", ())) or "body"
        parts.append(f"{location}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)
