"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request

from admin_api.auth import ServiceState
from admin_api.config import get_settings
from admin_api.firebase import connect

_service_state: ServiceState | None = None


def get_service_state() -> ServiceState:
    """
    Return the singleton service state, connecting to Firebase on first use.

    When credentials are missing the state is `Unconfigured` and every admin
    operation answers 503.
    """
    global _service_state
    if _service_state:
        return _service_state

    _service_state = connect(get_settings())
    return _service_state


async def get_json_body(request: Request) -> Any:
    """
    Return the decoded JSON body, or None when it is missing or malformed.

    Admin operations validate the body themselves so that every failure is
    reported with the operation's own error envelope.
    """
    try:
        return await request.json()
    except ValueError:
        return None
