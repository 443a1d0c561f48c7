"""
Identity verification and the admin authorization gate.

Every admin operation resolves its caller through `authorize_admin`, which
verifies the bearer token with the identity provider and then requires the
caller's user record to carry `isAdmin: true`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Protocol, Union

from admin_api.errors import (
    AuthenticationError,
    AuthorizationError,
    UnavailableError,
)
from admin_api.store import RecordStore
from shared.constants import (
    ID_TOKEN_MAX_LENGTH,
    ID_TOKEN_MIN_LENGTH,
    ID_TOKEN_PATTERN,
)

BEARER_PREFIX = "Bearer "

_ID_TOKEN_RE = re.compile(ID_TOKEN_PATTERN)


class IdentityVerifier(Protocol):
    """Exchanges an ID token for the verified uid, or raises AuthenticationError."""

    def verify(self, id_token: str) -> str:
        ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AdminContext:
    """Everything an admin operation needs, constructed once at startup."""

    identity: IdentityVerifier
    store: RecordStore
    clock: Callable[[], datetime] = field(default=_utcnow)
    list_users_limit: int | None = None
    license_key_attempts: int = 3


@dataclass(frozen=True)
class Unconfigured:
    """The service could not be connected to Firebase; every call fails."""

    reason: str


ServiceState = Union[AdminContext, Unconfigured]


def require_configured(state: ServiceState) -> AdminContext:
    if isinstance(state, AdminContext):
        return state
    reason = state.reason if isinstance(state, Unconfigured) else "not configured"
    raise UnavailableError(f"Admin service unavailable: {reason}")


def check_id_token_format(id_token) -> str:
    if not isinstance(id_token, str):
        raise AuthenticationError("No ID token provided")
    if not ID_TOKEN_MIN_LENGTH <= len(id_token) <= ID_TOKEN_MAX_LENGTH:
        raise AuthenticationError("Invalid token length")
    if not _ID_TOKEN_RE.match(id_token):
        raise AuthenticationError("Invalid token format")
    return id_token


def extract_bearer_token(authorization: str | None) -> str:
    """Returns the ID token from an `Authorization: Bearer <token>` header."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthenticationError("No ID token provided")
    id_token = authorization[len(BEARER_PREFIX) :].strip()
    if not id_token:
        raise AuthenticationError("No ID token provided")
    return check_id_token_format(id_token)


def authorize_admin(ctx: AdminContext, id_token: str) -> str:
    """
    Verifies `id_token` and returns the caller's uid if they are an admin.

    Fails closed: a missing user record or any `isAdmin` value other than
    `True` is rejected.
    """
    uid = ctx.identity.verify(id_token)
    user = ctx.store.get_user(uid)
    if user is None or user.get("isAdmin") is not True:
        raise AuthorizationError("User is not an admin")
    return uid
