"""
Admin operations.

Each operation is a linear pipeline: check the service is configured,
validate the input, authorize the caller as an admin, then read or write the
record store. Failures raise `AdminError` subclasses; nothing is written
before authorization succeeds.
"""

from __future__ import annotations

import logging
import secrets
import string
from dataclasses import asdict
from datetime import datetime, timedelta
from typing import Any, Type, TypeVar

from dacite import Config, from_dict
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from admin_api.auth import (
    ServiceState,
    authorize_admin,
    extract_bearer_token,
    require_configured,
)
from admin_api.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
    describe_validation_errors,
)
from admin_api.schemas import (
    BanIpRequest,
    BanUserRequest,
    CreateLicenseRequest,
    VerifyAdminRequest,
)
from shared.constants import LICENSE_KEY_PREFIX, LICENSE_KEY_SUFFIX_LENGTH
from shared.json_utils import convert_keys, to_json_value
from shared.types import BanRecord, IpBanRecord, LicenseRecord, UserRecord

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

LICENSE_KEY_ALPHABET = string.ascii_uppercase + string.digits

# Top-level `error` of each operation's failure envelope.
VERIFY_ADMIN_FAILURE = "Unauthorized"
BAN_USER_FAILURE = "Failed to ban user"
BAN_IP_FAILURE = "Failed to ban IP address"
LIST_USERS_FAILURE = "Unauthorized"
CREATE_LICENSE_FAILURE = "Failed to create license"

USER_BANNED_MESSAGE = "User banned successfully"
IP_BANNED_MESSAGE = "IP address banned successfully"


def parse_request(model: Type[M], body: Any) -> M:
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return model.model_validate(body)
    except PydanticValidationError as e:
        raise ValidationError(describe_validation_errors(e.errors())) from e


def ban_expiry(banned_at: datetime, duration: int) -> datetime:
    """Ban durations are in seconds."""
    return banned_at + timedelta(milliseconds=duration * 1000)


def generate_license_key(created_at: datetime) -> str:
    """Returns `LIC-<epoch ms>-<9 uppercase alphanumerics>`."""
    timestamp_ms = int(created_at.timestamp() * 1000)
    suffix = "".join(
        secrets.choice(LICENSE_KEY_ALPHABET) for _ in range(LICENSE_KEY_SUFFIX_LENGTH)
    )
    return f"{LICENSE_KEY_PREFIX}-{timestamp_ms}-{suffix}"


def project_user(uid: str, data: dict) -> dict:
    """Reduces a user document to the fields admins may list."""
    user = from_dict(
        data_class=UserRecord,
        data={**convert_keys(data, "camel_to_snake"), "uid": uid},
        config=Config(check_types=False),
    )
    return to_json_value(convert_keys(asdict(user), "snake_to_camel"))


def verify_admin(state: ServiceState, body: Any) -> str:
    """Returns the caller's uid if their ID token belongs to an admin."""
    ctx = require_configured(state)
    try:
        request = parse_request(VerifyAdminRequest, body)
    except ValidationError as e:
        raise AuthenticationError(e.message) from e
    return authorize_admin(ctx, request.idToken)


def ban_user(state: ServiceState, body: Any) -> str:
    """
    Bans a non-admin user.

    Appends a new ban record on every call; repeated bans of the same user
    are kept side by side.
    """
    ctx = require_configured(state)
    request = parse_request(BanUserRequest, body)
    admin_uid = authorize_admin(ctx, request.idToken)

    target = ctx.store.get_user(request.userId)
    if target is None:
        raise NotFoundError("User not found")
    if target.get("isAdmin"):
        raise ConflictError("Cannot ban admin users")

    banned_at = ctx.clock()
    ban = BanRecord(
        user_id=request.userId,
        reason=request.reason,
        banned_by=admin_uid,
        banned_at=banned_at,
        duration=request.duration,
        expires_at=ban_expiry(banned_at, request.duration),
    )
    ctx.store.add_ban(convert_keys(asdict(ban), "snake_to_camel"))

    logger.info(
        f"[ADMIN] {admin_uid} banned user {request.userId}. Reason: {request.reason}"
    )
    return USER_BANNED_MESSAGE


def ban_ip(state: ServiceState, body: Any) -> str:
    ctx = require_configured(state)
    request = parse_request(BanIpRequest, body)
    admin_uid = authorize_admin(ctx, request.idToken)

    banned_at = ctx.clock()
    ip_ban = IpBanRecord(
        ip_address=request.ipAddress,
        reason=request.reason,
        banned_by=admin_uid,
        banned_at=banned_at,
        duration=request.duration,
        expires_at=ban_expiry(banned_at, request.duration),
    )
    ctx.store.add_ip_ban(convert_keys(asdict(ip_ban), "snake_to_camel"))

    logger.info(
        f"[ADMIN] {admin_uid} banned IP {request.ipAddress}. Reason: {request.reason}"
    )
    return IP_BANNED_MESSAGE


def list_users(state: ServiceState, authorization: str | None) -> list[dict]:
    ctx = require_configured(state)
    admin_uid = authorize_admin(ctx, extract_bearer_token(authorization))

    users = [
        project_user(uid, data)
        for uid, data in ctx.store.list_users(limit=ctx.list_users_limit)
    ]
    logger.info(f"[ADMIN] {admin_uid} listed {len(users)} users")
    return users


def create_license(
    state: ServiceState, authorization: str | None, body: Any
) -> str:
    """
    Issues a new unused license and returns its key.

    The key is written with a create-if-absent call; on a collision a fresh
    key is generated, up to `license_key_attempts` times.
    """
    ctx = require_configured(state)
    admin_uid = authorize_admin(ctx, extract_bearer_token(authorization))
    request = parse_request(CreateLicenseRequest, body)

    for _ in range(ctx.license_key_attempts):
        created_at = ctx.clock()
        license_key = generate_license_key(created_at)
        record = LicenseRecord(
            key=license_key,
            plan=request.plan,
            validity_days=request.validityDays,
            created_by=admin_uid,
            created_at=created_at,
        )
        if ctx.store.create_license(
            license_key, convert_keys(asdict(record), "snake_to_camel")
        ):
            logger.info(f"[ADMIN] {admin_uid} created license {license_key}")
            return license_key
        logger.warning(f"License key collision on {license_key}, regenerating")

    raise ConflictError("Could not generate a unique license key", status_code=409)
