"""
Pydantic schemas for the admin API.

Field names are camelCase to match the JSON the web client sends.
"""

from __future__ import annotations

import ipaddress
from typing import Annotated, Any, Literal, Optional

from pydantic import BaseModel, Field, StringConstraints, field_validator

from shared.constants import (
    BAN_DURATION_MAX,
    BAN_DURATION_MIN,
    BAN_REASON_MAX_LENGTH,
    BAN_REASON_MIN_LENGTH,
    ID_TOKEN_MAX_LENGTH,
    ID_TOKEN_MIN_LENGTH,
    ID_TOKEN_PATTERN,
    LICENSE_VALIDITY_DAYS_MAX,
    LICENSE_VALIDITY_DAYS_MIN,
    USER_ID_MAX_LENGTH,
    USER_ID_MIN_LENGTH,
)
from shared.types import LicensePlan

IdToken = Annotated[
    str,
    StringConstraints(
        min_length=ID_TOKEN_MIN_LENGTH,
        max_length=ID_TOKEN_MAX_LENGTH,
        pattern=ID_TOKEN_PATTERN,
    ),
]
BanReason = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=BAN_REASON_MIN_LENGTH,
        max_length=BAN_REASON_MAX_LENGTH,
    ),
]
# Seconds, see shared.constants.
BanDuration = Annotated[
    int, Field(strict=True, ge=BAN_DURATION_MIN, le=BAN_DURATION_MAX)
]


class VerifyAdminRequest(BaseModel):
    idToken: IdToken


class BanUserRequest(BaseModel):
    idToken: IdToken
    userId: str = Field(..., min_length=USER_ID_MIN_LENGTH, max_length=USER_ID_MAX_LENGTH)
    reason: BanReason
    duration: BanDuration


class BanIpRequest(BaseModel):
    idToken: IdToken
    ipAddress: str
    reason: BanReason
    duration: BanDuration

    @field_validator("ipAddress")
    @classmethod
    def _parse_ip(cls, value: str) -> str:
        try:
            return str(ipaddress.ip_address(value))
        except ValueError as e:
            raise ValueError("Invalid IPv4 or IPv6 address") from e


class CreateLicenseRequest(BaseModel):
    plan: LicensePlan
    validityDays: int = Field(
        ...,
        strict=True,
        ge=LICENSE_VALIDITY_DAYS_MIN,
        le=LICENSE_VALIDITY_DAYS_MAX,
    )


class RenderMessageRequest(BaseModel):
    content: str


class VerifyAdminResponse(BaseModel):
    success: Literal[True] = True
    adminUid: str


class MessageResponse(BaseModel):
    success: Literal[True] = True
    message: str


class UserSummary(BaseModel):
    uid: str
    email: Optional[str] = None
    displayName: Optional[str] = None
    isAdmin: Optional[Any] = None
    plan: Optional[str] = None
    createdAt: Optional[Any] = None


class ListUsersResponse(BaseModel):
    success: Literal[True] = True
    users: list[UserSummary]


class CreateLicenseResponse(BaseModel):
    success: Literal[True] = True
    licenseKey: str


class RenderMessageResponse(BaseModel):
    html: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
