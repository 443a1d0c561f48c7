"""
HTTP routes for the admin API.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse

from admin_api import operations
from admin_api.auth import ServiceState
from admin_api.dependencies import get_json_body, get_service_state
from admin_api.errors import error_envelope
from admin_api.schemas import (
    CreateLicenseResponse,
    ErrorResponse,
    ListUsersResponse,
    MessageResponse,
    RenderMessageRequest,
    RenderMessageResponse,
    VerifyAdminResponse,
)
from shared import message_renderer

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


def _error_response(error: Exception, title: str) -> JSONResponse:
    status_code, body = error_envelope(error, title)
    return JSONResponse(status_code=status_code, content=body)


@router.post(
    "/verify-admin", response_model=VerifyAdminResponse, responses=ERROR_RESPONSES
)
def verify_admin(
    body: Any = Depends(get_json_body),
    state: ServiceState = Depends(get_service_state),
):
    try:
        admin_uid = operations.verify_admin(state, body)
    except Exception as e:
        return _error_response(e, operations.VERIFY_ADMIN_FAILURE)
    return VerifyAdminResponse(adminUid=admin_uid)


@router.post("/ban-user", response_model=MessageResponse, responses=ERROR_RESPONSES)
def ban_user(
    body: Any = Depends(get_json_body),
    state: ServiceState = Depends(get_service_state),
):
    try:
        message = operations.ban_user(state, body)
    except Exception as e:
        return _error_response(e, operations.BAN_USER_FAILURE)
    return MessageResponse(message=message)


@router.post("/ban-ip", response_model=MessageResponse, responses=ERROR_RESPONSES)
def ban_ip(
    body: Any = Depends(get_json_body),
    state: ServiceState = Depends(get_service_state),
):
    try:
        message = operations.ban_ip(state, body)
    except Exception as e:
        return _error_response(e, operations.BAN_IP_FAILURE)
    return MessageResponse(message=message)


@router.get("/list-users", response_model=ListUsersResponse, responses=ERROR_RESPONSES)
def list_users(
    authorization: str | None = Header(None),
    state: ServiceState = Depends(get_service_state),
):
    """Lists every user record (or up to LIST_USERS_LIMIT of them)."""
    try:
        users = operations.list_users(state, authorization)
    except Exception as e:
        return _error_response(e, operations.LIST_USERS_FAILURE)
    return ListUsersResponse(users=users)


@router.post(
    "/create-license", response_model=CreateLicenseResponse, responses=ERROR_RESPONSES
)
def create_license(
    body: Any = Depends(get_json_body),
    authorization: str | None = Header(None),
    state: ServiceState = Depends(get_service_state),
):
    try:
        license_key = operations.create_license(state, authorization, body)
    except Exception as e:
        return _error_response(e, operations.CREATE_LICENSE_FAILURE)
    return CreateLicenseResponse(licenseKey=license_key)


@router.post("/render-message", response_model=RenderMessageResponse)
def render_message(payload: RenderMessageRequest):
    return RenderMessageResponse(html=message_renderer.render_message(payload.content))
