# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================

# Cloud functions for the chat admin API.
#
# This file containing Python cloud functions must be named main.py.
# See https://cloud.google.com/run/docs/write-functions#python for more info.

# Standard library imports
import json

# Third-party library imports
from firebase_functions import https_fn, logger, options

# Local application imports
from admin_api import operations
from admin_api.auth import ServiceState, Unconfigured
from admin_api.config import get_settings
from admin_api.errors import error_envelope
from admin_api.firebase import connect

_service_state: ServiceState | None = None


def _get_service_state() -> ServiceState:
    """Connects to Firebase on the first request served by this instance."""
    global _service_state
    if _service_state is None:
        _service_state = connect(get_settings())
        if isinstance(_service_state, Unconfigured):
            logger.error(f"Admin functions disabled: {_service_state.reason}")
    return _service_state


def _json_response(body: dict, status: int = 200) -> https_fn.Response:
    return https_fn.Response(
        json.dumps(body), status=status, content_type="application/json"
    )


def _error_response(error: Exception, title: str) -> https_fn.Response:
    status, body = error_envelope(error, title)
    return _json_response(body, status)


def _method_not_allowed(req: https_fn.Request, method: str):
    if req.method == method:
        return None
    return _json_response(
        {"error": "Method not allowed", "details": f"Use {method}"}, 405
    )


@https_fn.on_request(memory=options.MemoryOption.MB_256)
def verify_admin(req: https_fn.Request) -> https_fn.Response:
    """
    Verifies that the caller's ID token belongs to an admin.

    Body: {"idToken": str}. Responds {"success": true, "adminUid": str}.
    """
    if rejected := _method_not_allowed(req, "POST"):
        return rejected
    try:
        admin_uid = operations.verify_admin(
            _get_service_state(), req.get_json(silent=True)
        )
    except Exception as e:
        return _error_response(e, operations.VERIFY_ADMIN_FAILURE)
    return _json_response({"success": True, "adminUid": admin_uid})


@https_fn.on_request(memory=options.MemoryOption.MB_256)
def ban_user(req: https_fn.Request) -> https_fn.Response:
    """
    Bans a non-admin user.

    Body: {"idToken", "userId", "reason", "duration"}, duration in seconds.
    """
    if rejected := _method_not_allowed(req, "POST"):
        return rejected
    try:
        message = operations.ban_user(_get_service_state(), req.get_json(silent=True))
    except Exception as e:
        return _error_response(e, operations.BAN_USER_FAILURE)
    return _json_response({"success": True, "message": message})


@https_fn.on_request(memory=options.MemoryOption.MB_256)
def ban_ip(req: https_fn.Request) -> https_fn.Response:
    if rejected := _method_not_allowed(req, "POST"):
        return rejected
    try:
        message = operations.ban_ip(_get_service_state(), req.get_json(silent=True))
    except Exception as e:
        return _error_response(e, operations.BAN_IP_FAILURE)
    return _json_response({"success": True, "message": message})


@https_fn.on_request(memory=options.MemoryOption.MB_512)
def list_users(req: https_fn.Request) -> https_fn.Response:
    """Lists users. Requires an `Authorization: Bearer <idToken>` header."""
    if rejected := _method_not_allowed(req, "GET"):
        return rejected
    try:
        users = operations.list_users(
            _get_service_state(), req.headers.get("Authorization")
        )
    except Exception as e:
        return _error_response(e, operations.LIST_USERS_FAILURE)
    return _json_response({"success": True, "users": users})


@https_fn.on_request(memory=options.MemoryOption.MB_256)
def create_license(req: https_fn.Request) -> https_fn.Response:
    """
    Issues a license key.

    Requires an `Authorization: Bearer <idToken>` header.
    Body: {"plan": "Free" | "Classic" | "Pro", "validityDays": int}.
    """
    if rejected := _method_not_allowed(req, "POST"):
        return rejected
    try:
        license_key = operations.create_license(
            _get_service_state(),
            req.headers.get("Authorization"),
            req.get_json(silent=True),
        )
    except Exception as e:
        return _error_response(e, operations.CREATE_LICENSE_FAILURE)
    return _json_response({"success": True, "licenseKey": license_key})
