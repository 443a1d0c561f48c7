"""
Firebase wiring: service-account initialization and ID token verification.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

import firebase_admin
from firebase_admin import auth, credentials, firestore

from admin_api.auth import AdminContext, ServiceState, Unconfigured
from admin_api.config import Settings
from admin_api.errors import AuthenticationError, UnavailableError
from admin_api.store import FirestoreRecordStore

logger = logging.getLogger(__name__)


class FirebaseIdentityVerifier:
    """Verifies Firebase Authentication ID tokens."""

    def __init__(self, app: firebase_admin.App, check_revoked: bool = False):
        self.app = app
        self.check_revoked = check_revoked

    def verify(self, id_token: str) -> str:
        try:
            decoded = auth.verify_id_token(
                id_token, app=self.app, check_revoked=self.check_revoked
            )
        except auth.CertificateFetchError as e:
            raise UnavailableError(f"Could not fetch token certificates: {e}") from e
        except (auth.InvalidIdTokenError, auth.UserDisabledError, ValueError) as e:
            raise AuthenticationError(f"Invalid ID token: {e}") from e

        uid = decoded.get("uid")
        if not uid:
            raise AuthenticationError("ID token has no subject")
        return uid


def load_credentials(settings: Settings) -> Optional[credentials.Certificate]:
    """
    Builds service-account credentials from settings.

    The inline JSON variable takes precedence over the key file path.
    Returns None when neither is set.
    """
    if settings.firebase_service_account:
        return credentials.Certificate(json.loads(settings.firebase_service_account))
    if settings.firebase_service_account_path:
        return credentials.Certificate(settings.firebase_service_account_path)
    return None


def _get_or_initialize_app(
    cred: credentials.Certificate, settings: Settings
) -> firebase_admin.App:
    try:
        return firebase_admin.get_app(settings.firebase_app_name)
    except ValueError:
        options = (
            {"projectId": settings.firebase_project_id}
            if settings.firebase_project_id
            else None
        )
        return firebase_admin.initialize_app(
            cred, options, name=settings.firebase_app_name
        )


def connect(settings: Settings) -> ServiceState:
    """
    Connects to Firebase Authentication and Firestore.

    Returns `Unconfigured` instead of raising so that the service still
    starts and answers every admin call with 503.
    """
    try:
        cred = load_credentials(settings)
    except (ValueError, OSError) as e:
        logger.error(f"Invalid Firebase service account: {e}")
        return Unconfigured(f"invalid Firebase service account: {e}")

    if cred is None:
        logger.warning("No Firebase service account configured; admin API disabled")
        return Unconfigured("Firebase service account not configured")

    try:
        app = _get_or_initialize_app(cred, settings)
        client = firestore.client(app)
    except ValueError as e:
        logger.error(f"Firebase initialization failed: {e}")
        return Unconfigured(f"Firebase initialization failed: {e}")

    logger.info(f"Connected to Firebase project {cred.project_id}")
    return AdminContext(
        identity=FirebaseIdentityVerifier(app, settings.check_revoked_tokens),
        store=FirestoreRecordStore(client),
        list_users_limit=settings.list_users_limit,
        license_key_attempts=settings.license_key_attempts,
    )
