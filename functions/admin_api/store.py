"""
Record store access for users, bans, IP bans and licenses.

`FirestoreRecordStore` is used in production; `InMemoryRecordStore` backs
tests and local development. Records cross this boundary as camelCase
dicts, exactly as they are stored in Firestore.
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Protocol

from google.api_core import exceptions

from admin_api.errors import UnavailableError
from shared.firebase_constants import (
    BANS_COLLECTION,
    IP_BANS_COLLECTION,
    LICENSES_COLLECTION,
    USERS_COLLECTION,
)


class RecordStore(Protocol):
    """Interface for the document database behind the admin operations."""

    def get_user(self, uid: str) -> Optional[dict]:
        ...

    def list_users(self, limit: int | None = None) -> list[tuple[str, dict]]:
        ...

    def add_ban(self, ban: dict) -> str:
        ...

    def add_ip_ban(self, ip_ban: dict) -> str:
        ...

    def create_license(self, key: str, license_data: dict) -> bool:
        """Writes the license unless `key` exists. Returns False on collision."""
        ...


@contextmanager
def _firestore_errors() -> Iterator[None]:
    try:
        yield
    except (
        exceptions.ServiceUnavailable,
        exceptions.DeadlineExceeded,
        exceptions.RetryError,
    ) as e:
        raise UnavailableError(f"Record store unavailable: {e}") from e


class FirestoreRecordStore:
    def __init__(self, client):
        self.client = client

    def get_user(self, uid: str) -> Optional[dict]:
        with _firestore_errors():
            doc = self.client.collection(USERS_COLLECTION).document(uid).get()
        if not doc.exists:
            return None
        return doc.to_dict() or {}

    def list_users(self, limit: int | None = None) -> list[tuple[str, dict]]:
        query = self.client.collection(USERS_COLLECTION)
        if limit:
            query = query.limit(limit)
        with _firestore_errors():
            return [(doc.id, doc.to_dict() or {}) for doc in query.stream()]

    def add_ban(self, ban: dict) -> str:
        with _firestore_errors():
            _, doc_ref = self.client.collection(BANS_COLLECTION).add(ban)
        return doc_ref.id

    def add_ip_ban(self, ip_ban: dict) -> str:
        with _firestore_errors():
            _, doc_ref = self.client.collection(IP_BANS_COLLECTION).add(ip_ban)
        return doc_ref.id

    def create_license(self, key: str, license_data: dict) -> bool:
        doc_ref = self.client.collection(LICENSES_COLLECTION).document(key)
        try:
            with _firestore_errors():
                doc_ref.create(license_data)
        except exceptions.AlreadyExists:
            return False
        return True


class InMemoryRecordStore:
    """Simple in-memory record store for development and tests."""

    def __init__(self):
        self.users: Dict[str, dict] = {}
        self.bans: Dict[str, dict] = {}
        self.ip_bans: Dict[str, dict] = {}
        self.licenses: Dict[str, dict] = {}

    def add_user(self, uid: str, **fields) -> None:
        self.users[uid] = dict(fields)

    def get_user(self, uid: str) -> Optional[dict]:
        user = self.users.get(uid)
        return dict(user) if user is not None else None

    def list_users(self, limit: int | None = None) -> list[tuple[str, dict]]:
        items: List[tuple[str, dict]] = [
            (uid, dict(data)) for uid, data in self.users.items()
        ]
        return items[:limit] if limit else items

    def add_ban(self, ban: dict) -> str:
        ban_id = uuid.uuid4().hex
        self.bans[ban_id] = dict(ban)
        return ban_id

    def add_ip_ban(self, ip_ban: dict) -> str:
        ban_id = uuid.uuid4().hex
        self.ip_bans[ban_id] = dict(ip_ban)
        return ban_id

    def create_license(self, key: str, license_data: dict) -> bool:
        if key in self.licenses:
            return False
        self.licenses[key] = dict(license_data)
        return True

    def write_count(self) -> int:
        return len(self.bans) + len(self.ip_bans) + len(self.licenses)

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.users.clear()
        self.bans.clear()
        self.ip_bans.clear()
        self.licenses.clear()
