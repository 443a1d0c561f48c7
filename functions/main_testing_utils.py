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

# Fakes and fixtures shared by the admin API tests.

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict

from admin_api.auth import AdminContext
from admin_api.errors import AuthenticationError
from admin_api.store import InMemoryRecordStore

ADMIN_UID = "adminUid0000000000000001"
MEMBER_UID = "memberUid000000000000002"
TARGET_UID = "targetUid000000000000003"
OTHER_ADMIN_UID = "otherAdmin00000000000004"
ORPHAN_UID = "orphanUid000000000000005"

ADMIN_TOKEN = "admin-token.abc_123"
MEMBER_TOKEN = "member-token.def_456"
OTHER_ADMIN_TOKEN = "other-admin-token.ghi"
ORPHAN_TOKEN = "orphan-token.jkl_789"
UNKNOWN_TOKEN = "unknown-token.mno_000"

FIXED_NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@dataclass
class FakeIdentityVerifier:
    """Maps known ID tokens to uids; anything else fails verification."""

    tokens: Dict[str, str] = field(default_factory=dict)

    def verify(self, id_token: str) -> str:
        uid = self.tokens.get(id_token)
        if uid is None:
            raise AuthenticationError("Invalid ID token: token not recognized")
        return uid


def create_mock_store() -> InMemoryRecordStore:
    store = InMemoryRecordStore()
    store.add_user(
        ADMIN_UID,
        email="admin@example.com",
        displayName="Admin",
        isAdmin=True,
        plan="Pro",
        createdAt=datetime(2025, 6, 1, tzinfo=timezone.utc),
    )
    store.add_user(
        MEMBER_UID,
        email="member@example.com",
        displayName="Member",
        isAdmin=False,
        plan="Free",
        createdAt=datetime(2025, 7, 1, tzinfo=timezone.utc),
    )
    store.add_user(
        TARGET_UID,
        email="target@example.com",
        displayName="Target",
        isAdmin=False,
        plan="Classic",
        createdAt=datetime(2025, 8, 1, tzinfo=timezone.utc),
        stripeCustomerId="cus_secret",
        passwordHint="do not leak",
    )
    store.add_user(
        OTHER_ADMIN_UID,
        email="other-admin@example.com",
        displayName="Other Admin",
        isAdmin=True,
        plan="Pro",
        createdAt=datetime(2025, 9, 1, tzinfo=timezone.utc),
    )
    return store


def create_mock_context(store: InMemoryRecordStore | None = None, **kwargs) -> AdminContext:
    identity = FakeIdentityVerifier(
        tokens={
            ADMIN_TOKEN: ADMIN_UID,
            MEMBER_TOKEN: MEMBER_UID,
            OTHER_ADMIN_TOKEN: OTHER_ADMIN_UID,
            ORPHAN_TOKEN: ORPHAN_UID,
        }
    )
    return AdminContext(
        identity=identity,
        store=store if store is not None else create_mock_store(),
        clock=lambda: FIXED_NOW,
        **kwargs,
    )
