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

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any, Optional


class LicensePlan(StrEnum):
    FREE = "Free"
    CLASSIC = "Classic"
    PRO = "Pro"


@dataclass
class UserRecord:
    """A document in the `users` collection, keyed by the auth uid."""

    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    is_admin: Optional[Any] = None
    plan: Optional[str] = None
    created_at: Optional[Any] = None


@dataclass
class BanRecord:
    """Schema for user bans stored in Firestore."""

    user_id: str
    reason: str
    banned_by: str
    banned_at: datetime
    duration: int
    expires_at: datetime


@dataclass
class IpBanRecord:
    """Schema for IP address bans stored in Firestore."""

    ip_address: str
    reason: str
    banned_by: str
    banned_at: datetime
    duration: int
    expires_at: datetime


@dataclass
class LicenseRecord:
    """
    Schema for license keys stored in Firestore.

    Licenses are written unused; redemption fills in `used`, `used_by` and
    `used_at`.
    """

    key: str
    plan: LicensePlan
    validity_days: int
    created_by: str
    created_at: datetime
    used: bool = False
    used_by: Optional[str] = None
    used_at: Optional[datetime] = None
