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

import hmac
import secrets
from typing import Optional

from shared.constants import CSRF_TOKEN_BYTES, CSRF_TOKEN_STORAGE_KEY
from shared.rate_limit import KeyValueStorage


def generate_csrf_token() -> str:
    """Returns 32 random bytes as a 64-character hex string."""
    return secrets.token_hex(CSRF_TOKEN_BYTES)


def store_csrf_token(session_storage: KeyValueStorage, token: str) -> None:
    session_storage.set_item(CSRF_TOKEN_STORAGE_KEY, token)


def get_csrf_token(session_storage: KeyValueStorage) -> Optional[str]:
    return session_storage.get_item(CSRF_TOKEN_STORAGE_KEY)


def validate_csrf_token(session_storage: KeyValueStorage, token: str) -> bool:
    """Compares a server-supplied token with the one stored for the session."""
    stored = get_csrf_token(session_storage)
    if stored is None or not isinstance(token, str):
        return False
    return hmac.compare_digest(stored.encode("utf-8"), token.encode("utf-8"))
