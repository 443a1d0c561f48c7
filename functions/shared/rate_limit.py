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

"""
Fixed-window rate limiting over a key/value storage.

The storage mirrors the browser's localStorage API so the limiter can be
backed by whatever per-client store is at hand. Counts are never shared
between clients.
"""

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Protocol

from shared.constants import (
    RATE_LIMIT_DEFAULT_MAX_REQUESTS,
    RATE_LIMIT_DEFAULT_WINDOW_MS,
    RATE_LIMIT_KEY_PREFIX,
)

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """Subset of the Web Storage API used by the helpers."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


@dataclass
class InMemoryStorage:
    """Dict-backed storage for a single client (and for tests)."""

    items: Dict[str, str] = field(default_factory=dict)

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


def _now_ms() -> int:
    return int(time.time() * 1000)


class RateLimiter:
    """
    Allows up to `max_requests` actions per `window_ms` for a logical key.

    State is stored as JSON `{"count": n, "resetAt": epoch_ms}`. Any storage
    failure allows the action.
    """

    def __init__(
        self,
        key: str,
        storage: KeyValueStorage,
        max_requests: int = RATE_LIMIT_DEFAULT_MAX_REQUESTS,
        window_ms: int = RATE_LIMIT_DEFAULT_WINDOW_MS,
        clock: Callable[[], int] = _now_ms,
    ):
        self.key = f"{RATE_LIMIT_KEY_PREFIX}{key}"
        self.storage = storage
        self.max_requests = max_requests
        self.window_ms = window_ms
        self.clock = clock

    def _start_window(self, now: int) -> None:
        self.storage.set_item(
            self.key, json.dumps({"count": 1, "resetAt": now + self.window_ms})
        )

    def is_allowed(self) -> bool:
        try:
            now = self.clock()
            data = self.storage.get_item(self.key)
            if not data:
                self._start_window(now)
                return True

            window = json.loads(data)
            if now > window["resetAt"]:
                self._start_window(now)
                return True

            if window["count"] >= self.max_requests:
                return False

            window["count"] += 1
            self.storage.set_item(self.key, json.dumps(window))
            return True
        except Exception as e:
            logger.warning(f"Rate limiter storage unavailable for {self.key}: {e}")
            return True

    def reset(self) -> None:
        try:
            self.storage.remove_item(self.key)
        except Exception as e:
            logger.warning(f"Could not reset rate limit for {self.key}: {e}")
