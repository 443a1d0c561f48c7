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

# Bearer tokens accepted by the admin endpoints.
ID_TOKEN_MIN_LENGTH = 10
ID_TOKEN_MAX_LENGTH = 3000
ID_TOKEN_PATTERN = r"^[A-Za-z0-9_.-]+$"

USER_ID_MIN_LENGTH = 10
USER_ID_MAX_LENGTH = 100

BAN_REASON_MIN_LENGTH = 5
BAN_REASON_MAX_LENGTH = 500

# Ban durations are consumed as seconds but bounded as if they were days.
BAN_DURATION_MIN = 1
BAN_DURATION_MAX = 36500

LICENSE_VALIDITY_DAYS_MIN = 1
LICENSE_VALIDITY_DAYS_MAX = 3650
LICENSE_KEY_PREFIX = "LIC"
LICENSE_KEY_SUFFIX_LENGTH = 9
LICENSE_KEY_PATTERN = r"^LIC-\d+-[A-Z0-9]{9}$"

MAX_MESSAGE_LENGTH = 5000
MAX_MESSAGE_LINE_LENGTH = 1000
MAX_CONVERSATION_TITLE_LENGTH = 255
MAX_CONVERSATION_ID_LENGTH = 255

RATE_LIMIT_DEFAULT_MAX_REQUESTS = 10
RATE_LIMIT_DEFAULT_WINDOW_MS = 60000
RATE_LIMIT_KEY_PREFIX = "ratelimit_"

CSRF_TOKEN_BYTES = 32
CSRF_TOKEN_STORAGE_KEY = "csrf_token"
