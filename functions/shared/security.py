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
Input validation, sanitization and output encoding for chat content.

These checks run before user content is stored or submitted. They are a
first line of defense only: the record store and the admin API validate
again on their side.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

import bleach

from shared.constants import (
    MAX_CONVERSATION_ID_LENGTH,
    MAX_CONVERSATION_TITLE_LENGTH,
    MAX_MESSAGE_LENGTH,
    MAX_MESSAGE_LINE_LENGTH,
)

logger = logging.getLogger(__name__)

# Control characters except tab, newline and carriage return.
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")

_EMAIL_RE = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)
_TITLE_RE = re.compile(
    r"^[a-zA-Z0-9\s\-_.àâäéèêëïîôöùûüçœæ]{1,%d}$" % MAX_CONVERSATION_TITLE_LENGTH
)
_USER_ID_RE = re.compile(r"^[a-zA-Z0-9]{20,40}$")
_CONVERSATION_ID_RE = re.compile(
    r"^[a-zA-Z0-9\-_]{1,%d}$" % MAX_CONVERSATION_ID_LENGTH
)

INJECTION_PATTERNS = (
    # SQL keywords
    re.compile(
        r"\b(SELECT|INSERT|UPDATE|DELETE|DROP|CREATE|ALTER|EXEC|EXECUTE|UNION|WHERE|OR|AND)\b",
        re.IGNORECASE,
    ),
    # NoSQL operators
    re.compile(r"[{}$\[\]]"),
    # Script injection
    re.compile(r"<script[^>]*>", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    # Shell metacharacters
    re.compile(r"[;&|`$()]"),
    # Path traversal
    re.compile(r"\.\./"),
    re.compile(r"\.\.\\"),
)


def escape_html(text: str) -> str:
    """Neutralizes markup so user content can be displayed as text."""
    if not text or not isinstance(text, str):
        return ""
    return bleach.clean(text, tags=set(), attributes={}, strip=True)


def sanitize_input(text: str) -> str:
    """
    Removes null bytes, control characters and all markup from user input.

    Whitespace is trimmed last so that sanitizing an already sanitized
    string returns it unchanged.
    """
    if not text or not isinstance(text, str):
        return ""
    sanitized = _CONTROL_CHARS.sub("", text)
    sanitized = bleach.clean(sanitized, tags=set(), attributes={}, strip=True)
    return sanitized.strip()


def validate_email(email: str) -> bool:
    if not email or not isinstance(email, str):
        return False
    return bool(_EMAIL_RE.fullmatch(email))


def validate_message_content(content: str) -> bool:
    """
    Checks a chat message: 1 to 5000 characters once trimmed, no null bytes
    and no line longer than 1000 characters.
    """
    if not content or not isinstance(content, str):
        return False
    length = len(content.strip())
    if length < 1 or length > MAX_MESSAGE_LENGTH:
        return False
    if "\0" in content:
        return False
    return all(
        len(line) <= MAX_MESSAGE_LINE_LENGTH for line in content.split("\n")
    )


def validate_conversation_title(title: str) -> bool:
    if not title or not isinstance(title, str):
        return False
    length = len(title.strip())
    if length < 1 or length > MAX_CONVERSATION_TITLE_LENGTH:
        return False
    if "\0" in title:
        return False
    return bool(_TITLE_RE.fullmatch(title))


def validate_user_id(user_id: str) -> bool:
    """Firebase uids are 20 to 40 alphanumeric characters (usually 28)."""
    if not user_id or not isinstance(user_id, str):
        return False
    return bool(_USER_ID_RE.fullmatch(user_id))


def validate_conversation_id(conversation_id: str) -> bool:
    if not conversation_id or not isinstance(conversation_id, str):
        return False
    return bool(_CONVERSATION_ID_RE.fullmatch(conversation_id))


def detect_injection_attempt(text: str) -> bool:
    """
    Flags SQL, NoSQL, script, shell and path traversal patterns.

    This is a coarse pre-submission block: plain words such as "or" and
    "and" match too.
    """
    if not text or not isinstance(text, str):
        return False
    return any(pattern.search(text) for pattern in INJECTION_PATTERNS)


@dataclass
class SecureMessage:
    conversation_id: str
    user_id: str
    content: str
    sanitized_content: str


@dataclass
class SecureConversation:
    user_id: str
    title: str
    sanitized_title: str


def create_secure_message(
    conversation_id: str, user_id: str, content: str
) -> Optional[SecureMessage]:
    """Validates and sanitizes a message before storage, or returns None."""
    if not validate_conversation_id(conversation_id):
        logger.error("Invalid conversation ID format")
        return None
    if not validate_user_id(user_id):
        logger.error("Invalid user ID format")
        return None
    if not validate_message_content(content):
        logger.error("Invalid message content")
        return None
    if detect_injection_attempt(content):
        logger.error("Potential injection attack detected in message content")
        return None

    sanitized = sanitize_input(content)
    return SecureMessage(
        conversation_id=conversation_id,
        user_id=user_id,
        content=sanitized,
        sanitized_content=sanitized,
    )


def create_secure_conversation(
    user_id: str, title: str
) -> Optional[SecureConversation]:
    if not validate_user_id(user_id):
        logger.error("Invalid user ID format")
        return None
    if not validate_conversation_title(title):
        logger.error("Invalid conversation title")
        return None
    if detect_injection_attempt(title):
        logger.error("Potential injection attack detected in conversation title")
        return None

    sanitized = sanitize_input(title)
    return SecureConversation(user_id=user_id, title=sanitized, sanitized_title=sanitized)
