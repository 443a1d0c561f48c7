"""
Configuration and settings for the admin API.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the admin service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")

    # Firebase service account: inline JSON or a path to the key file.
    firebase_service_account: Optional[str] = Field(default=None)
    firebase_service_account_path: Optional[str] = Field(default=None)
    firebase_project_id: Optional[str] = Field(default=None)
    firebase_app_name: str = Field(default="chat-admin")

    # Reject tokens of users whose sessions were revoked (one extra lookup).
    check_revoked_tokens: bool = Field(default=False)

    # Unset means list-users returns every user.
    list_users_limit: Optional[int] = Field(default=None, ge=1)

    license_key_attempts: int = Field(default=3, ge=1)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
