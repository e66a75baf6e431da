# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Application configuration loaded from the environment."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "sitemeet"
    debug: bool = False
    log_level: str = "INFO"

    # Bind address for `python -m sitemeet`
    host: str = "127.0.0.1"
    port: int = 8000

    database_url: str = "sqlite:///./sitemeet.db"

    # Origins allowed to call the API from a browser
    cors_origins: list[str] = ["http://localhost:5173"]

    # Header set by the upstream authentication gateway with the caller's user id
    user_id_header: str = "X-User-Id"


settings = Settings()
