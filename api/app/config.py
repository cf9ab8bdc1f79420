"""
Process configuration.

Everything the service needs from the environment is read once at startup
into an immutable Settings object and handed to the components that need it.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)


DEFAULT_DATABASE_URL = "postgresql+psycopg://postgres:postgres@db:5432/app"
DEFAULT_MODEL = "gpt-4.1-mini"
DEFAULT_PORT = 10000
# Matches the JSON body limit of the original deployment (1 MB).
MAX_BODY_BYTES = 1024 * 1024


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name, "").strip().lower()
    if not value:
        return default
    return value not in {"0", "false", "no", "off"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("%s=%r is not an integer; using %d", name, value, default)
        return default


def _env_log_level(name: str, default: str) -> str:
    value = os.getenv(name, "").strip().upper()
    if not value:
        return default
    if not isinstance(logging.getLevelName(value), int):
        logger.warning("%s=%r is not a logging level; using %s", name, value, default)
        return default
    return value


@dataclass(frozen=True)
class Settings:
    openai_api_key: str = ""
    openai_base_url: str | None = None
    model: str = DEFAULT_MODEL
    database_url: str = DEFAULT_DATABASE_URL
    telemetry_enabled: bool = True
    shared_secret: str = ""
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    max_body_bytes: int = MAX_BODY_BYTES

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY", "").strip(),
            openai_base_url=os.getenv("OPENAI_BASE_URL", "").strip() or None,
            model=os.getenv("ANALYZE_MODEL", "").strip() or DEFAULT_MODEL,
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            telemetry_enabled=_env_flag("TELEMETRY_ENABLED", True),
            shared_secret=os.getenv("TEGER_SHARED_SECRET", ""),
            port=_env_int("PORT", DEFAULT_PORT),
            log_level=_env_log_level("LOG_LEVEL", "INFO"),
        )
