"""Runtime configuration, read once from the environment (and .env when present)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import dotenv

# Load environment from .env if present (local dev)
dotenv.load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_MAX_UPLOAD_MB = 20


def _max_upload_bytes() -> int:
    raw_mb = os.getenv("MAX_UPLOAD_MB", "").strip()
    if raw_mb:
        try:
            value = float(raw_mb)
            if value > 0:
                return int(value * 1024 * 1024)
        except ValueError:
            pass
        logger.warning("Ignoring invalid MAX_UPLOAD_MB=%r", raw_mb)
    return DEFAULT_MAX_UPLOAD_MB * 1024 * 1024


def _log_level() -> str:
    level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    if level not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
        return "INFO"
    return level


def _api_key() -> Optional[str]:
    for name in ("GEMINI_API_KEY", "GOOGLE_API_KEY"):
        value = os.getenv(name, "").strip()
        if value:
            return value
    return None


def _port() -> int:
    raw = os.getenv("PORT", "").strip()
    return int(raw) if raw.isdigit() else 8000


@dataclass(frozen=True)
class Settings:
    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_MODEL
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_MB * 1024 * 1024
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            gemini_api_key=_api_key(),
            gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
            max_upload_bytes=_max_upload_bytes(),
            log_level=_log_level(),
            host=os.getenv("HOST", "0.0.0.0"),
            port=_port(),
        )

    @property
    def configured(self) -> bool:
        return bool(self.gemini_api_key and self.gemini_api_key.strip())

    @property
    def key_prefix(self) -> str:
        """Redacted key shown by the configuration probe."""
        if not self.configured:
            return "N/A"
        return self.gemini_api_key[:8] + "..."

    @property
    def max_upload_mb(self) -> float:
        return self.max_upload_bytes / (1024 * 1024)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
