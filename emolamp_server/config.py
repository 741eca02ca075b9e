"""Simplified configuration management."""

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv(dotenv_path=Path(__file__).parent.parent / ".env", override=False)


DEFAULT_APP_NAME = "EmoLamp Server"
DEFAULT_APP_VERSION = "1.0.0"

Mode = Literal["pubsub", "stats", "all"]


def _env_int(name: str, fallback: int) -> int:
    try:
        return int(os.getenv(name, str(fallback)))
    except (TypeError, ValueError):
        return fallback


def _get_port() -> int:
    """Get server port, checking the platform's PORT first, then EMOLAMP_PORT."""
    port = os.getenv("PORT") or os.getenv("EMOLAMP_PORT")
    if port:
        try:
            return int(port)
        except ValueError:
            pass
    return 3000


def _get_mode() -> str:
    mode = os.getenv("EMOLAMP_MODE", "all").strip().lower()
    return mode if mode in {"pubsub", "stats", "all"} else "all"


class Settings(BaseModel):
    """Application settings with lightweight env fallbacks."""

    # App metadata
    app_name: str = Field(default=DEFAULT_APP_NAME)
    app_version: str = Field(default=DEFAULT_APP_VERSION)

    # Server runtime
    server_host: str = Field(default=os.getenv("EMOLAMP_HOST", "0.0.0.0"))
    server_port: int = Field(default_factory=_get_port)
    mode: Mode = Field(default_factory=_get_mode)

    # "local" follows the server process zone; anything else is an IANA name
    timezone: str = Field(default=os.getenv("EMOLAMP_TIMEZONE", "local"))

    # Store limits
    max_logs: int = Field(default=_env_int("EMOLAMP_MAX_LOGS", 1000), ge=1)
    max_messages_per_topic: int = Field(default=_env_int("EMOLAMP_MAX_MESSAGES", 100), ge=1)

    # Janitor
    log_retention_hours: int = Field(default=_env_int("EMOLAMP_LOG_RETENTION_HOURS", 24), ge=1)
    log_sweep_interval_seconds: float = Field(default=_env_int("EMOLAMP_LOG_SWEEP_SECONDS", 3600), gt=0)
    message_max_age_seconds: int = Field(default=_env_int("EMOLAMP_MESSAGE_MAX_AGE_SECONDS", 3600), ge=1)
    message_sweep_interval_seconds: float = Field(default=_env_int("EMOLAMP_MESSAGE_SWEEP_SECONDS", 60), gt=0)
    subscriber_timeout_seconds: int = Field(default=_env_int("EMOLAMP_SUBSCRIBER_TIMEOUT_SECONDS", 300), ge=1)
    subscriber_sweep_interval_seconds: float = Field(
        default=_env_int("EMOLAMP_SUBSCRIBER_SWEEP_SECONDS", 300), gt=0
    )

    # Stats
    correlation_window_minutes: int = Field(default=30, ge=0)
    recent_default_limit: int = Field(default=10, ge=1)

    # HTTP behaviour
    cors_allow_origins_raw: str = Field(default=os.getenv("EMOLAMP_CORS_ALLOW_ORIGINS", "*"))
    enable_docs: bool = Field(default=os.getenv("EMOLAMP_ENABLE_DOCS", "1") != "0")
    docs_url: Optional[str] = Field(default=os.getenv("EMOLAMP_DOCS_URL", "/docs"))

    @property
    def cors_allow_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        if self.cors_allow_origins_raw.strip() in {"", "*"}:
            return ["*"]
        return [origin.strip() for origin in self.cors_allow_origins_raw.split(",") if origin.strip()]

    @property
    def resolved_docs_url(self) -> Optional[str]:
        """Return documentation URL when docs are enabled."""
        return (self.docs_url or "/docs") if self.enable_docs else None

    @property
    def pubsub_enabled(self) -> bool:
        return self.mode in {"pubsub", "all"}

    @property
    def stats_enabled(self) -> bool:
        return self.mode in {"stats", "all"}

    @property
    def log_retention_ms(self) -> int:
        return self.log_retention_hours * 60 * 60 * 1000

    @property
    def message_max_age_ms(self) -> int:
        return self.message_max_age_seconds * 1000

    @property
    def subscriber_timeout_ms(self) -> int:
        return self.subscriber_timeout_seconds * 1000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
