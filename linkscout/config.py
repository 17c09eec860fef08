"""
Runtime configuration via environment variables.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional
from urllib.parse import urlencode

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from linkscout.errors import ConfigurationError

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    """Pipeline settings loaded from environment variables."""

    # Remote browser
    browserless_token: Optional[str] = None
    browserless_endpoint: str = "wss://production-sfo.browserless.io"

    # Fetch cache
    cache_ttl_seconds: float = Field(default=600, gt=0)
    cache_max_entries: int = Field(default=50, gt=0)

    # Outbound pacing
    min_request_interval_s: float = Field(default=1.5, ge=0)

    # Page loading (milliseconds)
    navigation_timeout_ms: int = 2000
    settle_delay_ms: int = 2000
    content_wait_timeout_ms: int = 2000
    cookie_probe_timeout_ms: int = 2000
    cookie_dismiss_delay_ms: int = 1000

    viewport_width: int = 1280
    viewport_height: int = 720
    user_agent: str = DEFAULT_USER_AGENT

    # Developer aid: write the last fetched page here
    debug_dump_path: Optional[str] = None

    log_level: str = "INFO"

    class Config:
        env_prefix = "LINKSCOUT_"
        env_file = ".env"
        extra = "ignore"

    @field_validator("browserless_token", "debug_dump_path", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Treat empty env values as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def cdp_url(self) -> str:
        """Websocket endpoint for connect_over_cdp, token included."""
        if not self.browserless_token:
            raise ConfigurationError()
        query = urlencode({"token": self.browserless_token})
        return f"{self.browserless_endpoint.rstrip('/')}?{query}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
