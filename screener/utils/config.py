import os
from typing import Callable, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from screener.utils.exceptions import ConfigurationError

DEFAULT_API_BASE_URL = "http://localhost:5000"


def normalize_base_url(raw: Optional[str]) -> str:
    """Drop any '#' fragment, surrounding whitespace and one trailing slash.

    An unset or empty value falls back to DEFAULT_API_BASE_URL.
    """
    url = raw or DEFAULT_API_BASE_URL
    url = url.split("#")[0].strip()
    if url.endswith("/"):
        url = url[:-1]
    return url


def _positive_env(key: str, cast: Callable, unit: str):
    """Read a positive number from the environment, or None when unset"""
    raw = os.getenv(key, "").strip()
    if not raw:
        return None
    try:
        value = cast(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"{key} must be a number of {unit}",
            config_key=key,
            config_value=raw,
            cause=e
        ) from e
    if value <= 0:
        raise ConfigurationError(
            f"{key} must be positive",
            config_key=key,
            config_value=raw
        )
    return value


class Settings(BaseModel):
    """Resolved once at startup and handed to the service clients"""
    model_config = ConfigDict(frozen=True)

    api_base_url: str = Field(default=DEFAULT_API_BASE_URL, description="Scoring service base URL, already normalized")
    request_timeout: Optional[float] = Field(default=None, gt=0, description="Per-request timeout in seconds; None waits forever")
    session_idle_timeout: float = Field(default=3600, gt=0, description="Seconds before an untouched session is dropped")
    max_sessions: int = Field(default=1000, gt=0, description="Sessions kept in memory before the least recently used is dropped")

    def endpoint(self, path: str) -> str:
        return f"{self.api_base_url}{path}"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()

        overrides = {}
        idle_timeout = _positive_env("SESSION_IDLE_TIMEOUT", float, "seconds")
        if idle_timeout is not None:
            overrides["session_idle_timeout"] = idle_timeout
        max_sessions = _positive_env("MAX_SESSIONS", int, "sessions")
        if max_sessions is not None:
            overrides["max_sessions"] = max_sessions

        return cls(
            api_base_url=normalize_base_url(os.getenv("API_BASE_URL")),
            request_timeout=_positive_env("REQUEST_TIMEOUT", float, "seconds"),
            **overrides
        )
