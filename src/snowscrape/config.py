"""Runtime configuration from environment variables.

Variables:
    HOST, PORT: Bind address for the API server
    SNOWSCRAPE_REQUEST_TIMEOUT: Page fetch timeout in seconds
    SNOWSCRAPE_USER_AGENT: User-Agent sent with page fetches
    SNOWSCRAPE_REFRESH_WORKERS: Background refresh threads
    SNOWSCRAPE_SINGLE_FLIGHT: Skip a refresh while one is running for the URL
    SNOWSCRAPE_CORS_ORIGINS: Comma-separated allowed origins
    SNOWSCRAPE_LOG_LEVEL: Logging level name
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from snowscrape.scrape.page import DEFAULT_USER_AGENT, REQUEST_TIMEOUT

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_REFRESH_WORKERS = 4

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _parse_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _parse_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


@dataclass
class Settings:
    """Service settings.

    Attributes:
        host: Bind address for the API server
        port: Bind port for the API server
        request_timeout: Page fetch timeout in seconds
        user_agent: User-Agent header for page fetches
        refresh_workers: Number of background refresh threads
        single_flight: Whether to skip duplicate refreshes per URL
        cors_origins: Allowed CORS origins
        log_level: Logging level name
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    request_timeout: float = REQUEST_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    refresh_workers: int = DEFAULT_REFRESH_WORKERS
    single_flight: bool = True
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Args:
            env: Mapping to read instead of os.environ

        Raises:
            ValueError: If a variable holds an invalid value
        """
        if env is None:
            env = os.environ

        origins = env.get("SNOWSCRAPE_CORS_ORIGINS", "*")

        return cls(
            host=env.get("HOST", DEFAULT_HOST),
            port=_parse_int(env, "PORT", DEFAULT_PORT),
            request_timeout=_parse_float(env, "SNOWSCRAPE_REQUEST_TIMEOUT", REQUEST_TIMEOUT),
            user_agent=env.get("SNOWSCRAPE_USER_AGENT", DEFAULT_USER_AGENT),
            refresh_workers=_parse_int(env, "SNOWSCRAPE_REFRESH_WORKERS", DEFAULT_REFRESH_WORKERS),
            single_flight=_parse_bool(env, "SNOWSCRAPE_SINGLE_FLIGHT", True),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()] or ["*"],
            log_level=env.get("SNOWSCRAPE_LOG_LEVEL", "INFO").upper(),
        )
