from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List

DEFAULT_DATABASE_URL = "sqlite:///./data/todos.db"
DEFAULT_PORT = 4000


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - DATABASE_URL: 'sqlite:///<path>' (default './data/todos.db') or a postgres:// URL
    - DATABASE_SSL_REJECT_UNAUTHORIZED: 'true' to verify the server certificate (default: false)
    - HOST: bind address for the HTTP server. Default '0.0.0.0'
    - PORT: listening port. Default 4000
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: root log level name. Default 'INFO'
    """

    database_url: str = DEFAULT_DATABASE_URL
    database_ssl_reject_unauthorized: bool = False
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_port(value: str, default: int = DEFAULT_PORT) -> int:
    try:
        port = int(value.strip())
    except ValueError:
        return default
    if not (0 < port < 65536):
        return default
    return port


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    return Settings(
        database_url=_get_env("DATABASE_URL", DEFAULT_DATABASE_URL).strip(),
        database_ssl_reject_unauthorized=_parse_bool(
            _get_env("DATABASE_SSL_REJECT_UNAUTHORIZED", "false"), False
        ),
        host=_get_env("HOST", "0.0.0.0").strip(),
        port=_parse_port(_get_env("PORT", str(DEFAULT_PORT))),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
    )
