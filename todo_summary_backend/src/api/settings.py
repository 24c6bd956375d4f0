from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - STORE_BACKEND: 'supabase' (default) or 'memory'
    - SUPABASE_URL / SUPABASE_ANON_KEY: hosted store connection
    - SUPABASE_TABLE: table holding the todos. Default 'todos'
    - OPENAI_API_KEY: key for the chat completion API
    - OPENAI_BASE_URL: chat completion API base. Default 'https://api.openai.com/v1'
    - OPENAI_MODEL: model identifier. Default 'gpt-3.5-turbo'
    - SUMMARY_TEMPERATURE: sampling temperature. Default 0.7
    - SLACK_WEBHOOK_URL: incoming webhook the summary is posted to
    - HTTP_TIMEOUT_SECONDS: timeout applied to every outbound call. Default 10
    - HOST / PORT / LIVENESS_PORT: listeners. Defaults '0.0.0.0', 4000, 5000
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: logging level name. Default 'INFO'
    """

    store_backend: str
    supabase_url: Optional[str]
    supabase_key: Optional[str]
    supabase_table: str
    openai_api_key: Optional[str]
    openai_base_url: str
    openai_model: str
    summary_temperature: float
    slack_webhook_url: Optional[str]
    http_timeout_seconds: float
    host: str
    port: int
    liveness_port: int
    cors_allow_origins: List[str]
    log_level: str


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _get_optional(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return value.strip()


def _parse_int(value: str, default: int) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return default


def _parse_float(value: str, default: float) -> float:
    try:
        return float(value.strip())
    except ValueError:
        return default


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
    backend = _get_env("STORE_BACKEND", "supabase").strip().lower()
    if backend not in {"supabase", "memory"}:
        backend = "supabase"

    timeout = _parse_float(_get_env("HTTP_TIMEOUT_SECONDS", "10"), 10.0)
    if timeout <= 0:
        timeout = 10.0

    return Settings(
        store_backend=backend,
        supabase_url=_get_optional("SUPABASE_URL"),
        supabase_key=_get_optional("SUPABASE_ANON_KEY"),
        supabase_table=_get_env("SUPABASE_TABLE", "todos").strip(),
        openai_api_key=_get_optional("OPENAI_API_KEY"),
        openai_base_url=_get_env("OPENAI_BASE_URL", "https://api.openai.com/v1").strip().rstrip("/"),
        openai_model=_get_env("OPENAI_MODEL", "gpt-3.5-turbo").strip(),
        summary_temperature=_parse_float(_get_env("SUMMARY_TEMPERATURE", "0.7"), 0.7),
        slack_webhook_url=_get_optional("SLACK_WEBHOOK_URL"),
        http_timeout_seconds=timeout,
        host=_get_env("HOST", "0.0.0.0").strip(),
        port=_parse_int(_get_env("PORT", "4000"), 4000),
        liveness_port=_parse_int(_get_env("LIVENESS_PORT", "5000"), 5000),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
    )
