"""
Configuration loader for the knowledge base gateway.

The gateway needs exactly three required values: the OpenAI API key, the id of
the assistant that searches the knowledge base, and the id of the vector store
(the Collection) that holds the documents. They are read once at startup into
an immutable `Settings` value that is then handed explicitly to every
component; nothing re-reads the environment afterwards.

Optional values (port, timeouts, logging, CORS, probe caching, provider switch)
come from the same environment with defaults suitable for local development.
`.env` loading is done by the process entrypoint (`main.run`) through
python-dotenv so tests can build settings from a plain mapping.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from core.errors import ConfigMissingError

logger = logging.getLogger(__name__)

REQUIRED_ENV_VARS: Tuple[str, ...] = (
    "OPENAI_API_KEY",
    "OPENAI_ASSISTANT_ID",
    "OPENAI_VECTOR_STORE_ID",
)

DEFAULT_PORT = 3000
DEFAULT_TIMEOUT_S = 30.0
DEFAULT_MAX_RETRIES = 2


class Settings(BaseModel):
    """
    Immutable runtime configuration for one gateway process.

    The Collection and Assistant identifiers never change for the lifetime of
    the process. Instances are frozen so that no component can mutate shared
    configuration after startup.
    """

    model_config = ConfigDict(frozen=True)

    openai_api_key: str
    openai_assistant_id: str
    openai_vector_store_id: str

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    openai_timeout_s: float = DEFAULT_TIMEOUT_S
    openai_max_retries: int = DEFAULT_MAX_RETRIES
    status_probe_cache_s: float = 0.0
    cors_allow_origins: Tuple[str, ...] = ("*",)
    kb_provider: str = "openai"
    log_config: Dict[str, object] = {}


def _read_number(env: Mapping[str, str], name: str, default, cast):
    """
    Parse an optional numeric value, falling back to `default` on bad input.
    """
    raw = env.get(name)
    if raw is None or not str(raw).strip():
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Invalid value for %s=%r; using default %s", name, raw, default)
        return default


def _read_logging(env: Mapping[str, str]) -> Dict[str, object]:
    return {
        "level": env.get("LOG_LEVEL", "INFO"),
        "file_path": env.get("LOG_FILE_PATH", ""),
        "max_bytes": _read_number(env, "LOG_MAX_BYTES", 5 * 1024 * 1024, int),
        "backup_count": _read_number(env, "LOG_BACKUP_COUNT", 3, int),
    }


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build the process `Settings` from environment variables.

    All required names are checked before anything else so that the error
    lists every missing value at once rather than failing one at a time.

    Args:
        env (Optional[Mapping[str, str]]): Source mapping; defaults to `os.environ`.

    Returns:
        Settings: The frozen configuration value.

    Raises:
        ConfigMissingError: If any required variable is unset or empty.
    """
    if env is None:
        env = os.environ

    missing = [name for name in REQUIRED_ENV_VARS if not (env.get(name) or "").strip()]
    if missing:
        raise ConfigMissingError(missing)

    origins = tuple(
        origin.strip() for origin in env.get("CORS_ALLOW_ORIGINS", "*").split(",") if origin.strip()
    ) or ("*",)

    return Settings(
        openai_api_key=env["OPENAI_API_KEY"].strip(),
        openai_assistant_id=env["OPENAI_ASSISTANT_ID"].strip(),
        openai_vector_store_id=env["OPENAI_VECTOR_STORE_ID"].strip(),
        host=env.get("HOST", "0.0.0.0"),
        port=_read_number(env, "PORT", DEFAULT_PORT, int),
        openai_timeout_s=_read_number(env, "OPENAI_TIMEOUT_S", DEFAULT_TIMEOUT_S, float),
        openai_max_retries=_read_number(env, "OPENAI_MAX_RETRIES", DEFAULT_MAX_RETRIES, int),
        status_probe_cache_s=_read_number(env, "STATUS_PROBE_CACHE_S", 0.0, float),
        cors_allow_origins=origins,
        kb_provider=env.get("KB_PROVIDER", "openai").strip().lower(),
        log_config=_read_logging(env),
    )


def required_presence(settings: Settings) -> Dict[str, bool]:
    """
    Report, per required variable name, whether a value is configured.
    """
    return {
        "OPENAI_API_KEY": bool(settings.openai_api_key),
        "OPENAI_ASSISTANT_ID": bool(settings.openai_assistant_id),
        "OPENAI_VECTOR_STORE_ID": bool(settings.openai_vector_store_id),
    }


__all__ = [
    "REQUIRED_ENV_VARS",
    "Settings",
    "load_settings",
    "required_presence",
]
