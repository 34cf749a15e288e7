"""Process configuration, loaded once at startup.

The provider key is read from the environment first, then from a
`.env.local` file in the project root (the nearest ancestor of the working
directory that contains pyproject.toml). A missing key is a normal state:
every provider-backed feature has a no-key behavior.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

PROJECT_MARKER = "pyproject.toml"
ENV_LOCAL_FILENAME = ".env.local"
MAX_PARENT_LEVELS = 20

DEFAULT_MODEL = "gpt-4o-mini"

# gpt-4o-mini approximate USD prices
DEFAULT_PRICE_IN_PER_MILLION = 0.15
DEFAULT_PRICE_OUT_PER_MILLION = 0.60

STORAGE_BACKENDS = ("memory", "file", "redis")


@dataclass(frozen=True)
class Settings:
    """Immutable configuration passed to every component that needs it."""
    openai_api_key: str | None = None
    model: str = DEFAULT_MODEL
    cwd: str = "."
    project_root: str | None = None
    env_local_path: str | None = None
    env_local_exists: bool = False
    storage_backend: str = "file"
    storage_path: str = "data/wordtap.json"
    redis_url: str = ""
    rate_limit_max_requests: int = 15
    rate_limit_window_seconds: float = 60.0
    trusted_proxy_hops: int = 0
    price_in_per_million: float = DEFAULT_PRICE_IN_PER_MILLION
    price_out_per_million: float = DEFAULT_PRICE_OUT_PER_MILLION
    cors_origins: str = "*"
    log_level: str = "INFO"

    @property
    def has_provider_key(self) -> bool:
        return bool(self.openai_api_key)

    def env_check(self) -> dict:
        """Diagnostic view of key loading (never includes the key itself)."""
        return {
            "cwd": self.cwd,
            "projectRoot": self.project_root,
            "envLocalPath": self.env_local_path,
            "envLocalExists": self.env_local_exists,
            "hasKey": self.has_provider_key,
        }


def find_project_root(start: Path) -> Path | None:
    """Walk upward from start until a directory containing pyproject.toml is found."""
    current = start.resolve()
    for _ in range(MAX_PARENT_LEVELS):
        if (current / PROJECT_MARKER).exists():
            return current
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _read_env_local_key(env_path: Path) -> str | None:
    try:
        values = dotenv_values(env_path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read env file", extra={"path": str(env_path), "error": str(e)})
        return None
    key = (values.get("OPENAI_API_KEY") or "").strip().strip("\"'")
    return key or None


def _int_env(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer setting", extra={"setting": name, "value": raw})
        return default
    return value if value > 0 else default


def _float_env(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric setting", extra={"setting": name, "value": raw})
        return default
    return value if value >= 0 else default


def load_settings(
    environ: Mapping[str, str] | None = None,
    cwd: Path | None = None,
) -> Settings:
    """Build Settings from the environment and the project's .env.local."""
    env = os.environ if environ is None else environ
    work_dir = cwd or Path.cwd()

    project_root = find_project_root(work_dir)
    env_local_path = project_root / ENV_LOCAL_FILENAME if project_root else None
    env_local_exists = bool(env_local_path and env_local_path.is_file())

    api_key = (env.get("OPENAI_API_KEY") or "").strip() or None
    if not api_key and env_local_exists:
        api_key = _read_env_local_key(env_local_path)

    storage_backend = (env.get("STORAGE_BACKEND") or "file").strip().lower()
    if storage_backend not in STORAGE_BACKENDS:
        logger.warning("Unknown storage backend, using file", extra={"storageBackend": storage_backend})
        storage_backend = "file"

    settings = Settings(
        openai_api_key=api_key,
        model=(env.get("OPENAI_MODEL") or DEFAULT_MODEL).strip(),
        cwd=str(work_dir),
        project_root=str(project_root) if project_root else None,
        env_local_path=str(env_local_path) if env_local_path else None,
        env_local_exists=env_local_exists,
        storage_backend=storage_backend,
        storage_path=(env.get("STORAGE_PATH") or "data/wordtap.json").strip(),
        redis_url=(env.get("REDIS_URL") or "").strip(),
        rate_limit_max_requests=_int_env(env, "RATE_LIMIT_MAX_REQUESTS", 15),
        rate_limit_window_seconds=_float_env(env, "RATE_LIMIT_WINDOW_SECONDS", 60.0) or 60.0,
        trusted_proxy_hops=_int_env(env, "TRUSTED_PROXY_HOPS", 0),
        price_in_per_million=_float_env(env, "PRICE_IN_PER_MILLION", DEFAULT_PRICE_IN_PER_MILLION),
        price_out_per_million=_float_env(env, "PRICE_OUT_PER_MILLION", DEFAULT_PRICE_OUT_PER_MILLION),
        cors_origins=(env.get("CORS_ORIGINS") or "*").strip(),
        log_level=(env.get("LOG_LEVEL") or "INFO").strip().upper(),
    )

    if not settings.has_provider_key:
        logger.info("OPENAI_API_KEY is missing or empty, provider calls will use fallbacks")

    return settings
