from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_API_BASE = "https://testfastapi-flax.vercel.app"
DEFAULT_AUTH_BASE = "http://localhost:8000"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    api_base: str = DEFAULT_API_BASE
    auth_base: str = DEFAULT_AUTH_BASE
    http_timeout: float = 30.0
    data_dir: Path = Path("data")
    cache_ttl: int = 3600
    log_level: str = "INFO"

    @property
    def cache_path(self) -> Path:
        return self.data_dir / "job_cache.db"

    @property
    def settings_path(self) -> Path:
        return self.data_dir / "account_settings.json"


def _number(env: dict, key: str, default, cast):
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}") from None


def load_settings(env: dict | None = None, dotenv_path: str | Path | None = None) -> Settings:
    """Build Settings from the environment, reading a .env file first when env is not given."""
    if env is None:
        load_dotenv(dotenv_path)
        env = dict(os.environ)

    return Settings(
        api_base=env.get("EVIDI_API_BASE", "").strip().rstrip("/") or DEFAULT_API_BASE,
        auth_base=env.get("EVIDI_AUTH_BASE", "").strip().rstrip("/") or DEFAULT_AUTH_BASE,
        http_timeout=_number(env, "EVIDI_HTTP_TIMEOUT", 30.0, float),
        data_dir=Path(env.get("EVIDI_DATA_DIR", "").strip() or "data"),
        cache_ttl=_number(env, "EVIDI_CACHE_TTL", 3600, int),
        log_level=(env.get("EVIDI_LOG_LEVEL", "").strip() or "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
