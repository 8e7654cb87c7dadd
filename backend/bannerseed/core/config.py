from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv


def _load_dotenv() -> None:
    if os.getenv("BANNERSEED_SKIP_DOTENV") == "1":
        return

    env_path = Path(__file__).resolve().parents[2] / ".env"
    if not env_path.exists():
        return

    load_dotenv(env_path, override=True)


def _parse_non_negative_int(value: str | None, default: int = 0) -> int:
    if value is None:
        return default
    raw = value.strip()
    if not raw:
        return default
    try:
        return max(0, int(raw))
    except ValueError:
        return default


def _parse_positive_float(value: str | None, default: float) -> float:
    if value is None:
        return default
    raw = value.strip()
    if not raw:
        return default
    try:
        parsed = float(raw)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _parse_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


@dataclass(frozen=True)
class Settings:
    env: str
    database_url: str | None
    upload_dir: Path
    upload_url_prefix: str
    scratch_dir: Path | None
    http_insecure_tls: bool
    http_max_redirects: int
    http_timeout_seconds: float
    log_level: str


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_dotenv()

    scratch_raw = (os.getenv("BANNERSEED_SCRATCH_DIR") or "").strip()
    log_level = (os.getenv("BANNERSEED_LOG_LEVEL") or "INFO").strip().upper() or "INFO"

    return Settings(
        env=os.getenv("BANNERSEED_ENV", "development"),
        database_url=os.getenv("DATABASE_URL") or None,
        upload_dir=Path(os.getenv("BANNERSEED_UPLOAD_DIR", "backend/uploads")),
        upload_url_prefix=os.getenv("BANNERSEED_UPLOAD_URL_PREFIX", "/uploads").rstrip("/") or "/uploads",
        scratch_dir=Path(scratch_raw) if scratch_raw else None,
        http_insecure_tls=_parse_bool(os.getenv("BANNERSEED_HTTP_INSECURE_TLS"), default=False),
        http_max_redirects=_parse_non_negative_int(os.getenv("BANNERSEED_HTTP_MAX_REDIRECTS"), default=10),
        http_timeout_seconds=_parse_positive_float(os.getenv("BANNERSEED_HTTP_TIMEOUT_SECONDS"), default=30.0),
        log_level=log_level,
    )
