# triveast/config.py
# Purpose: Read environment configuration once at startup.
# Pitfalls: Values are frozen; restart the process to pick up changes.

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _parse_origins(raw: str | None) -> list[str]:
    """'*' or unset -> allow all; otherwise a comma separated list."""
    if not raw or raw.strip() == "*":
        return ["*"]
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


@dataclass(frozen=True)
class Settings:
    trivia_url: str = "https://opentdb.com/api.php"
    quote_url: str = "https://query1.finance.yahoo.com/v7/finance/quote"
    question_ttl_s: float = 600.0
    quote_ttl_s: float = 60.0
    http_timeout_s: float = 10.0
    initial_balance: float = 10000.0
    admin_token: str | None = None
    allowed_origins: tuple[str, ...] = ("*",)
    uploads_dir: str = "uploads"
    max_upload_bytes: int = 5 * 1024 * 1024

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            trivia_url=os.getenv("TRIVEAST_TRIVIA_URL", cls.trivia_url),
            quote_url=os.getenv("TRIVEAST_QUOTE_URL", cls.quote_url),
            question_ttl_s=_env_float("TRIVEAST_QUESTION_TTL_SEC", cls.question_ttl_s),
            quote_ttl_s=_env_float("TRIVEAST_QUOTE_TTL_SEC", cls.quote_ttl_s),
            http_timeout_s=_env_float("TRIVEAST_HTTP_TIMEOUT_SEC", cls.http_timeout_s),
            initial_balance=_env_float("TRIVEAST_INITIAL_BALANCE", cls.initial_balance),
            admin_token=os.getenv("TRIVEAST_ADMIN_TOKEN") or None,
            allowed_origins=tuple(_parse_origins(os.getenv("ALLOWED_ORIGINS"))),
            uploads_dir=os.getenv("TRIVEAST_UPLOADS_DIR", cls.uploads_dir),
            max_upload_bytes=int(_env_float("TRIVEAST_MAX_UPLOAD_BYTES", cls.max_upload_bytes)),
        )
