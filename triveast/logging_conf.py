# triveast/logging_conf.py
from __future__ import annotations

import json
import logging
import os
from logging.config import dictConfig
from typing import Any

# Extras callers may attach with logger.info(..., extra={...})
_EXTRA_KEYS = ("category_id", "symbol", "outcome", "reason")


class JsonFormatter(logging.Formatter):
    """One JSON object per line on stdout."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
        }
        for key in _EXTRA_KEYS:
            val = getattr(record, key, None)
            if val is not None:
                payload[key] = val
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _console(level: str, propagate: bool = False) -> dict[str, Any]:
    return {"level": level, "handlers": ["console"], "propagate": propagate}


def setup_logging(level: str | None = None) -> None:
    """JSON logging for triveast + uvicorn; uvicorn access lines replaced by the request log."""
    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"json": {"()": JsonFormatter}},
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {"level": log_level, "handlers": ["console"]},
            "loggers": {
                "uvicorn": _console(log_level),
                "uvicorn.error": _console(log_level),
                # timing_middleware logs each request under "request"
                "uvicorn.access": _console("WARNING"),
                "fastapi": _console(log_level),
                "httpx": _console("WARNING"),
                "triveast": _console(log_level),
                "request": _console(log_level),
            },
        }
    )
