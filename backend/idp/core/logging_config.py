"""
Central logging configuration shared by the API and the Celery worker.

- JSON lines on stdout.
- Correlation fields from request_context on every record.
- Share tokens never reach the log stream: they are bearer credentials for
  the collaborator link.
"""

from __future__ import annotations

import json
import logging
import os
import re
import sys
from datetime import datetime, timezone
from logging.config import dictConfig

from idp.core.request_context import get_context

# Attributes every LogRecord has; anything else came in through extra={...}
_STANDARD_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime", "taskName"}

_SECRET_KEYS = {"share_token", "shareToken", "shareLink", "share_link", "authorization"}
_TOKEN_IN_LINK = re.compile(r"(/collaborate/)[^/\s\"']+")


def redact(value):
    if isinstance(value, str):
        return _TOKEN_IN_LINK.sub(r"\1***", value)
    if isinstance(value, dict):
        return {k: ("***" if k in _SECRET_KEYS else redact(v)) for k, v in value.items()}
    return value


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        out = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            **get_context(),
        }

        for k, v in record.__dict__.items():
            if k in _STANDARD_ATTRS or k.startswith("_") or k in out:
                continue
            if k in _SECRET_KEYS:
                out[k] = "***"
                continue
            v = redact(v)
            try:
                json.dumps(v)
            except (TypeError, ValueError):
                v = str(v)
            out[k] = v

        if record.exc_info:
            out["exc"] = self.formatException(record.exc_info)

        return json.dumps(out, ensure_ascii=False)


def configure_logging() -> None:
    """Idempotent; call at process start."""
    level = os.getenv("LOG_LEVEL", "INFO").upper()

    def _own(lvl: str = level) -> dict:
        return {"level": lvl, "handlers": ["stdout"], "propagate": False}

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"json": {"()": JsonFormatter}},
            "handlers": {
                "stdout": {"class": "logging.StreamHandler", "formatter": "json", "stream": sys.stdout},
            },
            "root": {"level": level, "handlers": ["stdout"]},
            "loggers": {
                "idp": _own(),
                "uvicorn.error": _own(),
                # the request middleware already logs one line per request
                "uvicorn.access": _own("WARNING"),
                "celery": _own(),
                "sqlalchemy.engine": _own("WARNING"),
            },
        }
    )
