"""
request_logging.py
- Purpose: One structured access line per request, tagged with a request id
  that is echoed back in the x-request-id header.
"""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from idp.core.request_context import clear_context, set_context

logger = logging.getLogger("idp.http")

REQUEST_ID_HEADER = "x-request-id"
COLLABORATE_PREFIX = "/api/collaborate/"


def _redact(path: str) -> str:
    """Mask the share token segment of collaborator routes."""
    if not path.startswith(COLLABORATE_PREFIX):
        return path
    _, _, rest = path[len(COLLABORATE_PREFIX):].partition("/")
    return COLLABORATE_PREFIX + "***" + (f"/{rest}" if rest else "")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        set_context(request_id=rid)
        fields = {"method": request.method, "path": _redact(request.url.path)}
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("http.failed", extra={**fields, "duration_ms": _ms_since(started)})
            clear_context()
            raise

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(level, "http.request", extra={**fields, "status_code": response.status_code, "duration_ms": _ms_since(started)})
        response.headers[REQUEST_ID_HEADER] = rid
        clear_context()
        return response


def _ms_since(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)
