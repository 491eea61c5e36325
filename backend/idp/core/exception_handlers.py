"""
exception_handlers.py
- Purpose: Every failure leaves the API in the same envelope:
  {"error": {"code", "reason", "message", ["details"]}}.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from idp.core import AppError, ErrorCode, ErrorReason

logger = logging.getLogger("idp.exceptions")


def _where(request: Request) -> dict:
    return {"path": request.url.path, "method": request.method}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.info
    log("app_error", extra={**_where(request), "status_code": exc.status_code, "code": exc.code, "reason": exc.reason})
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = [".".join(str(p) for p in e.get("loc", ())) for e in exc.errors()]
    logger.info("request_invalid", extra={**_where(request), "fields": fields})
    err = AppError(
        code=ErrorCode.VALIDATION_ERROR,
        reason=ErrorReason.INVALID_INPUT.value,
        status_code=422,
        message="Request body or parameters are invalid",
        details={"fields": fields},
    )
    return JSONResponse(status_code=422, content=err.to_dict())


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # services catch store errors themselves; this covers reads done in routers
    logger.exception("store_error", extra=_where(request))
    err = AppError(
        code=ErrorCode.DB_ERROR,
        reason=ErrorReason.DATABASE_UNAVAILABLE.value,
        status_code=503,
        message="The data store is temporarily unavailable. Please try again.",
    )
    return JSONResponse(status_code=503, content=err.to_dict())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", extra=_where(request))
    return JSONResponse(
        status_code=500,
        content={"error": {"code": ErrorCode.INTERNAL_ERROR, "reason": "Unhandled exception", "message": "Something went wrong"}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
