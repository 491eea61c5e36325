"""
errors.py
- Purpose: AppError, the one exception routers raise for expected failures.
  The handler in exception_handlers turns it into the JSON error envelope.
- Services in this package report store failures through return values;
  AppError marks the decision a router made about them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from fastapi import status as http_status

from idp.core.error_codes import ErrorCode
from idp.core.error_reasons import ErrorReason


def _text(reason) -> str:
    return reason.value if isinstance(reason, Enum) else str(reason)


@dataclass
class AppError(Exception):
    code: ErrorCode
    reason: str
    status_code: int = http_status.HTTP_400_BAD_REQUEST
    details: dict[str, Any] | None = None
    message: str | None = None  # shown to the user; falls back to reason

    def __post_init__(self):
        self.reason = _text(self.reason)

    def __str__(self) -> str:
        return f"{_text(self.code)}: {self.message or self.reason}"

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"code": self.code, "reason": self.reason, "message": self.message or self.reason}
        if self.details:
            body["details"] = self.details
        return {"error": body}


def unprocessable(reason: str = ErrorReason.INVALID_INPUT, *, code: ErrorCode = ErrorCode.VALIDATION_ERROR, message: str | None = None, details: dict | None = None) -> AppError:
    return AppError(code=code, reason=reason, status_code=422, message=message, details=details)


def not_found(reason: str = ErrorReason.RESOURCE_NOT_FOUND, *, message: str | None = None, details: dict | None = None) -> AppError:
    return AppError(code=ErrorCode.NOT_FOUND, reason=reason, status_code=http_status.HTTP_404_NOT_FOUND, message=message, details=details)


def forbidden(reason: str = ErrorReason.NOT_AUTHORIZED, *, message: str | None = None) -> AppError:
    return AppError(code=ErrorCode.FORBIDDEN, reason=reason, status_code=http_status.HTTP_403_FORBIDDEN, message=message)


def conflict(reason: str = ErrorReason.ALREADY_EXISTS, *, code: ErrorCode = ErrorCode.CONFLICT, message: str | None = None, details: dict | None = None) -> AppError:
    return AppError(code=code, reason=reason, status_code=http_status.HTTP_409_CONFLICT, message=message, details=details)


def store_unavailable(message: str | None = None, *, code: ErrorCode = ErrorCode.DB_ERROR) -> AppError:
    return AppError(
        code=code,
        reason=ErrorReason.DATABASE_UNAVAILABLE,
        status_code=http_status.HTTP_503_SERVICE_UNAVAILABLE,
        message=message,
    )
