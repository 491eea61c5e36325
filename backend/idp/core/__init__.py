# idp/core/__init__.py
from idp.core.errors import AppError
from idp.core.error_codes import ErrorCode
from idp.core.error_reasons import ErrorReason

__all__ = ["AppError", "ErrorCode", "ErrorReason"]
