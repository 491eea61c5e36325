# idp/auth/deps.py
from dataclasses import dataclass

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from idp.auth.jwt import decode_session_token
from idp.core import AppError, ErrorCode, ErrorReason
from idp.core.request_context import set_context
from idp.validations.email_validators import normalize_email

bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """Opaque identity issued by the auth provider."""
    id: str
    email: str


def get_current_user(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> CurrentUser:
    if not creds or creds.scheme.lower() != "bearer" or not creds.credentials:
        raise AppError(
            code=ErrorCode.UNAUTHORIZED,
            reason=ErrorReason.AUTH_REQUIRED.value,
            message="Missing Authorization: Bearer token",
            status_code=401,
        )

    payload = decode_session_token(creds.credentials)

    sub = payload.get("sub")
    email = normalize_email(payload.get("email"))
    if not sub or not email:
        raise AppError(
            code=ErrorCode.UNAUTHORIZED,
            reason=ErrorReason.AUTH_INVALID.value,
            message="Session is missing a user id or email",
            status_code=401,
        )

    set_context(user_id=sub)
    return CurrentUser(id=sub, email=email)
