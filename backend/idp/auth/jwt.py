# idp/auth/jwt.py
from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError

from idp.core.config import settings
from idp.core import AppError, ErrorCode, ErrorReason


def create_session_token(*, user_id: str, email: str, expires_minutes: int = 60) -> str:
    """
    Mint a token shaped like a Supabase session JWT.
    Sessions are issued by Supabase Auth; this exists for local tooling and tests.
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "email": email,
        "aud": settings.SUPABASE_JWT_AUDIENCE,
        "role": "authenticated",
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(payload, settings.SUPABASE_JWT_SECRET, algorithm=settings.SUPABASE_JWT_ALGORITHM)


def decode_session_token(token: str) -> dict:
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.SUPABASE_JWT_ALGORITHM],
            audience=settings.SUPABASE_JWT_AUDIENCE,
        )
    except JWTError:
        raise AppError(
            code=ErrorCode.UNAUTHORIZED,
            reason=ErrorReason.AUTH_INVALID.value,
            message="Invalid or expired token",
            status_code=401,
        )
