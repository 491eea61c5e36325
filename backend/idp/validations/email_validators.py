"""
email_validators.py
- Purpose: One canonical email form (trimmed, lower-case) for every identity
  comparison; collaborator emails act as the share allow-list.
"""

from pydantic import EmailStr, TypeAdapter, ValidationError

from idp.core import AppError, ErrorCode, ErrorReason

_email_adapter = TypeAdapter(EmailStr)


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def validate_email(email: str | None) -> str:
    """Normalize and validate; returns the canonical form."""
    e = normalize_email(email)
    try:
        _email_adapter.validate_python(e)
    except ValidationError as exc:
        raise AppError(
            code=ErrorCode.INVALID_EMAIL,
            reason=ErrorReason.INVALID_INPUT.value,
            message="Please enter a valid email address",
            status_code=422,
        ) from exc
    return e
