"""
access_guard.py
- Purpose: Authorization checks for shares. The share token is a bearer
  link; only the addressed collaborator may read or write feedback with it.
"""

from idp.validations.email_validators import normalize_email


def can_user_provide_feedback(share, caller_email: str | None) -> bool:
    if share is None:
        return False
    return normalize_email(share.collaborator_email) == normalize_email(caller_email)


def is_share_owner(share, user_id: str | None) -> bool:
    return share is not None and user_id is not None and share.original_user_id == user_id


def can_view_share(share, *, user_id: str | None, email: str | None) -> bool:
    """Owner or addressed collaborator."""
    return is_share_owner(share, user_id) or can_user_provide_feedback(share, email)
