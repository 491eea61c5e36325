"""
models package
- Purpose: Import all ORM models so Alembic autogenerate discovers them.
- Important: Alembic only sees models that are imported somewhere.
"""

from idp.models.user_response import UserResponse
from idp.models.share import Share
from idp.models.share_snapshot import ShareSnapshot
from idp.models.collaborator_feedback import CollaboratorFeedback

__all__ = [
    "UserResponse",
    "Share",
    "ShareSnapshot",
    "CollaboratorFeedback",
]
