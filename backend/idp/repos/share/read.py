"""
share/read.py
- Purpose: Read-side DB operations for Share and its snapshot rows.
- Design: Keeps query access patterns centralized.
"""

import uuid

from sqlalchemy import func
from sqlalchemy.orm import Session
from idp.models.share import Share
from idp.models.share_snapshot import ShareSnapshot


class ShareReadRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, share_id: uuid.UUID) -> Share | None:
        return self.db.query(Share).filter(Share.id == share_id).first()

    def get_by_token(self, share_token: str) -> Share | None:
        return self.db.query(Share).filter(Share.share_token == share_token).first()

    def list_by_owner(self, original_user_id: str) -> list[Share]:
        return (
            self.db.query(Share)
            .filter(Share.original_user_id == original_user_id)
            .order_by(Share.shared_at.desc())
            .all()
        )

    def list_by_collaborator(self, email: str) -> list[Share]:
        # lower() on the column too, for rows written before emails were normalized
        return (
            self.db.query(Share)
            .filter(func.lower(Share.collaborator_email) == email.lower())
            .order_by(Share.shared_at.desc())
            .all()
        )

    def list_for_owner_collaborator_role(self, original_user_id: str, collaborator_email: str, role_id: int) -> list[Share]:
        return (
            self.db.query(Share)
            .filter(
                Share.original_user_id == original_user_id,
                func.lower(Share.collaborator_email) == collaborator_email.lower(),
                Share.role_id == role_id,
            )
            .all()
        )

    def list_snapshots(self, share_id: uuid.UUID) -> list[ShareSnapshot]:
        return (
            self.db.query(ShareSnapshot)
            .filter(ShareSnapshot.share_id == share_id)
            .order_by(ShareSnapshot.competency_id.asc())
            .all()
        )
