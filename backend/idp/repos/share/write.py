"""
share/write.py
- Purpose: Write-side DB operations for Share and ShareSnapshot.
- Design: No business logic; persistence only. Each call is its own commit,
  the service sequences them (there is no cross-call transaction).
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import Session
from idp.models.share import Share
from idp.models.share_snapshot import ShareSnapshot


class ShareWriteRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_share(
        self,
        *,
        original_user_id: str,
        original_user_email: str,
        collaborator_email: str,
        role_id: int,
    ) -> Share:
        share = Share(
            original_user_id=original_user_id,
            original_user_email=original_user_email,
            collaborator_email=collaborator_email,
            role_id=role_id,
            feedback_submitted=False,
        )
        self.db.add(share)
        self.db.commit()
        self.db.refresh(share)
        return share

    def insert_snapshots(self, share_id: uuid.UUID, rows: list[dict]) -> int:
        if not rows:
            return 0
        self.db.add_all(
            ShareSnapshot(
                share_id=share_id,
                competency_id=r["competency_id"],
                assessment_level=r.get("assessment_level"),
                notes=r.get("notes"),
            )
            for r in rows
        )
        self.db.commit()
        return len(rows)

    def mark_feedback_submitted(self, share_id: uuid.UUID) -> bool:
        updated = (
            self.db.query(Share)
            .filter(Share.id == share_id)
            .update(
                {"feedback_submitted": True, "feedback_submitted_at": datetime.now(timezone.utc)},
                synchronize_session=False,
            )
        )
        self.db.commit()
        return updated == 1

    def delete_snapshots(self, share_id: uuid.UUID) -> int:
        deleted = self.db.query(ShareSnapshot).filter(ShareSnapshot.share_id == share_id).delete(synchronize_session=False)
        self.db.commit()
        return deleted

    def delete_share(self, share_id: uuid.UUID) -> int:
        deleted = self.db.query(Share).filter(Share.id == share_id).delete(synchronize_session=False)
        self.db.commit()
        return deleted
