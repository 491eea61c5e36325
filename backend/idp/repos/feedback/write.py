"""
feedback/write.py
- Purpose: Write-side DB operations for CollaboratorFeedback.
- Design: Upsert keyed by (share_id, competency_id); last write wins unless
  the caller sends client_seq.
"""

import uuid

from sqlalchemy.orm import Session
from idp.models.collaborator_feedback import CollaboratorFeedback
from idp.repos.response.write import is_stale


class FeedbackWriteRepo:
    def __init__(self, db: Session):
        self.db = db

    def upsert(
        self,
        *,
        share_id: uuid.UUID,
        competency_id: int,
        collaborator_assessment_level: int | None,
        collaborator_notes: str | None,
        client_seq: int | None = None,
    ) -> tuple[CollaboratorFeedback, bool]:
        existing = (
            self.db.query(CollaboratorFeedback)
            .filter(
                CollaboratorFeedback.share_id == share_id,
                CollaboratorFeedback.competency_id == competency_id,
            )
            .first()
        )
        if existing:
            if is_stale(existing.client_seq, client_seq):
                return existing, False

            existing.collaborator_assessment_level = collaborator_assessment_level
            existing.collaborator_notes = collaborator_notes
            if client_seq is not None:
                existing.client_seq = client_seq
            self.db.commit()
            self.db.refresh(existing)
            return existing, True

        row = CollaboratorFeedback(
            share_id=share_id,
            competency_id=competency_id,
            collaborator_assessment_level=collaborator_assessment_level,
            collaborator_notes=collaborator_notes,
            client_seq=client_seq,
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row, True

    def delete_for_share(self, share_id: uuid.UUID) -> int:
        deleted = (
            self.db.query(CollaboratorFeedback)
            .filter(CollaboratorFeedback.share_id == share_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted
