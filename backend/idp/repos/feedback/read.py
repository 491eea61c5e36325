"""
feedback/read.py
- Purpose: Read-side DB operations for CollaboratorFeedback.
"""

import uuid

from sqlalchemy.orm import Session
from idp.models.collaborator_feedback import CollaboratorFeedback


class FeedbackReadRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_for_share(self, share_id: uuid.UUID) -> list[CollaboratorFeedback]:
        return (
            self.db.query(CollaboratorFeedback)
            .filter(CollaboratorFeedback.share_id == share_id)
            .order_by(CollaboratorFeedback.competency_id.asc())
            .all()
        )
