"""
feedback_service.py
- Purpose: Collaborator feedback writes (autosave upsert) and submission.
- Design: The data layer does not freeze submitted feedback; the API gates
  edits on Share.feedback_submitted.
"""

import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from idp.repos.feedback.write import FeedbackWriteRepo
from idp.repos.share.write import ShareWriteRepo

logger = logging.getLogger("idp.feedback_service")


class FeedbackService:
    def __init__(self, db: Session):
        self.db = db
        self.feedback_write = FeedbackWriteRepo(db)
        self.share_write = ShareWriteRepo(db)

    def save_collaborator_feedback(
        self,
        share_id: uuid.UUID,
        competency_id: int,
        level: int | None = None,
        notes: str | None = None,
        *,
        client_seq: int | None = None,
    ) -> bool:
        try:
            _, applied = self.feedback_write.upsert(
                share_id=share_id,
                competency_id=competency_id,
                collaborator_assessment_level=level,
                collaborator_notes=notes or None,
                client_seq=client_seq,
            )
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("feedback.save_failed", extra={"share_id": str(share_id), "competency_id": competency_id})
            return False

        if not applied:
            logger.info(
                "feedback.stale_write_ignored",
                extra={"share_id": str(share_id), "competency_id": competency_id, "client_seq": client_seq},
            )
        return True

    def submit_feedback(self, share_id: uuid.UUID) -> bool:
        try:
            updated = self.share_write.mark_feedback_submitted(share_id)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("feedback.submit_failed", extra={"share_id": str(share_id)})
            return False

        if not updated:
            logger.warning("feedback.submit_share_missing", extra={"share_id": str(share_id)})
            return False

        logger.info("feedback.submitted", extra={"share_id": str(share_id)})
        return True
