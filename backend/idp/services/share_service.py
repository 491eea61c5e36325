"""
share_service.py
- Purpose: Share lifecycle. Create (dedup -> insert -> notify -> snapshot),
  look up, list, bundle details, and cascade-delete shares.
- Owns: duplicate-share suppression and the compensating delete that keeps
  a Share from ever existing without its snapshot.
- Design: Every operation reports failure through its return value; store
  errors are logged and rolled back here, never propagated.
"""

import logging
import uuid
from collections.abc import Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from idp.models.share import Share
from idp.repos.feedback.read import FeedbackReadRepo
from idp.repos.feedback.write import FeedbackWriteRepo
from idp.repos.share.read import ShareReadRepo
from idp.repos.share.write import ShareWriteRepo
from idp.schemas.response import ResponseData
from idp.schemas.share import DeleteResult, ShareCreateResult, ShareDetails
from idp.services.notifications import ShareNotifier
from idp.validations.email_validators import normalize_email

logger = logging.getLogger("idp.share_service")

DUPLICATE_SHARE_MESSAGE = (
    "You've already shared an identical assessment with this collaborator. "
    "Please make edits to send a new assessment."
)


def _trimmed(notes: str | None) -> str:
    return (notes or "").strip()


def _same_assessment(current: Mapping[int, ResponseData], snapshot: Mapping[int, ResponseData]) -> bool:
    if set(current) != set(snapshot):
        return False
    return all(
        current[cid].assessment_level == snapshot[cid].assessment_level
        and _trimmed(current[cid].notes) == _trimmed(snapshot[cid].notes)
        for cid in current
    )


class ShareService:
    def __init__(self, db: Session, notifier: ShareNotifier):
        self.db = db
        self.notifier = notifier

        self.share_read = ShareReadRepo(db)
        self.share_write = ShareWriteRepo(db)
        self.feedback_read = FeedbackReadRepo(db)
        self.feedback_write = FeedbackWriteRepo(db)

    # ---- create ----

    def _has_identical_share(
        self,
        original_user_id: str,
        collaborator_email: str,
        role_id: int,
        current_responses: Mapping[int, ResponseData],
    ) -> bool:
        try:
            existing = self.share_read.list_for_owner_collaborator_role(original_user_id, collaborator_email, role_id)
        except SQLAlchemyError:
            self.db.rollback()
            logger.warning("share.dedup_check_failed", exc_info=True)
            return False

        for share in existing:
            try:
                rows = self.share_read.list_snapshots(share.id)
            except SQLAlchemyError:
                self.db.rollback()
                logger.warning("share.dedup_snapshot_read_failed", exc_info=True, extra={"share_id": str(share.id)})
                continue

            snapshot = {
                s.competency_id: ResponseData(assessment_level=s.assessment_level, notes=s.notes)
                for s in rows
            }
            if _same_assessment(current_responses, snapshot):
                return True
        return False

    def create_share(
        self,
        original_user_id: str,
        original_user_email: str,
        collaborator_email: str,
        role_id: int,
        current_responses: Mapping[int, ResponseData],
    ) -> ShareCreateResult:
        collaborator_email = normalize_email(collaborator_email)
        original_user_email = normalize_email(original_user_email)

        logger.info(
            "share.create_requested",
            extra={"role_id": role_id, "response_count": len(current_responses)},
        )

        if self._has_identical_share(original_user_id, collaborator_email, role_id, current_responses):
            logger.info("share.duplicate_rejected", extra={"role_id": role_id})
            return ShareCreateResult(success=False, error=DUPLICATE_SHARE_MESSAGE, duplicate=True)

        try:
            share = self.share_write.create_share(
                original_user_id=original_user_id,
                original_user_email=original_user_email,
                collaborator_email=collaborator_email,
                role_id=role_id,
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("share.insert_failed")
            return ShareCreateResult(success=False, error=str(e.__cause__ or e))

        share_id, share_token = share.id, share.share_token
        logger.info("share.created", extra={"share_id": str(share_id), "role_id": role_id})

        if not self.notifier.notify_share_created(
            collaborator_email=collaborator_email,
            original_user_email=original_user_email,
            role_id=role_id,
            share_token=share_token,
            share_id=str(share_id),
        ):
            logger.warning("share.notify_failed", extra={"share_id": str(share_id)})

        snapshot_rows = [
            {
                "competency_id": int(cid),
                "assessment_level": r.assessment_level,
                "notes": r.notes or None,
            }
            for cid, r in current_responses.items()
        ]
        try:
            self.share_write.insert_snapshots(share_id, snapshot_rows)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("share.snapshot_failed", extra={"share_id": str(share_id)})
            self._compensate_delete(share_id)
            return ShareCreateResult(success=False, error=str(e.__cause__ or e))

        return ShareCreateResult(success=True, share_id=share_id, share_token=share_token)

    def _compensate_delete(self, share_id: uuid.UUID) -> None:
        try:
            self.share_write.delete_snapshots(share_id)
            self.share_write.delete_share(share_id)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("share.compensating_delete_failed", extra={"share_id": str(share_id)})

    # ---- read ----

    def get_share_by_token(self, share_token: str) -> Share | None:
        """Token lookup only; authorization is the caller's job."""
        try:
            return self.share_read.get_by_token(share_token)
        except SQLAlchemyError:
            self.db.rollback()
            logger.warning("share.lookup_failed", exc_info=True)
            return None

    def get_my_shares(self, original_user_id: str) -> list[Share]:
        try:
            return self.share_read.list_by_owner(original_user_id)
        except SQLAlchemyError:
            self.db.rollback()
            logger.warning("share.list_mine_failed", exc_info=True)
            return []

    def get_shares_for_collaborator(self, email: str) -> list[Share]:
        try:
            return self.share_read.list_by_collaborator(normalize_email(email))
        except SQLAlchemyError:
            self.db.rollback()
            logger.warning("share.list_for_collaborator_failed", exc_info=True)
            return []

    def get_share_details(self, share_id: uuid.UUID) -> ShareDetails:
        try:
            share = self.share_read.get_by_id(share_id)
        except SQLAlchemyError:
            self.db.rollback()
            logger.warning("share.details_failed", exc_info=True, extra={"share_id": str(share_id)})
            return ShareDetails(share=None)

        if share is None:
            return ShareDetails(share=None)

        snapshots = {}
        try:
            snapshots = {s.competency_id: s for s in self.share_read.list_snapshots(share_id)}
        except SQLAlchemyError:
            self.db.rollback()
            logger.warning("share.snapshots_failed", exc_info=True, extra={"share_id": str(share_id)})

        feedback = {}
        try:
            feedback = {f.competency_id: f for f in self.feedback_read.list_for_share(share_id)}
        except SQLAlchemyError:
            self.db.rollback()
            logger.warning("share.feedback_failed", exc_info=True, extra={"share_id": str(share_id)})

        return ShareDetails(share=share, snapshots=snapshots, feedback=feedback)

    def has_feedback_started(self, share_id: uuid.UUID) -> bool:
        try:
            rows = self.feedback_read.list_for_share(share_id)
        except SQLAlchemyError:
            self.db.rollback()
            logger.warning("share.feedback_check_failed", exc_info=True, extra={"share_id": str(share_id)})
            return False

        return any(
            f.collaborator_assessment_level is not None or _trimmed(f.collaborator_notes)
            for f in rows
        )

    # ---- delete ----

    def delete_share(self, share_id: uuid.UUID) -> DeleteResult:
        """
        Unconditional cascading delete: feedback -> snapshots -> share.
        Callers check has_feedback_started() first. No rollback of steps
        that already succeeded.
        """
        steps = (
            ("feedback", self.feedback_write.delete_for_share),
            ("snapshots", self.share_write.delete_snapshots),
            ("share", self.share_write.delete_share),
        )
        for name, step in steps:
            try:
                step(share_id)
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.exception("share.delete_failed", extra={"share_id": str(share_id), "step": name})
                return DeleteResult(success=False, error=str(e.__cause__ or e))

        logger.info("share.deleted", extra={"share_id": str(share_id)})
        return DeleteResult(success=True)
