"""
response_store.py
- Purpose: Load/save a user's own ratings, falling back to the local cache
  when the relational store is unavailable.
- Owns: the two-tier read/write policy and the one-time migration sweep.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from idp.repos.response.read import ResponseReadRepo
from idp.repos.response.write import ResponseWriteRepo
from idp.schemas.response import ResponseData, ResponseMap
from idp.services.local_cache import LocalResponseCache

logger = logging.getLogger("idp.response_store")


def _clean_notes(notes: str | None) -> str | None:
    return notes if notes else None


class ResponseStore:
    def __init__(self, db: Session, cache: LocalResponseCache):
        self.db = db
        self.cache = cache
        self.read = ResponseReadRepo(db)
        self.write = ResponseWriteRepo(db)

    def load_responses(self, user_id: str, email: str, role_id: int) -> ResponseMap:
        try:
            rows = self.read.list_for_user_role(user_id, role_id)
        except SQLAlchemyError:
            self.db.rollback()
            logger.warning(
                "responses.fallback_local",
                exc_info=True,
                extra={"op": "load", "role_id": role_id},
            )
            return self.cache.load(email, role_id)

        return {
            r.competency_id: ResponseData(assessment_level=r.assessment_level, notes=r.notes)
            for r in rows
        }

    def save_response(
        self,
        user_id: str,
        email: str,
        role_id: int,
        competency_id: int,
        response: ResponseData,
        *,
        client_seq: int | None = None,
    ) -> bool:
        """
        Upsert one rating. Returns True when the store accepted the write
        (or already holds a newer one), False when it went to the local cache.
        """
        try:
            _, applied = self.write.upsert(
                user_id=user_id,
                email=email,
                role_id=role_id,
                competency_id=competency_id,
                assessment_level=response.assessment_level,
                notes=_clean_notes(response.notes),
                client_seq=client_seq,
            )
        except SQLAlchemyError:
            self.db.rollback()
            logger.warning(
                "responses.fallback_local",
                exc_info=True,
                extra={"op": "save", "role_id": role_id, "competency_id": competency_id},
            )
            if not self.cache.put(email, role_id, competency_id, response):
                logger.error(
                    "responses.save_lost",
                    extra={"role_id": role_id, "competency_id": competency_id},
                )
            return False

        if not applied:
            logger.info(
                "responses.stale_write_ignored",
                extra={"role_id": role_id, "competency_id": competency_id, "client_seq": client_seq},
            )
        return True

    def migrate_local_data(self, user_id: str, email: str) -> bool:
        """
        Replay every cached (email, role) bucket into the store.

        A bucket is removed only once every one of its responses was accepted
        by the store; otherwise it stays for the next sweep.
        Returns True if at least one bucket was migrated.
        """
        migrated: list[int] = []
        for role_id in self.cache.buckets(email):
            data = self.cache.load(email, role_id)
            ok = True
            for competency_id, response in data.items():
                ok = self.save_response(user_id, email, role_id, competency_id, response) and ok
            # an unremovable bucket is replayed again on the next sweep
            if ok and self.cache.remove(email, role_id):
                migrated.append(role_id)
            else:
                logger.warning("responses.migration_incomplete", extra={"role_id": role_id})

        if migrated:
            logger.info("responses.migrated", extra={"role_ids": migrated})
        return bool(migrated)
