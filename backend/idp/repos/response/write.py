"""
response/write.py
- Purpose: Write-side DB operations for UserResponse.
- Design: No business logic. Upsert keyed by (user_id, role_id, competency_id).
"""

from sqlalchemy.orm import Session
from idp.models.user_response import UserResponse


def is_stale(stored_seq: int | None, incoming_seq: int | None) -> bool:
    """An incoming write is stale only when both sides carry a sequence and it is not newer."""
    return stored_seq is not None and incoming_seq is not None and incoming_seq <= stored_seq


class ResponseWriteRepo:
    def __init__(self, db: Session):
        self.db = db

    def upsert(
        self,
        *,
        user_id: str,
        email: str,
        role_id: int,
        competency_id: int,
        assessment_level: int | None,
        notes: str | None,
        client_seq: int | None = None,
    ) -> tuple[UserResponse, bool]:
        """Returns (row, applied). `applied` is False when a newer write already landed."""
        existing = (
            self.db.query(UserResponse)
            .filter(
                UserResponse.user_id == user_id,
                UserResponse.role_id == role_id,
                UserResponse.competency_id == competency_id,
            )
            .first()
        )
        if existing:
            if is_stale(existing.client_seq, client_seq):
                return existing, False

            existing.email = email
            existing.assessment_level = assessment_level
            existing.notes = notes
            if client_seq is not None:
                existing.client_seq = client_seq
            self.db.commit()
            self.db.refresh(existing)
            return existing, True

        row = UserResponse(
            user_id=user_id,
            email=email,
            role_id=role_id,
            competency_id=competency_id,
            assessment_level=assessment_level,
            notes=notes,
            client_seq=client_seq,
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row, True
