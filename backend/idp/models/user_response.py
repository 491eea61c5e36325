"""
user_response.py
- Purpose: One self-rating (level + notes) per user, role and competency.
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Text, DateTime, Integer, BigInteger, Uuid, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from idp.models.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserResponse(Base):
    __tablename__ = "user_responses"
    __table_args__ = (
        UniqueConstraint("user_id", "role_id", "competency_id", name="uq_user_responses_user_role_competency"),
        Index("ix_user_responses_user_role", "user_id", "role_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)

    role_id: Mapped[int] = mapped_column(Integer, nullable=False)
    competency_id: Mapped[int] = mapped_column(Integer, nullable=False)

    assessment_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Monotonic per-editor sequence; stale autosaves are ignored when present
    client_seq: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
