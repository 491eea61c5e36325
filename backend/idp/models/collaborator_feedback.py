"""
collaborator_feedback.py
- Purpose: Collaborator's rating + notes for one competency of a share.
"""

import uuid
from datetime import datetime
from sqlalchemy import Text, DateTime, Integer, BigInteger, Uuid, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column

from idp.models.base import Base
from idp.models.user_response import utcnow


class CollaboratorFeedback(Base):
    __tablename__ = "collaborator_feedback"
    __table_args__ = (
        UniqueConstraint("share_id", "competency_id", name="uq_collaborator_feedback_share_competency"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    share_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("shares.id"), nullable=False)
    competency_id: Mapped[int] = mapped_column(Integer, nullable=False)

    collaborator_assessment_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    collaborator_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    client_seq: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    share: Mapped["Share"] = relationship(back_populates="feedback")
