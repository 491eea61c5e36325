"""
share.py
- Purpose: A request from an owner to one collaborator to review a frozen
  copy of the owner's ratings for a role.
"""

import secrets
import uuid
from datetime import datetime
from sqlalchemy import Text, DateTime, Integer, Boolean, Uuid, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column

from idp.models.base import Base
from idp.models.user_response import utcnow


def generate_share_token() -> str:
    return secrets.token_urlsafe(32)


class Share(Base):
    __tablename__ = "shares"
    __table_args__ = (
        Index("ix_shares_original_user_id", "original_user_id"),
        Index("ix_shares_collaborator_email", "collaborator_email"),
        # Duplicate-share scan
        Index("ix_shares_owner_collaborator_role", "original_user_id", "collaborator_email", "role_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    original_user_id: Mapped[str] = mapped_column(Text, nullable=False)
    original_user_email: Mapped[str] = mapped_column(Text, nullable=False)
    collaborator_email: Mapped[str] = mapped_column(Text, nullable=False)
    role_id: Mapped[int] = mapped_column(Integer, nullable=False)

    shared_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    feedback_submitted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    feedback_submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    share_token: Mapped[str] = mapped_column(Text, nullable=False, unique=True, default=generate_share_token)

    snapshots: Mapped[list["ShareSnapshot"]] = relationship(
        back_populates="share",
        order_by="ShareSnapshot.competency_id",
    )
    feedback: Mapped[list["CollaboratorFeedback"]] = relationship(
        back_populates="share",
        order_by="CollaboratorFeedback.competency_id",
    )
