"""
share_snapshot.py
- Purpose: Frozen copy of one owner response at share-creation time.
- Written once together with its Share; never updated.
"""

import uuid
from sqlalchemy import Text, Integer, Uuid, ForeignKey
from sqlalchemy.orm import relationship, Mapped, mapped_column

from idp.models.base import Base


class ShareSnapshot(Base):
    __tablename__ = "share_snapshots"

    share_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("shares.id"), primary_key=True)
    competency_id: Mapped[int] = mapped_column(Integer, primary_key=True)

    assessment_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    share: Mapped["Share"] = relationship(back_populates="snapshots")
