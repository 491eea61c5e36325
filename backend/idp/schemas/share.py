"""
share.py (schemas)
- Purpose: Request/response DTOs for sharing and collaborator feedback.
- Design: Read DTOs map straight from ORM rows (from_attributes).
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from idp.schemas.response import Progress


class ShareOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    original_user_id: str
    original_user_email: str
    collaborator_email: str
    role_id: int
    shared_at: datetime
    feedback_submitted: bool
    feedback_submitted_at: datetime | None = None
    share_token: str


class ShareSummaryOut(ShareOut):
    role_name: str


class SnapshotOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    competency_id: int
    assessment_level: int | None = None
    notes: str | None = None


class FeedbackOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    competency_id: int
    collaborator_assessment_level: int | None = None
    collaborator_notes: str | None = None
    updated_at: datetime | None = None


class ShareDetailsOut(BaseModel):
    share: ShareOut
    role_name: str
    snapshots: dict[int, SnapshotOut]
    feedback: dict[int, FeedbackOut]
    progress: Progress
    read_only: bool


class ShareCreateRequest(BaseModel):
    collaborator_email: str = Field(min_length=3, max_length=320)
    role_id: int


class ShareCreateResponse(BaseModel):
    share_id: uuid.UUID
    share_token: str
    share_link: str


class FeedbackSaveRequest(BaseModel):
    collaborator_assessment_level: Annotated[int | None, Field(ge=1)] = None
    collaborator_notes: str | None = Field(default=None, max_length=10_000)
    client_seq: int | None = Field(default=None, ge=0)


class FeedbackSubmitResponse(BaseModel):
    share_id: uuid.UUID
    feedback_submitted: bool
    feedback_submitted_at: datetime | None = None


# ---- Service-level results (returned, never raised) ----

@dataclass
class ShareCreateResult:
    success: bool
    share_id: uuid.UUID | None = None
    share_token: str | None = None
    error: str | None = None
    duplicate: bool = False


@dataclass
class DeleteResult:
    success: bool
    error: str | None = None


@dataclass
class ShareDetails:
    share: object | None
    snapshots: dict = field(default_factory=dict)
    feedback: dict = field(default_factory=dict)


def share_details_out(details: ShareDetails, reference) -> ShareDetailsOut:
    """DRY mapper from ShareDetails (ORM rows) -> response DTO, with feedback progress."""
    from idp.services.completion import feedback_as_responses, progress

    share = details.share
    return ShareDetailsOut(
        share=ShareOut.model_validate(share),
        role_name=reference.role_name(share.role_id),
        snapshots={cid: SnapshotOut.model_validate(s) for cid, s in details.snapshots.items()},
        feedback={cid: FeedbackOut.model_validate(f) for cid, f in details.feedback.items()},
        progress=progress(feedback_as_responses(details.feedback), reference.group_by_core_competency(share.role_id)),
        read_only=bool(share.feedback_submitted),
    )
