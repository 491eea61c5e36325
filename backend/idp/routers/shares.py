"""
shares.py
- Purpose: Owner-side share routes: create, list, view, delete.
- Design: Keep router thin. Business-rule gates (completeness before sharing,
  no delete once feedback started) live here; ShareService does the work.
"""

import uuid

from fastapi import APIRouter, Depends, status

from idp.api.deps import get_reference, get_response_store, get_share_service
from idp.auth.deps import CurrentUser, get_current_user
from idp.core import ErrorCode, ErrorReason
from idp.core.config import settings
from idp.core.errors import AppError, conflict, forbidden, not_found, unprocessable
from idp.core.request_context import set_context
from idp.reference import ReferenceData
from idp.schemas.share import (
    ShareCreateRequest,
    ShareCreateResponse,
    ShareDetailsOut,
    ShareOut,
    ShareSummaryOut,
    share_details_out,
)
from idp.services.access_guard import can_view_share, is_share_owner
from idp.services.completion import is_fully_complete
from idp.services.response_store import ResponseStore
from idp.services.share_service import ShareService
from idp.validations.assessment_validators import validate_role
from idp.validations.email_validators import validate_email

router = APIRouter(prefix="/api/shares", tags=["Shares"])


def _summaries(shares, reference: ReferenceData) -> list[ShareSummaryOut]:
    return [
        ShareSummaryOut(
            **ShareOut.model_validate(s).model_dump(),
            role_name=reference.role_name(s.role_id),
        )
        for s in shares
    ]


@router.post("", response_model=ShareCreateResponse, status_code=status.HTTP_201_CREATED)
def create_share(
    body: ShareCreateRequest,
    user: CurrentUser = Depends(get_current_user),
    store: ResponseStore = Depends(get_response_store),
    svc: ShareService = Depends(get_share_service),
    reference: ReferenceData = Depends(get_reference),
):
    validate_role(reference, body.role_id)
    collaborator_email = validate_email(body.collaborator_email)

    responses = store.load_responses(user.id, user.email, body.role_id)
    if not is_fully_complete(responses, reference.competencies_for_role(body.role_id)):
        raise unprocessable(
            ErrorReason.ASSESSMENT_INCOMPLETE,
            code=ErrorCode.ASSESSMENT_INCOMPLETE,
            message="Please complete every competency (rating and notes) before sharing.",
        )

    result = svc.create_share(user.id, user.email, collaborator_email, body.role_id, responses)
    if not result.success:
        if result.duplicate:
            raise conflict(ErrorReason.SHARE_DUPLICATE, code=ErrorCode.DUPLICATE_SHARE, message=result.error)
        raise AppError(
            code=ErrorCode.SHARE_FAILED,
            reason=ErrorReason.SHARE_FAILED.value,
            message="Failed to share assessment. Please try again.",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return ShareCreateResponse(
        share_id=result.share_id,
        share_token=result.share_token,
        share_link=settings.collaborate_link(result.share_token),
    )


@router.get("/mine", response_model=list[ShareSummaryOut])
def list_my_shares(
    user: CurrentUser = Depends(get_current_user),
    svc: ShareService = Depends(get_share_service),
    reference: ReferenceData = Depends(get_reference),
):
    return _summaries(svc.get_my_shares(user.id), reference)


@router.get("/for-me", response_model=list[ShareSummaryOut])
def list_shares_for_me(
    user: CurrentUser = Depends(get_current_user),
    svc: ShareService = Depends(get_share_service),
    reference: ReferenceData = Depends(get_reference),
):
    return _summaries(svc.get_shares_for_collaborator(user.email), reference)


@router.get("/{share_id}", response_model=ShareDetailsOut)
def get_share(
    share_id: uuid.UUID,
    user: CurrentUser = Depends(get_current_user),
    svc: ShareService = Depends(get_share_service),
    reference: ReferenceData = Depends(get_reference),
):
    set_context(share_id=str(share_id))
    details = svc.get_share_details(share_id)
    if details.share is None:
        raise not_found(ErrorReason.SHARE_NOT_FOUND)
    if not can_view_share(details.share, user_id=user.id, email=user.email):
        raise forbidden(message="You don't have permission to access this share")
    return share_details_out(details, reference)


@router.delete("/{share_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_share(
    share_id: uuid.UUID,
    user: CurrentUser = Depends(get_current_user),
    svc: ShareService = Depends(get_share_service),
):
    set_context(share_id=str(share_id))
    details = svc.get_share_details(share_id)
    share = details.share
    if share is None:
        raise not_found(ErrorReason.SHARE_NOT_FOUND)
    if not is_share_owner(share, user.id):
        raise forbidden(message="Only the owner can delete this share")

    if svc.has_feedback_started(share_id):
        raise conflict(
            ErrorReason.FEEDBACK_STARTED,
            code=ErrorCode.FEEDBACK_STARTED,
            message=f"{share.collaborator_email} has already started providing feedback.",
        )

    result = svc.delete_share(share_id)
    if not result.success:
        raise AppError(
            code=ErrorCode.DB_ERROR,
            reason=ErrorReason.DATABASE_UNAVAILABLE.value,
            message=result.error or "Failed to delete share",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
