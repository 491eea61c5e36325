"""
collaborate.py
- Purpose: Collaborator-facing routes reached through the share link
  <origin>/collaborate/<token>.
- Design: Every route resolves the token, then runs the access guard before
  touching snapshot or feedback data. Submitted feedback is read-only here.
"""

from fastapi import APIRouter, Depends

from idp.api.deps import get_feedback_service, get_reference, get_share_service
from idp.auth.deps import CurrentUser, get_current_user
from idp.core import ErrorCode, ErrorReason
from idp.core.errors import conflict, forbidden, not_found, store_unavailable, unprocessable
from idp.core.request_context import set_context
from idp.reference import ReferenceData
from idp.schemas.share import (
    FeedbackOut,
    FeedbackSaveRequest,
    FeedbackSubmitResponse,
    ShareDetailsOut,
    share_details_out,
)
from idp.services.access_guard import can_user_provide_feedback
from idp.services.completion import feedback_as_responses, is_fully_complete
from idp.services.feedback_service import FeedbackService
from idp.services.share_service import ShareService
from idp.validations.assessment_validators import validate_assessment_level

router = APIRouter(prefix="/api/collaborate", tags=["Collaborate"])


def _resolve_share(token: str, user: CurrentUser, svc: ShareService):
    share = svc.get_share_by_token(token)
    if share is None:
        raise not_found(ErrorReason.SHARE_NOT_FOUND)
    if not can_user_provide_feedback(share, user.email):
        raise forbidden(message="You don't have permission to access this share")
    set_context(share_id=str(share.id))
    return share


def _require_editable(share) -> None:
    if share.feedback_submitted:
        raise conflict(
            ErrorReason.FEEDBACK_SUBMITTED,
            code=ErrorCode.FEEDBACK_SUBMITTED,
            message="Feedback has already been submitted and can no longer be edited.",
        )


@router.get("/{token}", response_model=ShareDetailsOut)
def open_share(
    token: str,
    user: CurrentUser = Depends(get_current_user),
    svc: ShareService = Depends(get_share_service),
    reference: ReferenceData = Depends(get_reference),
):
    share = _resolve_share(token, user, svc)
    details = svc.get_share_details(share.id)
    if details.share is None:
        raise not_found(ErrorReason.SHARE_NOT_FOUND)
    return share_details_out(details, reference)


@router.put("/{token}/feedback/{competency_id}", response_model=FeedbackOut)
def save_feedback(
    token: str,
    competency_id: int,
    body: FeedbackSaveRequest,
    user: CurrentUser = Depends(get_current_user),
    svc: ShareService = Depends(get_share_service),
    feedback_svc: FeedbackService = Depends(get_feedback_service),
    reference: ReferenceData = Depends(get_reference),
):
    share = _resolve_share(token, user, svc)
    _require_editable(share)

    if competency_id not in reference.competency_ids_for_role(share.role_id):
        raise not_found(message=f"Competency {competency_id} is not part of this assessment")
    validate_assessment_level(reference, body.collaborator_assessment_level)

    ok = feedback_svc.save_collaborator_feedback(
        share.id,
        competency_id,
        body.collaborator_assessment_level,
        body.collaborator_notes,
        client_seq=body.client_seq,
    )
    if not ok:
        raise store_unavailable("Failed to save feedback. Please try again.")

    return FeedbackOut(
        competency_id=competency_id,
        collaborator_assessment_level=body.collaborator_assessment_level,
        collaborator_notes=body.collaborator_notes or None,
    )


@router.post("/{token}/submit", response_model=FeedbackSubmitResponse)
def submit_feedback(
    token: str,
    user: CurrentUser = Depends(get_current_user),
    svc: ShareService = Depends(get_share_service),
    feedback_svc: FeedbackService = Depends(get_feedback_service),
    reference: ReferenceData = Depends(get_reference),
):
    share = _resolve_share(token, user, svc)
    _require_editable(share)

    details = svc.get_share_details(share.id)
    competencies = reference.competencies_for_role(share.role_id)
    if not is_fully_complete(feedback_as_responses(details.feedback), competencies):
        raise unprocessable(
            ErrorReason.ASSESSMENT_INCOMPLETE,
            code=ErrorCode.FEEDBACK_INCOMPLETE,
            message="Please provide a rating and notes for every competency before submitting.",
        )

    if not feedback_svc.submit_feedback(share.id):
        raise store_unavailable("Failed to submit feedback. Please try again.")

    refreshed = svc.get_share_by_token(token)
    return FeedbackSubmitResponse(
        share_id=share.id,
        feedback_submitted=True,
        feedback_submitted_at=refreshed.feedback_submitted_at if refreshed else None,
    )
