"""
responses.py
- Purpose: A user's own ratings: load, autosave, migrate, export.
- Design: Keep router thin. Delegate persistence to ResponseStore.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from idp.api.deps import get_reference, get_response_store
from idp.auth.deps import CurrentUser, get_current_user
from idp.reference import ReferenceData
from idp.schemas.response import MigrationResult, ResponseData, ResponseSaveRequest, ResponseSaveResult, ResponsesOut
from idp.services.completion import progress
from idp.services.csv_export import build_csv_rows, csv_filename, to_csv
from idp.services.response_store import ResponseStore
from idp.validations.assessment_validators import validate_assessment_level, validate_competency, validate_role

router = APIRouter(prefix="/api/responses", tags=["Responses"])


@router.get("/{role_id}", response_model=ResponsesOut)
def load_responses(
    role_id: int,
    user: CurrentUser = Depends(get_current_user),
    store: ResponseStore = Depends(get_response_store),
    reference: ReferenceData = Depends(get_reference),
):
    validate_role(reference, role_id)
    responses = store.load_responses(user.id, user.email, role_id)
    return ResponsesOut(
        role_id=role_id,
        responses=responses,
        progress=progress(responses, reference.group_by_core_competency(role_id)),
    )


@router.put("/{role_id}/{competency_id}", response_model=ResponseSaveResult)
def save_response(
    role_id: int,
    competency_id: int,
    body: ResponseSaveRequest,
    user: CurrentUser = Depends(get_current_user),
    store: ResponseStore = Depends(get_response_store),
    reference: ReferenceData = Depends(get_reference),
):
    validate_competency(reference, role_id, competency_id)
    validate_assessment_level(reference, body.assessment_level)

    response = ResponseData(assessment_level=body.assessment_level, notes=body.notes)
    persisted = store.save_response(
        user.id, user.email, role_id, competency_id, response, client_seq=body.client_seq
    )
    return ResponseSaveResult(competency_id=competency_id, persisted=persisted, response=response)


@router.post("/migrate", response_model=MigrationResult)
def migrate_local_data(
    user: CurrentUser = Depends(get_current_user),
    store: ResponseStore = Depends(get_response_store),
):
    return MigrationResult(migrated=store.migrate_local_data(user.id, user.email))


@router.get("/{role_id}/export.csv")
def export_csv(
    role_id: int,
    user: CurrentUser = Depends(get_current_user),
    store: ResponseStore = Depends(get_response_store),
    reference: ReferenceData = Depends(get_reference),
):
    validate_role(reference, role_id)
    responses = store.load_responses(user.id, user.email, role_id)
    body = to_csv(build_csv_rows(reference, role_id, responses))
    return Response(
        content=body,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{csv_filename(user.email)}"'},
    )
