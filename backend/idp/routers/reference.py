"""
reference.py
- Purpose: Read-only routes over the static reference dataset.
"""

from fastapi import APIRouter, Depends

from idp.api.deps import get_reference
from idp.reference import ReferenceData
from idp.reference.types import AssessmentLevel, CompetencyGroup, CoreCompetency, Role
from idp.validations.assessment_validators import validate_role

router = APIRouter(prefix="/api/reference", tags=["Reference"])


@router.get("/roles", response_model=list[Role])
def list_roles(reference: ReferenceData = Depends(get_reference)):
    return reference.roles()


@router.get("/core-competencies", response_model=list[CoreCompetency])
def list_core_competencies(reference: ReferenceData = Depends(get_reference)):
    return reference.core_competencies()


@router.get("/assessments", response_model=list[AssessmentLevel])
def list_assessments(reference: ReferenceData = Depends(get_reference)):
    return reference.assessments()


@router.get("/roles/{role_id}/competencies", response_model=list[CompetencyGroup])
def list_role_competencies(role_id: int, reference: ReferenceData = Depends(get_reference)):
    validate_role(reference, role_id)
    return reference.group_by_core_competency(role_id)
