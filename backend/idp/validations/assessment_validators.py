"""
assessment_validators.py
- Purpose: Check role / competency / level ids against the reference dataset.
"""

from idp.core import AppError, ErrorCode, ErrorReason
from idp.reference import ReferenceData


def validate_role(reference: ReferenceData, role_id: int) -> None:
    if reference.role(role_id) is None:
        raise AppError(
            code=ErrorCode.UNKNOWN_ROLE,
            reason=ErrorReason.RESOURCE_NOT_FOUND.value,
            message=f"Unknown role: {role_id}",
            status_code=404,
        )


def validate_competency(reference: ReferenceData, role_id: int, competency_id: int) -> None:
    validate_role(reference, role_id)
    if competency_id not in reference.competency_ids_for_role(role_id):
        raise AppError(
            code=ErrorCode.UNKNOWN_COMPETENCY,
            reason=ErrorReason.RESOURCE_NOT_FOUND.value,
            message=f"Competency {competency_id} does not belong to role {role_id}",
            status_code=404,
        )


def validate_assessment_level(reference: ReferenceData, level: int | None) -> None:
    if level is None:
        return
    if reference.assessment(level) is None:
        raise AppError(
            code=ErrorCode.INVALID_ASSESSMENT_LEVEL,
            reason=ErrorReason.INVALID_INPUT.value,
            message=f"Assessment level {level} is not on the scale",
            status_code=422,
        )
