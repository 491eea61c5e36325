"""
completion.py
- Purpose: Completion arithmetic for self-assessments and collaborator feedback.
  A competency counts as complete when it has a rating and non-blank notes.
"""

from collections.abc import Iterable, Mapping

from idp.reference.types import Competency, CompetencyGroup
from idp.schemas.response import GroupProgress, Progress, ResponseData


def completed_count(responses: Mapping[int, ResponseData], competencies: Iterable[Competency]) -> int:
    count = 0
    for c in competencies:
        r = responses.get(c.competency_id)
        if r is not None and r.is_complete:
            count += 1
    return count


def is_fully_complete(responses: Mapping[int, ResponseData], competencies: list[Competency]) -> bool:
    n = len(competencies)
    return n > 0 and completed_count(responses, competencies) == n


def feedback_as_responses(feedback: Mapping[int, object]) -> dict[int, ResponseData]:
    """Map CollaboratorFeedback rows (or DTOs) onto ResponseData for the same arithmetic."""
    return {
        cid: ResponseData(
            assessment_level=getattr(f, "collaborator_assessment_level", None),
            notes=getattr(f, "collaborator_notes", None),
        )
        for cid, f in feedback.items()
    }


def progress(responses: Mapping[int, ResponseData], groups: list[CompetencyGroup]) -> Progress:
    group_rows = [
        GroupProgress(
            core_competency_id=g.core_competency_id,
            core_competency_description=g.core_competency_description,
            completed=completed_count(responses, g.competencies),
            total=len(g.competencies),
        )
        for g in groups
    ]
    total = sum(g.total for g in group_rows)
    done = sum(g.completed for g in group_rows)
    return Progress(
        completed_count=done,
        total=total,
        is_fully_complete=total > 0 and done == total,
        groups=group_rows,
    )
