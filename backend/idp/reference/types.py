"""
reference/types.py
- Purpose: Typed rows of the static reference dataset.
"""

from pydantic import BaseModel, ConfigDict


class Role(BaseModel):
    model_config = ConfigDict(frozen=True)

    role_id: int
    role_description: str


class CoreCompetency(BaseModel):
    model_config = ConfigDict(frozen=True)

    core_competency_id: int
    core_competency_description: str


class Competency(BaseModel):
    model_config = ConfigDict(frozen=True)

    competency_id: int
    competency_description: str
    role_id: int
    role_description: str = ""
    core_competency_id: int
    core_competency_description: str = ""


class AssessmentLevel(BaseModel):
    model_config = ConfigDict(frozen=True)

    assessment_level: int
    assessment: str
    assessment_description: str = ""

    @property
    def label(self) -> str:
        return f"{self.assessment_level} - {self.assessment}"


class CompetencyGroup(BaseModel):
    """Competencies of one role under a single core competency, in dataset order."""

    core_competency_id: int
    core_competency_description: str
    competencies: list[Competency]
