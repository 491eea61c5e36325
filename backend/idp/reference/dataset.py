"""
reference/dataset.py
- Purpose: Load the spreadsheet-derived JSON dataset once and answer lookups.
- Design: Files are validated into pydantic models at the boundary; the
  loaded dataset is immutable and cached for the process lifetime.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from idp.core import AppError, ErrorCode, ErrorReason
from idp.core.config import settings
from idp.reference.types import AssessmentLevel, Competency, CompetencyGroup, CoreCompetency, Role

logger = logging.getLogger("idp.reference")

DATA_EXT = ".json"
ROLES_FILE = "roles.json"
CORE_COMPETENCIES_FILE = "core_competencies.json"
ASSESSMENTS_FILE = "assessments.json"
COMPETENCIES_BY_ROLE_FILE = "competencies_by_role.json"

UNKNOWN_ROLE_NAME = "Unknown Role"

_roles_adapter = TypeAdapter(list[Role])
_core_adapter = TypeAdapter(list[CoreCompetency])
_assessments_adapter = TypeAdapter(list[AssessmentLevel])
# JSON object keys are strings; coerce them to integer role ids
_by_role_adapter = TypeAdapter(dict[int, list[Competency]])


def _dataset_error(message: str, **details: Any) -> AppError:
    return AppError(
        code=ErrorCode.DATASET_INVALID,
        reason=ErrorReason.DATASET_INVALID.value,
        message=message,
        status_code=500,
        details=details or None,
    )


def _validate_filename(name: str) -> str:
    if "/" in name or "\\" in name or ".." in name:
        raise _dataset_error("Invalid dataset name", name=name)
    if not name.endswith(DATA_EXT):
        raise _dataset_error("Dataset must be a .json file", name=name)
    return name


def _read_json(data_dir: Path, name: str) -> Any:
    path = data_dir / _validate_filename(name)
    if not path.exists():
        raise _dataset_error(f"Dataset not found: {name}", path=str(path))
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise _dataset_error(f"Dataset parse error: {name}") from e


class ReferenceData:
    """Roles, core competencies, the assessment scale and competencies per role."""

    def __init__(
        self,
        *,
        roles: list[Role],
        core_competencies: list[CoreCompetency],
        assessments: list[AssessmentLevel],
        competencies_by_role: dict[int, list[Competency]],
    ):
        self._roles = tuple(roles)
        self._core_competencies = tuple(core_competencies)
        self._assessments = tuple(sorted(assessments, key=lambda a: a.assessment_level))
        self._by_role = {rid: tuple(comps) for rid, comps in competencies_by_role.items()}

        self._role_idx = {r.role_id: r for r in self._roles}
        self._core_idx = {c.core_competency_id: c for c in self._core_competencies}
        self._assessment_idx = {a.assessment_level: a for a in self._assessments}

    def roles(self) -> list[Role]:
        return list(self._roles)

    def role(self, role_id: int) -> Role | None:
        return self._role_idx.get(role_id)

    def role_name(self, role_id: int) -> str:
        r = self._role_idx.get(role_id)
        return r.role_description if r else UNKNOWN_ROLE_NAME

    def core_competencies(self) -> list[CoreCompetency]:
        return list(self._core_competencies)

    def core_competency(self, core_competency_id: int) -> CoreCompetency | None:
        return self._core_idx.get(core_competency_id)

    def assessments(self) -> list[AssessmentLevel]:
        return list(self._assessments)

    def assessment(self, level: int | None) -> AssessmentLevel | None:
        if level is None:
            return None
        return self._assessment_idx.get(level)

    def competencies_for_role(self, role_id: int) -> list[Competency]:
        return list(self._by_role.get(role_id, ()))

    def competency_ids_for_role(self, role_id: int) -> set[int]:
        return {c.competency_id for c in self._by_role.get(role_id, ())}

    def group_by_core_competency(self, role_id: int) -> list[CompetencyGroup]:
        groups: dict[int, CompetencyGroup] = {}
        for c in self._by_role.get(role_id, ()):
            group = groups.get(c.core_competency_id)
            if group is None:
                core = self.core_competency(c.core_competency_id)
                description = c.core_competency_description or (core.core_competency_description if core else "")
                group = CompetencyGroup(
                    core_competency_id=c.core_competency_id,
                    core_competency_description=description,
                    competencies=[],
                )
                groups[c.core_competency_id] = group
            group.competencies.append(c)
        return list(groups.values())


@lru_cache(maxsize=8)
def load_reference_data(data_dir: str) -> ReferenceData:
    """Load and validate the four dataset files from `data_dir`."""
    root = Path(data_dir).resolve()
    try:
        data = ReferenceData(
            roles=_roles_adapter.validate_python(_read_json(root, ROLES_FILE)),
            core_competencies=_core_adapter.validate_python(_read_json(root, CORE_COMPETENCIES_FILE)),
            assessments=_assessments_adapter.validate_python(_read_json(root, ASSESSMENTS_FILE)),
            competencies_by_role=_by_role_adapter.validate_python(_read_json(root, COMPETENCIES_BY_ROLE_FILE)),
        )
    except ValidationError as e:
        raise _dataset_error("Reference dataset failed validation", error_count=e.error_count()) from e

    logger.info(
        "reference.loaded",
        extra={"data_dir": str(root), "roles": len(data.roles()), "assessments": len(data.assessments())},
    )
    return data


def get_reference_data() -> ReferenceData:
    return load_reference_data(settings.REFERENCE_DATA_DIR)
