"""
response.py (schemas)
- Purpose: DTOs for a user's own ratings.
- Design: Responses are an explicit competency_id (int) -> ResponseData mapping,
  validated where external data enters (API bodies, the local cache).
"""

from typing import Annotated

from pydantic import BaseModel, Field, TypeAdapter


class ResponseData(BaseModel):
    assessment_level: int | None = None
    notes: str | None = None

    @property
    def is_complete(self) -> bool:
        return self.assessment_level is not None and bool((self.notes or "").strip())


ResponseMap = dict[int, ResponseData]
response_map_adapter = TypeAdapter(ResponseMap)


class ResponseSaveRequest(BaseModel):
    assessment_level: Annotated[int | None, Field(ge=1)] = None
    notes: str | None = Field(default=None, max_length=10_000)
    client_seq: int | None = Field(default=None, ge=0)


class ResponseSaveResult(BaseModel):
    competency_id: int
    persisted: bool
    response: ResponseData


class GroupProgress(BaseModel):
    core_competency_id: int
    core_competency_description: str
    completed: int
    total: int


class Progress(BaseModel):
    completed_count: int
    total: int
    is_fully_complete: bool
    groups: list[GroupProgress] = []


class ResponsesOut(BaseModel):
    role_id: int
    responses: ResponseMap
    progress: Progress


class MigrationResult(BaseModel):
    migrated: bool
