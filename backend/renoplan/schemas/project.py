import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from renoplan.schemas.plan import ProjectPlan

MIN_DESCRIPTION_LENGTH = 10
MAX_DESCRIPTION_LENGTH = 2000


def validate_description(raw: str) -> str:
    """Return the trimmed description, or raise ValueError naming the violated bound."""
    if not isinstance(raw, str):
        raise ValueError("Invalid project description: must be a string")
    description = raw.strip()
    if len(description) < MIN_DESCRIPTION_LENGTH:
        raise ValueError(
            f"Description too short: please provide at least {MIN_DESCRIPTION_LENGTH} characters"
        )
    if len(description) > MAX_DESCRIPTION_LENGTH:
        raise ValueError(
            f"Description too long: please keep it to at most {MAX_DESCRIPTION_LENGTH} characters"
        )
    return description


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ProjectCreate(_CamelModel):
    project_description: str

    @field_validator("project_description")
    @classmethod
    def _check_description(cls, value: str) -> str:
        return validate_description(value)


class ProjectCreatedResponse(_CamelModel):
    id: uuid.UUID
    status: str
    created_at: datetime


class ProjectPlanRecordResponse(_CamelModel):
    id: uuid.UUID
    user_id: str
    project_name: str
    project_description: str
    plan_data: ProjectPlan | None
    status: str
    created_at: datetime
    updated_at: datetime


class DeleteResponse(BaseModel):
    success: bool
