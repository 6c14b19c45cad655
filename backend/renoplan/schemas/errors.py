from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ErrorDetails(BaseModel):
    """User-facing description of a failure. Never persisted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    title: str
    message: str
    action: str | None = None
    retryable: bool = False
    retry_after: int | None = None
