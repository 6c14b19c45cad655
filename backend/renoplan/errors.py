"""Application error hierarchy.

Every error carries the HTTP status it maps to; the handlers in
``renoplan.exception_handlers`` render them as ``{"error": ..., "details": ...}``.
"""

from typing import Any


class AppError(Exception):
    status_code: int = 500
    default_message: str = "Something went wrong"

    def __init__(self, message: str | None = None, details: Any = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class NotFoundError(AppError):
    status_code = 404
    default_message = "Project not found"


class InvalidStateError(AppError):
    status_code = 400
    default_message = "Project has already been generated"


class PersistenceError(AppError):
    status_code = 500
    default_message = "Failed to save project"


class RateLimitExceeded(AppError):
    status_code = 429

    def __init__(self, error: str, message: str, retry_after: int) -> None:
        super().__init__(message)
        self.error = error
        self.retry_after = retry_after


# ── Generation pipeline ──────────────────────────────────────────────────────


class PlanGenerationError(AppError):
    """Failure anywhere between the AI call and plan validation."""

    status_code = 500
    default_message = "Failed to generate project plan. Please try again."
    # projectName written into the placeholder plan of the failed record
    placeholder_tag = "Generation Failed"


class AIGenerationError(PlanGenerationError):
    pass


class NoCandidatesError(AIGenerationError):
    default_message = "No response candidates from AI"


class EmptyResponseError(AIGenerationError):
    default_message = "Empty response from AI"


class UpstreamUnavailableError(AIGenerationError):
    status_code = 503
    default_message = "The AI service is overloaded. Please try again later."
    placeholder_tag = "Service Unavailable"


class PlanParseError(PlanGenerationError):
    default_message = "Failed to parse AI response. Please try again."
    placeholder_tag = "Parse Failed"


class PlanValidationError(PlanGenerationError):
    default_message = "AI response validation failed"
    placeholder_tag = "Validation Failed"

    def __init__(self, violations: list[str], message: str | None = None) -> None:
        super().__init__(message)
        self.violations = violations


class PlanIncompleteError(PlanValidationError):
    default_message = "AI response is missing required fields"
