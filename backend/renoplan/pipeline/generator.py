"""Plan generation pipeline.

prompt -> AI call -> fence stripping / JSON parse -> validation, wrapped in
the record lifecycle ``pending -> generating -> completed | failed``. Every
failure leaves the record ``failed`` with a tagged placeholder plan before
the error propagates to the caller. There are no automatic retries.
"""

import structlog
from openai import AsyncOpenAI
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from renoplan.config import settings
from renoplan.errors import InvalidStateError, PersistenceError, PlanGenerationError
from renoplan.models.project_plan import PlanStatus, ProjectPlanRecord
from renoplan.pipeline.ai_client import generate_text
from renoplan.pipeline.extractor import extract_json
from renoplan.pipeline.prompts.plan import build_plan_prompt
from renoplan.pipeline.validator import validate_plan
from renoplan.schemas.plan import ProjectPlan, placeholder_plan
from renoplan.services import project_service

logger = structlog.get_logger()

SAVE_FAILED_TAG = "Save Failed"


async def generate_plan(client: AsyncOpenAI, description: str) -> ProjectPlan:
    prompt = build_plan_prompt(description, settings.plan_location)
    text = await generate_text(client, prompt)
    data = extract_json(text)
    return validate_plan(data)


async def _mark_failed(db: AsyncSession, record: ProjectPlanRecord, tag: str, log) -> None:
    """Best effort; the caller re-raises its own error either way."""
    try:
        await db.rollback()
        await project_service.update_project_with_plan(db, record, placeholder_plan(tag), PlanStatus.FAILED)
    except SQLAlchemyError as exc:
        log.error("plan_mark_failed_failed", reason=tag, error=str(exc))


async def run_generation(db: AsyncSession, client: AsyncOpenAI, record: ProjectPlanRecord) -> ProjectPlanRecord:
    if record.status != PlanStatus.PENDING.value:
        raise InvalidStateError()
    claimed = await project_service.claim_for_generation(
        db, record, placeholder_plan(project_service.PENDING_PROJECT_NAME)
    )
    if not claimed:
        raise InvalidStateError()

    log = logger.bind(project_id=str(record.id), user_id=record.user_id)
    log.info("plan_generation_started")

    try:
        plan = await generate_plan(client, record.project_description)
    except PlanGenerationError as exc:
        log.warning(
            "plan_generation_failed",
            reason=exc.placeholder_tag,
            error=exc.message,
            violations=getattr(exc, "violations", None),
        )
        await _mark_failed(db, record, exc.placeholder_tag, log)
        raise
    except Exception:
        log.exception("plan_generation_crashed")
        await _mark_failed(db, record, PlanGenerationError.placeholder_tag, log)
        raise

    try:
        record = await project_service.update_project_with_plan(db, record, plan, PlanStatus.COMPLETED)
    except SQLAlchemyError as exc:
        log.error("plan_save_failed", error=str(exc))
        await _mark_failed(db, record, SAVE_FAILED_TAG, log)
        raise PersistenceError() from exc

    log.info("plan_generation_completed", materials=len(plan.materials), steps=len(plan.execution_steps))
    return record
