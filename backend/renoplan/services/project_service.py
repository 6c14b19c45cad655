import uuid

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from renoplan.models.project_plan import PlanStatus, ProjectPlanRecord
from renoplan.schemas.plan import ProjectPlan

logger = structlog.get_logger()

PENDING_PROJECT_NAME = "Generating..."


async def create_pending_project(db: AsyncSession, user_id: str, description: str) -> ProjectPlanRecord:
    record = ProjectPlanRecord(
        user_id=user_id,
        project_name=PENDING_PROJECT_NAME,
        project_description=description,
        plan_data=None,
        status=PlanStatus.PENDING.value,
    )
    db.add(record)
    await db.commit()
    await db.refresh(record)
    logger.info("project_created", project_id=str(record.id), user_id=user_id)
    return record


async def list_projects(db: AsyncSession, user_id: str) -> list[ProjectPlanRecord]:
    result = await db.execute(
        select(ProjectPlanRecord)
        .where(ProjectPlanRecord.user_id == user_id)
        .order_by(ProjectPlanRecord.created_at.desc())
    )
    return list(result.scalars().all())


async def get_project(db: AsyncSession, project_id: uuid.UUID, user_id: str) -> ProjectPlanRecord | None:
    """Fetch a record; records owned by someone else are reported as absent."""
    record = await db.get(ProjectPlanRecord, project_id)
    if record is None or record.user_id != user_id:
        return None
    return record


async def delete_project(db: AsyncSession, project_id: uuid.UUID, user_id: str) -> bool:
    record = await get_project(db, project_id, user_id)
    if record is None:
        return False
    await db.execute(delete(ProjectPlanRecord).where(ProjectPlanRecord.id == project_id))
    await db.commit()
    logger.info("project_deleted", project_id=str(project_id), user_id=user_id)
    return True


async def claim_for_generation(db: AsyncSession, record: ProjectPlanRecord, placeholder: ProjectPlan) -> bool:
    """Move a pending record to generating.

    The status check happens inside the UPDATE, so of two concurrent callers
    only one sees a matched row. Returns False when the record was not pending.
    """
    result = await db.execute(
        update(ProjectPlanRecord)
        .where(
            ProjectPlanRecord.id == record.id,
            ProjectPlanRecord.user_id == record.user_id,
            ProjectPlanRecord.status == PlanStatus.PENDING.value,
        )
        .values(
            status=PlanStatus.GENERATING.value,
            project_name=placeholder.project_name,
            plan_data=placeholder.model_dump(by_alias=True),
        )
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    await db.refresh(record)
    return result.rowcount == 1


async def update_project_with_plan(
    db: AsyncSession,
    record: ProjectPlanRecord,
    plan: ProjectPlan,
    status: PlanStatus,
) -> ProjectPlanRecord:
    record.project_name = plan.project_name
    record.plan_data = plan.model_dump(by_alias=True)
    record.status = status.value
    await db.commit()
    await db.refresh(record)
    return record
