import uuid

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from openai import AsyncOpenAI
from sqlalchemy.ext.asyncio import AsyncSession

from renoplan.dependencies import get_ai_client, get_current_user, get_db, rate_limit
from renoplan.errors import InvalidStateError, NotFoundError
from renoplan.models.project_plan import PlanStatus
from renoplan.pipeline.generator import run_generation
from renoplan.schemas.plan import ProjectPlan
from renoplan.schemas.project import (
    DeleteResponse,
    ProjectCreate,
    ProjectCreatedResponse,
    ProjectPlanRecordResponse,
)
from renoplan.services import project_service
from renoplan.services.pdf_export import render_plan_pdf

router = APIRouter(prefix="/api/projects", tags=["projects"], dependencies=[Depends(rate_limit("general"))])


@router.post(
    "/create",
    response_model=ProjectCreatedResponse,
    status_code=201,
    dependencies=[Depends(rate_limit("create"))],
)
async def create_project(
    data: ProjectCreate,
    user_id: str = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await project_service.create_pending_project(db, user_id, data.project_description)


@router.post(
    "/{project_id}/generate",
    response_model=ProjectPlanRecordResponse,
    dependencies=[Depends(rate_limit("generate"))],
)
async def generate_project(
    project_id: uuid.UUID,
    user_id: str = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    client: AsyncOpenAI = Depends(get_ai_client),
):
    record = await project_service.get_project(db, project_id, user_id)
    if record is None:
        raise NotFoundError()
    return await run_generation(db, client, record)


@router.get("", response_model=list[ProjectPlanRecordResponse])
async def list_projects(user_id: str = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await project_service.list_projects(db, user_id)


@router.get("/{project_id}", response_model=ProjectPlanRecordResponse)
async def get_project(
    project_id: uuid.UUID,
    user_id: str = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    record = await project_service.get_project(db, project_id, user_id)
    if record is None:
        raise NotFoundError()
    return record


@router.delete("/{project_id}", response_model=DeleteResponse)
async def delete_project(
    project_id: uuid.UUID,
    user_id: str = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    deleted = await project_service.delete_project(db, project_id, user_id)
    if not deleted:
        raise NotFoundError()
    return DeleteResponse(success=True)


@router.get("/{project_id}/export")
async def export_project(
    project_id: uuid.UUID,
    user_id: str = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    record = await project_service.get_project(db, project_id, user_id)
    if record is None:
        raise NotFoundError()
    if record.status != PlanStatus.COMPLETED.value or record.plan_data is None:
        raise InvalidStateError("Project plan is not ready for export")

    plan = ProjectPlan.model_validate(record.plan_data)
    pdf = render_plan_pdf(record, plan)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="project-plan-{record.id}.pdf"'},
    )
