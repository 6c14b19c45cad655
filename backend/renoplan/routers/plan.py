from fastapi import APIRouter, Depends
from openai import AsyncOpenAI
from sqlalchemy.ext.asyncio import AsyncSession

from renoplan.dependencies import get_ai_client, get_current_user, get_db, rate_limit
from renoplan.pipeline.generator import run_generation
from renoplan.schemas.project import ProjectCreate, ProjectPlanRecordResponse
from renoplan.services import project_service

router = APIRouter(prefix="/api", tags=["plan"], dependencies=[Depends(rate_limit("general"))])


@router.post(
    "/plan-project",
    response_model=ProjectPlanRecordResponse,
    dependencies=[Depends(rate_limit("plan"))],
)
async def plan_project(
    data: ProjectCreate,
    user_id: str = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    client: AsyncOpenAI = Depends(get_ai_client),
):
    """Create and generate in one request (older clients)."""
    record = await project_service.create_pending_project(db, user_id, data.project_description)
    return await run_generation(db, client, record)
