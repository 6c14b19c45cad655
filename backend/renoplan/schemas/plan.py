from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictStr
from pydantic.alias_generators import to_camel


def _require_number(value):
    # AI output must carry real JSON numbers, no "12.50" strings or booleans
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a number")
    return value


Cost = Annotated[float, BeforeValidator(_require_number), Field(ge=0)]


class _PlanModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Material(_PlanModel):
    item: StrictStr
    quantity: StrictStr
    estimated_cost: Cost


class CostAnalysis(_PlanModel):
    total_materials_cost: Cost
    estimated_labor_cost: Cost
    total_project_cost: Cost


class LandfillOption(_PlanModel):
    name: StrictStr
    address: StrictStr


class DisposalInfo(_PlanModel):
    regulations_summary: StrictStr
    landfill_options: list[LandfillOption]


class ProjectPlan(_PlanModel):
    project_name: StrictStr
    materials: list[Material]
    cost_analysis: CostAnalysis
    execution_steps: list[StrictStr]
    disposal_info: DisposalInfo


def placeholder_plan(project_name: str) -> ProjectPlan:
    """Zeroed plan stored while a record is generating or after it failed."""
    return ProjectPlan(
        project_name=project_name,
        materials=[],
        cost_analysis=CostAnalysis(
            total_materials_cost=0.0, estimated_labor_cost=0.0, total_project_cost=0.0
        ),
        execution_steps=[],
        disposal_info=DisposalInfo(regulations_summary="", landfill_options=[]),
    )
