import re
import uuid

from renoplan.models.project_plan import PlanStatus, ProjectPlanRecord
from renoplan.schemas.plan import ProjectPlan
from renoplan.services.pdf_export import render_plan_pdf


def _record(plan: dict) -> ProjectPlanRecord:
    return ProjectPlanRecord(
        id=uuid.uuid4(),
        user_id="user_test_123",
        project_name=plan["projectName"],
        project_description="Install new kitchen cabinets",
        plan_data=plan,
        status=PlanStatus.COMPLETED.value,
    )


def _page_count(pdf: bytes) -> int:
    return max(int(n) for n in re.findall(rb"/Count (\d+)", pdf))


def test_renders_pdf_document(sample_plan: dict) -> None:
    pdf = render_plan_pdf(_record(sample_plan), ProjectPlan.model_validate(sample_plan))
    assert pdf.startswith(b"%PDF")
    assert pdf.rstrip().endswith(b"%%EOF")
    assert _page_count(pdf) == 1


def test_long_plans_paginate(sample_plan: dict) -> None:
    sample_plan["projectName"] = "Whole house <renovation> & repaint"
    sample_plan["executionSteps"] = [
        f"Step {i}: " + "measure twice, cut once. " * 12 for i in range(80)
    ]
    pdf = render_plan_pdf(_record(sample_plan), ProjectPlan.model_validate(sample_plan))
    assert _page_count(pdf) > 1
