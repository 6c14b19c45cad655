"""Plan validation: structural shape first, then semantic completeness.

A payload can satisfy the schema with empty ``materials`` or
``executionSteps``; such a plan is useless to the user and is rejected.
"""

from typing import Any

import structlog
from pydantic import ValidationError

from renoplan.errors import PlanIncompleteError, PlanValidationError
from renoplan.schemas.plan import ProjectPlan

logger = structlog.get_logger()

# Tolerance before a total that doesn't add up gets logged
_TOTAL_MISMATCH_TOLERANCE = 1.0


def _format_loc(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "(root)"


def _completeness_violations(data: Any) -> list[str]:
    if not isinstance(data, dict):
        return []
    violations = []
    for key in ("materials", "executionSteps"):
        value = data.get(key)
        if value is None:
            violations.append(f"{key}: field required")
        elif isinstance(value, list) and not value:
            violations.append(f"{key}: must contain at least one entry")
    if data.get("costAnalysis") is None:
        violations.append("costAnalysis: field required")
    return violations


def validate_plan(data: Any) -> ProjectPlan:
    missing = _completeness_violations(data)
    try:
        plan = ProjectPlan.model_validate(data)
    except ValidationError as exc:
        missing_keys = {v.split(":", 1)[0] for v in missing}
        shape = [
            f"{_format_loc(err['loc'])}: {err['msg']}"
            for err in exc.errors()
            if _format_loc(err["loc"]) not in missing_keys
        ]
        if missing:
            raise PlanIncompleteError(missing + shape) from exc
        raise PlanValidationError(shape) from exc

    if missing:
        raise PlanIncompleteError(missing)

    costs = plan.cost_analysis
    expected_total = costs.total_materials_cost + costs.estimated_labor_cost
    if abs(costs.total_project_cost - expected_total) > _TOTAL_MISMATCH_TOLERANCE:
        logger.warning(
            "plan_total_mismatch",
            total_project_cost=costs.total_project_cost,
            expected_total=expected_total,
        )
    return plan
