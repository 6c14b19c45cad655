import pytest

from renoplan.errors import PlanIncompleteError, PlanValidationError
from renoplan.pipeline.validator import validate_plan


def test_valid_plan_is_returned_typed(sample_plan: dict) -> None:
    plan = validate_plan(sample_plan)
    assert plan.project_name == "Kitchen Cabinet Installation"
    assert plan.materials[1].estimated_cost == 15.5
    assert plan.cost_analysis.estimated_labor_cost == 800
    assert plan.model_dump(by_alias=True)["costAnalysis"]["totalProjectCost"] == 2015.5


@pytest.mark.parametrize("field", ["costAnalysis", "materials", "executionSteps"])
def test_missing_core_section_fails(sample_plan: dict, field: str) -> None:
    del sample_plan[field]
    with pytest.raises(PlanIncompleteError) as exc_info:
        validate_plan(sample_plan)
    assert any(v.startswith(field) for v in exc_info.value.violations)
    assert exc_info.value.message == "AI response is missing required fields"


@pytest.mark.parametrize("field", ["materials", "executionSteps"])
def test_empty_lists_fail_even_though_shape_is_valid(sample_plan: dict, field: str) -> None:
    sample_plan[field] = []
    with pytest.raises(PlanIncompleteError) as exc_info:
        validate_plan(sample_plan)
    assert exc_info.value.violations == [f"{field}: must contain at least one entry"]


def test_wrong_types_are_listed_by_path(sample_plan: dict) -> None:
    sample_plan["materials"][0]["estimatedCost"] = "1200"
    sample_plan["disposalInfo"]["landfillOptions"][0].pop("address")
    with pytest.raises(PlanValidationError) as exc_info:
        validate_plan(sample_plan)
    error = exc_info.value
    assert not isinstance(error, PlanIncompleteError)
    paths = [v.split(":", 1)[0] for v in error.violations]
    assert "materials.0.estimatedCost" in paths
    assert "disposalInfo.landfillOptions.0.address" in paths


def test_boolean_is_not_a_cost(sample_plan: dict) -> None:
    sample_plan["costAnalysis"]["estimatedLaborCost"] = True
    with pytest.raises(PlanValidationError):
        validate_plan(sample_plan)


def test_negative_cost_fails(sample_plan: dict) -> None:
    sample_plan["costAnalysis"]["totalProjectCost"] = -1
    with pytest.raises(PlanValidationError) as exc_info:
        validate_plan(sample_plan)
    assert exc_info.value.violations[0].startswith("costAnalysis.totalProjectCost")


def test_total_mismatch_is_not_enforced(sample_plan: dict) -> None:
    sample_plan["costAnalysis"]["totalProjectCost"] = 5
    assert validate_plan(sample_plan).cost_analysis.total_project_cost == 5


def test_non_object_payload_fails() -> None:
    with pytest.raises(PlanValidationError) as exc_info:
        validate_plan([1, 2, 3])
    assert exc_info.value.violations[0].startswith("(root)")
