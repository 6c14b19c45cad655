from renoplan.pipeline.prompts.plan import PLAN_SCHEMA, build_plan_prompt


def test_prompt_is_deterministic() -> None:
    args = ("Replace the bathroom vanity", "Chesterfield County, Virginia")
    assert build_plan_prompt(*args) == build_plan_prompt(*args)


def test_prompt_embeds_description_location_and_schema() -> None:
    prompt = build_plan_prompt("Build a 12x16 deck", "Henrico County, Virginia")
    assert '"Build a 12x16 deck"' in prompt
    assert "Location for Analysis: Henrico County, Virginia" in prompt
    assert PLAN_SCHEMA in prompt
    assert "Respond ONLY with a single, valid JSON object" in prompt


def test_schema_names_every_plan_field() -> None:
    for key in (
        "projectName", "materials", "estimatedCost", "costAnalysis", "totalMaterialsCost",
        "estimatedLaborCost", "totalProjectCost", "executionSteps", "disposalInfo",
        "regulationsSummary", "landfillOptions", "address",
    ):
        assert f'"{key}"' in PLAN_SCHEMA
