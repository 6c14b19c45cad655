PLAN_SCHEMA = """{
  "projectName": "string (concise project title)",
  "materials": [
    {
      "item": "string (material or tool name)",
      "quantity": "string (e.g., '10 pieces', '2 gallons')",
      "estimatedCost": number (cost in USD)
    }
  ],
  "costAnalysis": {
    "totalMaterialsCost": number (sum of all material costs),
    "estimatedLaborCost": number (typical labor cost for this project),
    "totalProjectCost": number (materials + labor)
  },
  "executionSteps": [
    "string (detailed step-by-step instruction)"
  ],
  "disposalInfo": {
    "regulationsSummary": "string (summary of local disposal regulations)",
    "landfillOptions": [
      {
        "name": "string (facility name)",
        "address": "string (full address)"
      }
    ]
  }
}"""


def build_plan_prompt(description: str, location: str) -> str:
    return f"""You are an expert project planner and cost estimator for home improvement projects.

Analyze the user's project request and generate a comprehensive project plan. Follow a "Plan-and-Solve" approach. First, devise a plan for your research. Second, execute that plan to generate the final output covering:
1. A list of all materials and tools required with realistic quantities and costs.
2. A detailed cost analysis for materials and typical labor rates in {location}.
3. A logical, step-by-step execution guide with clear instructions.
4. Specific regulations for construction debris disposal in {location}, including actual landfill options with addresses.

User's Project Request: "{description}"
Location for Analysis: {location}

IMPORTANT: Respond ONLY with a single, valid JSON object that adheres to the following schema. Do not include markdown, explanations, or any other text before or after the JSON. All costs are non-negative numbers.

Schema:
{PLAN_SCHEMA}

Generate the JSON response now:
"""
