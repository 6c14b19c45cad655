import json
from typing import Any

from renoplan.errors import PlanParseError


def strip_code_fences(text: str) -> str:
    """Remove a ```json / ``` wrapper around the payload, if present."""
    content = text.strip()
    if content.startswith("```"):
        content = content[7:] if content.startswith("```json") else content[3:]
        content = content.strip()
        if content.endswith("```"):
            content = content[:-3]
        content = content.strip()
    return content


def extract_json(text: str) -> Any:
    content = strip_code_fences(text)
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise PlanParseError() from exc
