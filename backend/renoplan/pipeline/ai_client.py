import openai
import structlog
from openai import AsyncOpenAI

from renoplan.config import settings
from renoplan.errors import (
    AIGenerationError,
    EmptyResponseError,
    NoCandidatesError,
    UpstreamUnavailableError,
)

logger = structlog.get_logger()

# Upstream markers for "try again later"; message matching is the fallback
# when the client gives no usable status code.
_UNAVAILABLE_STATUS_CODES = {503, 529}
_UNAVAILABLE_MARKERS = ("overloaded", "unavailable")


def _is_upstream_unavailable(exc: openai.OpenAIError) -> bool:
    if isinstance(exc, openai.APIStatusError) and exc.status_code in _UNAVAILABLE_STATUS_CODES:
        return True
    text = str(exc).lower()
    return any(marker in text for marker in _UNAVAILABLE_MARKERS)


async def generate_text(client: AsyncOpenAI, prompt: str, model: str | None = None) -> str:
    """Send one prompt, return the raw completion text. No retries."""
    model = model or settings.openai_model
    try:
        response = await client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.2,
            **settings.max_tokens_param(settings.plan_max_tokens),
        )
    except openai.OpenAIError as exc:
        if _is_upstream_unavailable(exc):
            logger.warning("ai_upstream_unavailable", model=model, error=str(exc))
            raise UpstreamUnavailableError() from exc
        logger.error("ai_request_failed", model=model, error=str(exc), error_type=type(exc).__name__)
        raise AIGenerationError(str(exc)) from exc

    if not response.choices:
        raise NoCandidatesError()

    content = response.choices[0].message.content
    if not content or not content.strip():
        raise EmptyResponseError()

    usage = getattr(response, "usage", None)
    logger.info(
        "ai_response_received",
        model=model,
        chars=len(content),
        prompt_tokens=getattr(usage, "prompt_tokens", None),
        completion_tokens=getattr(usage, "completion_tokens", None),
    )
    return content
