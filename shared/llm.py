"""
OpenAI chat completion helper for JSON-producing prompts.

Errors are classified but never retried: the caller decides whether a failure
is fatal (brief, script) or triggers a local fallback (shot plan, pitch).
"""

import json
from typing import Any, Dict, Optional, Tuple

from openai import AsyncOpenAI
from openai import APIConnectionError, APIError, APITimeoutError, RateLimitError

from shared.config import settings
from shared.errors import ConfigError, TransientExternalError, ValidationError
from shared.logging import get_logger

logger = get_logger("llm")

_openai_client: Optional[AsyncOpenAI] = None


def get_openai_client() -> AsyncOpenAI:
    """Get or create OpenAI async client."""
    global _openai_client
    if _openai_client is None:
        if not settings.openai_api_key:
            raise ConfigError("OPENAI_API_KEY is not configured")
        _openai_client = AsyncOpenAI(api_key=settings.openai_api_key)
    return _openai_client


async def complete_json(
    system_prompt: str,
    user_prompt: str,
    model: str,
    temperature: float,
    job_id: Optional[str] = None,
) -> Tuple[Dict[str, Any], Dict[str, int]]:
    """
    Run a chat completion in JSON mode and decode the reply.

    Returns:
        (decoded object, token usage)

    Raises:
        TransientExternalError: Network, timeout, rate limit or API failure
        ValidationError: Empty content or content that is not a JSON object
    """
    client = get_openai_client()

    try:
        response = await client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
            response_format={"type": "json_object"},
        )
    except RateLimitError as e:
        raise TransientExternalError(f"Rate limit error: {str(e)}", job_id=job_id) from e
    except APITimeoutError as e:
        raise TransientExternalError(f"API timeout: {str(e)}", job_id=job_id) from e
    except APIConnectionError as e:
        raise TransientExternalError(f"API connection error: {str(e)}", job_id=job_id) from e
    except APIError as e:
        raise TransientExternalError(f"OpenAI API error: {str(e)}", job_id=job_id) from e

    content = response.choices[0].message.content if response.choices else None
    if not content:
        raise ValidationError("No content in LLM response", job_id=job_id)

    try:
        payload = json.loads(content)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON from LLM: {str(e)}", job_id=job_id) from e

    if not isinstance(payload, dict):
        raise ValidationError("LLM response is not a JSON object", job_id=job_id)

    usage = {
        "input_tokens": getattr(response.usage, "prompt_tokens", 0) if response.usage else 0,
        "output_tokens": getattr(response.usage, "completion_tokens", 0) if response.usage else 0,
    }
    logger.info(
        f"LLM completion finished ({model})",
        extra={"job_id": job_id, "model": model, **usage}
    )
    return payload, usage
