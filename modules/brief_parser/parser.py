"""
Brief extraction.

Turns a free-text job description into a StructuredBrief. Any malformed
response is fatal for the render.
"""
import time
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from shared.config import settings
from shared.errors import ValidationError
from shared.llm import complete_json
from shared.logging import get_logger
from shared.models.brief import StructuredBrief
from .prompts import PARSER_SYSTEM_PROMPT, build_parser_prompt

logger = get_logger("brief_parser")

PARSER_TEMPERATURE = 0.3


async def parse_job_description(
    job_description: str,
    locale: str = "en-US",
    job_id: Optional[str] = None
) -> StructuredBrief:
    """
    Extract recruiting fields from a job description.

    Args:
        job_description: Raw posting text
        locale: Locale hint for the model
        job_id: Render id for logging

    Returns:
        StructuredBrief

    Raises:
        ValidationError: If title or impact is missing or the payload is malformed
        TransientExternalError: If the model call fails
    """
    start_time = time.time()
    logger.info("Parsing job description", extra={"job_id": job_id, "locale": locale})

    payload, _usage = await complete_json(
        PARSER_SYSTEM_PROMPT,
        build_parser_prompt(job_description, locale),
        model=settings.parser_llm_model,
        temperature=PARSER_TEMPERATURE,
        job_id=job_id
    )

    if not payload.get("title") or not payload.get("impact"):
        raise ValidationError("Missing required fields in parsed brief (title, impact)", job_id=job_id)

    try:
        brief = StructuredBrief.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid brief structure: {e}", job_id=job_id) from e

    logger.info(
        "Job description parsed successfully",
        extra={"job_id": job_id, "title": brief.title, "duration_ms": int((time.time() - start_time) * 1000)}
    )
    return brief
