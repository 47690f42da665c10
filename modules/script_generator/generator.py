"""
Script generation.

Produces the hook, one beat and one on-screen line per scene, and the call
to action. A structural mismatch with the requested scene count is fatal.
"""
import time
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from shared.config import settings
from shared.errors import ValidationError
from shared.llm import complete_json
from shared.logging import get_logger
from shared.models.brief import StructuredBrief, VideoScript
from .prompts import SCRIPT_SYSTEM_PROMPT, build_script_prompt

logger = get_logger("script_generator")

SCRIPT_TEMPERATURE = 0.8


async def generate_script(
    brief: StructuredBrief,
    tone: str,
    duration_s: float,
    scene_count: int,
    job_id: Optional[str] = None
) -> VideoScript:
    """
    Generate the video script for a brief.

    Args:
        brief: Parsed brief
        tone: Brand tone
        duration_s: Target duration of the scene content
        scene_count: Required number of beats
        job_id: Render id for logging

    Returns:
        VideoScript with exactly `scene_count` beats

    Raises:
        ValidationError: If the hook is missing or the beat count is wrong
        TransientExternalError: If the model call fails
    """
    start_time = time.time()
    logger.info(
        "Generating video script",
        extra={"job_id": job_id, "tone": tone, "duration_s": duration_s, "scene_count": scene_count}
    )

    payload, _usage = await complete_json(
        SCRIPT_SYSTEM_PROMPT,
        build_script_prompt(brief, tone, duration_s, scene_count),
        model=settings.script_llm_model,
        temperature=SCRIPT_TEMPERATURE,
        job_id=job_id
    )

    if not payload.get("hook"):
        raise ValidationError("Invalid script structure: missing hook", job_id=job_id)

    beats = payload.get("beats")
    if not isinstance(beats, list) or len(beats) != scene_count:
        got = len(beats) if isinstance(beats, list) else 0
        raise ValidationError(
            f"Invalid script structure: expected {scene_count} beats, got {got}",
            job_id=job_id
        )

    if not payload.get("cta_url"):
        payload["cta_url"] = brief.cta_url
    if not payload.get("cta"):
        payload.pop("cta", None)

    try:
        script = VideoScript.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid script structure: {e}", job_id=job_id) from e

    logger.info(
        "Script generated successfully",
        extra={"job_id": job_id, "beat_count": len(script.beats), "duration_ms": int((time.time() - start_time) * 1000)}
    )
    return script
