"""
Sales pitch generation.

Optional stage: one short pitch line per scene, used as caption text. Never
fails the render; any problem yields a deterministic pitch built from the
brief.
"""
import time
from typing import Optional

from shared.config import settings
from shared.logging import get_logger
from shared.llm import complete_json
from shared.models.brief import SalesPitch, StructuredBrief
from .prompts import SALES_PITCH_SYSTEM_PROMPT, build_sales_pitch_prompt

logger = get_logger("sales_pitch")

PITCH_TEMPERATURE = 0.7
SEGMENT_MAX_CHARS = 60


def make_fallback_pitch(brief: StructuredBrief, scene_count: int) -> SalesPitch:
    """Build pitch segments from the brief alone."""
    segments = []
    if scene_count >= 1:
        segments.append(f"{brief.title} opportunity at {brief.location or 'a great company'}")
    if scene_count >= 2:
        responsibility = brief.top_responsibilities[0] if brief.top_responsibilities else "Make an impact"
        segments.append(responsibility[:SEGMENT_MAX_CHARS])
    if scene_count >= 3:
        benefit = brief.benefits[0] if brief.benefits else "Join our team"
        segments.append(benefit[:SEGMENT_MAX_CHARS])

    extras = brief.top_responsibilities[1:] + brief.benefits[1:] + [brief.impact]
    while len(segments) < scene_count:
        segments.append(extras[(len(segments) - 3) % len(extras)][:SEGMENT_MAX_CHARS])

    return SalesPitch(
        segments=segments,
        full_pitch=f"{brief.title} role focused on {brief.impact}"
    )


async def generate_sales_pitch(
    brief: StructuredBrief,
    scene_count: int,
    job_id: Optional[str] = None
) -> SalesPitch:
    """
    Generate one pitch segment per scene.

    Returns:
        SalesPitch with exactly `scene_count` segments (model or fallback)
    """
    start_time = time.time()
    logger.info("Generating sales pitch", extra={"job_id": job_id, "scene_count": scene_count})

    try:
        payload, _usage = await complete_json(
            SALES_PITCH_SYSTEM_PROMPT,
            build_sales_pitch_prompt(brief, scene_count),
            model=settings.pitch_llm_model,
            temperature=PITCH_TEMPERATURE,
            job_id=job_id
        )
        segments = payload.get("segments")
        if not isinstance(segments, list) or len(segments) != scene_count:
            got = len(segments) if isinstance(segments, list) else 0
            raise ValueError(f"expected {scene_count} segments, got {got}")

        pitch = SalesPitch(
            segments=[str(segment) for segment in segments],
            full_pitch=str(payload.get("full_pitch") or "")
        )
    except Exception as e:
        logger.warning(
            f"Failed to generate sales pitch, using fallback: {e}",
            extra={"job_id": job_id, "error": str(e), "error_type": type(e).__name__}
        )
        return make_fallback_pitch(brief, scene_count)

    logger.info(
        "Sales pitch generated successfully",
        extra={
            "job_id": job_id,
            "segment_count": len(pitch.segments),
            "duration_ms": int((time.time() - start_time) * 1000)
        }
    )
    return pitch
