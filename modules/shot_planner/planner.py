"""
Shot planning.

Asks the model for a shot plan and falls back to a deterministic tone-keyed
plan when the call fails or the scene count does not match. Planning never
raises to the caller, and the plan always has the requested scene count.
"""
import time
from typing import Any, Dict, List, Optional

from shared.config import settings
from shared.errors import DegradableError
from shared.llm import complete_json
from shared.logging import get_logger
from shared.models.brief import StructuredBrief, VideoScript
from shared.models.scene import Scene, ShotPlan
from .prompts import SHOT_PLAN_SYSTEM_PROMPT, build_shot_plan_prompt
from .templates import visual_metaphor, music_mood

logger = get_logger("shot_planner")

SHOT_PLAN_TEMPERATURE = 0.85
OVERLAY_MAX_CHARS = 60


def default_overlay(script: VideoScript, index: int) -> str:
    """On-screen text for a scene, else the (truncated) beat."""
    if index < len(script.on_screen_text) and script.on_screen_text[index]:
        return script.on_screen_text[index]
    if index < len(script.beats):
        return script.beats[index][:OVERLAY_MAX_CHARS]
    return script.hook[:OVERLAY_MAX_CHARS]


def make_shot_plan_fallback(
    script: VideoScript,
    duration_s: float,
    tone: str,
    scene_count: int
) -> ShotPlan:
    """
    Deterministic shot plan.

    Each scene gets a tone-keyed visual metaphor and an equal share of the
    duration.
    """
    logger.info("Creating fallback shot plan", extra={"duration_s": duration_s, "tone": tone, "scene_count": scene_count})

    scene_length = duration_s / scene_count
    scenes = [
        Scene(
            len_s=scene_length,
            visual_metaphor=visual_metaphor(index, tone),
            overlay=default_overlay(script, index)
        )
        for index in range(scene_count)
    ]
    return ShotPlan(
        aspect="9:16",
        music_mood=music_mood(tone),
        subtitle_style="bold_lower_thirds",
        scenes=scenes
    )


def _plan_from_payload(
    payload: Dict[str, Any],
    script: VideoScript,
    duration_s: float,
    tone: str,
    scene_count: int
) -> ShotPlan:
    raw_scenes = payload.get("scenes")
    if not isinstance(raw_scenes, list) or len(raw_scenes) != scene_count:
        got = len(raw_scenes) if isinstance(raw_scenes, list) else 0
        raise DegradableError(f"Invalid shot plan structure: expected {scene_count} scenes, got {got}")

    scenes: List[Scene] = []
    for index, raw in enumerate(raw_scenes):
        if not isinstance(raw, dict) or not raw.get("visual_metaphor"):
            raise DegradableError(f"Scene {index} has no visual_metaphor")
        scenes.append(
            Scene(
                len_s=raw.get("len_s") or duration_s / scene_count,
                visual_metaphor=str(raw["visual_metaphor"]),
                overlay=str(raw.get("overlay") or default_overlay(script, index))
            )
        )

    return ShotPlan(
        aspect=payload.get("aspect") or "9:16",
        music_mood=payload.get("music_mood") or music_mood(tone),
        subtitle_style=payload.get("subtitle_style") or "bold_lower_thirds",
        scenes=scenes
    )


async def generate_shot_plan(
    script: VideoScript,
    brief: StructuredBrief,
    duration_s: float,
    tone: str,
    scene_count: int,
    job_id: Optional[str] = None
) -> ShotPlan:
    """
    Plan one scene per beat.

    Returns:
        ShotPlan with exactly `scene_count` scenes
    """
    if not settings.use_llm_shot_plan:
        return make_shot_plan_fallback(script, duration_s, tone, scene_count)

    start_time = time.time()
    logger.info("Generating shot plan with LLM", extra={"job_id": job_id, "tone": tone, "scene_count": scene_count})

    try:
        payload, _usage = await complete_json(
            SHOT_PLAN_SYSTEM_PROMPT,
            build_shot_plan_prompt(script, brief, duration_s, tone, scene_count),
            model=settings.shot_plan_llm_model,
            temperature=SHOT_PLAN_TEMPERATURE,
            job_id=job_id
        )
        plan = _plan_from_payload(payload, script, duration_s, tone, scene_count)
    except Exception as e:
        logger.warning(
            f"Failed to generate shot plan, falling back to template plan: {e}",
            extra={"job_id": job_id, "error": str(e), "error_type": type(e).__name__}
        )
        return make_shot_plan_fallback(script, duration_s, tone, scene_count)

    logger.info(
        "Shot plan generated successfully",
        extra={"job_id": job_id, "scene_count": len(plan.scenes), "duration_ms": int((time.time() - start_time) * 1000)}
    )
    return plan
