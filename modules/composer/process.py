"""
Main entry point for composer module.

Normalizes and concatenates scene clips, burns captions, and appends the
end card. Every intermediate artifact is kept on disk under the render id.
"""
import time
from pathlib import Path
from typing import List, Optional

from shared.errors import CompositionError
from shared.logging import get_logger
from shared.models.brief import VideoScript
from shared.models.job import BrandConfig
from shared.models.media import CompositionResult
from shared.models.scene import ShotPlan

from .utils import check_ffmpeg_available, get_video_duration
from .normalizer import normalize_clip, concatenate_scenes
from .overlays import add_overlays
from .end_card import append_end_card

logger = get_logger("composer.process")


async def compose(
    render_id: str,
    scene_files: List[str],
    shot_plan: ShotPlan,
    script: VideoScript,
    brand: BrandConfig,
    pitch_segments: Optional[List[str]] = None
) -> CompositionResult:
    """
    Build the final video from acquired scene clips.

    Args:
        render_id: Render id (artifact names are derived from it)
        scene_files: Scene clip paths, aligned with shot_plan.scenes
        shot_plan: Planned scenes
        script: Script (caption fallback text and CTA URL)
        brand: Brand colors
        pitch_segments: Optional per-scene caption overrides

    Returns:
        CompositionResult with every artifact path

    Raises:
        CompositionError: If FFmpeg is unavailable or any step fails
    """
    if not check_ffmpeg_available():
        raise CompositionError("FFmpeg not found in PATH", job_id=render_id)
    if not scene_files:
        raise CompositionError("No scene clips to compose", job_id=render_id)

    start_time = time.time()

    normalized = []
    for index, scene_file in enumerate(scene_files):
        normalized.append(await normalize_clip(Path(scene_file), index, render_id))

    # Captions follow the measured clip lengths, not the planned ones
    durations = [await get_video_duration(path) for path in normalized]

    concat = await concatenate_scenes(normalized, render_id)
    overlaid = await add_overlays(
        concat,
        durations,
        shot_plan,
        script,
        brand,
        render_id,
        pitch_segments=pitch_segments
    )
    card, final = await append_end_card(overlaid, brand, script.cta_url, render_id)

    logger.info(
        f"Composition complete in {time.time() - start_time:.2f}s",
        extra={
            "job_id": render_id,
            "scene_count": len(scene_files),
            "scene_durations": durations,
            "final_path": str(final)
        }
    )

    return CompositionResult(
        normalized_paths=[str(p) for p in normalized],
        scene_durations=durations,
        concat_path=str(concat),
        overlay_path=str(overlaid),
        end_card_path=str(card),
        final_path=str(final)
    )
