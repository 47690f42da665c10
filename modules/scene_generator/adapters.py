"""
Scene acquisition adapters.

One adapter per engine, all behind `acquire(scene, render_id, scene_index)`.
Template renders a gradient clip locally; Veo generates remotely and falls
back to template on any failure; the Sora2 adapter is a placeholder that
delegates to template.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Type

from shared.errors import CompositionError
from shared.logging import get_logger
from shared.models.job import BrandConfig
from shared.models.scene import Scene, ShotPlan
from modules.composer.config import (
    OUTPUT_WIDTH,
    OUTPUT_HEIGHT,
    OUTPUT_FPS,
    OUTPUT_PIX_FMT,
    OUTPUT_VIDEO_CODEC,
    FFMPEG_PRESET,
    FFMPEG_CRF,
    scene_path,
)
from modules.composer.utils import run_ffmpeg_command
from .config import (
    ENGINE_TEMPLATE,
    ENGINE_VEO3,
    ENGINE_SORA2,
    MIN_CLIP_BYTES,
    TEMPLATE_TOP_COLOR,
    TEMPLATE_BOTTOM_COLOR,
    resolve_engine,
)
from .prompts import build_veo_prompt
from .veo import VeoClient

logger = get_logger("scene_generator.adapters")


def _channel_gradient(top: int, bottom: int) -> str:
    """geq expression for one channel, blending top to bottom over the frame height."""
    return f"{top}+({bottom}-{top})*Y/H"


def _rgb(hex_color: str) -> tuple:
    value = hex_color.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


class SceneAdapter(ABC):
    """Obtains one clip for one planned scene."""

    name: str = ""

    @abstractmethod
    async def acquire(self, scene: Scene, render_id: str, scene_index: int) -> Path:
        """Return the path of a clip for the scene, written to `{render_id}_scene{index}.mp4`."""


class TemplateAdapter(SceneAdapter):
    """Renders a vertical gradient clip with FFmpeg."""

    name = ENGINE_TEMPLATE

    def __init__(self, top_color: str = TEMPLATE_TOP_COLOR, bottom_color: str = TEMPLATE_BOTTOM_COLOR):
        self.top_color = top_color
        self.bottom_color = bottom_color

    def build_command(self, scene: Scene, output_path: Path) -> List[str]:
        top = _rgb(self.top_color)
        bottom = _rgb(self.bottom_color)
        geq = "geq=" + ":".join(
            f"{channel}='{_channel_gradient(t, b)}'"
            for channel, t, b in zip("rgb", top, bottom)
        )
        return [
            "ffmpeg",
            "-f", "lavfi",
            "-i", f"color=c=black:s={OUTPUT_WIDTH}x{OUTPUT_HEIGHT}:d={scene.len_s:g},format=rgb24",
            "-vf", geq,
            "-r", str(OUTPUT_FPS),
            "-c:v", OUTPUT_VIDEO_CODEC,
            "-preset", FFMPEG_PRESET,
            "-crf", str(FFMPEG_CRF),
            "-pix_fmt", OUTPUT_PIX_FMT,
            "-y",
            str(output_path)
        ]

    async def acquire(self, scene: Scene, render_id: str, scene_index: int) -> Path:
        """
        Raises:
            CompositionError: If FFmpeg fails
        """
        output_path = scene_path(render_id, scene_index)
        logger.info(
            "Generating template scene",
            extra={"job_id": render_id, "scene_index": scene_index, "len_s": scene.len_s}
        )
        await run_ffmpeg_command(self.build_command(scene, output_path), job_id=render_id)
        if not output_path.exists():
            raise CompositionError(f"Template scene not created: {output_path}", job_id=render_id)
        return output_path


class VeoAdapter(SceneAdapter):
    """Generates the scene with Veo; any failure falls back to the template."""

    name = ENGINE_VEO3

    def __init__(self, fallback: Optional[SceneAdapter] = None, client: Optional[VeoClient] = None):
        self.fallback = fallback or TemplateAdapter()
        self.client = client or VeoClient()

    async def acquire(self, scene: Scene, render_id: str, scene_index: int) -> Path:
        output_path = scene_path(render_id, scene_index)
        try:
            return await self.client.generate(
                build_veo_prompt(scene),
                output_path,
                render_id=render_id,
                scene_index=scene_index
            )
        except Exception as e:
            logger.warning(
                f"Veo generation failed, falling back to template: {e}",
                extra={
                    "job_id": render_id,
                    "scene_index": scene_index,
                    "error": str(e),
                    "error_type": type(e).__name__
                }
            )
        return await self.fallback.acquire(scene, render_id, scene_index)


class StubAdapter(SceneAdapter):
    """Placeholder for Sora2; delegates to the template."""

    name = ENGINE_SORA2

    def __init__(self, fallback: Optional[SceneAdapter] = None):
        self.fallback = fallback or TemplateAdapter()

    async def acquire(self, scene: Scene, render_id: str, scene_index: int) -> Path:
        logger.warning(
            "Sora2 adapter not implemented, falling back to template",
            extra={"job_id": render_id, "scene_index": scene_index}
        )
        return await self.fallback.acquire(scene, render_id, scene_index)


ADAPTERS: Dict[str, Type[SceneAdapter]] = {
    ENGINE_TEMPLATE: TemplateAdapter,
    ENGINE_VEO3: VeoAdapter,
    ENGINE_SORA2: StubAdapter,
}


def get_adapter(engine: str, brand: Optional[BrandConfig] = None) -> SceneAdapter:
    """
    Build the adapter for an engine identifier.

    Unknown or empty identifiers select the template adapter. The brand
    primary color becomes the top of the template gradient.
    """
    template = TemplateAdapter(top_color=brand.primary_hex) if brand else TemplateAdapter()
    adapter_cls = ADAPTERS[resolve_engine(engine)]
    if adapter_cls is TemplateAdapter:
        return template
    return adapter_cls(fallback=template)


def find_existing_clip(render_id: str, scene_index: int) -> Optional[Path]:
    """Return a previously acquired clip for this scene, if it looks usable."""
    path = scene_path(render_id, scene_index)
    if path.exists() and path.stat().st_size >= MIN_CLIP_BYTES:
        return path
    return None


async def acquire_scenes(
    shot_plan: ShotPlan,
    render_id: str,
    engine: str,
    brand: Optional[BrandConfig] = None,
    reuse_existing: bool = False,
    adapter: Optional[SceneAdapter] = None
) -> List[str]:
    """
    Acquire one clip per planned scene, in order.

    Args:
        shot_plan: Planned scenes
        render_id: Render id (clip names are derived from it)
        engine: Engine identifier from the request
        brand: Brand colors for the template gradient
        reuse_existing: Reuse clips already on disk for this render id
        adapter: Override the adapter selected from `engine`

    Returns:
        Clip paths aligned with shot_plan.scenes
    """
    adapter = adapter or get_adapter(engine, brand)
    paths: List[str] = []

    for index, scene in enumerate(shot_plan.scenes):
        if reuse_existing:
            existing = find_existing_clip(render_id, index)
            if existing is not None:
                logger.info(
                    "Reusing existing scene clip",
                    extra={"job_id": render_id, "scene_index": index, "path": str(existing)}
                )
                paths.append(str(existing))
                continue
            logger.warning(
                "No reusable clip found, acquiring scene",
                extra={"job_id": render_id, "scene_index": index}
            )

        clip = await adapter.acquire(scene, render_id, index)
        paths.append(str(clip))

    logger.info(
        f"Acquired {len(paths)} scenes",
        extra={"job_id": render_id, "engine": adapter.name, "scene_count": len(paths)}
    )
    return paths
