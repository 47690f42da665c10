"""
Veo client for scene generation.

Submits a long-running generation through the Gemini API, polls the
operation until it finishes, downloads the clip and validates it.
"""
import asyncio
import json
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from shared.config import settings
from shared.errors import CompositionError, ConfigError, GenerationError
from shared.logging import get_logger
from shared.polling import poll_until
from modules.composer.utils import probe_media
from .config import (
    POLL_INTERVAL_SECONDS,
    MAX_POLLS,
    VEO_ASPECT_RATIO,
    MIN_CLIP_BYTES,
    SETTLE_DELAY_SECONDS,
)

logger = get_logger("scene_generator.veo")


async def validate_clip(
    path: Path,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
) -> None:
    """
    Reject clips that are truncated or not a readable container.

    Raises:
        GenerationError: If the file is missing, too small, or unreadable
    """
    if not path.exists():
        raise GenerationError(f"Video file not found: {path}")

    size = path.stat().st_size
    if size < MIN_CLIP_BYTES:
        raise GenerationError(f"Video file too small ({size} bytes), likely corrupted")

    # Give the filesystem a moment to flush the download
    await sleep(SETTLE_DELAY_SECONDS)

    try:
        info = await probe_media(path)
    except CompositionError as e:
        raise GenerationError(f"Video file validation failed: {e}") from e

    logger.info(
        "Video file validated successfully",
        extra={"path": str(path), "size": size, "duration_s": info.duration_s}
    )


class VeoClient:
    """Async wrapper around Veo video generation."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        poll_interval_s: float = POLL_INTERVAL_SECONDS,
        max_polls: int = MAX_POLLS,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        client: Optional[genai.Client] = None
    ):
        self.api_key = api_key or settings.gemini_api_key
        self.model = model or settings.veo_model
        self.poll_interval_s = poll_interval_s
        self.max_polls = max_polls
        self.sleep = sleep
        self._client = client

    @property
    def client(self) -> genai.Client:
        """Get or create the Gemini client."""
        if self._client is None:
            if not self.api_key:
                raise ConfigError("GEMINI_API_KEY is not configured")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def generate(
        self,
        prompt: str,
        output_path: Path,
        render_id: Optional[str] = None,
        scene_index: Optional[int] = None
    ) -> Path:
        """
        Generate one clip and write it to `output_path`.

        Raises:
            ConfigError: If no API key is configured
            GenerationError: If the operation fails or returns no video
            PollTimeoutError: If the operation is still running after the last poll
        """
        log_extra = {"job_id": render_id, "scene_index": scene_index, "model": self.model}
        logger.info("Starting Veo generation", extra={**log_extra, "prompt": prompt})

        try:
            operation = await self.client.aio.models.generate_videos(
                model=self.model,
                prompt=prompt,
                config=types.GenerateVideosConfig(
                    aspect_ratio=VEO_ASPECT_RATIO,
                    number_of_videos=1
                )
            )
        except genai_errors.APIError as e:
            raise GenerationError(f"Veo request failed: {e}", job_id=render_id) from e

        logger.info("Veo operation started", extra={**log_extra, "operation": operation.name})

        if not operation.done:
            def on_attempt(attempt: int, op: Any) -> None:
                logger.info(
                    "Polling Veo operation",
                    extra={**log_extra, "poll_count": attempt, "done": bool(op.done)}
                )

            try:
                operation = await poll_until(
                    fetch=lambda: self.client.aio.operations.get(operation),
                    is_done=lambda op: bool(op.done),
                    interval_s=self.poll_interval_s,
                    max_attempts=self.max_polls,
                    sleep=self.sleep,
                    on_attempt=on_attempt,
                    description="Veo operation"
                )
            except genai_errors.APIError as e:
                raise GenerationError(f"Veo polling failed: {e}", job_id=render_id) from e

        if operation.error:
            raise GenerationError(
                f"Veo operation failed: {json.dumps(operation.error, default=str)}",
                job_id=render_id
            )

        response = operation.response
        videos = response.generated_videos if response else None
        if not videos or not videos[0].video:
            raise GenerationError("No video generated in operation response", job_id=render_id)

        video = videos[0].video
        if video.video_bytes:
            data = video.video_bytes
        else:
            try:
                data = await self.client.aio.files.download(file=video)
            except genai_errors.APIError as e:
                raise GenerationError(f"Veo download failed: {e}", job_id=render_id) from e

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)
        logger.info(
            "Downloaded Veo video",
            extra={**log_extra, "path": str(output_path), "size": len(data)}
        )

        await validate_clip(output_path, sleep=self.sleep)
        return output_path
