"""
Quality check for finished renders.

Probes the final video and reports issues. Never raises: a failed check is
a warning on the job, not a reason to withhold the video.
"""
from pathlib import Path
from typing import Any, Dict, List, Optional

from shared.errors import CompositionError
from shared.logging import get_logger
from shared.models.job import BrandConfig
from shared.models.media import QCResult
from modules.composer.config import OUTPUT_WIDTH, OUTPUT_HEIGHT
from modules.composer.utils import probe_media
from .contrast import contrast_ratio, MIN_CONTRAST_RATIO

logger = get_logger("quality_check")

DURATION_TOLERANCE_S = 1.0
MIN_FPS = 24
CAPTION_TEXT_HEX = "#FFFFFF"


async def perform_qc(
    video_path: Path,
    expected_duration_s: float,
    brand: Optional[BrandConfig] = None,
    job_id: Optional[str] = None
) -> QCResult:
    """
    Check duration, resolution, frame rate and audio of a video.

    Args:
        video_path: Final video
        expected_duration_s: Target duration including the end card
        brand: When given, also checks caption text contrast on the brand color
        job_id: Render id for logging

    Returns:
        QCResult with itemized issues and measured metrics
    """
    logger.info("Performing QC checks", extra={"job_id": job_id, "path": str(video_path)})

    issues: List[str] = []
    metrics: Dict[str, Any] = {}

    try:
        info = await probe_media(Path(video_path))
    except CompositionError as e:
        logger.error("QC check failed", extra={"job_id": job_id, "error": str(e)})
        return QCResult(passed=False, issues=["Failed to perform QC checks"], metrics=metrics)

    video = info.video_stream
    metrics["duration_s"] = info.duration_s
    metrics["audio_present"] = info.has_audio
    if video is not None:
        metrics["resolution"] = f"{video.width}x{video.height}"
        if video.fps is not None:
            metrics["fps"] = round(video.fps)

    if abs(info.duration_s - expected_duration_s) > DURATION_TOLERANCE_S:
        issues.append(
            f"Duration mismatch: expected {expected_duration_s:g}s, got {info.duration_s:g}s"
        )

    expected_resolution = f"{OUTPUT_WIDTH}x{OUTPUT_HEIGHT}"
    if metrics.get("resolution") != expected_resolution:
        issues.append(
            f"Resolution mismatch: expected {expected_resolution}, got {metrics.get('resolution')}"
        )

    if metrics.get("fps") is not None and metrics["fps"] < MIN_FPS:
        issues.append(f"Low FPS: {metrics['fps']}")

    if brand is not None:
        ratio = contrast_ratio(brand.primary_hex, CAPTION_TEXT_HEX)
        metrics["caption_contrast_ratio"] = round(ratio, 2)
        if ratio < MIN_CONTRAST_RATIO:
            issues.append(
                f"Low caption contrast: {ratio:.2f}:1 for white text on {brand.primary_hex}"
            )

    result = QCResult(passed=not issues, issues=issues, metrics=metrics)
    logger.info(
        "QC checks completed",
        extra={"job_id": job_id, "passed": result.passed, "issue_count": len(issues)}
    )
    return result
