"""
Clip normalization and concatenation for composer module.

Every scene clip is re-encoded to the same frame size, frame rate and codecs
so that the concat demuxer can join them with stream copy.
"""
from pathlib import Path
from typing import List, Optional

from shared.errors import CompositionError
from shared.logging import get_logger
from .config import (
    FFMPEG_THREADS,
    FFMPEG_PRESET,
    FFMPEG_CRF,
    OUTPUT_FPS,
    OUTPUT_WIDTH,
    OUTPUT_HEIGHT,
    OUTPUT_PIX_FMT,
    OUTPUT_VIDEO_CODEC,
    OUTPUT_AUDIO_CODEC,
    OUTPUT_AUDIO_BITRATE,
    OUTPUT_AUDIO_SAMPLE_RATE,
    OUTPUT_AUDIO_CHANNEL_LAYOUT,
    normalized_path,
    concat_path,
    tmp_dir,
)
from .utils import run_ffmpeg_command, probe_media, write_concat_list

logger = get_logger("composer.normalizer")


def build_scale_filter(width: int = OUTPUT_WIDTH, height: int = OUTPUT_HEIGHT) -> str:
    """Scale to cover the target frame, then center-crop to it."""
    return (
        f"scale={width}:{height}:force_original_aspect_ratio=increase,"
        f"crop={width}:{height}"
    )


def encoder_args() -> List[str]:
    """Codec arguments shared by every artifact that gets concatenated."""
    return [
        "-c:v", OUTPUT_VIDEO_CODEC,
        "-preset", FFMPEG_PRESET,
        "-crf", str(FFMPEG_CRF),
        "-pix_fmt", OUTPUT_PIX_FMT,
        "-c:a", OUTPUT_AUDIO_CODEC,
        "-b:a", OUTPUT_AUDIO_BITRATE,
        "-ar", str(OUTPUT_AUDIO_SAMPLE_RATE),
        "-ac", "2",
    ]


def build_normalize_command(input_path: Path, output_path: Path, has_audio: bool) -> List[str]:
    """
    Build the FFmpeg command that normalizes one clip.

    Clips without audio get a generated silent stereo track so all
    normalized clips carry the same stream layout.
    """
    cmd = [
        "ffmpeg",
        "-threads", str(FFMPEG_THREADS),
        "-i", str(input_path),
    ]
    if has_audio:
        cmd.extend(["-map", "0:v:0", "-map", "0:a:0"])
    else:
        cmd.extend([
            "-f", "lavfi",
            "-i", f"anullsrc=channel_layout={OUTPUT_AUDIO_CHANNEL_LAYOUT}:sample_rate={OUTPUT_AUDIO_SAMPLE_RATE}",
            "-map", "0:v:0", "-map", "1:a:0",
            "-shortest",
        ])
    cmd.extend([
        "-r", str(OUTPUT_FPS),
        "-vf", build_scale_filter(),
        *encoder_args(),
        "-y",
        str(output_path)
    ])
    return cmd


async def normalize_clip(
    input_path: Path,
    clip_index: int,
    render_id: str,
    output_path: Optional[Path] = None
) -> Path:
    """
    Normalize a clip to 1080x1920 @ 30 FPS, H.264 + AAC.

    Args:
        input_path: Source clip
        clip_index: Scene index for naming
        render_id: Render id for naming and logging
        output_path: Override for the output path

    Returns:
        Path to `{render_id}_scene{index}_norm.mp4`

    Raises:
        CompositionError: If normalization fails
    """
    output_path = output_path or normalized_path(render_id, clip_index)
    info = await probe_media(input_path)
    video = info.video_stream

    logger.info(
        f"Normalizing clip {clip_index} "
        f"({video.width if video else '?'}x{video.height if video else '?'} @ "
        f"{video.fps if video else '?'}fps -> {OUTPUT_WIDTH}x{OUTPUT_HEIGHT} @ {OUTPUT_FPS}fps)",
        extra={"job_id": render_id, "clip_index": clip_index, "has_audio": info.has_audio}
    )

    cmd = build_normalize_command(input_path, output_path, info.has_audio)
    await run_ffmpeg_command(cmd, job_id=render_id)

    if not output_path.exists():
        raise CompositionError(f"Normalized clip not created: {output_path}", job_id=render_id)

    return output_path


async def concatenate_scenes(paths: List[Path], render_id: str) -> Path:
    """
    Join normalized clips in order using the concat demuxer (stream copy).

    Returns:
        Path to `{render_id}_concat.mp4`

    Raises:
        CompositionError: If there is nothing to join or FFmpeg fails
    """
    if not paths:
        raise CompositionError("No clips to concatenate", job_id=render_id)

    output_path = concat_path(render_id)
    list_path = write_concat_list(paths, tmp_dir() / f"{render_id}_concat.txt")

    cmd = [
        "ffmpeg",
        "-f", "concat",
        "-safe", "0",
        "-i", str(list_path),
        "-c", "copy",
        "-y",
        str(output_path)
    ]
    await run_ffmpeg_command(cmd, job_id=render_id)

    if not output_path.exists():
        raise CompositionError(f"Concatenated video not created: {output_path}", job_id=render_id)

    logger.info(
        f"Concatenated {len(paths)} clips",
        extra={"job_id": render_id, "clip_count": len(paths), "output": str(output_path)}
    )
    return output_path
