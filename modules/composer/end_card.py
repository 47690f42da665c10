"""
End card for composer module.

Renders a short branded call-to-action card with a silent audio track and
appends it to the captioned video.
"""
from pathlib import Path
from typing import Optional

from shared.errors import CompositionError
from shared.logging import get_logger
from shared.models.job import BrandConfig
from .config import (
    END_CARD_DURATION,
    END_CARD_HEADLINE,
    END_CARD_FALLBACK_TEXT,
    END_CARD_HEADLINE_SIZE,
    END_CARD_URL_SIZE,
    OUTPUT_WIDTH,
    OUTPUT_HEIGHT,
    OUTPUT_FPS,
    OUTPUT_AUDIO_SAMPLE_RATE,
    OUTPUT_AUDIO_CHANNEL_LAYOUT,
    end_card_path,
    final_path,
    tmp_dir,
)
from .normalizer import encoder_args
from .utils import escape_filter_value, run_ffmpeg_command, write_concat_list

logger = get_logger("composer.end_card")


def build_end_card_command(brand: BrandConfig, cta_url: Optional[str], output_path: Path) -> list:
    """FFmpeg command for the end card clip (brand color, CTA text, silence)."""
    color = "0x" + brand.primary_hex.lstrip("#")
    url_text = escape_filter_value(cta_url or END_CARD_FALLBACK_TEXT)
    # expansion=none keeps % sequences in encoded URLs literal
    drawtext = (
        f"drawtext=text={escape_filter_value(END_CARD_HEADLINE)}:expansion=none:fontcolor=white:"
        f"fontsize={END_CARD_HEADLINE_SIZE}:x=(w-text_w)/2:y=(h-text_h)/2-40,"
        f"drawtext=text={url_text}:expansion=none:fontcolor=white:"
        f"fontsize={END_CARD_URL_SIZE}:x=(w-text_w)/2:y=(h-text_h)/2+40"
    )
    return [
        "ffmpeg",
        "-f", "lavfi",
        "-i", f"color=c={color}:s={OUTPUT_WIDTH}x{OUTPUT_HEIGHT}:r={OUTPUT_FPS}:d={END_CARD_DURATION}",
        "-f", "lavfi",
        "-i", f"anullsrc=channel_layout={OUTPUT_AUDIO_CHANNEL_LAYOUT}:sample_rate={OUTPUT_AUDIO_SAMPLE_RATE}",
        "-vf", drawtext,
        "-t", str(END_CARD_DURATION),
        "-r", str(OUTPUT_FPS),
        *encoder_args(),
        "-y",
        str(output_path)
    ]


async def append_end_card(
    video_path: Path,
    brand: BrandConfig,
    cta_url: Optional[str],
    render_id: str
) -> tuple:
    """
    Render the end card and append it to the video.

    Returns:
        (end card path, final video path)

    Raises:
        CompositionError: If either FFmpeg step fails
    """
    card_path = end_card_path(render_id)
    await run_ffmpeg_command(build_end_card_command(brand, cta_url, card_path), job_id=render_id)
    if not card_path.exists():
        raise CompositionError(f"End card not created: {card_path}", job_id=render_id)

    output_path = final_path(render_id)
    list_path = write_concat_list([video_path, card_path], tmp_dir() / f"{render_id}_final.txt")
    cmd = [
        "ffmpeg",
        "-f", "concat",
        "-safe", "0",
        "-i", str(list_path),
        "-c", "copy",
        "-movflags", "+faststart",
        "-y",
        str(output_path)
    ]
    await run_ffmpeg_command(cmd, job_id=render_id)
    if not output_path.exists():
        raise CompositionError(f"Final video not created: {output_path}", job_id=render_id)

    logger.info(
        "Appended end card",
        extra={"job_id": render_id, "cta_url": cta_url, "output": str(output_path)}
    )
    return card_path, output_path
