"""
Caption overlays for composer module.

Builds an ASS subtitle file with one caption per scene, timed from the
measured clip durations, and burns it into the concatenated video.
"""
from pathlib import Path
from typing import List, Optional

from shared.config import settings
from shared.errors import CompositionError
from shared.logging import get_logger
from shared.models.brief import VideoScript
from shared.models.job import BrandConfig
from shared.models.scene import ShotPlan
from .config import (
    OUTPUT_WIDTH,
    OUTPUT_HEIGHT,
    CAPTION_FONT,
    CAPTION_FONT_SIZE,
    CAPTION_MARGIN_V,
    CAPTION_MAX_CHARS,
    FFMPEG_THREADS,
    FFMPEG_PRESET,
    FFMPEG_CRF,
    OUTPUT_VIDEO_CODEC,
    OUTPUT_PIX_FMT,
    overlays_path,
    subtitles_path,
)
from .utils import run_ffmpeg_command, escape_filter_path

logger = get_logger("composer.overlays")


def hex_to_ass_color(hex_color: str, alpha: Optional[str] = None) -> str:
    """
    Convert `#RRGGBB` into an ASS color `&HAABBGGRR`.

    >>> hex_to_ass_color("#0B5FFF", "AA")
    '&HAAFF5F0B'
    """
    value = hex_color.lstrip("#").upper()
    if len(value) != 6:
        raise ValueError(f"Expected #RRGGBB, got '{hex_color}'")
    red, green, blue = value[0:2], value[2:4], value[4:6]
    alpha = (alpha or settings.caption_alpha_hex).upper()
    return f"&H{alpha}{blue}{green}{red}"


def format_ass_timestamp(seconds: float) -> str:
    """Format seconds as `H:MM:SS.cc`."""
    total_cs = int(round(max(seconds, 0.0) * 100))
    hours, rem = divmod(total_cs, 360000)
    minutes, rem = divmod(rem, 6000)
    secs, cs = divmod(rem, 100)
    return f"{hours}:{minutes:02d}:{secs:02d}.{cs:02d}"


def escape_ass_text(text: str) -> str:
    """Keep caption text from being parsed as override tags or line breaks."""
    return (
        text.replace("\\", "\\\\")
        .replace("{", "\\{")
        .replace("}", "\\}")
        .replace("\r", " ")
        .replace("\n", " ")
        .strip()
    )


def caption_text(
    index: int,
    shot_plan: ShotPlan,
    script: VideoScript,
    pitch_segments: Optional[List[str]] = None
) -> str:
    """
    Pick the caption for one scene.

    Priority: pitch segment, scene overlay, script on-screen text, beat text.
    """
    if pitch_segments and index < len(pitch_segments) and pitch_segments[index]:
        return pitch_segments[index]
    if index < len(shot_plan.scenes) and shot_plan.scenes[index].overlay:
        return shot_plan.scenes[index].overlay
    if index < len(script.on_screen_text) and script.on_screen_text[index]:
        return script.on_screen_text[index]
    if index < len(script.beats):
        return script.beats[index][:CAPTION_MAX_CHARS]
    return ""


def cue_times(durations: List[float]) -> List[tuple]:
    """Cumulative (start, end) offsets for scenes in order."""
    cues = []
    start = 0.0
    for duration in durations:
        end = start + duration
        cues.append((start, end))
        start = end
    return cues


def build_subtitles(
    durations: List[float],
    texts: List[str],
    brand: BrandConfig
) -> str:
    """
    Render the ASS document for the given per-scene durations and captions.

    The box behind the text uses the brand primary color.
    """
    box_color = hex_to_ass_color(brand.primary_hex)
    header = "\n".join([
        "[Script Info]",
        "ScriptType: v4.00+",
        f"PlayResX: {OUTPUT_WIDTH}",
        f"PlayResY: {OUTPUT_HEIGHT}",
        "WrapStyle: 0",
        "ScaledBorderAndShadow: yes",
        "",
        "[V4+ Styles]",
        "Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, OutlineColour, BackColour, "
        "Bold, Italic, Underline, StrikeOut, ScaleX, ScaleY, Spacing, Angle, BorderStyle, Outline, "
        "Shadow, Alignment, MarginL, MarginR, MarginV, Encoding",
        f"Style: LT,{CAPTION_FONT},{CAPTION_FONT_SIZE},&H00FFFFFF,&H00FFFFFF,{box_color},{box_color},"
        f"-1,0,0,0,100,100,0,0,3,12,0,2,60,60,{CAPTION_MARGIN_V},1",
        "",
        "[Events]",
        "Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text",
    ])

    events = []
    for (start, end), text in zip(cue_times(durations), texts):
        events.append(
            f"Dialogue: 0,{format_ass_timestamp(start)},{format_ass_timestamp(end)},"
            f"LT,,0,0,0,,{escape_ass_text(text)}"
        )
    return header + "\n" + "\n".join(events) + "\n"


async def add_overlays(
    video_path: Path,
    durations: List[float],
    shot_plan: ShotPlan,
    script: VideoScript,
    brand: BrandConfig,
    render_id: str,
    pitch_segments: Optional[List[str]] = None
) -> Path:
    """
    Burn per-scene captions into the concatenated video.

    Returns:
        Path to `{render_id}_overlays.mp4`

    Raises:
        CompositionError: If FFmpeg fails
    """
    texts = [
        caption_text(i, shot_plan, script, pitch_segments)
        for i in range(len(durations))
    ]
    ass_path = subtitles_path(render_id)
    ass_path.write_text(build_subtitles(durations, texts, brand), encoding="utf-8")

    output_path = overlays_path(render_id)
    cmd = [
        "ffmpeg",
        "-threads", str(FFMPEG_THREADS),
        "-i", str(video_path),
        "-vf", f"subtitles={escape_filter_path(ass_path)}",
        "-c:v", OUTPUT_VIDEO_CODEC,
        "-preset", FFMPEG_PRESET,
        "-crf", str(FFMPEG_CRF),
        "-pix_fmt", OUTPUT_PIX_FMT,
        "-c:a", "copy",
        "-y",
        str(output_path)
    ]
    await run_ffmpeg_command(cmd, job_id=render_id)

    if not output_path.exists():
        raise CompositionError(f"Overlay video not created: {output_path}", job_id=render_id)

    logger.info(
        f"Added {len(texts)} captions",
        extra={"job_id": render_id, "caption_count": len(texts), "total_s": sum(durations)}
    )
    return output_path
