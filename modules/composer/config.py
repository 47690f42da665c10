"""
Composer configuration.

Centralized FFmpeg settings, output parameters and artifact naming.
"""
import os
from pathlib import Path

from shared.config import settings

# FFmpeg settings
FFMPEG_THREADS = 4
FFMPEG_TIMEOUT = 300  # 5 minutes
FFMPEG_PRESET = os.getenv("FFMPEG_PRESET", "veryfast")
FFMPEG_CRF = 23
FFPROBE_TIMEOUT = 30

# Video output settings (vertical 9:16)
OUTPUT_WIDTH = 1080
OUTPUT_HEIGHT = 1920
OUTPUT_FPS = 30
OUTPUT_PIX_FMT = "yuv420p"
OUTPUT_VIDEO_CODEC = "libx264"
OUTPUT_AUDIO_CODEC = "aac"
OUTPUT_AUDIO_BITRATE = "128k"
OUTPUT_AUDIO_SAMPLE_RATE = 44100
OUTPUT_AUDIO_CHANNEL_LAYOUT = "stereo"

# Captions
CAPTION_FONT = "Inter"
CAPTION_FONT_SIZE = 42
CAPTION_MARGIN_V = 160
CAPTION_MAX_CHARS = 60

# End card
END_CARD_DURATION = 2.0
END_CARD_HEADLINE = "Apply Now"
END_CARD_FALLBACK_TEXT = "Visit our careers page"
END_CARD_HEADLINE_SIZE = 60
END_CARD_URL_SIZE = 30


def tmp_dir() -> Path:
    """Working directory for intermediate artifacts (created on demand)."""
    path = settings.tmp_path
    path.mkdir(parents=True, exist_ok=True)
    return path


# Artifact naming. Reuse-existing-clips mode depends on these names.
def scene_path(render_id: str, index: int) -> Path:
    return tmp_dir() / f"{render_id}_scene{index}.mp4"


def normalized_path(render_id: str, index: int) -> Path:
    return tmp_dir() / f"{render_id}_scene{index}_norm.mp4"


def concat_path(render_id: str) -> Path:
    return tmp_dir() / f"{render_id}_concat.mp4"


def overlays_path(render_id: str) -> Path:
    return tmp_dir() / f"{render_id}_overlays.mp4"


def subtitles_path(render_id: str) -> Path:
    return tmp_dir() / f"{render_id}_overlays.ass"


def end_card_path(render_id: str) -> Path:
    return tmp_dir() / f"{render_id}_endcard.mp4"


def final_path(render_id: str) -> Path:
    return tmp_dir() / f"{render_id}_final.mp4"
