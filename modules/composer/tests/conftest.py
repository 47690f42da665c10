"""
Pytest fixtures for composer tests.
"""
import shutil
import subprocess
from pathlib import Path

import pytest

from shared.config import settings
from shared.models.brief import VideoScript
from shared.models.job import BrandConfig
from shared.models.scene import Scene, ShotPlan


@pytest.fixture
def ffmpeg():
    """Skip unless real ffmpeg and ffprobe binaries are installed."""
    if shutil.which("ffmpeg") is None or shutil.which("ffprobe") is None:
        pytest.skip("FFmpeg not installed")


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Point the artifact directory at a per-test temp dir."""
    monkeypatch.setattr(settings, "tmp_dir", str(tmp_path))
    return tmp_path


@pytest.fixture
def brand():
    return BrandConfig(primary_hex="#0B5FFF", secondary_hex="#FFFFFF", tone="professional")


@pytest.fixture
def script():
    return VideoScript(
        hook="Build the future of payments",
        beats=["Ship features used by millions", "Own systems end to end"],
        on_screen_text=["Millions of users", "Real ownership"],
        cta="Apply now",
        cta_url="https://example.com/jobs/42",
    )


@pytest.fixture
def shot_plan():
    return ShotPlan(
        music_mood="corporate modern",
        scenes=[
            Scene(len_s=7, visual_metaphor="city skyline", overlay="Millions of users"),
            Scene(len_s=7, visual_metaphor="team at whiteboard", overlay="Real ownership"),
        ],
    )


def create_test_video(
    output_path: Path,
    duration: float = 1.0,
    width: int = 640,
    height: int = 480,
    fps: int = 25,
    with_audio: bool = False
) -> Path:
    """
    Create a small real video with FFmpeg.

    Args:
        output_path: Path to output video file
        duration: Duration in seconds
        width: Video width
        height: Video height
        fps: Frame rate
        with_audio: Add a sine-wave audio track
    """
    cmd = [
        "ffmpeg",
        "-f", "lavfi",
        "-i", f"testsrc=size={width}x{height}:rate={fps}:duration={duration}",
    ]
    if with_audio:
        cmd.extend(["-f", "lavfi", "-i", f"sine=frequency=440:duration={duration}"])
    cmd.extend([
        "-c:v", "libx264",
        "-preset", "ultrafast",
        "-pix_fmt", "yuv420p",
    ])
    if with_audio:
        cmd.extend(["-c:a", "aac", "-shortest"])
    cmd.extend(["-y", str(output_path)])
    subprocess.run(cmd, capture_output=True, timeout=30, check=True)
    return output_path


@pytest.fixture
def create_test_video_file():
    """Fixture that returns the create_test_video function."""
    return create_test_video
