"""
Pytest fixtures for scene generator tests.
"""
import shutil
from pathlib import Path
from types import SimpleNamespace

import pytest
from unittest.mock import AsyncMock, MagicMock

from shared.config import settings
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
def scene():
    return Scene(len_s=7, visual_metaphor="sunrise over a modern office", overlay="Build what matters")


@pytest.fixture
def shot_plan(scene):
    return ShotPlan(
        music_mood="corporate modern",
        scenes=[
            scene,
            Scene(len_s=7, visual_metaphor="team collaborating", overlay="Grow fast"),
            Scene(len_s=7, visual_metaphor="city at dusk", overlay="Join us"),
        ],
    )


def make_operation(done: bool, error=None, video_bytes=None, videos=True):
    """Stand-in for a google-genai GenerateVideosOperation."""
    response = None
    if done and error is None:
        generated = [SimpleNamespace(video=SimpleNamespace(video_bytes=video_bytes, uri="files/abc"))] if videos else []
        response = SimpleNamespace(generated_videos=generated)
    return SimpleNamespace(name="models/veo/operations/op-1", done=done, error=error, response=response)


@pytest.fixture
def operation_factory():
    return make_operation


@pytest.fixture
def genai_client():
    """Mocked google-genai client with async surface under `.aio`."""
    client = MagicMock()
    client.aio.models.generate_videos = AsyncMock(return_value=make_operation(done=False))
    client.aio.operations.get = AsyncMock(return_value=make_operation(done=True))
    client.aio.files.download = AsyncMock(return_value=b"\x00" * 4096)
    return client
