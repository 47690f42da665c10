"""
Pytest fixtures for API gateway tests.
"""
import shutil
from unittest.mock import AsyncMock

import pytest

from shared.config import settings
from shared.models.brief import SalesPitch, StructuredBrief, VideoScript
from shared.models.job import BrandConfig, JobStatus, RenderJob, RenderRequest
from shared.models.media import CompositionResult, QCResult
from shared.models.scene import Scene, ShotPlan
from api_gateway.orchestrator import StageOrchestrator
from api_gateway.store import JobStore


@pytest.fixture
def ffmpeg():
    """Skip unless real ffmpeg and ffprobe binaries are installed."""
    if shutil.which("ffmpeg") is None or shutil.which("ffprobe") is None:
        pytest.skip("FFmpeg not installed")


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Point artifact and render directories at a per-test temp dir."""
    monkeypatch.setattr(settings, "tmp_dir", str(tmp_path / "tmp"))
    monkeypatch.setattr(settings, "renders_dir", str(tmp_path / "renders"))
    return tmp_path


@pytest.fixture
def store():
    return JobStore()


@pytest.fixture
def render_request():
    return RenderRequest(
        company="Acme Payments",
        job_description="Senior Backend Engineer in Berlin. Scale our payments platform.",
        brand=BrandConfig(primary_hex="#0B5FFF", secondary_hex="#FFFFFF", tone="professional"),
        scene_count=1,
        engine="template",
    )


@pytest.fixture
def make_job(store):
    """Insert a QUEUED job built from request overrides."""
    def _make(render_id="r_0123456789ab", target_store=None, **overrides):
        fields = {
            "company": "Acme Payments",
            "job_description": "Senior Backend Engineer in Berlin. Scale our payments platform.",
            "brand": BrandConfig(primary_hex="#0B5FFF", secondary_hex="#FFFFFF", tone="professional"),
            "scene_count": 1,
            "engine": "template",
        }
        fields.update(overrides)
        job = RenderJob(render_id=render_id, request=RenderRequest(**fields))
        (target_store if target_store is not None else store).insert(job)
        return job
    return _make


@pytest.fixture
def brief():
    return StructuredBrief(
        title="Senior Backend Engineer",
        impact="Scale the payments platform that moves $2B a year",
        location="Berlin",
        top_responsibilities=["Design resilient payment services"],
        benefits=["Equity"],
        cta_url="https://example.com/jobs/42",
    )


def _make_script(beats: int) -> VideoScript:
    return VideoScript(
        hook="What if your code moved $2B a year?",
        beats=[f"Beat {i}" for i in range(beats)],
        on_screen_text=[f"Text {i}" for i in range(beats)],
        cta_url="https://example.com/jobs/42",
    )


def _make_plan(scene_count: int, len_s: float = 7) -> ShotPlan:
    return ShotPlan(
        music_mood="corporate modern",
        scenes=[
            Scene(len_s=len_s, visual_metaphor=f"scene {i}", overlay=f"Text {i}")
            for i in range(scene_count)
        ],
    )


@pytest.fixture
def script_factory():
    return _make_script


@pytest.fixture
def plan_factory():
    return _make_plan


@pytest.fixture
def collaborators(brief, workdir):
    """Async doubles for every stage, shaped for a one-scene render."""
    tmp = workdir / "tmp"
    final = str(tmp / "r_0123456789ab_final.mp4")
    return {
        "parse": AsyncMock(return_value=brief),
        "pitch": AsyncMock(return_value=SalesPitch(segments=["Senior Backend Engineer opportunity at Berlin"])),
        "script": AsyncMock(return_value=_make_script(1)),
        "shot_plan": AsyncMock(return_value=_make_plan(1)),
        "acquire": AsyncMock(return_value=[str(tmp / "r_0123456789ab_scene0.mp4")]),
        "compose": AsyncMock(return_value=CompositionResult(
            normalized_paths=[str(tmp / "r_0123456789ab_scene0_norm.mp4")],
            scene_durations=[7.0],
            concat_path=str(tmp / "r_0123456789ab_concat.mp4"),
            overlay_path=str(tmp / "r_0123456789ab_overlays.mp4"),
            end_card_path=str(tmp / "r_0123456789ab_endcard.mp4"),
            final_path=final,
        )),
        "qc": AsyncMock(return_value=QCResult(
            passed=True,
            metrics={"duration_s": 9.0, "resolution": "1080x1920", "fps": 30, "audio_present": True}
        )),
        "publish": AsyncMock(return_value=f"file://{final}"),
    }


@pytest.fixture
def orchestrator(store, collaborators):
    return StageOrchestrator(store=store, **collaborators)


class RecordingStore(JobStore):
    """JobStore that remembers every status it was asked to set."""

    def __init__(self):
        super().__init__()
        self.history = []

    def update_status(self, render_id, status: JobStatus, error=None):
        job = super().update_status(render_id, status, error=error)
        self.history.append(status)
        return job


@pytest.fixture
def recording_store():
    return RecordingStore()
