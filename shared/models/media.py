"""
Media inspection and composition result models.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from shared.errors import QCError


class StreamInfo(BaseModel):
    """One stream as reported by ffprobe."""

    codec_type: str
    codec_name: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    fps: Optional[float] = None
    sample_rate: Optional[int] = None
    channels: Optional[int] = None


class MediaInfo(BaseModel):
    """Container-level metadata for a media file."""

    duration_s: float
    streams: List[StreamInfo] = Field(default_factory=list)

    @property
    def video_stream(self) -> Optional[StreamInfo]:
        return next((s for s in self.streams if s.codec_type == "video"), None)

    @property
    def audio_stream(self) -> Optional[StreamInfo]:
        return next((s for s in self.streams if s.codec_type == "audio"), None)

    @property
    def has_audio(self) -> bool:
        return self.audio_stream is not None


class CompositionResult(BaseModel):
    """Artifacts produced by the composer, in creation order."""

    normalized_paths: List[str]
    scene_durations: List[float] = Field(description="Measured duration of each normalized clip")
    concat_path: str
    overlay_path: str
    end_card_path: str
    final_path: str


class QCResult(BaseModel):
    """Quality-check report. Never blocks publication."""

    passed: bool
    issues: List[str] = Field(default_factory=list)
    metrics: Dict[str, Any] = Field(default_factory=dict)

    def raise_for_issues(self, job_id: Optional[str] = None) -> None:
        """Raise QCError listing every issue when the check did not pass."""
        if not self.passed:
            raise QCError("; ".join(self.issues) or "Quality check failed", job_id=job_id)
