"""
Job-related data models.

Defines RenderRequest, RenderJob and its debug trace, and the job state machine.
"""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field, field_serializer, field_validator

from shared.config import settings
from shared.errors import InvalidTransitionError
from shared.models.brief import StructuredBrief, VideoScript
from shared.models.scene import ShotPlan

HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JobStatus(str, Enum):
    """Render job status. QUEUED -> RUNNING -> READY | ERROR."""

    QUEUED = "QUEUED"
    RUNNING = "RUNNING"
    READY = "READY"
    ERROR = "ERROR"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.READY, JobStatus.ERROR)


ALLOWED_TRANSITIONS: Dict[JobStatus, frozenset] = {
    JobStatus.QUEUED: frozenset({JobStatus.RUNNING}),
    JobStatus.RUNNING: frozenset({JobStatus.READY, JobStatus.ERROR}),
    JobStatus.READY: frozenset(),
    JobStatus.ERROR: frozenset(),
}


class BrandConfig(BaseModel):
    """Brand colors and tone for a render."""

    primary_hex: str = Field(description="Primary brand color, #RRGGBB")
    secondary_hex: str = Field(description="Secondary brand color, #RRGGBB")
    logo_url: Optional[str] = None
    tone: Literal["energetic", "aspirational", "professional", "witty"] = Field(
        default_factory=lambda: settings.default_tone
    )

    @field_validator("primary_hex", "secondary_hex")
    @classmethod
    def validate_hex(cls, v: str) -> str:
        if not HEX_COLOR_RE.match(v):
            raise ValueError(f"Color must be in #RRGGBB form, got '{v}'")
        return v.upper()


class RenderRequest(BaseModel):
    """Render request as submitted by a client."""

    render_id: Optional[str] = Field(
        default=None,
        description="Optional render id; resubmitting a finished id re-renders in place"
    )
    job_id: Optional[str] = Field(default=None, description="Client-side posting id")
    company: str = Field(min_length=1)
    job_description: str = Field(min_length=1)
    brand: BrandConfig
    locale: str = Field(default_factory=lambda: settings.default_locale)
    scene_count: Optional[int] = Field(default=None, ge=1, description="Number of scenes (~7s each)")
    duration_s: Optional[float] = Field(default=None, gt=0, description="Deprecated: use scene_count")
    scenes: Optional[int] = Field(default=None, ge=1, description="Deprecated: use scene_count")
    engine: str = Field(default="template", description="template | veo3 | sora2; unknown values use template")
    overlay_only: bool = Field(
        default=False,
        description="Reuse existing scene clips from the tmp directory instead of generating"
    )

    @property
    def resolved_scene_count(self) -> int:
        """Scene count after applying legacy fields and the configured ceiling."""
        count = self.scene_count or self.scenes or settings.default_scene_count
        return max(1, min(count, settings.max_scene_count))

    @property
    def target_duration_s(self) -> float:
        """Total planned duration of the scene content, excluding the end card."""
        if self.duration_s:
            return float(self.duration_s)
        return float(self.resolved_scene_count * settings.seconds_per_scene)


class StepRecord(BaseModel):
    """Wall-clock duration of one pipeline stage."""

    step: str
    duration_ms: int
    timestamp: datetime = Field(default_factory=utcnow)

    @field_serializer("timestamp")
    def serialize_datetime(self, value: datetime) -> str:
        return value.isoformat()


class DebugTrace(BaseModel):
    """Per-job diagnostics returned alongside the status."""

    cost_cents: int = 0
    latency_s: int = 0
    engine: Optional[str] = None
    steps: List[StepRecord] = Field(default_factory=list)
    qc: Optional[Dict[str, Any]] = None
    warnings: List[str] = Field(default_factory=list)


class RenderJob(BaseModel):
    """Full state of one render job."""

    render_id: str
    request: RenderRequest
    status: JobStatus = JobStatus.QUEUED
    brief: Optional[StructuredBrief] = None
    script: Optional[VideoScript] = None
    shot_plan: Optional[ShotPlan] = None
    sales_pitch: Optional[List[str]] = None
    scene_files: List[str] = Field(default_factory=list)
    final_video: Optional[str] = None
    error: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    debug: DebugTrace = Field(default_factory=DebugTrace)

    @field_serializer("created_at", "updated_at")
    def serialize_datetime(self, value: datetime) -> str:
        return value.isoformat()

    def transition_to(self, status: JobStatus, error: Optional[str] = None) -> None:
        """
        Move the job to a new status.

        Raises:
            InvalidTransitionError: If the state machine does not allow the change
        """
        if status not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidTransitionError(
                f"Cannot move render {self.render_id} from {self.status.value} to {status.value}",
                job_id=self.render_id
            )
        self.status = status
        if error:
            self.error = error
        self.updated_at = utcnow()

    def record_step(self, step: str, duration_ms: int) -> StepRecord:
        record = StepRecord(step=step, duration_ms=duration_ms)
        self.debug.steps.append(record)
        self.updated_at = utcnow()
        return record
