"""
Data models for the render pipeline.

This module exports all Pydantic models used across pipeline modules.
"""

from .brief import StructuredBrief, VideoScript, SalesPitch
from .scene import Scene, ShotPlan
from .media import StreamInfo, MediaInfo, CompositionResult, QCResult
from .job import (
    JobStatus,
    BrandConfig,
    RenderRequest,
    StepRecord,
    DebugTrace,
    RenderJob,
)

__all__ = [
    # Brief and script models
    "StructuredBrief",
    "VideoScript",
    "SalesPitch",
    # Scene models
    "Scene",
    "ShotPlan",
    # Media models
    "StreamInfo",
    "MediaInfo",
    "CompositionResult",
    "QCResult",
    # Job models
    "JobStatus",
    "BrandConfig",
    "RenderRequest",
    "StepRecord",
    "DebugTrace",
    "RenderJob",
]
