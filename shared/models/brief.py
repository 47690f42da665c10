"""
Language-model output models.

Defines StructuredBrief, VideoScript and SalesPitch.
"""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator


class StructuredBrief(BaseModel):
    """Recruiting fields extracted from a raw job description."""

    title: str = Field(min_length=1)
    impact: str = Field(min_length=1)
    location: Optional[str] = None
    seniority: Optional[str] = None
    employment_type: Optional[str] = None
    salary: Optional[str] = None
    remote: Optional[Literal["On-site", "Hybrid", "Remote"]] = None
    team: Optional[str] = None
    top_responsibilities: List[str] = Field(default_factory=list)
    requirements: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    cta_url: Optional[str] = None

    @field_validator("location", "seniority", "employment_type", "salary", "team", mode="before")
    @classmethod
    def coerce_text(cls, v):
        """Salary and similar fields sometimes come back as numbers."""
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("remote", mode="before")
    @classmethod
    def normalize_remote(cls, v):
        """Models sometimes answer 'remote' or 'onsite'; anything unknown becomes None."""
        if v is None:
            return None
        lookup = {
            "on-site": "On-site",
            "onsite": "On-site",
            "on site": "On-site",
            "hybrid": "Hybrid",
            "remote": "Remote",
        }
        return lookup.get(str(v).strip().lower())


class VideoScript(BaseModel):
    """Narrative script: a hook, one beat per scene and a call to action."""

    hook: str = Field(min_length=1)
    beats: List[str]
    on_screen_text: List[str] = Field(default_factory=list)
    tone: Optional[str] = None
    cta: str = "Apply now"
    cta_url: Optional[str] = None
    estimated_duration_s: Optional[float] = None


class SalesPitch(BaseModel):
    """Short per-scene pitch lines used as caption text."""

    segments: List[str]
    full_pitch: str = ""
