"""
Scene planning data models.

Defines Scene and ShotPlan.
"""

from typing import List
from pydantic import BaseModel, Field


class Scene(BaseModel):
    """One planned visual segment."""

    len_s: float = Field(gt=0, description="Planned length in seconds")
    visual_metaphor: str = Field(description="Visual description handed to the generator")
    overlay: str = Field(default="", description="On-screen text for this scene")


class ShotPlan(BaseModel):
    """Ordered scenes plus presentation parameters."""

    aspect: str = "9:16"
    music_mood: str
    subtitle_style: str = "bold_lower_thirds"
    scenes: List[Scene]

    @property
    def total_length_s(self) -> float:
        return sum(scene.len_s for scene in self.scenes)
