"""
Scene generator module.

Acquires one clip per planned scene through an engine-specific adapter
(template, Veo, or the Sora2 placeholder).
"""

from modules.scene_generator.adapters import (
    SceneAdapter,
    TemplateAdapter,
    VeoAdapter,
    StubAdapter,
    get_adapter,
    acquire_scenes,
)
from modules.scene_generator.config import estimate_cost_cents

__all__ = [
    "SceneAdapter",
    "TemplateAdapter",
    "VeoAdapter",
    "StubAdapter",
    "get_adapter",
    "acquire_scenes",
    "estimate_cost_cents",
]
