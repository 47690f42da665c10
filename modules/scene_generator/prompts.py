"""
Prompt templates for generated scenes.
"""
from shared.models.scene import Scene


def build_veo_prompt(scene: Scene) -> str:
    """Cinematic prompt for one vertical scene."""
    return (
        f"Create a {scene.len_s:g} second cinematic vertical video (9:16).\n"
        f"Scene concept: {scene.visual_metaphor}.\n"
        "Lighting: natural realistic. Camera: smooth motion, shallow depth of field.\n"
        "Reserve lower 20% of frame for captions. No logos or text overlays."
    )
