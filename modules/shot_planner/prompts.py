"""
Prompts for model-generated shot plans.
"""
from shared.models.brief import StructuredBrief, VideoScript
from .templates import style_guide, role_visuals

SHOT_PLAN_SYSTEM_PROMPT = """You are an expert cinematographer and visual storyteller specializing in AI-generated video direction for short-form recruitment content.

PRINCIPLES: one clear subject per scene, intentional camera movement and depth of field,
visuals that match each script beat, visual momentum across scenes.

CONSTRAINTS:
- NO text, logos, or readable content in scenes (overlays are added in post)
- NO impossible physics
- NO static shots
- Reserve lower 20% of frame for caption overlays

OUTPUT FORMAT (JSON):
{
  "aspect": "9:16",
  "music_mood": "descriptive mood",
  "subtitle_style": "bold_lower_thirds",
  "scenes": [
    {"len_s": 7, "visual_metaphor": "Detailed scene description with camera movement, lighting, subject, and mood"}
  ]
}

Be specific: describe camera, lighting, subject, environment and mood in 1-2 sentences."""


def build_shot_plan_prompt(
    script: VideoScript,
    brief: StructuredBrief,
    duration_s: float,
    tone: str,
    scene_count: int
) -> str:
    scene_length = duration_s / scene_count
    beats = "\n".join(
        f"Beat {index + 1}: {beat} (Scene {index} - {scene_length:g}s)"
        for index, beat in enumerate(script.beats)
    )
    plural = "s" if scene_count > 1 else ""
    return f"""Create a shot plan for a {duration_s:g}-second recruitment video ({scene_count} scene{plural}).

JOB CONTEXT:
Role: {brief.title}
Company Type: {brief.team or 'Technology company'}
Impact: {brief.impact}

SCRIPT TO VISUALIZE:
Hook: {script.hook}
{beats}

VISUAL STYLE FOR {tone.upper()} TONE:
{style_guide(tone)}

ROLE-SPECIFIC VISUAL THINKING:
{role_visuals(brief.title)}

Create exactly {scene_count} cinematic scene description{plural} that match each beat,
follow the {tone} style guide, and build visual momentum from scene to scene."""
