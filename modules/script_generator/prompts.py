"""
Prompts for the narrative script.
"""
from typing import List

from shared.models.brief import StructuredBrief

SCRIPT_SYSTEM_PROMPT = """You are an expert short-form video scriptwriter specializing in recruitment content for TikTok, Instagram Reels, and YouTube Shorts.

STORYTELLING STRUCTURE (7-21 seconds, scales with scene count):
1. HOOK (always): Grab attention with a question, bold claim, or surprising statement
2. BUILD (1-3 beats): Develop the narrative showing what makes this role compelling
   - 1 beat: Single core message (~7s total)
   - 2 beats: Two-part story (~14s total)
   - 3 beats: Full narrative arc (~21s total)
3. CTA (always): Clear call-to-action with next steps

KEY PRINCIPLES:
- Use conversational, natural language
- Create emotional connection (aspiration, excitement, belonging)
- Be specific and concrete
- One core message per video
- Show impact and meaning, not just features

AVOID: corporate jargon, buzzwords ("rockstar", "ninja"), cliches, list dumps, empty phrases.

OUTPUT FORMAT (JSON):
{
  "hook": "Opening line that stops the scroll",
  "beats": ["Build beat 1", ...],
  "on_screen_text": ["Text for scene 1", ...],
  "cta": "Clear call to action",
  "cta_url": "Application URL if provided",
  "tone": "Match requested tone",
  "estimated_duration_s": 7
}
The beats and on_screen_text arrays must both have exactly the requested scene count.

WORD COUNT: 30-40 words for 1 scene, 50-70 for 2 scenes, 70-90 for 3 scenes.
INCLUSIVITY: Use gender-neutral language, avoid protected-class references."""


def _bullets(items: List[str]) -> str:
    return "\n".join(f"- {item}" for item in items) or "- Not specified"


def format_role_details(brief: StructuredBrief) -> str:
    """Role summary shared by the script and pitch prompts."""
    lines = [
        f"Title: {brief.title}",
        f"Location: {brief.location or 'Not specified'}",
    ]
    if brief.remote:
        lines.append(f"Work Mode: {brief.remote}")
    if brief.seniority:
        lines.append(f"Level: {brief.seniority}")
    if brief.salary:
        lines.append(f"Compensation: {brief.salary}")
    lines.extend([
        "",
        f"Impact: {brief.impact}",
        "",
        "Key Responsibilities:",
        _bullets(brief.top_responsibilities),
        "",
        "Requirements:",
        _bullets(brief.requirements),
        "",
        "Benefits:",
        _bullets(brief.benefits),
    ])
    return "\n".join(lines)


def build_script_prompt(brief: StructuredBrief, tone: str, duration_s: float, scene_count: int) -> str:
    plural = "s" if scene_count > 1 else ""
    return f"""Create a {duration_s:g}-second recruitment video script with {scene_count} scene{plural} for this role:

ROLE DETAILS:
{format_role_details(brief)}

---

TONE: {tone}
DURATION: {duration_s:g} seconds total
SCENE COUNT: {scene_count} (generate exactly {scene_count} beat{plural} in the beats array)

HOOK PATTERNS: question ("What if...?"), bold claim, problem/solution, impact-first, contrast.

Focus on ONE core message (impact, growth, culture, innovation or mission) and use
concrete details when available. Generate a script that makes someone want to learn more."""
