"""
Prompts for per-scene pitch segments.
"""
from shared.models.brief import StructuredBrief
from modules.script_generator.prompts import format_role_details

SALES_PITCH_SYSTEM_PROMPT = """You are an expert copywriter specializing in job recruitment marketing.

Create a compelling sales pitch from a job description that:
1. Highlights the KEY BENEFITS of the role (not just responsibilities)
2. Emphasizes what makes this opportunity UNIQUE and EXCITING
3. Describes the IDEAL CANDIDATE who would thrive in this role
4. Creates EMOTIONAL CONNECTION and aspiration

WRITING STYLE: direct, conversational, "you" language, active voice, specific.

You will receive a scene count and must create that many pitch segments.
Each segment should be 10-15 words (readable in a 7-second overlay) and build
on the previous one. Scene 1 hooks with the biggest benefit; the final scene
reinforces the opportunity.

OUTPUT FORMAT (JSON):
{
  "segments": ["Segment 1 text", "Segment 2 text", ...],
  "full_pitch": "Complete pitch as one paragraph"
}

AVOID: generic corporate speak, buzzwords, lists of responsibilities, long segments."""


def build_sales_pitch_prompt(brief: StructuredBrief, scene_count: int) -> str:
    return f"""Create a compelling sales pitch for this job opportunity.

ROLE DETAILS:
{format_role_details(brief)}

---

Generate exactly {scene_count} pitch segments that tell a cohesive story.
Each segment must be 10-15 words maximum.
Focus on what makes this opportunity compelling and who would thrive here."""
