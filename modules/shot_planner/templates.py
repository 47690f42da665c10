"""
Tone-keyed templates for shot planning.

Used by the deterministic fallback plan and by the model prompt.
"""
from typing import Dict, List

DEFAULT_TONE = "professional"

VISUAL_METAPHORS: Dict[str, List[str]] = {
    "aspirational": [
        "holographic constellations of code over a sunrise city skyline",
        "dynamic system diagrams morphing into real-world outcomes",
        "modern office with team collaborating, warm natural light",
    ],
    "energetic": [
        "fast-paced montage of tech products launching",
        "colorful data visualizations coming to life",
        "vibrant workspace with dynamic team interactions",
    ],
    "professional": [
        "clean modern office spaces with focused professionals",
        "sophisticated data dashboards and analytics",
        "executive team in sleek conference room",
    ],
    "witty": [
        "playful tech metaphors with unexpected twists",
        "clever visual puns on technology concepts",
        "creative team brainstorming with dynamic energy",
    ],
}

MUSIC_MOODS: Dict[str, str] = {
    "aspirational": "upbeat cinematic",
    "energetic": "upbeat electronic",
    "professional": "corporate modern",
    "witty": "playful upbeat",
}
DEFAULT_MUSIC_MOOD = "upbeat cinematic"

STYLE_GUIDES: Dict[str, str] = {
    "aspirational": (
        "CINEMATOGRAPHY: Sweeping camera movements, golden hour lighting, hero shots\n"
        "COLOR PALETTE: Warm tones, sunrise/sunset oranges and golds\n"
        "METAPHORS: Height/elevation, horizons, connectivity, transformation\n"
        "MOOD: Inspiring, uplifting, forward-looking"
    ),
    "energetic": (
        "CINEMATOGRAPHY: Dynamic movement, quick cuts between angles, vibrant colors\n"
        "COLOR PALETTE: Bold, saturated colors - teals, magentas, electric blues\n"
        "METAPHORS: Motion, velocity, collaboration in action, creation\n"
        "MOOD: Fast-paced, exciting, vibrant"
    ),
    "professional": (
        "CINEMATOGRAPHY: Steady, composed shots, sophisticated lighting, clean lines\n"
        "COLOR PALETTE: Cool blues, slate grays, crisp whites, accent colors\n"
        "METAPHORS: Precision, expertise, modern technology, clarity\n"
        "MOOD: Confident, accomplished, refined"
    ),
    "witty": (
        "CINEMATOGRAPHY: Unexpected angles, playful framing, creative compositions\n"
        "COLOR PALETTE: Eclectic but harmonious, pops of unexpected color\n"
        "METAPHORS: Clever juxtapositions, visual puns, delightful surprises\n"
        "MOOD: Clever, warm, human, approachable"
    ),
}

# (title keywords, guidance) checked in order
ROLE_VISUALS = [
    (("engineer", "developer"),
     "- Focus on creation: code, building, problem-solving in action\n"
     "- Show collaboration between engineers in modern, well-lit spaces\n"
     "- Include human elements, not just screens"),
    (("designer", "creative"),
     "- Show creative process: sketching, prototyping, iterating\n"
     "- Emphasize visual thinking: whiteboards, design tools, critiques\n"
     "- Mix digital and analog creative tools"),
    (("data", "analyst"),
     "- Visualize insights emerging from complexity\n"
     "- Show dashboards and patterns with human interpretation\n"
     "- Modern, clean aesthetic with pops of color"),
    (("sales", "account"),
     "- Focus on human connection: conversations, relationships\n"
     "- Show energy, momentum and team celebrations\n"
     "- Modern offices, video calls, presentations"),
    (("manager", "lead"),
     "- Show leadership in action: mentoring, strategy, collaboration\n"
     "- Balance authority with approachability\n"
     "- Modern professional settings with human warmth"),
]
DEFAULT_ROLE_VISUALS = (
    "- Focus on impact: show the human outcome of the work\n"
    "- Include collaboration and team dynamics\n"
    "- Modern, well-designed workplace"
)


def visual_metaphor(index: int, tone: str) -> str:
    metaphors = VISUAL_METAPHORS.get(tone, VISUAL_METAPHORS[DEFAULT_TONE])
    return metaphors[index % len(metaphors)]


def music_mood(tone: str) -> str:
    return MUSIC_MOODS.get(tone, DEFAULT_MUSIC_MOOD)


def style_guide(tone: str) -> str:
    return STYLE_GUIDES.get(tone, STYLE_GUIDES[DEFAULT_TONE])


def role_visuals(title: str) -> str:
    lower_title = title.lower()
    for keywords, guidance in ROLE_VISUALS:
        if any(keyword in lower_title for keyword in keywords):
            return guidance
    return DEFAULT_ROLE_VISUALS
