"""
Scene generator configuration.

Engine identifiers, polling limits for long-running generation, clip
validation thresholds, and cost lookup.
"""
from typing import Dict

from shared.logging import get_logger

logger = get_logger("scene_generator.config")

# Engine identifiers accepted on a render request
ENGINE_TEMPLATE = "template"
ENGINE_VEO3 = "veo3"
ENGINE_SORA2 = "sora2"
SUPPORTED_ENGINES = (ENGINE_TEMPLATE, ENGINE_VEO3, ENGINE_SORA2)

# Veo long-running operation polling (10s * 60 = 10 minute ceiling)
POLL_INTERVAL_SECONDS = 10
MAX_POLLS = 60
VEO_ASPECT_RATIO = "9:16"

# Downloaded clip validation
MIN_CLIP_BYTES = 1000
SETTLE_DELAY_SECONDS = 0.5

# Template clip gradient (top color comes from the brand)
TEMPLATE_TOP_COLOR = "#0B5FFF"
TEMPLATE_BOTTOM_COLOR = "#111827"

# Estimated cost in cents
# Template is flat per render; generated engines are per scene
ENGINE_COST_CENTS: Dict[str, int] = {
    ENGINE_TEMPLATE: 1,
    ENGINE_VEO3: 40,
    ENGINE_SORA2: 50,
}


def resolve_engine(engine: str) -> str:
    """Map a requested engine to a supported one (unknown -> template)."""
    normalized = (engine or "").strip().lower()
    if normalized not in SUPPORTED_ENGINES:
        if normalized:
            logger.warning(
                f"Unknown engine '{engine}', using template",
                extra={"engine": engine}
            )
        return ENGINE_TEMPLATE
    return normalized


def estimate_cost_cents(engine: str, scene_count: int) -> int:
    """
    Estimate render cost in cents.

    Args:
        engine: Requested engine identifier
        scene_count: Number of scenes

    Returns:
        Estimated cost in whole cents
    """
    engine = resolve_engine(engine)
    if engine == ENGINE_TEMPLATE:
        return ENGINE_COST_CENTS[ENGINE_TEMPLATE]
    return ENGINE_COST_CENTS[engine] * scene_count
