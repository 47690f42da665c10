"""
Shot planner module.

Plans one scene per script beat, with a deterministic fallback.
"""

from modules.shot_planner.planner import generate_shot_plan, make_shot_plan_fallback

__all__ = ["generate_shot_plan", "make_shot_plan_fallback"]
