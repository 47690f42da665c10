"""
Sales pitch module.

Optional stage producing per-scene pitch lines for captions.
"""

from modules.sales_pitch.generator import generate_sales_pitch, make_fallback_pitch

__all__ = ["generate_sales_pitch", "make_fallback_pitch"]
