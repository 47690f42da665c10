"""
Quality check module.

Structural checks on the final video plus a WCAG contrast check.
"""

from modules.quality_check.process import perform_qc
from modules.quality_check.contrast import check_color_contrast, contrast_ratio, relative_luminance

__all__ = ["perform_qc", "check_color_contrast", "contrast_ratio", "relative_luminance"]
