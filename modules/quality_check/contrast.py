"""
WCAG color contrast.
"""
from typing import Tuple

# WCAG AA threshold for normal body text
MIN_CONTRAST_RATIO = 4.5


def _hex_to_rgb(hex_color: str) -> Tuple[float, float, float]:
    value = hex_color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected #RRGGBB, got '{hex_color}'")
    return tuple(int(value[i:i + 2], 16) / 255 for i in (0, 2, 4))


def _linearize(channel: float) -> float:
    if channel <= 0.03928:
        return channel / 12.92
    return ((channel + 0.055) / 1.055) ** 2.4


def relative_luminance(hex_color: str) -> float:
    """Relative luminance of an sRGB color (0 for black, 1 for white)."""
    r, g, b = (_linearize(c) for c in _hex_to_rgb(hex_color))
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(first_hex: str, second_hex: str) -> float:
    """Contrast ratio between two colors, from 1.0 to 21.0."""
    l1 = relative_luminance(first_hex)
    l2 = relative_luminance(second_hex)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def check_color_contrast(first_hex: str, second_hex: str) -> bool:
    """True when the pair meets the 4.5:1 threshold."""
    return contrast_ratio(first_hex, second_hex) >= MIN_CONTRAST_RATIO
