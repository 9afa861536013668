"""Hex/RGB conversion and RGB distance helpers."""

import math
import re
from typing import Optional, Tuple

HEX_PATTERN = re.compile(r"^#?[0-9a-fA-F]{6}$")

RGB = Tuple[int, int, int]


def is_valid_hex(value) -> bool:
    return isinstance(value, str) and bool(HEX_PATTERN.match(value.strip()))


def normalize_hex(value) -> Optional[str]:
    """Canonical "#RRGGBB" form, or None when the value is not a 6-digit hex color."""
    if not is_valid_hex(value):
        return None
    return "#" + value.strip().lstrip("#").upper()


def hex_to_rgb(hex_color: str) -> RGB:
    """Convert hex color to RGB."""
    canonical = normalize_hex(hex_color)
    if canonical is None:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    digits = canonical[1:]
    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))


def rgb_to_hex(rgb: RGB) -> str:
    r, g, b = (max(0, min(255, int(round(c)))) for c in rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


def color_distance(a: RGB, b: RGB) -> float:
    """Euclidean distance in RGB space."""
    return math.sqrt(sum((x - y) ** 2 for x, y in zip(a, b)))


def hex_distance(hex_a: str, hex_b: str) -> float:
    return color_distance(hex_to_rgb(hex_a), hex_to_rgb(hex_b))
