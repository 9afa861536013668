"""
Shared helpers.
"""

from glam_agents.utils.color_math import (
    HEX_PATTERN,
    is_valid_hex,
    normalize_hex,
    hex_to_rgb,
    rgb_to_hex,
    color_distance,
    hex_distance
)

__all__ = [
    'HEX_PATTERN',
    'is_valid_hex',
    'normalize_hex',
    'hex_to_rgb',
    'rgb_to_hex',
    'color_distance',
    'hex_distance'
]
