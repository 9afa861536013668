"""
Test filter normalization and color helpers.
"""

import math

from glam_agents.domain.models import FilterType
from glam_agents.interpretation.filter_normalizer import (
    DEFAULT_COLORS,
    DEFAULT_INTENSITIES,
    normalize,
)
from glam_agents.utils.color_math import hex_distance, hex_to_rgb, normalize_hex, rgb_to_hex


def test_hex_helpers():
    """Hex parsing, canonical form and distance."""
    print("\n=== TESTING COLOR MATH ===\n")

    assert normalize_hex("e8a9a9") == "#E8A9A9"
    assert normalize_hex("#e8a9a9") == "#E8A9A9"
    assert normalize_hex("#FFF") is None
    assert normalize_hex("red") is None
    assert normalize_hex(None) is None

    assert hex_to_rgb("#FF0000") == (255, 0, 0)
    assert rgb_to_hex((255, 0, 0)) == "#FF0000"

    assert hex_distance("#FF0000", "#FF0000") == 0
    assert math.isclose(hex_distance("#000000", "#FFFFFF"), math.sqrt(3 * 255 ** 2))

    try:
        hex_to_rgb("not-a-color")
    except ValueError:
        pass
    else:
        raise AssertionError("invalid hex should raise ValueError")

    print("✅ Color helpers OK")


def test_intensity_clamping():
    """Out-of-range and non-numeric intensities end up in [0, 1]."""
    print("\n=== TESTING INTENSITY CLAMPING ===\n")

    high = normalize([{"type": "lipstick", "hex": "#CC0000", "intensity": 1.5}])
    low = normalize([{"type": "blush", "hex": "#FFB6C1", "intensity": -0.2}])
    junk = normalize([{"type": "eyeshadow", "hex": "#444444", "intensity": "abc"}])
    missing = normalize([{"type": "eyeliner", "hex": "#000000"}])
    nan = normalize([{"type": "contour", "intensity": float("nan")}])
    flag = normalize([{"type": "highlighter", "intensity": True}])

    print(f"  1.5 -> {high[0].intensity}, -0.2 -> {low[0].intensity}, 'abc' -> {junk[0].intensity}")

    assert high[0].intensity == 1.0
    assert low[0].intensity == 0.0
    assert junk[0].intensity == DEFAULT_INTENSITIES[FilterType.EYESHADOW]
    assert missing[0].intensity == DEFAULT_INTENSITIES[FilterType.EYELINER]
    assert nan[0].intensity == DEFAULT_INTENSITIES[FilterType.CONTOUR]
    assert flag[0].intensity == DEFAULT_INTENSITIES[FilterType.HIGHLIGHTER]

    for filters in (high, low, junk, missing, nan, flag):
        assert 0.0 <= filters[0].intensity <= 1.0


def test_color_resolution():
    """Colors are read from any accepted key and fall back to the type default."""
    filters = normalize([
        {"type": "lipstick", "colorHex": "#e8a9a9"},
        {"type": "blush", "color_hex": "ffb6c1"},
        {"type": "eyeshadow", "hex": "purple"},
        {"type": "foundation"},
    ])
    colors = {f.type: f.color_hex for f in filters}

    assert colors[FilterType.LIPSTICK] == "#E8A9A9"
    assert colors[FilterType.BLUSH] == "#FFB6C1"
    assert colors[FilterType.EYESHADOW] == DEFAULT_COLORS[FilterType.EYESHADOW]
    assert colors[FilterType.FOUNDATION] == DEFAULT_COLORS[FilterType.FOUNDATION]


def test_duplicate_merge():
    """Duplicate types keep the stronger suggestion; ties keep the first."""
    print("\n=== TESTING DUPLICATE MERGE ===\n")

    merged = normalize([
        {"type": "lipstick", "hex": "#111111", "intensity": 0.3},
        {"type": "lipstick", "hex": "#222222", "intensity": 0.9},
    ])
    assert len(merged) == 1
    assert merged[0].intensity == 0.9
    assert merged[0].color_hex == "#222222"

    tie = normalize([
        {"type": "blush", "hex": "#AAAAAA", "intensity": 0.5},
        {"type": "blush", "hex": "#BBBBBB", "intensity": 0.5},
    ])
    assert len(tie) == 1
    assert tie[0].color_hex == "#AAAAAA"
    print("✅ Duplicates merged")


def test_unknown_types_dropped_and_ordering():
    """Unknown entries are dropped; the rest follow the application order."""
    filters = normalize([
        {"type": "highlighter", "hex": "#FFF3E0"},
        {"type": "mascara", "hex": "#000000"},
        "not a filter",
        {"hex": "#123456"},
        {"type": "blush", "hex": "#E8B4B8"},
        {"type": "eyeliner", "hex": "#614E3E"},
        {"type": "eyeshadow", "hex": "#E6D2B5"},
        {"type": "LIPSTICK", "hex": "#E8A9A9"},
        {"type": "foundation"},
        {"type": "contour"},
    ])
    order = [f.type.value for f in filters]
    print(f"  Order: {order}")

    assert order == [
        "foundation", "lipstick", "eyeshadow", "eyeliner", "blush", "contour", "highlighter"
    ]


def test_secondary_params():
    """Per-type secondary parameters get defaults and are clamped."""
    filters = normalize([
        {"type": "lipstick", "glossiness": 3},
        {"type": "eyeshadow"},
        {"type": "eyeliner", "extra": {"width": 0.2}},
        {"type": "blush", "placement": "Angular"},
        {"type": "foundation"},
    ])
    extra = {f.type: f.extra for f in filters}

    assert extra[FilterType.LIPSTICK] == {"glossiness": 1.0}
    assert extra[FilterType.EYESHADOW] == {"coverage": 0.6}
    assert extra[FilterType.EYELINER] == {"width": 0.2}
    assert extra[FilterType.BLUSH] == {"placement": "angular"}
    assert extra[FilterType.FOUNDATION] == {}


def main():
    test_hex_helpers()
    test_intensity_clamping()
    test_color_resolution()
    test_duplicate_merge()
    test_unknown_types_dropped_and_ordering()
    test_secondary_params()
    print("\n✅ All normalizer tests passed")


if __name__ == "__main__":
    main()
