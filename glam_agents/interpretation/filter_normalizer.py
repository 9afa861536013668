"""
Filter normalization.

Turns arbitrary filter suggestions (model output or classifier library
entries) into a canonical list: known types only, one filter per type,
intensities clamped into [0, 1], colors in "#RRGGBB" form, ordered by the
application priority.
"""

import math
from typing import Any, Dict, List, Optional, Union

from glam_agents.domain.models import Filter, FilterType, priority_of
from glam_agents.exceptions import UnknownFilterTypeError
from glam_agents.utils.color_math import normalize_hex
from setup_logging_optimized import get_logger

logger = get_logger(__name__)


DEFAULT_INTENSITIES: Dict[FilterType, float] = {
    FilterType.LIPSTICK: 0.8,
    FilterType.EYESHADOW: 0.7,
    FilterType.BLUSH: 0.6,
    FilterType.FOUNDATION: 0.7,
    FilterType.EYELINER: 0.8,
    FilterType.HIGHLIGHTER: 0.6,
    FilterType.CONTOUR: 0.6,
}

DEFAULT_COLORS: Dict[FilterType, str] = {
    FilterType.LIPSTICK: "#FF6B6B",
    FilterType.EYESHADOW: "#D8BFD8",
    FilterType.EYELINER: "#4A4A4A",
    FilterType.BLUSH: "#FFB6C1",
    FilterType.FOUNDATION: "#F5DEB3",
    FilterType.HIGHLIGHTER: "#FFF0DB",
    FilterType.CONTOUR: "#CCCCCC",
}

# Secondary parameter per type: (name, default). Numeric ones are clamped.
SECONDARY_PARAMS: Dict[FilterType, tuple] = {
    FilterType.LIPSTICK: ("glossiness", 0.5),
    FilterType.EYESHADOW: ("coverage", 0.6),
    FilterType.EYELINER: ("width", 0.5),
    FilterType.BLUSH: ("placement", "natural"),
    FilterType.CONTOUR: ("placement", "natural"),
    FilterType.HIGHLIGHTER: ("placement", "natural"),
}

_COLOR_KEYS = ("colorHex", "color_hex", "hex")


def clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def resolve_filter_type(value: Any) -> FilterType:
    """Map a raw type value onto FilterType, raising UnknownFilterTypeError."""
    if isinstance(value, FilterType):
        return value
    if isinstance(value, str):
        try:
            return FilterType(value.strip().lower())
        except ValueError:
            pass
    raise UnknownFilterTypeError(value)


def resolve_intensity(filter_type: FilterType, value: Any) -> float:
    if _is_number(value):
        return clamp_unit(value)
    # Numeric strings are as good as numbers
    if isinstance(value, str):
        try:
            parsed = float(value)
        except ValueError:
            parsed = None
        if parsed is not None and not math.isnan(parsed):
            return clamp_unit(parsed)
    return DEFAULT_INTENSITIES[filter_type]


def resolve_color(filter_type: FilterType, raw: Dict[str, Any]) -> str:
    for key in _COLOR_KEYS:
        canonical = normalize_hex(raw.get(key))
        if canonical:
            return canonical
    return DEFAULT_COLORS[filter_type]


def resolve_extra(filter_type: FilterType, raw: Dict[str, Any]) -> Dict[str, Union[float, str]]:
    secondary = SECONDARY_PARAMS.get(filter_type)
    if secondary is None:
        return {}

    name, default = secondary
    nested = raw.get("extra") if isinstance(raw.get("extra"), dict) else {}
    value = raw.get(name, nested.get(name))

    if isinstance(default, float):
        value = clamp_unit(value) if _is_number(value) else default
    elif not isinstance(value, str) or not value.strip():
        value = default
    else:
        value = value.strip().lower()
    return {name: value}


def _optional_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def build_filter(raw: Dict[str, Any]) -> Filter:
    """Build one Filter from a raw suggestion (raises UnknownFilterTypeError)."""
    filter_type = resolve_filter_type(raw.get("type"))
    return Filter(
        type=filter_type,
        color_hex=resolve_color(filter_type, raw),
        intensity=resolve_intensity(filter_type, raw.get("intensity")),
        style=_optional_text(raw.get("style")),
        name=_optional_text(raw.get("name")) or _optional_text(raw.get("color")),
        extra=resolve_extra(filter_type, raw),
    )


def normalize(raw_filters: List[Dict[str, Any]]) -> List[Filter]:
    """
    Normalize raw filter suggestions into a canonical, ordered list.

    Duplicate types keep the entry with the higher intensity; on a tie the
    first one seen wins.
    """
    by_type: Dict[FilterType, Filter] = {}

    for raw in raw_filters or []:
        if not isinstance(raw, dict):
            logger.warning(f"Dropping non-object filter suggestion: {raw!r}")
            continue
        try:
            candidate = build_filter(raw)
        except UnknownFilterTypeError as e:
            logger.warning(f"Dropping filter suggestion: {e}")
            continue

        current = by_type.get(candidate.type)
        if current is None:
            by_type[candidate.type] = candidate
        elif candidate.intensity > current.intensity:
            logger.debug(
                f"Merging duplicate {candidate.type.value}: "
                f"{current.intensity} -> {candidate.intensity}"
            )
            by_type[candidate.type] = candidate

    # dicts keep first-insertion order, sorted() is stable
    return sorted(by_type.values(), key=lambda f: priority_of(f.type))
