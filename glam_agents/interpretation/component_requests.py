"""
Per-component intensity requests spelled out in the prompt.

Phrases such as "bold lips", "rosy cheeks" or "subtle contour" pin the
intensity of one component regardless of what the model or the keyword
classifier suggested. Requested components missing from the look are added
with their default color.
"""

from typing import Dict, List, Tuple

from glam_agents.domain.models import CanonicalLook, FilterType
from glam_agents.interpretation.filter_normalizer import clamp_unit, normalize
from setup_logging_optimized import get_logger

logger = get_logger(__name__)

STRONG = 1.0
MEDIUM = 0.7
SUBTLE = 0.4

COMPONENT_KEYWORDS: Dict[FilterType, List[Tuple[float, Tuple[str, ...]]]] = {
    FilterType.LIPSTICK: [
        (STRONG, ("bold lips", "dark lips", "red lips", "vibrant lips", "dramatic lips")),
        (MEDIUM, ("medium lips", "pink lips", "coral lips", "colored lips")),
        (SUBTLE, ("subtle lips", "light lips", "natural lips", "nude lips")),
    ],
    FilterType.EYESHADOW: [
        (STRONG, ("dramatic eyes", "smokey eyes", "smoky eyes", "bold eyeshadow", "colorful eyeshadow")),
        (MEDIUM, ("medium eyeshadow", "moderate eye makeup", "visible eyeshadow")),
        (SUBTLE, ("subtle eyeshadow", "light eyeshadow", "natural eye makeup")),
    ],
    FilterType.FOUNDATION: [
        (STRONG, ("full coverage", "heavy foundation", "flawless base")),
        (MEDIUM, ("medium coverage", "foundation", "even skin tone")),
        (SUBTLE, ("light coverage", "natural foundation", "sheer base")),
    ],
    FilterType.BLUSH: [
        (STRONG, ("heavy blush", "bright cheeks", "vibrant blush", "rosy cheeks")),
        (MEDIUM, ("medium blush", "visible blush", "pink cheeks")),
        (SUBTLE, ("subtle blush", "light blush", "natural cheeks")),
    ],
    FilterType.CONTOUR: [
        (STRONG, ("defined contour", "sharp contour", "heavy contour", "sculpted face")),
        (MEDIUM, ("medium contour", "visible contour", "defined cheekbones")),
        (SUBTLE, ("subtle contour", "light contour", "natural definition")),
    ],
    FilterType.HIGHLIGHTER: [
        (STRONG, ("intense highlight", "glowing highlight", "dramatic highlighter")),
        (MEDIUM, ("medium highlight", "visible glow", "shimmery")),
        (SUBTLE, ("subtle highlight", "natural glow", "light highlighter")),
    ],
}


def extract_component_requests(prompt_text: str) -> Dict[FilterType, float]:
    """
    Map each component named in the prompt to its requested intensity.

    The longest matching phrase wins, so "natural foundation" is subtle even
    though it also contains the medium keyword "foundation".
    """
    text = " ".join((prompt_text or "").lower().split())
    requests: Dict[FilterType, float] = {}

    for filter_type, levels in COMPONENT_KEYWORDS.items():
        best = None
        for intensity, phrases in levels:
            for phrase in phrases:
                if phrase in text and (best is None or len(phrase) > len(best[1])):
                    best = (intensity, phrase)
        if best is not None:
            requests[filter_type] = best[0]

    return requests


def apply_component_requests(look: CanonicalLook, requests: Dict[FilterType, float]) -> CanonicalLook:
    """Copy of the look with requested intensities enforced."""
    if not requests:
        return look

    raw_filters = []
    for f in look.filters:
        raw = f.to_dict()
        if f.type in requests:
            raw['intensity'] = clamp_unit(requests[f.type])
        raw_filters.append(raw)

    present = set(look.filter_types)
    for filter_type, intensity in requests.items():
        if filter_type not in present:
            raw_filters.append({'type': filter_type.value, 'intensity': clamp_unit(intensity)})

    logger.info(
        "Component requests enforced: "
        + ", ".join(f"{t.value}={v}" for t, v in requests.items())
    )
    return CanonicalLook(
        filters=tuple(normalize(raw_filters)),
        style=look.style,
        description=look.description,
        source=look.source,
        occasion=look.occasion,
    )
