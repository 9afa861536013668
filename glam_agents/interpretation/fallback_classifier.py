"""
Deterministic keyword classifier used when the model cannot be used.

Maps a prompt onto one of a fixed library of hand-authored looks. Groups are
checked in a fixed priority order, so the same text always yields the same
look and no network access is ever needed.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class LibraryLook:
    """Hand-authored look in raw-suggestion form (fed through the normalizer)."""
    key: str
    style: str
    description: str
    filters: Tuple[Dict[str, Any], ...]
    occasion: Optional[str] = None

    def raw_filters(self) -> List[Dict[str, Any]]:
        return [dict(f) for f in self.filters]


BRIDAL = LibraryLook(
    key="bridal",
    style="Bridal",
    description="Elegant bridal makeup with soft pink tones and subtle shimmer",
    occasion="wedding",
    filters=(
        {"type": "lipstick", "name": "Soft Pink", "hex": "#E8A9A9", "intensity": 0.7, "glossiness": 0.6},
        {"type": "eyeshadow", "name": "Champagne Shimmer", "hex": "#E6D2B5", "intensity": 0.6, "coverage": 0.5},
        {"type": "blush", "name": "Delicate Rose", "hex": "#E8B4B8", "intensity": 0.5, "placement": "natural"},
        {"type": "eyeliner", "name": "Soft Brown", "hex": "#614E3E", "intensity": 0.6, "width": 0.4},
    ),
)

EVENING_GLAMOUR = LibraryLook(
    key="evening",
    style="Evening Glamour",
    description="Dramatic evening makeup with bold eyes and statement lip",
    occasion="evening",
    filters=(
        {"type": "lipstick", "name": "Bold Red", "hex": "#D81E5B", "intensity": 0.8, "glossiness": 0.4},
        {"type": "eyeshadow", "name": "Smoky Charcoal", "hex": "#444444", "intensity": 0.7, "coverage": 0.7,
         "style": "smokey"},
        {"type": "blush", "name": "Deep Rose", "hex": "#C27C88", "intensity": 0.6, "placement": "angular"},
        {"type": "highlighter", "name": "Golden Glow", "hex": "#FFF3E0", "intensity": 0.7, "placement": "prominent"},
    ),
)

PROFESSIONAL = LibraryLook(
    key="professional",
    style="Professional",
    description="Subtle, workplace-appropriate makeup with neutral tones",
    occasion="work",
    filters=(
        {"type": "lipstick", "name": "Muted Mauve", "hex": "#C8A2C8", "intensity": 0.6, "glossiness": 0.3},
        {"type": "eyeshadow", "name": "Taupe Matte", "hex": "#BEA99F", "intensity": 0.5, "coverage": 0.5},
        {"type": "blush", "name": "Subtle Rose", "hex": "#DCAEA9", "intensity": 0.4},
    ),
)

NATURAL = LibraryLook(
    key="natural",
    style="Natural",
    description="Fresh, natural makeup that enhances your features",
    occasion="everyday",
    filters=(
        {"type": "lipstick", "name": "Natural Rose", "hex": "#FF6B6B", "intensity": 0.6, "glossiness": 0.5},
        {"type": "eyeshadow", "name": "Soft Taupe", "hex": "#D2B48C", "intensity": 0.5, "coverage": 0.4},
        {"type": "blush", "name": "Warm Peach", "hex": "#FFAA99", "intensity": 0.4},
    ),
)

# Checked in order; first group with a matching substring wins
KEYWORD_GROUPS: Tuple[Tuple[Tuple[str, ...], LibraryLook], ...] = (
    (("wedding", "bridal", "bride"), BRIDAL),
    (("evening", "night", "party", "glamorous", "dramatic", "bold"), EVENING_GLAMOUR),
    (("professional", "office", "work"), PROFESSIONAL),
)

DEFAULT_LOOK = NATURAL

LOOK_LIBRARY: Dict[str, LibraryLook] = {
    look.key: look for look in (BRIDAL, EVENING_GLAMOUR, PROFESSIONAL, NATURAL)
}


def classify(prompt_text: str) -> LibraryLook:
    """Pick the library look for a prompt."""
    text = (prompt_text or "").lower()
    for keywords, look in KEYWORD_GROUPS:
        if any(keyword in text for keyword in keywords):
            return look
    return DEFAULT_LOOK
