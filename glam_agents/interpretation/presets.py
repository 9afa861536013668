"""Ready-made styling prompts offered next to the free-text input."""

from dataclasses import dataclass, asdict
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Preset:
    name: str
    description: str
    prompt: str
    category: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


PRESETS: Dict[str, List[Preset]] = {
    "natural": [
        Preset(
            name="Fresh Faced",
            description="Light, natural makeup for everyday wear",
            prompt="Apply a natural makeup look with light foundation, subtle blush, neutral eyeshadow, and tinted lip balm",
            category="natural",
        ),
        Preset(
            name="No Makeup Look",
            description="Enhances features without looking made up",
            prompt="Apply a no-makeup makeup look with tinted moisturizer, clear brow gel, curled lashes, and a hint of lip color",
            category="natural",
        ),
    ],
    "glamorous": [
        Preset(
            name="Night Out",
            description="Bold, evening-ready makeup",
            prompt="Apply glamorous evening makeup with full coverage foundation, contour, highlight, smokey eyes, and deep red lipstick",
            category="glamorous",
        ),
        Preset(
            name="Red Carpet",
            description="High-impact, photo-ready look",
            prompt="Apply red carpet makeup with flawless foundation, sharp contour, dramatic winged liner, false lashes, and a bold lip",
            category="glamorous",
        ),
    ],
    "creative": [
        Preset(
            name="Festival Ready",
            description="Colorful, expressive makeup",
            prompt="Apply festival makeup with colorful eyeshadow, glitter, face gems, and a bold lip color",
            category="creative",
        ),
        Preset(
            name="Artistic Expression",
            description="Unique, artistic makeup",
            prompt="Apply artistic makeup with graphic liner, color blocking eyeshadow, and an ombré lip",
            category="creative",
        ),
    ],
}


def list_presets(category: Optional[str] = None) -> List[Preset]:
    """All presets, or those of one category (unknown category -> [])."""
    if category is not None:
        return list(PRESETS.get(category, []))
    return [preset for presets in PRESETS.values() for preset in presets]


def get_preset(name: str) -> Optional[Preset]:
    wanted = name.strip().lower()
    for preset in list_presets():
        if preset.name.lower() == wanted:
            return preset
    return None
