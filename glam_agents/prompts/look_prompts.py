"""
Look Interpretation Prompts

This module contains the prompts used to ask a language model for makeup
filter settings.
"""

from typing import Dict, List

from glam_agents.domain.models import FilterType


SYSTEM_PROMPT = (
    "You are a professional makeup artist AI. You translate styling requests "
    "into concrete makeup filter settings. Always return valid JSON in the exact "
    "format requested and nothing else."
)

RESPONSE_FORMAT = """{
  "filters": [
    {
      "type": "lipstick",
      "color": "specific descriptive name",
      "hex": "#HEX_COLOR",
      "intensity": 0.X (float between 0.1 and 1.0),
      "glossiness": 0.X (optional, float between 0 and 1.0)
    },
    {
      "type": "eyeshadow",
      "color": "specific descriptive name",
      "hex": "#HEX_COLOR",
      "intensity": 0.X,
      "coverage": 0.X (optional),
      "style": "natural|smokey|cat|dramatic (optional)"
    },
    {
      "type": "eyeliner",
      "color": "specific descriptive name",
      "hex": "#HEX_COLOR",
      "intensity": 0.X,
      "width": 0.X (optional),
      "style": "classic|winged|bold (optional)"
    },
    {
      "type": "blush",
      "color": "specific descriptive name",
      "hex": "#HEX_COLOR",
      "intensity": 0.X,
      "placement": "natural|angular|prominent (optional)"
    }
  ],
  "style": "descriptive style name",
  "description": "Brief 1-2 sentence description of this makeup look",
  "occasion": "optional occasion, e.g. wedding, evening, work"
}"""

OCCASION_GUIDANCE: Dict[str, str] = {
    "wedding": """SPECIFIC OCCASION GUIDANCE - WEDDING:
- Focus on elegant, timeless makeup that photographs well
- Aim for a look that will last all day and night
- Avoid makeup that's too trendy and may look dated in photos""",
    "party": """SPECIFIC OCCASION GUIDANCE - PARTY/NIGHT OUT:
- Create a bold, eye-catching look suitable for evening lighting
- Suggest colors with higher intensity and pigmentation""",
    "natural": """SPECIFIC OCCASION GUIDANCE - NATURAL/EVERYDAY:
- Focus on enhancing natural features with subtle colors
- Keep intensities low and buildable""",
    "professional": """SPECIFIC OCCASION GUIDANCE - PROFESSIONAL SETTING:
- Focus on neutral colors that appear put-together but not distracting
- Recommend makeup that will last through a full workday""",
}

# Order matters: the first matching occasion adds its guidance
_OCCASION_TRIGGERS = (
    ("wedding", ("wedding", "bridal", "bride")),
    ("party", ("party", "night out", "evening")),
    ("natural", ("natural", "everyday")),
    ("professional", ("office", "work", "professional")),
)


def get_occasion_guidance(user_prompt: str) -> str:
    """Extra guidance for recognizable occasions; empty string otherwise."""
    text = user_prompt.lower()
    for occasion, triggers in _OCCASION_TRIGGERS:
        if any(trigger in text for trigger in triggers):
            return OCCASION_GUIDANCE[occasion]
    return ""


def get_look_prompt(user_prompt: str, has_image: bool = False) -> str:
    """Generate the user prompt asking for filter settings."""
    allowed_types = ", ".join(f'"{t}"' for t in FilterType.values())

    image_section = ""
    if has_image:
        image_section = """
An image of the face is attached. Consider skin tone, undertone and eye color
when choosing colors, and keep the palette harmonious.
"""

    guidance = get_occasion_guidance(user_prompt)
    guidance_section = f"\n{guidance}\n" if guidance else ""

    return f"""Analyze the following makeup request and suggest appropriate makeup filters.

Request: "{user_prompt}"
{image_section}{guidance_section}
Based on this request, provide JSON output with specific makeup filter settings that would look good for this style.
Allowed filter types: {allowed_types}. Use each type at most once.
The output should be in this exact format:

{RESPONSE_FORMAT}

Include at least lipstick, eyeshadow, and blush. Only include valid JSON, nothing else."""


def get_look_messages(user_prompt: str, has_image: bool = False) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": get_look_prompt(user_prompt, has_image=has_image)},
    ]
