"""
Ranked ways of making the rendering engine reflect a filter.

Each strategy either reaches a terminal state for the filter (applied or
approximated) or returns None so the next one is tried. Collaborator
exceptions never escape a strategy.
"""

import inspect
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from glam_agents.core.interfaces import EffectParams, VisualApproximation
from glam_agents.domain.models import Filter, FilterState, FilterType
from glam_agents.rendering.context import RenderingContext
from glam_agents.utils.color_math import hex_to_rgb
from setup_logging_optimized import get_logger

logger = get_logger(__name__)


async def _resolve(result: Any) -> Any:
    """Collaborator methods may be sync or async."""
    if inspect.isawaitable(result):
        return await result
    return result


# ============= Style mapping =============

# (keywords, engine style); first match wins
EYESHADOW_STYLES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("cat eye", "cat-eye", "winged"), "cat"),
    (("smokey", "smoky"), "smokey"),
    (("natural", "subtle"), "natural"),
    (("dramatic", "bold"), "dramatic"),
)
EYESHADOW_DEFAULT_STYLE = "smokey"

EYELINER_STYLES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("winged", "cat eye", "cat-eye"), "winged"),
    (("classic", "natural"), "classic"),
    (("bold", "dramatic"), "bold"),
)
EYELINER_DEFAULT_STYLE = "classic"


def _match_style(style: str, table, default: str) -> str:
    text = style.lower()
    for keywords, engine_style in table:
        if any(keyword in text for keyword in keywords):
            return engine_style
    return default


def map_engine_style(filter_type: FilterType, style: Optional[str]) -> Optional[str]:
    """Translate a free-form style word into the engine's vocabulary."""
    if not style:
        return None
    if filter_type == FilterType.EYESHADOW:
        return _match_style(style, EYESHADOW_STYLES, EYESHADOW_DEFAULT_STYLE)
    if filter_type == FilterType.EYELINER:
        return _match_style(style, EYELINER_STYLES, EYELINER_DEFAULT_STYLE)
    return style


def build_effect_params(f: Filter) -> EffectParams:
    return EffectParams(
        color_hex=f.color_hex,
        intensity=f.intensity,
        style=map_engine_style(f.type, f.style),
        extra=dict(f.extra),
    )


# ============= Strategies =============

class ApplicationStrategy(ABC):
    """One way of applying a filter"""

    name = "strategy"

    @abstractmethod
    async def attempt(self, f: Filter, context: RenderingContext) -> Optional[FilterState]:
        """Terminal state on success, None when this strategy did not work"""
        pass


class DirectEngineStrategy(ApplicationStrategy):
    """Call the engine's own apply method for the filter type"""

    name = "direct_engine"

    async def attempt(self, f: Filter, context: RenderingContext) -> Optional[FilterState]:
        engine = context.engine
        if engine is None:
            return None
        try:
            if not engine.supports(f.type):
                return None
            ok = await _resolve(engine.apply_filter(f.type, build_effect_params(f)))
        except Exception as e:
            logger.warning(f"Engine failed to apply {f.type.value}: {e}")
            return None

        if ok:
            logger.debug(f"{f.type.value} applied by engine")
            return FilterState.APPLIED
        return None


# Engine panel sections; anything not listed lives under "Makeup"
UI_SECTIONS: Dict[FilterType, str] = {
    FilterType.LIPSTICK: "Lipstick",
    FilterType.EYESHADOW: "Eyes",
    FilterType.EYELINER: "Eyes",
}


def ui_selectors(filter_type: FilterType) -> List[str]:
    """Ranked selectors for the control that applies a filter type."""
    t = filter_type.value
    section = UI_SECTIONS.get(filter_type, "Makeup")
    return [
        f'[data-filter="{t}"]',
        f".filter-{t}",
        f".preset-{t}",
        f'[data-preset*="{t}"]',
        f'[data-section="{section}"]',
    ]


class UISimulationStrategy(ApplicationStrategy):
    """Click the engine's own control for the filter type"""

    name = "ui_simulation"

    async def attempt(self, f: Filter, context: RenderingContext) -> Optional[FilterState]:
        driver = context.ui_driver
        if driver is None:
            return None

        for selector in ui_selectors(f.type):
            try:
                element = driver.query(selector)
            except Exception as e:
                logger.debug(f"UI query {selector!r} failed: {e}")
                continue
            if element is None:
                continue

            try:
                ok = await _resolve(driver.activate(element))
            except Exception as e:
                logger.warning(f"UI activation of {selector!r} failed: {e}")
                continue
            if ok:
                logger.debug(f"{f.type.value} applied via UI control {selector!r}")
                return FilterState.APPLIED
            logger.debug(f"UI control {selector!r} rejected {f.type.value}, trying next selector")
        return None


# Adjustment at full intensity
BRIGHTNESS_GAIN = 0.05
CONTRAST_GAIN = 0.1
SATURATE_GAIN = 0.2
OVERLAY_MAX_ALPHA = 0.6


def build_visual_approximation(f: Filter) -> VisualApproximation:
    """CSS filter chain and tinted overlay scaled by the filter intensity."""
    i = f.intensity
    css_filter = (
        f"brightness({1 + BRIGHTNESS_GAIN * i:.2f}) "
        f"contrast({1 + CONTRAST_GAIN * i:.2f}) "
        f"saturate({1 + SATURATE_GAIN * i:.2f})"
    )
    r, g, b = hex_to_rgb(f.color_hex)
    alpha = round(OVERLAY_MAX_ALPHA * i, 2)
    return VisualApproximation(filter_type=f.type, css_filter=css_filter, overlay_rgba=(r, g, b, alpha))


class VisualApproximationStrategy(ApplicationStrategy):
    """Tint the visible surface when the engine cannot be driven"""

    name = "visual_approximation"

    async def attempt(self, f: Filter, context: RenderingContext) -> Optional[FilterState]:
        surface = context.visual_surface
        if surface is None:
            return None
        try:
            if not surface.is_available():
                return None
            ok = await _resolve(surface.apply_visual(build_visual_approximation(f)))
        except Exception as e:
            logger.warning(f"Visual approximation of {f.type.value} failed: {e}")
            return None

        if ok:
            logger.debug(f"{f.type.value} approximated on visual surface")
            return FilterState.APPROXIMATED
        return None


def default_strategies() -> List[ApplicationStrategy]:
    return [DirectEngineStrategy(), UISimulationStrategy(), VisualApproximationStrategy()]
