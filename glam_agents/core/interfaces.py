"""
Interfaces for the collaborators the pipeline talks to.

Design principles:
- Small, focused interfaces
- Collaborators are registered explicitly, never discovered at runtime
- Each method may be sync or async where noted
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Dict, List, Optional, Tuple, Union

from glam_agents.domain.models import FilterType


# ============= Data Models =============

@dataclass(frozen=True)
class EffectParams:
    """Parameters handed to a rendering engine for one filter"""
    color_hex: str
    intensity: float
    style: Optional[str] = None
    extra: Dict[str, Union[float, str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'colorHex': self.color_hex,
            'intensity': self.intensity,
            'style': self.style,
            **self.extra
        }


@dataclass(frozen=True)
class VisualApproximation:
    """CSS-level stand-in for a filter the engine could not render"""
    filter_type: FilterType
    css_filter: str
    overlay_rgba: Tuple[int, int, int, float]

    @property
    def overlay_css(self) -> str:
        r, g, b, a = self.overlay_rgba
        return f"rgba({r}, {g}, {b}, {a:.2f})"


# ============= Model Interface =============

class IModelClient(ABC):
    """Single-turn text generation"""

    @abstractmethod
    async def generate_text(
        self,
        messages: List[Dict[str, str]],
        image_bytes: Optional[bytes] = None,
        timeout: Optional[float] = None
    ) -> str:
        """Return the model's free-text answer"""
        pass


# ============= Rendering Interfaces =============

class RenderingEngine(ABC):
    """Face-rendering engine with per-type apply methods"""

    @abstractmethod
    def supports(self, filter_type: FilterType) -> bool:
        """Whether the engine exposes an apply method for this type"""
        pass

    @abstractmethod
    def apply_filter(self, filter_type: FilterType, params: EffectParams) -> Union[bool, Awaitable[bool]]:
        """Apply a filter; returns success"""
        pass

    @abstractmethod
    def has_image(self) -> bool:
        """Whether a face/image is currently displayed"""
        pass

    @abstractmethod
    def capture_frame(self) -> Optional[bytes]:
        """Raw pixel buffer of the displayed frame, None when nothing is shown"""
        pass


class UIDriver(ABC):
    """Drives the engine's own controls when no direct handle exists"""

    @abstractmethod
    def query(self, selector: str) -> Optional[Any]:
        """Find the first element matching a selector"""
        pass

    @abstractmethod
    def activate(self, element: Any) -> Union[bool, Awaitable[bool]]:
        """Simulate a click on an element"""
        pass


class VisualSurface(ABC):
    """Visible face surface that accepts CSS-level adjustments"""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether a canvas/video/image is mounted"""
        pass

    @abstractmethod
    def apply_visual(self, approximation: VisualApproximation) -> Union[bool, Awaitable[bool]]:
        """Apply a filter chain and overlay; returns success"""
        pass
