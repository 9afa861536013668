"""
Explicit registry of the rendering collaborators available to the applicator.

The composition root registers whatever the host provides (engine, UI
driver, visual surface). Each registration is checked against its interface
so a wrong object fails at startup rather than mid-look.
"""

from enum import Enum
from typing import Any, Dict, Optional, Type

from glam_agents.core.interfaces import RenderingEngine, UIDriver, VisualSurface
from glam_agents.exceptions import CapabilityError
from setup_logging_optimized import get_logger

logger = get_logger(__name__)


class Capability(str, Enum):
    ENGINE = "engine"
    UI_DRIVER = "ui_driver"
    VISUAL_SURFACE = "visual_surface"


CAPABILITY_INTERFACES: Dict[Capability, Type] = {
    Capability.ENGINE: RenderingEngine,
    Capability.UI_DRIVER: UIDriver,
    Capability.VISUAL_SURFACE: VisualSurface,
}


class CapabilityRegistry:
    """Capability -> implementation, validated on registration."""

    def __init__(self):
        self._implementations: Dict[Capability, Any] = {}

    def register(self, capability: Capability, implementation: Any) -> None:
        capability = Capability(capability)
        interface = CAPABILITY_INTERFACES[capability]
        if not isinstance(implementation, interface):
            raise CapabilityError(
                f"{type(implementation).__name__} does not implement {interface.__name__}",
                context={'capability': capability.value}
            )
        self._implementations[capability] = implementation
        logger.debug(f"Registered {type(implementation).__name__} as {capability.value}")

    def get(self, capability: Capability) -> Optional[Any]:
        return self._implementations.get(Capability(capability))

    def has(self, capability: Capability) -> bool:
        return Capability(capability) in self._implementations


def _is_blank(frame: Optional[bytes]) -> bool:
    return not frame or not any(frame)


class RenderingContext:
    """Collaborators handed to the effect applicator."""

    def __init__(
        self,
        engine: Optional[RenderingEngine] = None,
        ui_driver: Optional[UIDriver] = None,
        visual_surface: Optional[VisualSurface] = None,
        registry: Optional[CapabilityRegistry] = None,
    ):
        self.registry = registry or CapabilityRegistry()
        if engine is not None:
            self.registry.register(Capability.ENGINE, engine)
        if ui_driver is not None:
            self.registry.register(Capability.UI_DRIVER, ui_driver)
        if visual_surface is not None:
            self.registry.register(Capability.VISUAL_SURFACE, visual_surface)

    @property
    def engine(self) -> Optional[RenderingEngine]:
        return self.registry.get(Capability.ENGINE)

    @property
    def ui_driver(self) -> Optional[UIDriver]:
        return self.registry.get(Capability.UI_DRIVER)

    @property
    def visual_surface(self) -> Optional[VisualSurface]:
        return self.registry.get(Capability.VISUAL_SURFACE)

    def surface_available(self) -> bool:
        """
        Whether there is a face to render onto.

        With an engine registered, the engine decides (an image is reported
        or the captured frame is not blank). Without one, the visual surface
        decides.
        """
        engine = self.engine
        if engine is not None:
            try:
                if engine.has_image():
                    return True
                return not _is_blank(engine.capture_frame())
            except Exception as e:
                logger.warning(f"Engine surface check failed: {e}")
                return False

        surface = self.visual_surface
        if surface is not None:
            try:
                return bool(surface.is_available())
            except Exception as e:
                logger.warning(f"Visual surface check failed: {e}")
                return False
        return False
