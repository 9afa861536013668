"""
Effect application: drives a CanonicalLook onto the rendering engine.

Every filter walks pending -> applying -> applied | approximated | failed.
Strategies are tried in rank order; failures are recorded on the filter,
never raised.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from glam_agents.application.event_bus import EventBus, Events, get_event_bus
from glam_agents.domain.models import CanonicalLook, Filter, FilterState, FilterType
from glam_agents.exceptions import NoRenderableSurfaceError
from glam_agents.rendering.context import RenderingContext
from glam_agents.rendering.strategies import ApplicationStrategy, default_strategies
from setup_logging_optimized import get_logger

logger = get_logger(__name__)


@dataclass
class FilterApplication:
    """Mutable application record for one filter of a look"""
    filter: Filter
    state: FilterState = FilterState.PENDING
    strategy: Optional[str] = None
    attempts: int = 0
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.filter.type.value,
            'state': self.state.value,
            'strategy': self.strategy,
            'attempts': self.attempts,
            'error': self.error
        }


@dataclass
class AppliedLook:
    """Outcome of applying a look, updated in place by reconciliation"""
    look: CanonicalLook
    applications: List[FilterApplication] = field(default_factory=list)

    @classmethod
    def for_look(cls, look: CanonicalLook) -> 'AppliedLook':
        return cls(look=look, applications=[FilterApplication(filter=f) for f in look.filters])

    def state_of(self, filter_type: FilterType) -> Optional[FilterState]:
        wanted = FilterType(filter_type)
        for application in self.applications:
            if application.filter.type == wanted:
                return application.state
        return None

    @property
    def states(self) -> Dict[str, str]:
        return {a.filter.type.value: a.state.value for a in self.applications}

    @property
    def all_applied(self) -> bool:
        return all(a.state == FilterState.APPLIED for a in self.applications)

    @property
    def unapplied(self) -> List[FilterApplication]:
        return [a for a in self.applications if a.state != FilterState.APPLIED]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'look': self.look.to_dict(),
            'filters': [a.to_dict() for a in self.applications]
        }


class EffectApplicator:
    """Applies looks through a ranked list of strategies."""

    def __init__(
        self,
        context: RenderingContext,
        strategies: Optional[List[ApplicationStrategy]] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.context = context
        self.strategies = strategies if strategies is not None else default_strategies()
        self.event_bus = event_bus or get_event_bus()

    async def apply(self, look: CanonicalLook) -> AppliedLook:
        """Run one pass over every filter, then announce the look."""
        applied = AppliedLook.for_look(look)
        for application in applied.applications:
            await self.attempt_filter(application)

        logger.info(f"Look '{look.style}' applied: {applied.states}")
        await self.event_bus.emit(Events.LOOK_APPLIED, {
            'look': look.to_dict(),
            'filters': [a.to_dict() for a in applied.applications]
        })
        return applied

    async def attempt_filter(self, application: FilterApplication) -> FilterState:
        """
        One attempt at a filter: surface check, then each strategy in order.

        Emits filterApplied when the terminal state differs from the previous one.
        """
        previous = application.state
        application.state = FilterState.APPLYING
        application.attempts += 1
        f = application.filter

        new_state = FilterState.FAILED
        strategy_name = None
        error = None

        if not self.context.surface_available():
            error = str(NoRenderableSurfaceError(
                "No face image available to render onto",
                context={'filter_type': f.type.value}
            ))
            logger.debug(error)
        else:
            for strategy in self.strategies:
                state = await strategy.attempt(f, self.context)
                if state is not None:
                    new_state = state
                    strategy_name = strategy.name
                    break
            else:
                error = f"No strategy could apply {f.type.value}"
                logger.debug(error)

        application.state = new_state
        application.strategy = strategy_name
        application.error = error

        if new_state != previous:
            await self.event_bus.emit(Events.FILTER_APPLIED, {
                'type': f.type.value,
                'state': new_state.value,
                'colorHex': f.color_hex,
                'intensity': f.intensity
            })
        return new_state
