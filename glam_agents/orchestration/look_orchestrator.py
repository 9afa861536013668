"""
Orchestrator for prompt -> look -> engine + product recommendations.

Only the newest submission is live: submitting a prompt cancels the
interpretation/application still running for the previous one, and the
previous reconciliation loop.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from glam_agents.ai.clients import ModelClient
from glam_agents.application.event_bus import EventBus, get_event_bus
from glam_agents.catalog.product_catalog import ProductCatalog, load_catalog
from glam_agents.core.interfaces import IModelClient
from glam_agents.domain.models import CanonicalLook, MatchResult
from glam_agents.exceptions import InvalidConfigError, LookSupersededError
from glam_agents.interpretation.prompt_interpreter import PromptInterpreter
from glam_agents.persistence.look_cache import LookCache
from glam_agents.recommendation.product_matcher import ProductRecommender
from glam_agents.rendering.context import RenderingContext
from glam_agents.rendering.effect_applicator import AppliedLook, EffectApplicator
from glam_agents.rendering.reconciler import ReconciliationLoop
from glam_agents.settings import get_config
from setup_logging_optimized import get_logger

logger = get_logger(__name__)


@dataclass
class LookResult:
    look: CanonicalLook
    applied: AppliedLook
    recommendations: Dict[str, List[MatchResult]] = field(default_factory=dict)
    generation: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'generation': self.generation,
            'look': self.look.to_dict(),
            'filters': [a.to_dict() for a in self.applied.applications],
            'recommendations': {
                filter_type: [m.to_dict() for m in matches]
                for filter_type, matches in self.recommendations.items()
            }
        }


class LookOrchestrator:
    """Wires interpreter, applicator, recommender and reconciliation together."""

    def __init__(
        self,
        interpreter: PromptInterpreter,
        applicator: EffectApplicator,
        recommender: ProductRecommender,
        catalog: ProductCatalog,
        reconciler: Optional[ReconciliationLoop] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.interpreter = interpreter
        self.applicator = applicator
        self.recommender = recommender
        self.catalog = catalog
        self.reconciler = reconciler
        self.event_bus = event_bus or get_event_bus()
        self._generation = 0
        self._current_task: Optional[asyncio.Task] = None

    @property
    def generation(self) -> int:
        return self._generation

    def subscribe(self, event_type: str, handler: Callable) -> None:
        """Listen to filterApplied / lookApplied / productsRecommended."""
        self.event_bus.subscribe(event_type, handler)

    async def submit(self, prompt: str, image_bytes: Optional[bytes] = None) -> LookResult:
        """
        Interpret a prompt, apply the look and recommend products.

        Raises LookSupersededError when a newer submission replaces this one
        before it finishes.
        """
        self._generation += 1
        generation = self._generation

        self._cancel_in_flight()
        logger.info(f"[LOOK_ORCH] Generation {generation}: {prompt!r}")

        task = asyncio.create_task(self._run(prompt, image_bytes, generation))
        self._current_task = task
        try:
            return await task
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.info(f"[LOOK_ORCH] Generation {generation} superseded by {self._generation}")
                raise LookSupersededError(generation, self._generation)
            raise
        finally:
            if self._current_task is task:
                self._current_task = None

    async def shutdown(self) -> None:
        """Cancel the in-flight submission and reconciliation."""
        task = self._current_task
        self._current_task = None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        if self.reconciler is not None:
            await self.reconciler.stop()
        logger.info("[LOOK_ORCH] Shut down")

    def _cancel_in_flight(self) -> None:
        if self._current_task is not None and not self._current_task.done():
            self._current_task.cancel()
        if self.reconciler is not None:
            self.reconciler.cancel()

    def _ensure_current(self, generation: int) -> None:
        if generation != self._generation:
            raise LookSupersededError(generation, self._generation)

    async def _run(self, prompt: str, image_bytes: Optional[bytes], generation: int) -> LookResult:
        look = await self.interpreter.interpret(prompt, image_bytes)
        self._ensure_current(generation)
        logger.info(f"[LOOK_ORCH] Look '{look.style}' ({look.source.value}) with {len(look.filters)} filters")

        applied, recommendations = await asyncio.gather(
            self.applicator.apply(look),
            self.recommender.recommend(look, self.catalog),
        )
        self._ensure_current(generation)

        if self.reconciler is not None and not applied.all_applied:
            logger.info(f"[LOOK_ORCH] Reconciling {len(applied.unapplied)} unapplied filters")
            self.reconciler.start(applied)

        return LookResult(
            look=look,
            applied=applied,
            recommendations=recommendations,
            generation=generation
        )


def build_default_orchestrator(
    context: RenderingContext,
    catalog: Optional[ProductCatalog] = None,
    event_bus: Optional[EventBus] = None,
    model_client: Optional[IModelClient] = None,
) -> LookOrchestrator:
    """Build an orchestrator from the environment configuration."""
    config = get_config()
    bus = event_bus or get_event_bus()

    if model_client is None:
        try:
            model_client = ModelClient(
                config.model.model,
                temperature=config.model.temperature,
                max_tokens=config.model.max_tokens
            )
        except ValueError as e:
            raise InvalidConfigError(f"Unsupported MAKEUP_MODEL {config.model.model!r}", cause=e)

    interpreter = PromptInterpreter(
        model_client,
        cache=LookCache(config.cache.max_entries, config.cache.ttl_seconds),
        timeout=config.model.timeout_seconds
    )
    applicator = EffectApplicator(context, event_bus=bus)
    reconciler = ReconciliationLoop(
        applicator,
        interval=config.rendering.reconcile_interval,
        max_attempts=config.rendering.reconcile_max_attempts
    )
    recommender = ProductRecommender(top_k=config.recommendation.top_k, event_bus=bus)

    if catalog is None:
        catalog = load_catalog(config.recommendation.catalog_path)

    return LookOrchestrator(
        interpreter=interpreter,
        applicator=applicator,
        recommender=recommender,
        catalog=catalog,
        reconciler=reconciler,
        event_bus=bus
    )
