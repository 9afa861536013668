"""
End-to-end tests for the look orchestrator: prompt -> look -> engine ->
recommendations, plus supersession of older submissions.
"""

import asyncio

from glam_agents.application.event_bus import EventBus, Events
from glam_agents.core.interfaces import IModelClient, RenderingEngine
from glam_agents.domain.models import FilterState, FilterType, LookSource, Product
from glam_agents.exceptions import LookSupersededError, ModelUnavailableError
from glam_agents.interpretation.prompt_interpreter import PromptInterpreter
from glam_agents.orchestration.look_orchestrator import LookOrchestrator, build_default_orchestrator
from glam_agents.persistence.look_cache import LookCache
from glam_agents.recommendation.product_matcher import ProductRecommender
from glam_agents.rendering.context import RenderingContext
from glam_agents.rendering.effect_applicator import EffectApplicator
from glam_agents.rendering.reconciler import ReconciliationLoop


class UnavailableModel(IModelClient):
    async def generate_text(self, messages, image_bytes=None, timeout=None):
        raise ModelUnavailableError("no credentials")


class GatedModel(IModelClient):
    """Hangs on prompts mentioning "zzz-hold", fails fast otherwise."""

    async def generate_text(self, messages, image_bytes=None, timeout=None):
        if "zzz-hold" in messages[-1]["content"]:
            await asyncio.sleep(10)
        raise ModelUnavailableError("no credentials")


class RecordingEngine(RenderingEngine):
    def __init__(self, has_image=True):
        self.image = has_image
        self.applied = []

    def supports(self, filter_type):
        return True

    def apply_filter(self, filter_type, params):
        self.applied.append((filter_type, params.color_hex))
        return True

    def has_image(self):
        return self.image

    def capture_frame(self):
        return None


CATALOG = {
    "lipstick": [
        Product(id="red", name="Classic Red", brand="BeautyGlow", price=18.99, category="lipstick", color_hex="#CC0000"),
        Product(id="soft-pink", name="Soft Pink", brand="Bridal Co", price=21.0, category="lipstick", color_hex="#E8A9A9"),
        Product(id="nude", name="Nude Elegance", brand="NaturalBeauty", price=15.99, category="lipstick", color_hex="#CC9966"),
    ],
    "eyeshadow": [
        Product(id="neutral", name="Neutral Essentials", brand="NaturalBeauty", price=28.99, category="eyeshadow",
                shades=("#F5DEB3", "#D2B48C")),
    ],
}


def build_orchestrator(model, engine, bus, reconcile_interval=0.01):
    applicator = EffectApplicator(RenderingContext(engine=engine), event_bus=bus)
    return LookOrchestrator(
        interpreter=PromptInterpreter(model, cache=LookCache(), timeout=30),
        applicator=applicator,
        recommender=ProductRecommender(top_k=2, event_bus=bus),
        catalog=CATALOG,
        reconciler=ReconciliationLoop(applicator, interval=reconcile_interval, max_attempts=3),
        event_bus=bus,
    )


def test_wedding_makeup_end_to_end():
    """Model unavailable: 'wedding makeup' yields the bridal look and a matching lipstick."""
    print("\n=== TESTING END TO END: WEDDING MAKEUP ===\n")

    bus = EventBus()
    looks_applied = []
    bus.subscribe(Events.LOOK_APPLIED, lambda data: looks_applied.append(data))
    engine = RecordingEngine()
    orchestrator = build_orchestrator(UnavailableModel(), engine, bus)

    async def run():
        result = await orchestrator.submit("wedding makeup")
        await orchestrator.shutdown()
        return result

    result = asyncio.run(run())
    look = result.look

    print(f"  Style: {look.style}")
    print(f"  Filters: {[(f.type.value, f.color_hex) for f in look.filters]}")
    print(f"  Top lipstick: {result.recommendations['lipstick'][0].product.name}")

    assert look.style == "Bridal"
    assert look.source == LookSource.FALLBACK
    assert set(look.filter_types) == {
        FilterType.LIPSTICK, FilterType.EYESHADOW, FilterType.BLUSH, FilterType.EYELINER
    }
    assert look.get_filter("lipstick").color_hex == "#E8A9A9"
    assert look.get_filter("eyeshadow").color_hex == "#E6D2B5"

    top = result.recommendations["lipstick"][0]
    assert top.product.id == "soft-pink"
    assert top.distance == 0
    assert result.recommendations["blush"] == []

    assert result.applied.all_applied
    assert all(a.state == FilterState.APPLIED for a in result.applied.applications)
    assert [t for t, _ in engine.applied] == list(look.filter_types)
    assert len(looks_applied) == 1
    assert result.generation == 1
    assert result.to_dict()["look"]["style"] == "Bridal"


def test_newer_prompt_supersedes_older():
    """A second submission cancels the first, which never announces a look."""
    print("\n=== TESTING SUPERSESSION ===\n")

    bus = EventBus()
    looks_applied = []
    bus.subscribe(Events.LOOK_APPLIED, lambda data: looks_applied.append(data["look"]["style"]))
    orchestrator = build_orchestrator(GatedModel(), RecordingEngine(), bus)

    async def run():
        first = asyncio.create_task(orchestrator.submit("zzz-hold evening party look"))
        await asyncio.sleep(0.05)
        second = await orchestrator.submit("wedding makeup")
        try:
            await first
        except LookSupersededError as e:
            superseded = e
        else:
            superseded = None
        await orchestrator.shutdown()
        return second, superseded

    second, superseded = asyncio.run(run())

    print(f"  Second look: {second.look.style}, superseded: {superseded}")
    assert second.look.style == "Bridal"
    assert second.generation == 2
    assert superseded is not None
    assert superseded.generation == 1
    assert superseded.current_generation == 2
    assert looks_applied == ["Bridal"]


def test_new_submission_cancels_reconciliation():
    """The reconciliation loop of an older look stops when a new prompt comes in."""
    bus = EventBus()
    engine = RecordingEngine(has_image=False)
    orchestrator = build_orchestrator(UnavailableModel(), engine, bus, reconcile_interval=10)

    async def run():
        first = await orchestrator.submit("office look")
        first_loop = orchestrator.reconciler._task
        assert orchestrator.reconciler.is_running

        second = await orchestrator.submit("natural look")
        await asyncio.sleep(0)
        cancelled = first_loop.cancelled()
        still_running = orchestrator.reconciler.is_running
        await orchestrator.shutdown()
        return first, second, cancelled, still_running

    first, second, cancelled, still_running = asyncio.run(run())

    assert first.look.style == "Professional"
    assert all(a.state == FilterState.FAILED for a in first.applied.applications)
    assert second.look.style == "Natural"
    assert cancelled
    assert still_running
    assert not orchestrator.reconciler.is_running


def test_build_default_orchestrator():
    bus = EventBus()
    orchestrator = build_default_orchestrator(
        RenderingContext(engine=RecordingEngine()),
        event_bus=bus,
        model_client=UnavailableModel(),
    )

    assert orchestrator.event_bus is bus
    assert "lipstick" in orchestrator.catalog
    assert orchestrator.reconciler is not None

    result = asyncio.run(orchestrator.submit("bold night out"))
    assert result.look.style == "Evening Glamour"
    assert len(result.recommendations["lipstick"]) == 2


def main():
    test_wedding_makeup_end_to_end()
    test_newer_prompt_supersedes_older()
    test_new_submission_cancels_reconciliation()
    test_build_default_orchestrator()
    print("\n✅ All orchestrator tests passed")


if __name__ == "__main__":
    main()
