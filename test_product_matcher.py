"""
Test nearest-color product matching and the catalog loader.
"""

import asyncio
import json
import tempfile
from pathlib import Path

from glam_agents.application.event_bus import EventBus, Events
from glam_agents.catalog.product_catalog import build_catalog, demo_catalog, load_catalog
from glam_agents.domain.models import MAX_COLOR_DISTANCE, CanonicalLook, Filter, FilterType, LookSource, Product, parse_price
from glam_agents.exceptions import ConfigurationError
from glam_agents.recommendation.product_matcher import ProductRecommender, match, primary_color


def lipstick(product_id, color=None, shades=(), category="lipstick"):
    return Product(id=product_id, name=product_id, brand="Test", price=10.0,
                   category=category, color_hex=color, shades=tuple(shades))


def test_exact_match_ranks_first():
    print("\n=== TESTING EXACT COLOR MATCH ===\n")

    catalog = {"lipstick": [
        lipstick("near", "#EE0000"),
        lipstick("exact", "#FF0000"),
        lipstick("far", "#0000FF"),
    ]}
    results = match(Filter(FilterType.LIPSTICK, "#FF0000", 0.8), catalog, k=2)

    print(f"  Ranked: {[(r.product.id, round(r.distance, 1)) for r in results]}")
    assert [r.product.id for r in results] == ["exact", "near"]
    assert results[0].distance == 0
    assert results[0].similarity == 1.0


def test_unknown_colors_rank_last():
    catalog = {"lipstick": [
        lipstick("no-color"),
        lipstick("bad-color", "Red"),
        lipstick("opposite", "#00FFFF"),
    ]}
    results = match(Filter(FilterType.LIPSTICK, "#FF0000", 0.8), catalog, k=3)

    assert [r.product.id for r in results] == ["opposite", "no-color", "bad-color"]
    assert results[1].distance == MAX_COLOR_DISTANCE
    # Opposite corner is as far as it gets but still outranks unknown colors
    assert results[0].distance > 441.6


def test_category_scoping_and_shades():
    catalog = {"eyeshadow": [
        lipstick("palette", shades=["#E6D2B5", "#000000"], category="eyeshadow"),
        lipstick("stray-lipstick", "#E6D2B5", category="lipstick"),
        lipstick("bad-shade", shades=["Fair"], category="eyeshadow"),
    ]}
    results = match(Filter(FilterType.EYESHADOW, "#E6D2B5", 0.6), catalog, k=5)

    assert [r.product.id for r in results] == ["palette", "bad-shade"]
    assert primary_color(catalog["eyeshadow"][0]) == "#E6D2B5"
    assert primary_color(catalog["eyeshadow"][2]) is None

    assert match(Filter(FilterType.BLUSH, "#FFB6C1", 0.5), catalog) == []


def test_stable_ties():
    catalog = {"lipstick": [lipstick("a", "#101010"), lipstick("b", "#101010"), lipstick("c", "#101010")]}
    results = match(Filter(FilterType.LIPSTICK, "#000000", 0.5), catalog, k=3)
    assert [r.product.id for r in results] == ["a", "b", "c"]


def test_recommend_emits_per_filter():
    print("\n=== TESTING RECOMMENDATION EVENTS ===\n")

    bus = EventBus()
    received = []
    bus.subscribe(Events.PRODUCTS_RECOMMENDED, lambda data: received.append(data))

    look = CanonicalLook(
        filters=(
            Filter(FilterType.LIPSTICK, "#CC0000", 0.8),
            Filter(FilterType.EYELINER, "#000000", 0.8),
            Filter(FilterType.CONTOUR, "#CCCCCC", 0.6),
        ),
        style="Test",
        description="",
        source=LookSource.MODEL,
    )
    recommender = ProductRecommender(top_k=2, event_bus=bus)
    recommendations = asyncio.run(recommender.recommend(look, demo_catalog()))

    print(f"  Events: {[(e['filterType'], len(e['matches'])) for e in received]}")
    assert [e["filterType"] for e in received] == ["lipstick", "eyeliner", "contour"]
    assert recommendations["lipstick"][0].product.id == "lipstick-001"
    assert recommendations["eyeliner"][0].product.id == "eyeliner-001"
    assert recommendations["contour"] == []
    assert received[0]["matches"][0]["product"]["price"] == 18.99


def test_load_catalog_from_json():
    data = {
        "lipstick": [{"id": "x", "name": "X", "brand": "B", "color": "#E8A9A9", "price": "$9.50"}],
        "blush": "not-a-list",
    }
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "catalog.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        catalog = load_catalog(path)

    assert list(catalog) == ["lipstick"]
    product = catalog["lipstick"][0]
    assert product.category == "lipstick"
    assert product.price == 9.5
    assert product.color_hex == "#E8A9A9"

    try:
        load_catalog("/nonexistent/catalog.json")
    except ConfigurationError:
        pass
    else:
        raise AssertionError("missing catalog should raise ConfigurationError")

    assert "lipstick" in load_catalog(None)


def test_catalog_tolerates_bad_prices():
    """Null or garbage prices become 0.0; structurally broken records are a config error."""
    catalog = build_catalog({"lipstick": [
        {"id": "null-price", "color": "#FF0000", "price": None},
        {"id": "text-price", "color": "#FF0000", "price": "call us"},
        {"id": "nan-price", "color": "#FF0000", "price": float("nan")},
        {"id": "ok", "color": "#FF0000", "price": "$1,299.00"},
    ]})
    assert [p.price for p in catalog["lipstick"]] == [0.0, 0.0, 0.0, 1299.0]
    assert parse_price(True) == 0.0
    assert parse_price(12) == 12.0

    try:
        build_catalog({"eyeshadow": [{"id": "p", "shades": 5}]})
    except ConfigurationError as e:
        assert e.context == {"index": 0}
        assert isinstance(e.cause, TypeError)
    else:
        raise AssertionError("non-iterable shades should raise ConfigurationError")


def main():
    test_exact_match_ranks_first()
    test_unknown_colors_rank_last()
    test_category_scoping_and_shades()
    test_stable_ties()
    test_recommend_emits_per_filter()
    test_load_catalog_from_json()
    test_catalog_tolerates_bad_prices()
    print("\n✅ All product matcher tests passed")


if __name__ == "__main__":
    main()
