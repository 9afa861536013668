"""
Nearest-color product matching.

Products are compared with the filter color by Euclidean RGB distance,
within the filter's own category only. Products with no resolvable color
sort after every product that has one.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union

from glam_agents.application.event_bus import EventBus, Events, get_event_bus
from glam_agents.domain.models import MAX_COLOR_DISTANCE, CanonicalLook, Filter, MatchResult, Product
from glam_agents.utils.color_math import hex_distance, normalize_hex
from setup_logging_optimized import get_logger

logger = get_logger(__name__)

Catalog = Mapping[str, Sequence[Product]]


def primary_color(product: Product) -> Optional[str]:
    """Product's own color, else its first shade; None when neither is a valid hex."""
    own = normalize_hex(product.color_hex)
    if own:
        return own
    if product.shades:
        return normalize_hex(product.shades[0])
    return None


def _candidates(filter_type: str, catalog: Union[Catalog, Iterable[Product]]) -> List[Product]:
    if isinstance(catalog, Mapping):
        products = catalog.get(filter_type, [])
    else:
        products = catalog
    return [p for p in products if p.category == filter_type]


def match(f: Filter, catalog: Union[Catalog, Iterable[Product]], k: int = 2) -> List[MatchResult]:
    """Top-k products of the filter's category by color distance."""
    filter_type = f.type.value
    products = _candidates(filter_type, catalog)
    if not products:
        logger.debug(f"No catalog products for {filter_type}")
        return []

    results = []
    for product in products:
        color = primary_color(product)
        distance = hex_distance(f.color_hex, color) if color else MAX_COLOR_DISTANCE
        results.append((color is None, distance, MatchResult(product=product, distance=distance)))

    # sorted() is stable, so equal distances keep catalog order
    results.sort(key=lambda item: (item[0], item[1]))
    return [result for _, _, result in results[:max(k, 0)]]


class ProductRecommender:
    """Runs match() for every filter of a look and announces the results."""

    def __init__(self, top_k: int = 2, event_bus: Optional[EventBus] = None):
        self.top_k = top_k
        self.event_bus = event_bus or get_event_bus()

    async def recommend(
        self,
        look: CanonicalLook,
        catalog: Catalog,
        k: Optional[int] = None,
    ) -> Dict[str, List[MatchResult]]:
        k = self.top_k if k is None else k
        recommendations: Dict[str, List[MatchResult]] = {}

        for f in look.filters:
            matches = match(f, catalog, k)
            recommendations[f.type.value] = matches
            await self.event_bus.emit(Events.PRODUCTS_RECOMMENDED, {
                'filterType': f.type.value,
                'matches': [m.to_dict() for m in matches]
            })

        counts = {t: len(m) for t, m in recommendations.items()}
        logger.info(f"Recommended products for '{look.style}': {counts}")
        return recommendations
