"""
Domain models and value objects.
"""

from glam_agents.domain.models import (
    FilterType,
    LookSource,
    FilterState,
    APPLICATION_PRIORITY,
    MAX_COLOR_DISTANCE,
    Filter,
    CanonicalLook,
    CacheEntry,
    Product,
    MatchResult,
    priority_of,
    parse_price
)

__all__ = [
    'FilterType',
    'LookSource',
    'FilterState',
    'APPLICATION_PRIORITY',
    'MAX_COLOR_DISTANCE',
    'Filter',
    'CanonicalLook',
    'CacheEntry',
    'Product',
    'MatchResult',
    'priority_of',
    'parse_price'
]
