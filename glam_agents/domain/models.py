"""
Domain models representing core makeup concepts.
"""

import math
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, Any, List, Mapping, Optional, Tuple, Union
from enum import Enum


class FilterType(str, Enum):
    """Cosmetic effect kinds the pipeline knows how to apply."""
    LIPSTICK = "lipstick"
    EYESHADOW = "eyeshadow"
    EYELINER = "eyeliner"
    BLUSH = "blush"
    FOUNDATION = "foundation"
    HIGHLIGHTER = "highlighter"
    CONTOUR = "contour"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


class LookSource(str, Enum):
    """Where a canonical look came from."""
    MODEL = "model"
    CACHE = "cache"
    FALLBACK = "fallback"


class FilterState(str, Enum):
    """Application status of one filter."""
    PENDING = "pending"
    APPLYING = "applying"
    APPLIED = "applied"
    APPROXIMATED = "approximated"
    FAILED = "failed"


# Application order on the face. "eyebrows" keeps its slot although no
# FilterType produces it; eyeliner sits with the other eye products.
APPLICATION_PRIORITY: Tuple[str, ...] = (
    "foundation",
    "lipstick",
    "eyebrows",
    "eyeshadow",
    "eyeliner",
    "blush",
    "contour",
    "highlighter",
)


def priority_of(filter_type: Union[FilterType, str]) -> int:
    """Position of a filter type in the application order."""
    value = filter_type.value if isinstance(filter_type, FilterType) else str(filter_type)
    try:
        return APPLICATION_PRIORITY.index(value)
    except ValueError:
        return len(APPLICATION_PRIORITY)


@dataclass(frozen=True)
class Filter:
    """One cosmetic effect with a color and intensity."""
    type: FilterType
    color_hex: str
    intensity: float
    style: Optional[str] = None
    name: Optional[str] = None
    extra: Mapping[str, Union[float, str]] = field(default_factory=dict)

    def __post_init__(self):
        # Looks are shared through the cache; secondary params stay read-only
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type.value,
            'colorHex': self.color_hex,
            'intensity': self.intensity,
            'style': self.style,
            'name': self.name,
            'extra': dict(self.extra)
        }


@dataclass(frozen=True)
class CanonicalLook:
    """Deduplicated, ordered filter set describing one makeup style."""
    filters: Tuple[Filter, ...]
    style: str
    description: str
    source: LookSource
    occasion: Optional[str] = None

    @property
    def filter_types(self) -> List[FilterType]:
        return [f.type for f in self.filters]

    def get_filter(self, filter_type: Union[FilterType, str]) -> Optional[Filter]:
        wanted = FilterType(filter_type)
        for f in self.filters:
            if f.type == wanted:
                return f
        return None

    def with_source(self, source: LookSource) -> 'CanonicalLook':
        """Copy of this look tagged with another source."""
        return replace(self, source=source)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'filters': [f.to_dict() for f in self.filters],
            'style': self.style,
            'description': self.description,
            'source': self.source.value,
            'occasion': self.occasion
        }


@dataclass(frozen=True)
class CacheEntry:
    """Cached interpretation of one normalized prompt."""
    prompt_key: str
    look: CanonicalLook
    created_at: float


def parse_price(value: Any) -> float:
    """Catalog price as float; missing or unparseable prices become 0.0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip().lstrip('$').replace(',', '')
    try:
        price = float(value)
    except (TypeError, ValueError):
        return 0.0
    return price if math.isfinite(price) else 0.0


@dataclass(frozen=True)
class Product:
    """Catalog product, supplied by the storefront."""
    id: str
    name: str
    brand: str
    price: float
    category: str
    color_hex: Optional[str] = None
    shades: Tuple[str, ...] = ()
    finish: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    rating: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], category: Optional[str] = None) -> 'Product':
        """Create Product from a catalog record ("$18.99" prices are accepted)."""
        return cls(
            id=str(data.get('id') or data.get('name', '')),
            name=data.get('name', ''),
            brand=data.get('brand', ''),
            price=parse_price(data.get('price')),
            category=data.get('category') or category or '',
            color_hex=data.get('colorHex') or data.get('color_hex') or data.get('color'),
            shades=tuple(data.get('shades') or ()),
            finish=data.get('finish'),
            description=data.get('description'),
            image=data.get('image'),
            rating=data.get('rating')
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'brand': self.brand,
            'price': self.price,
            'category': self.category,
            'colorHex': self.color_hex,
            'shades': list(self.shades),
            'finish': self.finish,
            'description': self.description,
            'image': self.image,
            'rating': self.rating
        }


# Largest Euclidean distance in RGB space, sqrt(3 * 255^2)
MAX_COLOR_DISTANCE = 441.67


@dataclass(frozen=True)
class MatchResult:
    """Product ranked against a filter color."""
    product: Product
    distance: float

    @property
    def similarity(self) -> float:
        return max(0.0, 1.0 - self.distance / MAX_COLOR_DISTANCE)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'product': self.product.to_dict(),
            'distance': round(self.distance, 2),
            'similarity': round(self.similarity, 4)
        }
