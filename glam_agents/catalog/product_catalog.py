"""
Product catalog loading.

The storefront normally supplies its catalog as JSON (category -> list of
product records). When none is configured the bundled demo catalog is used.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from glam_agents.domain.models import Product
from glam_agents.exceptions import ConfigurationError
from setup_logging_optimized import get_logger

logger = get_logger(__name__)

ProductCatalog = Dict[str, List[Product]]


DEMO_CATALOG_DATA: Dict[str, List[Dict[str, Any]]] = {
    "lipstick": [
        {"id": "lipstick-001", "name": "Classic Red Lipstick", "brand": "BeautyGlow", "color": "#CC0000",
         "finish": "Matte", "description": "Long-lasting matte red lipstick that stays all day",
         "price": "$18.99", "rating": 4.5},
        {"id": "lipstick-002", "name": "Pink Perfection", "brand": "GlamourGirl", "color": "#FF66B2",
         "finish": "Cream", "description": "Creamy pink lipstick with moisturizing formula",
         "price": "$16.99", "rating": 4.2},
        {"id": "lipstick-003", "name": "Nude Elegance", "brand": "NaturalBeauty", "color": "#CC9966",
         "finish": "Satin", "description": "Perfect everyday nude shade with satin finish",
         "price": "$15.99", "rating": 4.7},
        {"id": "lipstick-004", "name": "Berry Blast", "brand": "BeautyGlow", "color": "#990066",
         "finish": "Matte", "description": "Rich berry shade with full coverage matte finish",
         "price": "$19.99", "rating": 4.4},
        {"id": "lipstick-005", "name": "Coral Sunset", "brand": "SummerGlow", "color": "#FF6666",
         "finish": "Glossy", "description": "Vibrant coral with glossy finish for summer",
         "price": "$17.99", "rating": 4.3},
    ],
    "eyeshadow": [
        {"id": "eyeshadow-001", "name": "Smoky Night Palette", "brand": "GlamourGirl",
         "shades": ["#000000", "#333333", "#666666", "#999999", "#CCCCCC"], "finish": "Shimmer & Matte Mix",
         "description": "Classic smoky eye palette with 12 versatile shades", "price": "$32.99", "rating": 4.8},
        {"id": "eyeshadow-002", "name": "Neutral Essentials", "brand": "NaturalBeauty",
         "shades": ["#F5DEB3", "#D2B48C", "#8B4513", "#A0522D", "#CD853F"], "finish": "Matte",
         "description": "Everyday neutral matte shades for any occasion", "price": "$28.99", "rating": 4.7},
        {"id": "eyeshadow-003", "name": "Summer Sunset", "brand": "SummerGlow",
         "shades": ["#FF6347", "#FFA07A", "#FFDAB9", "#FFD700", "#FF8C00"], "finish": "Shimmer",
         "description": "Warm-toned shimmers inspired by summer sunsets", "price": "$24.99", "rating": 4.5},
        {"id": "eyeshadow-004", "name": "Berry Dreams", "brand": "BeautyGlow",
         "shades": ["#8B008B", "#9932CC", "#BA55D3", "#D8BFD8", "#E6E6FA"], "finish": "Shimmer & Matte Mix",
         "description": "Purple and berry tones for creating dramatic looks", "price": "$29.99", "rating": 4.3},
        {"id": "eyeshadow-005", "name": "Gold Luxe", "brand": "GlamourGirl",
         "shades": ["#FFD700", "#DAA520", "#B8860B", "#CD853F", "#8B4513"], "finish": "Metallic",
         "description": "Luxurious gold and bronze metallic shades", "price": "$34.99", "rating": 4.6},
    ],
    "foundation": [
        {"id": "foundation-001", "name": "Perfect Match Foundation", "brand": "BeautyGlow",
         "shades": ["Fair", "Light", "Medium", "Tan", "Deep", "Rich"], "finish": "Natural",
         "description": "Weightless formula that adapts to your skin tone", "price": "$29.99", "rating": 4.7},
        {"id": "foundation-002", "name": "Matte Velvet", "brand": "GlamourGirl",
         "shades": ["Fair", "Light", "Medium", "Tan", "Deep"], "finish": "Matte",
         "description": "Long-lasting matte foundation for oily skin", "price": "$32.99", "rating": 4.5},
    ],
    "blush": [
        {"id": "blush-001", "name": "Rosy Glow", "brand": "BeautyGlow", "color": "#FF6699", "finish": "Satin",
         "description": "Natural-looking pink blush for a healthy flush", "price": "$18.99", "rating": 4.5},
        {"id": "blush-002", "name": "Peachy Keen", "brand": "SummerGlow", "color": "#FFCC99", "finish": "Shimmer",
         "description": "Warm peach blush with subtle golden shimmer", "price": "$19.99", "rating": 4.6},
        {"id": "blush-003", "name": "Berry Flush", "brand": "GlamourGirl", "color": "#CC6699", "finish": "Matte",
         "description": "Deep berry shade for medium to deep skin tones", "price": "$20.99", "rating": 4.3},
        {"id": "blush-004", "name": "Coral Pop", "brand": "BeautyGlow", "color": "#FF9966", "finish": "Satin",
         "description": "Bright coral blush for a vibrant pop of color", "price": "$18.99", "rating": 4.4},
    ],
    "eyeliner": [
        {"id": "eyeliner-001", "name": "Perfect Precision Liquid Liner", "brand": "GlamourGirl", "color": "#000000",
         "description": "Ultra-fine tip for precise application, waterproof formula", "price": "$15.99", "rating": 4.8},
        {"id": "eyeliner-002", "name": "Smoky Kohl Pencil", "brand": "BeautyGlow", "color": "Black",
         "description": "Creamy pencil liner that smudges easily for smoky looks", "price": "$12.99", "rating": 4.5},
        {"id": "eyeliner-004", "name": "Bronze Shimmer Pencil", "brand": "NaturalBeauty", "color": "Bronze",
         "description": "Metallic bronze liner to enhance all eye colors", "price": "$13.99", "rating": 4.6},
    ],
}


def build_catalog(data: Dict[str, List[Dict[str, Any]]]) -> ProductCatalog:
    """Turn raw category -> records data into Products (category taken from the key)."""
    if not isinstance(data, dict):
        raise ConfigurationError("Product catalog must be an object of category -> product list")

    catalog: ProductCatalog = {}
    for category, records in data.items():
        if not isinstance(records, list):
            logger.warning(f"Skipping catalog category {category!r}: not a list")
            continue
        products = []
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                continue
            try:
                products.append(Product.from_dict(record, category=category))
            except (TypeError, ValueError) as e:
                raise ConfigurationError(
                    f"Invalid product record in category {category!r}",
                    cause=e,
                    context={'index': index}
                )
        catalog[category] = products
    return catalog


def demo_catalog() -> ProductCatalog:
    return build_catalog(DEMO_CATALOG_DATA)


def load_catalog(path: Optional[Union[str, Path]] = None) -> ProductCatalog:
    """Load a JSON catalog from path; the demo catalog when path is None."""
    if path is None:
        logger.info("No product catalog configured, using demo catalog")
        return demo_catalog()

    catalog_path = Path(path)
    try:
        with catalog_path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Product catalog not found: {catalog_path}", cause=e)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Product catalog is not valid JSON: {catalog_path}", cause=e)

    catalog = build_catalog(data)
    total = sum(len(products) for products in catalog.values())
    logger.info(f"Loaded {total} products in {len(catalog)} categories from {catalog_path}")
    return catalog
