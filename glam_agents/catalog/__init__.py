"""
Product catalog sources.
"""

from glam_agents.catalog.product_catalog import ProductCatalog, build_catalog, demo_catalog, load_catalog

__all__ = ['ProductCatalog', 'build_catalog', 'demo_catalog', 'load_catalog']
