"""
Product recommendations matched to applied filters.
"""

from glam_agents.recommendation.product_matcher import ProductRecommender, match, primary_color

__all__ = ['ProductRecommender', 'match', 'primary_color']
