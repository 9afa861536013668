"""
AI makeup look pipeline: prompt interpretation, effect application and
color-matched product recommendations.
"""
