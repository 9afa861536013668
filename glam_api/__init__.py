"""
HTTP surface for the makeup look pipeline.
"""
