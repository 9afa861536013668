"""
In-memory persistence for interpreted looks.
"""

from glam_agents.persistence.look_cache import LookCache, normalize_prompt_key

__all__ = ['LookCache', 'normalize_prompt_key']
