"""
Prompt templates for language model calls.
"""

from glam_agents.prompts.look_prompts import SYSTEM_PROMPT, get_look_prompt, get_look_messages

__all__ = ['SYSTEM_PROMPT', 'get_look_prompt', 'get_look_messages']
