"""
Language model clients.
"""

from glam_agents.ai.clients import MODELS, CLIENTS, ModelClient, get_client, resolve_model

__all__ = ['MODELS', 'CLIENTS', 'ModelClient', 'get_client', 'resolve_model']
