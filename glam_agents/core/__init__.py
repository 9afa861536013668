"""
Core interfaces and contracts for the makeup pipeline.
"""

from glam_agents.core.interfaces import (
    EffectParams,
    VisualApproximation,
    IModelClient,
    RenderingEngine,
    UIDriver,
    VisualSurface
)

__all__ = [
    'EffectParams',
    'VisualApproximation',
    'IModelClient',
    'RenderingEngine',
    'UIDriver',
    'VisualSurface'
]
