"""
Rendering: applying looks to the face-rendering engine.
"""

from glam_agents.rendering.context import Capability, CapabilityRegistry, RenderingContext
from glam_agents.rendering.strategies import (
    ApplicationStrategy,
    DirectEngineStrategy,
    UISimulationStrategy,
    VisualApproximationStrategy,
    build_visual_approximation,
    map_engine_style,
    ui_selectors,
    default_strategies
)
from glam_agents.rendering.effect_applicator import AppliedLook, EffectApplicator, FilterApplication
from glam_agents.rendering.reconciler import ReconciliationLoop

__all__ = [
    'Capability',
    'CapabilityRegistry',
    'RenderingContext',
    'ApplicationStrategy',
    'DirectEngineStrategy',
    'UISimulationStrategy',
    'VisualApproximationStrategy',
    'build_visual_approximation',
    'map_engine_style',
    'ui_selectors',
    'default_strategies',
    'AppliedLook',
    'EffectApplicator',
    'FilterApplication',
    'ReconciliationLoop'
]
