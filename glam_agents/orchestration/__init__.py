"""
Orchestration components package.
"""

from glam_agents.orchestration.look_orchestrator import LookOrchestrator, LookResult, build_default_orchestrator

__all__ = [
    'LookOrchestrator',
    'LookResult',
    'build_default_orchestrator'
]
