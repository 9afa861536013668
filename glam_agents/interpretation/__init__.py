"""
Prompt interpretation: model call, response parsing, keyword fallback and
filter normalization.
"""

from glam_agents.interpretation.filter_normalizer import normalize, build_filter
from glam_agents.interpretation.fallback_classifier import classify, LibraryLook, LOOK_LIBRARY
from glam_agents.interpretation.response_parser import ModelLookPayload, extract_json_block, parse_look_payload
from glam_agents.interpretation.presets import Preset, list_presets, get_preset
from glam_agents.interpretation.component_requests import extract_component_requests, apply_component_requests
from glam_agents.interpretation.prompt_interpreter import PromptInterpreter

__all__ = [
    'normalize',
    'build_filter',
    'classify',
    'LibraryLook',
    'LOOK_LIBRARY',
    'ModelLookPayload',
    'extract_json_block',
    'parse_look_payload',
    'Preset',
    'list_presets',
    'get_preset',
    'extract_component_requests',
    'apply_component_requests',
    'PromptInterpreter'
]
