"""
Exception hierarchy for the makeup look pipeline.

Most of these never reach the end user: the interpreter recovers model
failures with the fallback classifier and the applicator turns rendering
failures into filter states. They exist so each failure is logged and
handled by kind.
"""

from typing import Optional, Dict, Any


class MakeupPipelineError(Exception):
    """Base exception for all pipeline errors"""

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.cause = cause
        self.context = context or {}

    def __str__(self):
        parts = [super().__str__()]
        if self.cause:
            parts.append(f" (caused by: {type(self.cause).__name__}: {str(self.cause)})")
        if self.context:
            parts.append(f" Context: {self.context}")
        return "".join(parts)


# === Model exceptions ===

class ModelUnavailableError(MakeupPipelineError):
    """Model could not be reached (network, HTTP error, missing credentials)"""
    pass


class ModelTimeoutError(ModelUnavailableError):
    """Model call exceeded its timeout"""
    pass


class MalformedModelResponseError(MakeupPipelineError):
    """Model answered but no usable look could be extracted"""
    pass


# === Normalization exceptions ===

class UnknownFilterTypeError(MakeupPipelineError):
    """Filter suggestion names a type the pipeline does not know"""

    def __init__(self, filter_type: Any, message: Optional[str] = None, **kwargs):
        super().__init__(message or f"Unknown filter type: {filter_type!r}", **kwargs)
        self.filter_type = filter_type
        self.context.update({'filter_type': filter_type})


# === Rendering exceptions ===

class NoRenderableSurfaceError(MakeupPipelineError):
    """No image, canvas or video is available to render onto"""
    pass


class CapabilityError(MakeupPipelineError):
    """A collaborator registered an object that does not implement the capability"""
    pass


# === Orchestration exceptions ===

class LookSupersededError(MakeupPipelineError):
    """A newer prompt replaced this submission before it finished"""

    def __init__(self, generation: int, current_generation: int, message: Optional[str] = None, **kwargs):
        super().__init__(
            message or f"Look generation {generation} superseded by {current_generation}",
            **kwargs
        )
        self.generation = generation
        self.current_generation = current_generation
        self.context.update({
            'generation': generation,
            'current_generation': current_generation
        })


# === Configuration exceptions ===

class ConfigurationError(MakeupPipelineError):
    """Configuration error"""
    pass


class InvalidConfigError(ConfigurationError):
    """Invalid configuration value"""
    pass
