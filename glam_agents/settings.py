"""
Configuration management for the makeup look pipeline.

Centralized configuration with:
- Type safety
- Environment variable support
- Validation
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from functools import lru_cache

from glam_agents import config as global_config
from glam_agents.exceptions import InvalidConfigError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ModelConfig:
    """Language model configuration"""
    model: str = field(default_factory=lambda: os.getenv('MAKEUP_MODEL', global_config.MAKEUP_MODEL))
    timeout_seconds: float = field(default_factory=lambda: float(os.getenv('MAKEUP_MODEL_TIMEOUT', str(global_config.MAKEUP_MODEL_TIMEOUT))))
    temperature: float = field(default_factory=lambda: float(os.getenv('MAKEUP_MODEL_TEMPERATURE', str(global_config.MAKEUP_MODEL_TEMPERATURE))))
    max_tokens: int = field(default_factory=lambda: int(os.getenv('MAKEUP_MODEL_MAX_TOKENS', str(global_config.MAKEUP_MODEL_MAX_TOKENS))))


@dataclass
class CacheConfig:
    """Look cache configuration"""
    max_entries: int = field(default_factory=lambda: int(os.getenv('LOOK_CACHE_MAX_ENTRIES', str(global_config.LOOK_CACHE_MAX_ENTRIES))))
    ttl_seconds: float = field(default_factory=lambda: float(os.getenv('LOOK_CACHE_TTL', str(global_config.LOOK_CACHE_TTL_SECONDS))))


@dataclass
class RenderingConfig:
    """Effect application and reconciliation configuration"""
    reconcile_interval: float = field(default_factory=lambda: float(os.getenv('RECONCILE_INTERVAL', str(global_config.RECONCILE_INTERVAL_SECONDS))))
    reconcile_max_attempts: int = field(default_factory=lambda: int(os.getenv('RECONCILE_MAX_ATTEMPTS', str(global_config.RECONCILE_MAX_ATTEMPTS))))


@dataclass
class RecommendationConfig:
    """Product recommendation configuration"""
    top_k: int = field(default_factory=lambda: int(os.getenv('RECOMMEND_TOP_K', str(global_config.RECOMMEND_TOP_K))))
    catalog_path: Optional[str] = field(default_factory=lambda: os.getenv('PRODUCT_CATALOG_PATH', global_config.PRODUCT_CATALOG_PATH))


@dataclass
class LogConfig:
    """Logging configuration (unset level: the environment profile decides)"""
    level: Optional[str] = field(default_factory=lambda: os.getenv('LOG_LEVEL'))


@dataclass
class Config:
    """Master configuration"""
    model: ModelConfig = field(default_factory=ModelConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    rendering: RenderingConfig = field(default_factory=RenderingConfig)
    recommendation: RecommendationConfig = field(default_factory=RecommendationConfig)
    logging: LogConfig = field(default_factory=LogConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            'model': {
                'model': self.model.model,
                'timeout_seconds': self.model.timeout_seconds,
                'temperature': self.model.temperature,
                'max_tokens': self.model.max_tokens
            },
            'cache': {
                'max_entries': self.cache.max_entries,
                'ttl_seconds': self.cache.ttl_seconds
            },
            'rendering': {
                'reconcile_interval': self.rendering.reconcile_interval,
                'reconcile_max_attempts': self.rendering.reconcile_max_attempts
            },
            'recommendation': {
                'top_k': self.recommendation.top_k,
                'catalog_path': self.recommendation.catalog_path
            },
            'logging': {
                'level': self.logging.level
            }
        }

    def validate(self) -> None:
        """Validate configuration values"""
        if self.model.timeout_seconds < 1 or self.model.timeout_seconds > 30:
            raise InvalidConfigError(f"Model timeout must be between 1 and 30 seconds, got {self.model.timeout_seconds}")

        if self.model.temperature < 0 or self.model.temperature > 2:
            raise InvalidConfigError(f"Model temperature must be between 0 and 2, got {self.model.temperature}")

        if self.model.max_tokens < 100:
            raise InvalidConfigError(f"Model max_tokens must be at least 100, got {self.model.max_tokens}")

        if self.cache.max_entries < 0:
            raise InvalidConfigError(f"Cache max_entries cannot be negative, got {self.cache.max_entries}")

        if self.cache.ttl_seconds < 0:
            raise InvalidConfigError(f"Cache ttl_seconds cannot be negative, got {self.cache.ttl_seconds}")

        if self.rendering.reconcile_interval < 1 or self.rendering.reconcile_interval > 3:
            raise InvalidConfigError(f"reconcile_interval must be between 1 and 3 seconds, got {self.rendering.reconcile_interval}")

        if self.rendering.reconcile_max_attempts < 1:
            raise InvalidConfigError(f"reconcile_max_attempts must be at least 1, got {self.rendering.reconcile_max_attempts}")

        if self.recommendation.top_k < 1:
            raise InvalidConfigError(f"top_k must be at least 1, got {self.recommendation.top_k}")

        if self.logging.level and self.logging.level.upper() not in LOG_LEVELS:
            raise InvalidConfigError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {self.logging.level!r}")


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get singleton configuration instance"""
    config = Config()
    config.validate()
    return config

