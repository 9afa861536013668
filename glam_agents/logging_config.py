"""
Environment-specific logging profiles.

LOG_PROFILE picks a profile explicitly; otherwise DEBUG=true selects "debug",
ENV=production selects "production" and anything else "development".
"""
import logging
import os
from typing import Dict, Any

from setup_logging_optimized import NOISY_LOGGERS

# Per-tick modules: strategy attempts and events repeat on every reconciliation pass
RECONCILIATION_MODULES = [
    "glam_agents.rendering.strategies",
    "glam_agents.rendering.reconciler",
    "glam_agents.application.event_bus",
]

PROFILES: Dict[str, Dict[str, Any]] = {
    "production": {
        "default_level": "WARNING",
        "console_format": "%(levelname)s - %(message)s",
        "suppress_modules": RECONCILIATION_MODULES,
        "quiet_providers": True,
    },
    "development": {
        "default_level": "INFO",
        "console_format": "%(asctime)s - %(levelname)s - %(message)s",
        "suppress_modules": [],
        "quiet_providers": True,
    },
    "debug": {
        "default_level": "DEBUG",
        "console_format": "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
        "suppress_modules": [],
        "quiet_providers": False,
    },
    # Test runs: only failures
    "quiet": {
        "default_level": "ERROR",
        "console_format": "%(levelname)s - %(name)s - %(message)s",
        "suppress_modules": RECONCILIATION_MODULES,
        "quiet_providers": True,
    },
}


def detect_profile() -> str:
    explicit = (os.getenv("LOG_PROFILE") or "").lower()
    if explicit in PROFILES:
        return explicit
    if os.getenv("DEBUG", "false").lower() == "true":
        return "debug"
    if (os.getenv("ENV") or "").lower() == "production":
        return "production"
    return "development"


def get_logging_config(profile: str = None) -> Dict[str, Any]:
    """Copy of the selected profile with its name under "environment"."""
    name = profile if profile in PROFILES else detect_profile()
    config = dict(PROFILES[name])
    config["environment"] = name
    return config


def apply_logging_config(config: Dict[str, Any] = None, level: str = None) -> Dict[str, Any]:
    """Replace root handlers with one console handler configured from a profile.

    An explicit level (LOG_LEVEL) overrides the profile's default level.
    """
    if config is None:
        config = get_logging_config()
    if level:
        config = dict(config, default_level=level.upper())

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(config["console_format"]))

    root_logger = logging.getLogger()
    root_logger.handlers = [console_handler]
    root_logger.setLevel(getattr(logging, config["default_level"]))

    for module in config.get("suppress_modules", []):
        logging.getLogger(module).setLevel(logging.WARNING)

    provider_level = logging.WARNING if config.get("quiet_providers") else logging.NOTSET
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(provider_level)

    return config
