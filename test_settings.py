"""
Test configuration defaults, environment overrides and validation.
"""

import logging
import os

from glam_agents.exceptions import InvalidConfigError
from glam_agents.logging_config import apply_logging_config, get_logging_config
from glam_agents.settings import CacheConfig, Config, LogConfig, ModelConfig, RenderingConfig


def expect_invalid(config):
    try:
        config.validate()
    except InvalidConfigError as e:
        print(f"  Rejected: {e}")
        return
    raise AssertionError("config should have been rejected")


def test_defaults_validate():
    config = Config()
    config.validate()
    data = config.to_dict()
    assert set(data) == {"model", "cache", "rendering", "recommendation", "logging"}
    assert data["recommendation"]["top_k"] >= 1


def test_environment_override():
    os.environ["LOOK_CACHE_MAX_ENTRIES"] = "7"
    try:
        assert CacheConfig().max_entries == 7
    finally:
        del os.environ["LOOK_CACHE_MAX_ENTRIES"]


def test_invalid_values_rejected():
    print("\n=== TESTING CONFIG VALIDATION ===\n")

    expect_invalid(Config(model=ModelConfig(timeout_seconds=0.5)))
    expect_invalid(Config(model=ModelConfig(temperature=3.0)))
    expect_invalid(Config(cache=CacheConfig(max_entries=-1)))
    expect_invalid(Config(rendering=RenderingConfig(reconcile_interval=5.0)))
    expect_invalid(Config(rendering=RenderingConfig(reconcile_max_attempts=0)))
    expect_invalid(Config(logging=LogConfig(level="chatty")))

    Config(logging=LogConfig(level="debug")).validate()
    Config(logging=LogConfig(level=None)).validate()


def test_logging_profiles():
    os.environ["LOG_PROFILE"] = "quiet"
    try:
        config = get_logging_config()
    finally:
        del os.environ["LOG_PROFILE"]
    assert config["environment"] == "quiet"
    assert config["default_level"] == "ERROR"

    root = logging.getLogger()
    previous_handlers, previous_level = root.handlers[:], root.level
    try:
        applied = apply_logging_config(get_logging_config("production"))
        assert applied["environment"] == "production"
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert logging.getLogger("glam_agents.rendering.reconciler").level == logging.WARNING

        apply_logging_config(get_logging_config("production"), level=LogConfig(level="debug").level)
        assert root.level == logging.DEBUG
    finally:
        root.handlers = previous_handlers
        root.setLevel(previous_level)
        logging.getLogger("glam_agents.rendering.reconciler").setLevel(logging.NOTSET)


def main():
    test_defaults_validate()
    test_environment_override()
    test_invalid_values_rejected()
    test_logging_profiles()
    print("\n✅ All settings tests passed")


if __name__ == "__main__":
    main()
