import logging
import os

# Provider SDK and HTTP client loggers that flood INFO with request lines
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "google_genai", "urllib3")


def setup_logging(level: str = None) -> None:
    """Logging setup shared by the pipeline, the API server and the tests.

    - Root level from the argument, else LOG_LEVEL, else INFO
    - One StreamHandler on the root logger, added once
    - Provider SDK loggers capped at WARNING
    """
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        root.addHandler(handler)
    root.setLevel(getattr(logging, level, logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger after ensuring logging is initialized."""
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)
