"""Logging helpers for the goal planning service.

Provides a `get_logger` factory that attaches a shared stream handler and a
rotating file handler so every module logs in the same format. The log
directory and default level come from `LOG_DIR` and `LOG_LEVEL`.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from core.exceptions import ConfigurationError

LOG_DIR = os.getenv("LOG_DIR", os.path.join(os.path.dirname(__file__), "..", "logs"))
os.makedirs(LOG_DIR, exist_ok=True)

LOG_FILE = os.path.join(LOG_DIR, "nutrition_goals.log")


def _resolve_level(name: str) -> int:
    """Translate a level name such as 'DEBUG' into its numeric value."""
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level '{name}'", config_key="LOG_LEVEL")
    return level


DEFAULT_LEVEL = _resolve_level(os.getenv("LOG_LEVEL", "INFO"))

_formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

_stream_handler = logging.StreamHandler()
_stream_handler.setFormatter(_formatter)

_file_handler = RotatingFileHandler(LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3)
_file_handler.setFormatter(_formatter)


def get_logger(name: str = __name__, level: int = None) -> logging.Logger:
    """Return a logger wired to the shared stream and rotating file handlers.

    Calling this repeatedly for the same name never stacks handlers.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(level if level is not None else DEFAULT_LEVEL)
        logger.addHandler(_stream_handler)
        logger.addHandler(_file_handler)
    return logger
