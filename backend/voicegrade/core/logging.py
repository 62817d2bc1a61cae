"""
Application logging: one "voicegrade" logger writing to a rotating file and stdout.

Essay ids appear in every pipeline message so a failed analysis can be
traced from the API error back to the raw model reply.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from voicegrade.core.config import get_config, get_log_path

LOGGER_NAME = "voicegrade"

# LiteLLM and httpx log every request at INFO; keep them out of our log unless debugging
NOISY_LOGGERS = ("LiteLLM", "LiteLLM Router", "LiteLLM Proxy", "httpx", "httpcore")

_logger: Optional[logging.Logger] = None


def _build_handlers(level: int) -> list:
    log_config = get_config().logging
    formatter = logging.Formatter(log_config.format)

    file_handler = RotatingFileHandler(
        get_log_path(),
        maxBytes=log_config.max_size * 1024 * 1024,
        backupCount=log_config.backup_count,
        encoding="utf-8",
    )
    console_handler = logging.StreamHandler(sys.stdout)

    handlers = [file_handler, console_handler]
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging() -> logging.Logger:
    """
    Configure the application logger once; later calls return the same logger.

    The level comes from config (logging.level), which defaults to LOG_LEVEL.
    """
    global _logger
    if _logger is not None:
        return _logger

    level = getattr(logging, get_config().logging.level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()
    for handler in _build_handlers(level):
        logger.addHandler(handler)
    logger.propagate = False

    third_party_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Application logger, configured on first use."""
    return _logger if _logger is not None else setup_logging()
