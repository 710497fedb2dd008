"""Centralized logging configuration."""

import logging

from ethoslens.common.constants import LoggingConstants

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_logger(name: str, level: str = "INFO") -> logging.Logger:
    """Get a logger with a stream handler attached."""
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level))
    
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    
    return logger


def preview(text: str, limit: int = LoggingConstants.INPUT_PREVIEW_CHARS) -> str:
    """Shorten user text before it goes into a log line."""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}..."
