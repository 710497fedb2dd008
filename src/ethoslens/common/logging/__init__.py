"""Logging helpers."""

from ethoslens.common.logging.logger import get_logger, preview

__all__ = ["get_logger", "preview"]
