"""Tests for the logging helpers."""

import logging
import os
from unittest.mock import patch

from ethoslens.common.constants import LoggingConstants
from ethoslens.common.logging import get_logger, preview


class TestGetLogger:
    """Tests for get_logger."""
    
    def test_default_level_is_info(self):
        logger = get_logger("ethoslens.test.default")
        assert logger.level == logging.INFO
    
    def test_explicit_level(self):
        logger = get_logger("ethoslens.test.debug", "DEBUG")
        assert logger.level == logging.DEBUG
    
    def test_handler_added_once(self):
        get_logger("ethoslens.test.once")
        logger = get_logger("ethoslens.test.once")
        assert len(logger.handlers) == 1
    
    def test_independent_of_environment_config(self):
        """A broken ETHOS_* variable does not affect logger setup."""
        with patch.dict(os.environ, {"ETHOS_REMOTE_TIMEOUT_SECONDS": "soon"}, clear=True):
            with patch("ethoslens.common.config.settings.get_config") as get_config:
                logger = get_logger("ethoslens.test.no_config")
        
        get_config.assert_not_called()
        assert logger.level == logging.INFO


class TestPreview:
    """Tests for preview."""
    
    def test_short_text_unchanged(self):
        assert preview("hello") == "hello"
    
    def test_default_limit_from_constants(self):
        text = "x" * (LoggingConstants.INPUT_PREVIEW_CHARS + 10)
        assert preview(text) == "x" * LoggingConstants.INPUT_PREVIEW_CHARS + "..."
    
    def test_custom_limit(self):
        assert preview("abcdef", limit=3) == "abc..."
