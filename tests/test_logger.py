"""Tests for logging setup."""
import logging

from betsettle.utils.logger import ROOT_LOGGER, get_logger


class TestGetLogger:
    """Test package logger wiring."""
    
    def test_module_logger_is_child(self):
        """Test module loggers sit under the package logger."""
        logger = get_logger("betsettle.admin.ledger")
        assert logger.name == "betsettle.admin.ledger"
        assert logger.handlers == []
        assert logger.propagate
    
    def test_foreign_name_is_namespaced(self):
        """Test names outside the package are put under it."""
        assert get_logger("tests.helper").name == f"{ROOT_LOGGER}.tests.helper"
    
    def test_root_has_single_handler(self):
        """Test repeated calls don't stack handlers."""
        get_logger("a")
        get_logger("b")
        root = get_logger()
        
        assert root is logging.getLogger(ROOT_LOGGER)
        assert len(root.handlers) == 1
