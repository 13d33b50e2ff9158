"""Logging setup for the betsettle package."""
import logging
import sys
from typing import Optional

from betsettle.config import config

ROOT_LOGGER = "betsettle"


def _configure_root() -> logging.Logger:
    """Attach the stdout handler and level to the package logger, once."""
    root = logging.getLogger(ROOT_LOGGER)
    
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        root.addHandler(handler)
        root.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
    
    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger under the package logger.
    
    Module loggers carry no handlers of their own; records propagate to
    the "betsettle" logger, which holds the only handler and the level.
    
    Args:
        name: Logger name, typically __name__ of the calling module.
        
    Returns:
        The named logger (or the package logger if no name is given).
    """
    root = _configure_root()
    if not name or name == ROOT_LOGGER:
        return root
    if not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
