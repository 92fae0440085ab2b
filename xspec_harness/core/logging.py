"""
Logging configuration for XSpec Harness.

Two channels are kept apart. The runner prints one progress line per test
(``Running <name>`` and the result summary) to stdout and to the per-test
``OUT-<name>.txt`` file. Everything else goes through loggers under the
``xspec_harness`` namespace and ends up on stderr:

- WARNING: ignored missing catalogs, JUnit formatter warnings
- INFO: summary files written
- DEBUG: stylesheets loaded, resolver and catalog lookups, configuration
"""

import copy
import logging
import sys
from typing import Optional
from pathlib import Path

LOGGER_NAME = "xspec_harness"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output."""
    
    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[94m',      # Blue
        'WARNING': '\033[93m',   # Yellow
        'ERROR': '\033[91m',     # Red
        'CRITICAL': '\033[95m',  # Magenta
        'RESET': '\033[0m',      # Reset
        'BOLD': '\033[1m',       # Bold
    }
    
    def format(self, record):
        """Format a copy of the record so other handlers see it uncolored."""
        record = copy.copy(record)
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        
        # Engine errors and report failures stand out
        if levelname in ['ERROR', 'CRITICAL']:
            record.msg = f"{self.COLORS['BOLD']}{record.msg}{self.COLORS['RESET']}"
        
        return super().format(record)


def verbosity_to_level(verbosity: int) -> int:
    """Map the CLI verbosity (0-3) to a logging level."""
    if verbosity <= 0:
        return logging.WARNING
    if verbosity <= 2:
        return logging.INFO
    return logging.DEBUG


def setup_logger(
    name: str = LOGGER_NAME,
    level: Optional[int] = None,
    log_file: Optional[Path] = None,
    verbosity: int = 0
) -> logging.Logger:
    """
    Configure the harness logger hierarchy.

    Per-test engine diagnostics are not routed here; they go to the test's
    ``OUT-<name>.txt``. This logger carries harness-level events only.
    
    Args:
        name: Logger name (module loggers are children of ``xspec_harness``)
        level: Logging level (overrides verbosity if provided)
        log_file: Optional file receiving every record down to DEBUG, uncolored
        verbosity: 0=warnings only, 1-2=progress, 3=debug
        
    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    
    # Reconfiguring replaces handlers from an earlier call
    logger.handlers.clear()
    
    if level is None:
        level = verbosity_to_level(verbosity)
    
    logger.setLevel(logging.DEBUG if log_file else level)
    
    # stdout carries the per-test progress lines
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(ColoredFormatter(LOG_FORMAT))
    logger.addHandler(console_handler)
    
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)
    
    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get a logger; pass ``__name__`` so it sits under the harness logger."""
    return logging.getLogger(name)
