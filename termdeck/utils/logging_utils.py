"""Simple logging utilities for termdeck.

Standard Logger Initialization Pattern
--------------------------------------
For most modules, use the standard Python pattern:

    import logging
    logger = logging.getLogger(__name__)

Configuration is left to the application embedding termdeck. Use
`get_logger()` only when you need file-based logging with
auto-configuration (e.g. a dashboard that owns the terminal, where writing
to stderr would corrupt the screen).
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from termdeck.config.constants import LOG_FILE_NAME, TERMDECK_CONFIG_DIR
from termdeck.config.settings import get_log_level

# Max log file size: 5MB, keep 2 backups
_MAX_LOG_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 2

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str, log_dir: Optional[Path] = None) -> logging.Logger:
    """Get a logger that writes to the termdeck log file."""
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        # File handler instead of console handler to avoid TUI interference
        log_dir = log_dir or TERMDECK_CONFIG_DIR
        log_dir.mkdir(parents=True, exist_ok=True)

        handler = RotatingFileHandler(
            log_dir / LOG_FILE_NAME, maxBytes=_MAX_LOG_BYTES, backupCount=_BACKUP_COUNT
        )
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(get_log_level())

    return logger


def setup_cli_logging(verbose: bool = False) -> None:
    """Send termdeck logs to stderr for command line use."""
    logger = logging.getLogger("termdeck")
    for existing in logger.handlers:
        if getattr(existing, "_termdeck_cli", False):
            existing.setStream(sys.stderr)
            logger.setLevel(logging.DEBUG if verbose else get_log_level())
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    handler._termdeck_cli = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else get_log_level())
