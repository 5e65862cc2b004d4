"""
Centralized constants for termdeck.

Default values for container options and the locations termdeck reads
from and writes to live here so they are easy to find and change.
"""

from pathlib import Path
from typing import Any, Dict

# =============================================================================
# PATHS
# =============================================================================

TERMDECK_CONFIG_DIR = Path.home() / ".config" / "termdeck"
DEFAULT_LAYOUTS_DIR = TERMDECK_CONFIG_DIR / "layouts"
LOG_FILE_NAME = "termdeck.log"

# =============================================================================
# CONTAINER DEFAULTS
# =============================================================================

DEFAULT_SPLIT_PERCENT = 50  # First child gets half of the space
DEFAULT_SPLIT_REVERSED = False
DEFAULT_FOCUSED_COLOR = "yellow"  # Border color of the focused container

# Valid ranges for option arguments
MIN_SPLIT_PERCENT = 0  # exclusive
MAX_SPLIT_PERCENT = 100  # exclusive
MIN_SPACING_PERCENT = 0  # inclusive
MAX_SPACING_PERCENT = 100  # inclusive

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

ENV_VAR_DEFINITIONS: Dict[str, Dict[str, Any]] = {
    "TERMDECK_LAYOUTS_DIR": {
        "description": "Directory searched for named YAML layouts",
        "default": None,
        "valid_values": None,
    },
    "TERMDECK_LOG_LEVEL": {
        "description": "Log level for termdeck loggers",
        "default": "WARNING",
        "valid_values": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    },
}
