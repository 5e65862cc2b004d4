"""Configuration for termdeck."""

from .constants import TERMDECK_CONFIG_DIR
from .settings import get_env_var, get_layouts_dir, get_log_level, validate_all_env_vars

__all__ = [
    "TERMDECK_CONFIG_DIR",
    "get_env_var",
    "get_layouts_dir",
    "get_log_level",
    "validate_all_env_vars",
]
