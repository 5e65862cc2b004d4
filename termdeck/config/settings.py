"""Configuration utilities for termdeck."""

import logging
import os
from pathlib import Path
from typing import List, Optional, Tuple

from .constants import DEFAULT_LAYOUTS_DIR, ENV_VAR_DEFINITIONS


def validate_env_var(name: str, value: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Validate a single environment variable value.

    Args:
        name: The environment variable name.
        value: The current value (or None if not set).

    Returns:
        Tuple of (is_valid, error_message).
    """
    if name not in ENV_VAR_DEFINITIONS:
        return True, None  # Unknown vars are always valid

    if value is None:
        return True, None

    valid_values = ENV_VAR_DEFINITIONS[name].get("valid_values")
    if valid_values is None:
        return True, None

    if value.lower() not in [v.lower() for v in valid_values]:
        return False, f"Invalid value '{value}' for {name}. Valid values: {valid_values}"

    return True, None


def validate_all_env_vars() -> List[str]:
    """Validate all termdeck environment variables.

    Returns:
        List of error messages (empty if all valid).
    """
    errors = []
    for name in ENV_VAR_DEFINITIONS:
        is_valid, error = validate_env_var(name, os.environ.get(name))
        if not is_valid:
            errors.append(error)
    return errors


def get_env_var(name: str, validate: bool = True) -> Optional[str]:
    """Get an environment variable with optional validation.

    Args:
        name: The environment variable name.
        validate: Whether to validate the value against known definitions.

    Returns:
        The environment variable value, its default, or None.

    Raises:
        ValueError: If validate=True and the value is invalid.
    """
    value = os.environ.get(name)

    if validate and value is not None:
        is_valid, error = validate_env_var(name, value)
        if not is_valid:
            raise ValueError(error)

    if value is None and name in ENV_VAR_DEFINITIONS:
        return ENV_VAR_DEFINITIONS[name].get("default")

    return value


def get_layouts_dir() -> Path:
    """Get the directory searched for named layouts.

    Respects TERMDECK_LAYOUTS_DIR so tests and users can point elsewhere.
    """
    override = get_env_var("TERMDECK_LAYOUTS_DIR")
    if override:
        return Path(override).expanduser()
    return DEFAULT_LAYOUTS_DIR


def get_log_level() -> int:
    """Get the configured log level as a logging module constant.

    Invalid values fall back to WARNING; validate_all_env_vars() reports them.
    """
    name = get_env_var("TERMDECK_LOG_LEVEL", validate=False) or "WARNING"
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING
