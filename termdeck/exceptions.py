"""Exception hierarchy for termdeck.

Every error raised by the container core carries a human-readable message
plus keyword context (offending value, container id) so callers can report
exactly what was wrong.

Exception Hierarchy:
    TermdeckError (base)
    ├── ConfigurationError - invalid option values, conflicting modes, unknown ids
    │   └── ValidationError - aggregated whole-tree validation problems
    └── GeometryError - a region cannot be shrunk or split as requested

Usage:
    from termdeck.exceptions import ConfigurationError

    try:
        root = Container.new(split_vertical(left(...), right(...), split_percent(120)))
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
"""

from typing import Any, List, Optional


class TermdeckError(Exception):
    """Base exception for all termdeck errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (values, container ids)
    """

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(TermdeckError):
    """An option was given an invalid or conflicting value."""

    def __init__(
        self,
        message: str = "Configuration error",
        *,
        container_id: Optional[str] = None,
        **context: Any,
    ) -> None:
        if container_id:
            context["container_id"] = container_id
        super().__init__(message, **context)


class ValidationError(ConfigurationError):
    """One or more problems found while validating a container tree.

    All problems found in a single pass are reported together.
    """

    def __init__(self, problems: List[str]) -> None:
        self.problems = list(problems)
        super().__init__("; ".join(self.problems) or "Validation failed")


# =============================================================================
# Geometry Errors
# =============================================================================


class GeometryError(TermdeckError):
    """A region could not be shrunk or split as requested."""

    def __init__(
        self,
        message: str = "Geometry error",
        *,
        container_id: Optional[str] = None,
        **context: Any,
    ) -> None:
        if container_id:
            context["container_id"] = container_id
        super().__init__(message, **context)
