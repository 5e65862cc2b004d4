"""
Declarative layouts for termdeck.

Example usage:
    from termdeck.layout import LayoutLoader

    loader = LayoutLoader()
    root = loader.build("dashboard", widgets={"logs": log_view, "cpu": cpu_chart})
"""

from .loader import LayoutLoader, build_layout, key_options, options_from_dict, parse_spacing_value

__all__ = [
    "LayoutLoader",
    "build_layout",
    "key_options",
    "options_from_dict",
    "parse_spacing_value",
]
