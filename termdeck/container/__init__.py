"""
Container tree for termdeck dashboards.

Provides the layout core:
- Options that configure containers (splits, sizing, margin, padding,
  borders, colors, keyboard focus)
- Whole-tree validation
- Geometry resolution from a root region to a region per container
- Keyboard focus tracking and traversal

Example usage:
    from termdeck.container import Container, options as o

    root = Container.new(
        o.split_horizontal(
            o.top(o.place_widget(header), o.key_focus_skip()),
            o.bottom(o.place_widget(body)),
            o.split_fixed(3),
        ),
        o.key_focus_next("tab"),
    )
    root.resolve(Region(0, 0, 80, 24))
"""

from . import options
from .container import Container
from .focus import FocusTracker
from .geometry import apply_spacing, split_lengths
from .types import (
    ContainerOptions,
    FocusGroup,
    GlobalOptions,
    HorizontalAlign,
    InheritedOptions,
    LineStyle,
    Spacing,
    SplitType,
    VerticalAlign,
)
from .validate import collect_problems, validate_tree

__all__ = [
    "Container",
    "ContainerOptions",
    "FocusGroup",
    "FocusTracker",
    "GlobalOptions",
    "HorizontalAlign",
    "InheritedOptions",
    "LineStyle",
    "Spacing",
    "SplitType",
    "VerticalAlign",
    "apply_spacing",
    "collect_problems",
    "options",
    "split_lengths",
    "validate_tree",
]
