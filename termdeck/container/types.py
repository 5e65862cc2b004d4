"""
Configuration record for containers.

A container's settings come in three scopes:

- local options (``ContainerOptions``) belong to one container only,
- inherited options (``InheritedOptions``) are copied from the parent when
  a child container is created and diverge freely afterwards,
- global options (``GlobalOptions``) exist once per tree and are shared by
  reference between every container in it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from rich import box
from rich.color import Color

from termdeck.config.constants import (
    DEFAULT_FOCUSED_COLOR,
    DEFAULT_SPLIT_PERCENT,
    DEFAULT_SPLIT_REVERSED,
)

# Focus groups are non-negative integers.
FocusGroup = int

# Keys are Textual key names, e.g. "tab", "shift+tab", "ctrl+n".
Key = str


def normalize_key(key: Key) -> Key:
    """Canonical form of a key name used for comparisons."""
    return key.strip().lower()


class SplitType(Enum):
    """Axis along which a container is split."""

    VERTICAL = "vertical"  # first is left, second is right
    HORIZONTAL = "horizontal"  # first is top, second is bottom


class HorizontalAlign(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VerticalAlign(Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class LineStyle(Enum):
    """Border line styles."""

    NONE = "none"
    LIGHT = "light"
    DOUBLE = "double"
    ROUND = "round"
    HEAVY = "heavy"

    @property
    def box(self) -> Optional[box.Box]:
        """The rich box used to draw this style, None for no border."""
        return _BOXES.get(self)


_BOXES = {
    LineStyle.LIGHT: box.SQUARE,
    LineStyle.DOUBLE: box.DOUBLE,
    LineStyle.ROUND: box.ROUNDED,
    LineStyle.HEAVY: box.HEAVY,
}


class Side(Enum):
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"


@dataclass
class Spacing:
    """Margin or padding around a container.

    Each side is either a cell count or a percentage, never both. A value
    of zero means the representation is not in use for that side.
    """

    top_cells: int = 0
    top_percent: int = 0
    right_cells: int = 0
    right_percent: int = 0
    bottom_cells: int = 0
    bottom_percent: int = 0
    left_cells: int = 0
    left_percent: int = 0

    def cells(self, side: Side) -> int:
        return getattr(self, f"{side.value}_cells")

    def percent(self, side: Side) -> int:
        return getattr(self, f"{side.value}_percent")

    def set_cells(self, side: Side, cells: int) -> None:
        setattr(self, f"{side.value}_cells", cells)

    def set_percent(self, side: Side, percent: int) -> None:
        setattr(self, f"{side.value}_percent", percent)

    def is_empty(self) -> bool:
        return not any(self.cells(s) or self.percent(s) for s in Side)

    def to_cells(self, width: int, height: int) -> Tuple[int, int, int, int]:
        """Resolve each side to cells for a box of the given size.

        Returns:
            (top, right, bottom, left) cell counts
        """
        result = []
        for side in Side:
            dimension = height if side in (Side.TOP, Side.BOTTOM) else width
            if self.cells(side):
                result.append(self.cells(side))
            elif self.percent(side):
                result.append(dimension * self.percent(side) // 100)
            else:
                result.append(0)
        top, right, bottom, left = result
        return top, right, bottom, left


def _default_focused_color() -> Color:
    return Color.parse(DEFAULT_FOCUSED_COLOR)


@dataclass
class InheritedOptions:
    """Options a child container copies from its parent at creation time."""

    border_color: Optional[Color] = None
    focused_color: Color = field(default_factory=_default_focused_color)
    title_color: Optional[Color] = None
    title_focused_color: Optional[Color] = None


@dataclass
class GlobalOptions:
    """Options with a single value across the whole container tree.

    The group mappings associate a key with the focus groups it moves the
    focus within, in the order the groups were configured.
    """

    key_focus_next: Optional[Key] = None
    key_focus_previous: Optional[Key] = None
    key_focus_groups_next: Dict[Key, List[FocusGroup]] = field(default_factory=dict)
    key_focus_groups_previous: Dict[Key, List[FocusGroup]] = field(default_factory=dict)


def first_matching_group(
    key_groups: List[FocusGroup], container_groups: List[FocusGroup]
) -> Optional[FocusGroup]:
    """The first of the container's groups that the key is mapped to.

    The container's declaration order decides ties.
    """
    for group in container_groups:
        if group in key_groups:
            return group
    return None


@dataclass
class ContainerOptions:
    """Local options of a single container."""

    global_options: GlobalOptions = field(default_factory=GlobalOptions)
    inherited: InheritedOptions = field(default_factory=InheritedOptions)

    id: str = ""

    # Split configuration. None means the value was never set explicitly.
    split: Optional[SplitType] = None
    split_reversed: bool = DEFAULT_SPLIT_REVERSED
    split_percent: Optional[int] = None
    split_fixed: Optional[int] = None

    h_align: HorizontalAlign = HorizontalAlign.CENTER
    v_align: VerticalAlign = VerticalAlign.MIDDLE

    border: LineStyle = LineStyle.NONE
    border_title: str = ""
    border_title_align: HorizontalAlign = HorizontalAlign.LEFT

    margin: Spacing = field(default_factory=Spacing)
    padding: Spacing = field(default_factory=Spacing)

    key_focus_skip: bool = False
    key_focus_groups: List[FocusGroup] = field(default_factory=list)

    @property
    def effective_split_percent(self) -> int:
        if self.split_percent is None:
            return DEFAULT_SPLIT_PERCENT
        return self.split_percent

    @property
    def has_border(self) -> bool:
        return self.border is not LineStyle.NONE
