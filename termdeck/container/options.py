"""
Container options.

Every option is a small immutable command object with a uniform
``apply(container)`` method. Options validate their own arguments when
applied and raise ``ConfigurationError`` before touching any state.

Options are created with the lower-case factory functions in this module:

    root = Container.new(
        split_vertical(
            left(place_widget(log_view), id_("logs")),
            right(place_widget(chart), border(LineStyle.LIGHT)),
            split_percent(30),
        ),
        key_focus_next("tab"),
    )
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable, Optional, Tuple, Type, Union

from rich.color import Color, ColorParseError

from termdeck.config.constants import (
    MAX_SPACING_PERCENT,
    MAX_SPLIT_PERCENT,
    MIN_SPACING_PERCENT,
    MIN_SPLIT_PERCENT,
)
from termdeck.exceptions import ConfigurationError

from .types import (
    ContainerOptions,
    FocusGroup,
    HorizontalAlign,
    Key,
    LineStyle,
    Side,
    SplitType,
    VerticalAlign,
    normalize_key,
)

if TYPE_CHECKING:
    from .container import Container

logger = logging.getLogger(__name__)

ColorLike = Union[Color, str]


def apply_options(container: "Container", options: Iterable["Option"]) -> None:
    """Apply options to the container in order.

    Stops at the first option that fails. Options applied before the
    failing one are kept.
    """
    for opt in options:
        if not isinstance(opt, Option):
            raise ConfigurationError(
                f"expected a container option, got {type(opt).__name__}",
                container_id=container.options.id,
            )
        logger.debug("Applying %r to container %r", opt, container.options.id)
        opt.apply(container)


class Option:
    """Base class for options applied to a container."""

    def apply(self, container: "Container") -> None:
        raise NotImplementedError


class SplitOption:
    """Base class for options that configure how a split divides space."""

    def apply_split(self, options: ContainerOptions) -> None:
        raise NotImplementedError


# =============================================================================
# Split sizing
# =============================================================================


def _check_int(name: str, value: Any, container_id: str = "") -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(
            f"invalid {name}({value!r}), must be an integer", container_id=container_id
        )


def _check_split_percent(name: str, percent: int) -> None:
    _check_int(name, percent)
    if percent <= MIN_SPLIT_PERCENT or percent >= MAX_SPLIT_PERCENT:
        raise ConfigurationError(
            f"invalid {name}({percent}), must be in range "
            f"{MIN_SPLIT_PERCENT} < p < {MAX_SPLIT_PERCENT}",
            value=percent,
        )


def _check_split_fixed(name: str, cells: int) -> None:
    _check_int(name, cells)
    if cells < 0:
        raise ConfigurationError(
            f"invalid {name}({cells}), must be in range 0 <= cells", value=cells
        )


@dataclass(frozen=True)
class SplitPercent(SplitOption):
    percent: int
    from_end: bool = False

    def apply_split(self, options: ContainerOptions) -> None:
        name = "split_percent_from_end" if self.from_end else "split_percent"
        _check_split_percent(name, self.percent)
        options.split_percent = self.percent
        if self.from_end:
            options.split_reversed = True


@dataclass(frozen=True)
class SplitFixed(SplitOption):
    cells: int
    from_end: bool = False

    def apply_split(self, options: ContainerOptions) -> None:
        name = "split_fixed_from_end" if self.from_end else "split_fixed"
        _check_split_fixed(name, self.cells)
        options.split_fixed = self.cells
        if self.from_end:
            options.split_reversed = True


def split_percent(p: int) -> SplitPercent:
    """Give the first child (left or top) p percent of the space, 0 < p < 100."""
    return SplitPercent(p)


def split_percent_from_end(p: int) -> SplitPercent:
    """Give the second child (right or bottom) p percent of the space."""
    return SplitPercent(p, from_end=True)


def split_fixed(cells: int) -> SplitFixed:
    """Give the first child exactly this many cells, the second the remainder."""
    return SplitFixed(cells)


def split_fixed_from_end(cells: int) -> SplitFixed:
    """Give the second child exactly this many cells, the first the remainder."""
    return SplitFixed(cells, from_end=True)


# =============================================================================
# Structure
# =============================================================================


@dataclass(frozen=True)
class ChildOptions:
    """Options for one of the two containers created by a split."""

    slot: str  # "left", "right", "top" or "bottom"
    options: Tuple[Option, ...] = ()


def left(*opts: Option) -> ChildOptions:
    """Options for the left container of a vertical split."""
    return ChildOptions("left", tuple(opts))


def right(*opts: Option) -> ChildOptions:
    """Options for the right container of a vertical split."""
    return ChildOptions("right", tuple(opts))


def top(*opts: Option) -> ChildOptions:
    """Options for the top container of a horizontal split."""
    return ChildOptions("top", tuple(opts))


def bottom(*opts: Option) -> ChildOptions:
    """Options for the bottom container of a horizontal split."""
    return ChildOptions("bottom", tuple(opts))


_SPLIT_SLOTS = {
    SplitType.VERTICAL: ("left", "right"),
    SplitType.HORIZONTAL: ("top", "bottom"),
}


@dataclass(frozen=True)
class Split(Option):
    """Split the container into two new sub containers.

    Any widget or previous sub containers are removed. The sizing of the
    previous split is reset before the split options are applied.
    """

    split_type: SplitType
    first: ChildOptions
    second: ChildOptions
    split_options: Tuple[SplitOption, ...] = ()

    def apply(self, container: "Container") -> None:
        expected = _SPLIT_SLOTS[self.split_type]
        if (self.first.slot, self.second.slot) != expected:
            raise ConfigurationError(
                f"{self.split_type.value} split expects {expected[0]}(...) and "
                f"{expected[1]}(...) options, got {self.first.slot}(...) and "
                f"{self.second.slot}(...)",
                container_id=container.options.id,
            )

        opts = container.options
        opts.split = self.split_type
        opts.split_reversed = False
        opts.split_percent = None
        opts.split_fixed = None
        container.detach_content()

        for split_opt in self.split_options:
            if not isinstance(split_opt, SplitOption):
                raise ConfigurationError(
                    f"expected a split option, got {type(split_opt).__name__}",
                    container_id=opts.id,
                )
            split_opt.apply_split(opts)

        container.create_children(self.first.options, self.second.options)


def split_vertical(
    left_opts: ChildOptions, right_opts: ChildOptions, *opts: SplitOption
) -> Split:
    """Split the container along the vertical axis into left and right."""
    return Split(SplitType.VERTICAL, left_opts, right_opts, tuple(opts))


def split_horizontal(
    top_opts: ChildOptions, bottom_opts: ChildOptions, *opts: SplitOption
) -> Split:
    """Split the container along the horizontal axis into top and bottom."""
    return Split(SplitType.HORIZONTAL, top_opts, bottom_opts, tuple(opts))


@dataclass(frozen=True)
class Clear(Option):
    """Remove the widget and any sub containers."""

    def apply(self, container: "Container") -> None:
        container.detach_content()
        container.options.split = None


def clear() -> Clear:
    return Clear()


@dataclass(frozen=True)
class PlaceWidget(Option):
    """Place a widget into the container, removing any sub containers."""

    widget: Any = field(compare=False)

    def apply(self, container: "Container") -> None:
        if self.widget is None:
            raise ConfigurationError(
                "place_widget requires a widget, use clear() to empty a container",
                container_id=container.options.id,
            )
        container.detach_content()
        container.options.split = None
        container.set_widget(self.widget)


def place_widget(widget: Any) -> PlaceWidget:
    return PlaceWidget(widget)


@dataclass(frozen=True)
class SetID(Option):
    id: str

    def apply(self, container: "Container") -> None:
        if not self.id:
            raise ConfigurationError("the ID cannot be an empty string")
        container.options.id = self.id


def id_(name: str) -> SetID:
    """Set an identifier that must be unique among all containers in the tree."""
    return SetID(name)


# =============================================================================
# Margin and padding
# =============================================================================


@dataclass(frozen=True)
class SpacingCells(Option):
    """Absolute margin or padding on one side, in cells."""

    kind: str  # "margin" or "padding"
    side: Side
    cells: int

    @property
    def name(self) -> str:
        return f"{self.kind}_{self.side.value}"

    def apply(self, container: "Container") -> None:
        _check_int(self.name, self.cells, container.options.id)
        if self.cells < 0:
            raise ConfigurationError(
                f"invalid {self.name}({self.cells}), must be in range 0 <= value",
                container_id=container.options.id,
            )
        spacing = getattr(container.options, self.kind)
        existing = spacing.percent(self.side)
        if existing > 0:
            raise ConfigurationError(
                f"cannot specify both {self.name}({self.cells}) and "
                f"{self.name}_percent({existing})",
                container_id=container.options.id,
            )
        spacing.set_cells(self.side, self.cells)


@dataclass(frozen=True)
class SpacingPercent(Option):
    """Relative margin or padding on one side, as a percentage of the box."""

    kind: str
    side: Side
    percent: int

    @property
    def name(self) -> str:
        return f"{self.kind}_{self.side.value}_percent"

    def apply(self, container: "Container") -> None:
        _check_int(self.name, self.percent, container.options.id)
        if self.percent < MIN_SPACING_PERCENT or self.percent > MAX_SPACING_PERCENT:
            raise ConfigurationError(
                f"invalid {self.name}({self.percent}), must be in range "
                f"{MIN_SPACING_PERCENT} <= value <= {MAX_SPACING_PERCENT}",
                container_id=container.options.id,
            )
        spacing = getattr(container.options, self.kind)
        existing = spacing.cells(self.side)
        if existing > 0:
            raise ConfigurationError(
                f"cannot specify both {self.name}({self.percent}) and "
                f"{self.kind}_{self.side.value}({existing})",
                container_id=container.options.id,
            )
        spacing.set_percent(self.side, self.percent)


def margin_top(cells: int) -> SpacingCells:
    return SpacingCells("margin", Side.TOP, cells)


def margin_right(cells: int) -> SpacingCells:
    return SpacingCells("margin", Side.RIGHT, cells)


def margin_bottom(cells: int) -> SpacingCells:
    return SpacingCells("margin", Side.BOTTOM, cells)


def margin_left(cells: int) -> SpacingCells:
    return SpacingCells("margin", Side.LEFT, cells)


def margin_top_percent(perc: int) -> SpacingPercent:
    return SpacingPercent("margin", Side.TOP, perc)


def margin_right_percent(perc: int) -> SpacingPercent:
    return SpacingPercent("margin", Side.RIGHT, perc)


def margin_bottom_percent(perc: int) -> SpacingPercent:
    return SpacingPercent("margin", Side.BOTTOM, perc)


def margin_left_percent(perc: int) -> SpacingPercent:
    return SpacingPercent("margin", Side.LEFT, perc)


def padding_top(cells: int) -> SpacingCells:
    return SpacingCells("padding", Side.TOP, cells)


def padding_right(cells: int) -> SpacingCells:
    return SpacingCells("padding", Side.RIGHT, cells)


def padding_bottom(cells: int) -> SpacingCells:
    return SpacingCells("padding", Side.BOTTOM, cells)


def padding_left(cells: int) -> SpacingCells:
    return SpacingCells("padding", Side.LEFT, cells)


def padding_top_percent(perc: int) -> SpacingPercent:
    return SpacingPercent("padding", Side.TOP, perc)


def padding_right_percent(perc: int) -> SpacingPercent:
    return SpacingPercent("padding", Side.RIGHT, perc)


def padding_bottom_percent(perc: int) -> SpacingPercent:
    return SpacingPercent("padding", Side.BOTTOM, perc)


def padding_left_percent(perc: int) -> SpacingPercent:
    return SpacingPercent("padding", Side.LEFT, perc)


# =============================================================================
# Alignment and border
# =============================================================================


@dataclass(frozen=True)
class SetLocal(Option):
    """Set a plain local option.

    Values of enum options are converted when applied, plain values are
    stored as they are.
    """

    attribute: str
    value: Any
    kind: Optional[Type[Enum]] = None

    def apply(self, container: "Container") -> None:
        value = self.value
        if self.kind is not None:
            try:
                value = self.kind(value)
            except ValueError as e:
                valid = ", ".join(m.value for m in self.kind)
                raise ConfigurationError(
                    f"invalid {self.attribute} {value!r}, must be one of: {valid}",
                    container_id=container.options.id,
                ) from e
        setattr(container.options, self.attribute, value)


def align_horizontal(h: HorizontalAlign) -> SetLocal:
    """Horizontal alignment of the widget, defaults to center."""
    return SetLocal("h_align", h, HorizontalAlign)


def align_vertical(v: VerticalAlign) -> SetLocal:
    """Vertical alignment of the widget, defaults to middle."""
    return SetLocal("v_align", v, VerticalAlign)


def border(style: LineStyle) -> SetLocal:
    return SetLocal("border", style, LineStyle)


def border_title(title: str) -> SetLocal:
    return SetLocal("border_title", title)


def border_title_align_left() -> SetLocal:
    return SetLocal("border_title_align", HorizontalAlign.LEFT)


def border_title_align_center() -> SetLocal:
    return SetLocal("border_title_align", HorizontalAlign.CENTER)


def border_title_align_right() -> SetLocal:
    return SetLocal("border_title_align", HorizontalAlign.RIGHT)


# =============================================================================
# Inherited colors
# =============================================================================


@dataclass(frozen=True)
class SetInheritedColor(Option):
    """Set a color that sub containers created afterwards start out with."""

    attribute: str
    color: ColorLike

    def apply(self, container: "Container") -> None:
        color = self.color
        if isinstance(color, str):
            try:
                color = Color.parse(color)
            except ColorParseError as e:
                raise ConfigurationError(
                    f"invalid color {self.color!r} for {self.attribute}",
                    container_id=container.options.id,
                ) from e
        container.options.inherited = replace(
            container.options.inherited, **{self.attribute: color}
        )


def border_color(color: ColorLike) -> SetInheritedColor:
    return SetInheritedColor("border_color", color)


def focused_color(color: ColorLike) -> SetInheritedColor:
    """Border color used while the container has keyboard focus."""
    return SetInheritedColor("focused_color", color)


def title_color(color: ColorLike) -> SetInheritedColor:
    return SetInheritedColor("title_color", color)


def title_focused_color(color: ColorLike) -> SetInheritedColor:
    return SetInheritedColor("title_focused_color", color)


# =============================================================================
# Keyboard focus
# =============================================================================


@dataclass(frozen=True)
class KeyFocusNext(Option):
    key: Key

    def apply(self, container: "Container") -> None:
        container.options.global_options.key_focus_next = normalize_key(self.key)


@dataclass(frozen=True)
class KeyFocusPrevious(Option):
    key: Key

    def apply(self, container: "Container") -> None:
        container.options.global_options.key_focus_previous = normalize_key(self.key)


def key_focus_next(key: Key) -> KeyFocusNext:
    """Key that moves focus to the next leaf container, for the whole tree."""
    return KeyFocusNext(key)


def key_focus_previous(key: Key) -> KeyFocusPrevious:
    """Key that moves focus to the previous leaf container, for the whole tree."""
    return KeyFocusPrevious(key)


@dataclass(frozen=True)
class KeyFocusSkip(Option):
    def apply(self, container: "Container") -> None:
        container.options.key_focus_skip = True


def key_focus_skip() -> KeyFocusSkip:
    """Never focus this container via the global next/previous keys."""
    return KeyFocusSkip()


def _check_group(group: FocusGroup, context: str) -> None:
    if isinstance(group, bool) or not isinstance(group, int) or group < 0:
        raise ConfigurationError(f"invalid focus group {group!r} in {context}, must be 0 <= group")


@dataclass(frozen=True)
class KeyFocusGroups(Option):
    """Add the container to focus groups; no groups removes it from all."""

    groups: Tuple[FocusGroup, ...] = ()

    def apply(self, container: "Container") -> None:
        for group in self.groups:
            _check_group(group, "key_focus_groups")
        opts = container.options
        if not self.groups:
            opts.key_focus_groups = []
        for group in self.groups:
            if group not in opts.key_focus_groups:
                opts.key_focus_groups.append(group)


def key_focus_groups(*groups: FocusGroup) -> KeyFocusGroups:
    return KeyFocusGroups(tuple(groups))


@dataclass(frozen=True)
class KeyFocusGroupsKey(Option):
    """Bind a key to moving focus within focus groups.

    A key can move focus in one direction only; binding it in both
    directions is an error. Without groups nothing is bound.
    """

    key: Key
    groups: Tuple[FocusGroup, ...]
    forward: bool

    def apply(self, container: "Container") -> None:
        global_opts = container.options.global_options
        key = normalize_key(self.key)
        if self.forward:
            name = "key_focus_groups_next"
            target, opposite = global_opts.key_focus_groups_next, global_opts.key_focus_groups_previous
            opposite_name = "key_focus_groups_previous"
        else:
            name = "key_focus_groups_previous"
            target, opposite = global_opts.key_focus_groups_previous, global_opts.key_focus_groups_next
            opposite_name = "key_focus_groups_next"

        for group in self.groups:
            _check_group(group, f"{name} for key {key!r}")
        if not self.groups:
            return
        if key in opposite:
            raise ConfigurationError(
                f"key {key!r} is already assigned as a {opposite_name} "
                f"for focus groups {opposite[key]}",
                container_id=container.options.id,
            )
        bound = target.setdefault(key, [])
        for group in self.groups:
            if group not in bound:
                bound.append(group)


def key_focus_groups_next(key: Key, *groups: FocusGroup) -> KeyFocusGroupsKey:
    """Key that moves focus to the next container within the focus groups."""
    return KeyFocusGroupsKey(key, tuple(groups), forward=True)


def key_focus_groups_previous(key: Key, *groups: FocusGroup) -> KeyFocusGroupsKey:
    """Key that moves focus to the previous container within the focus groups."""
    return KeyFocusGroupsKey(key, tuple(groups), forward=False)


@dataclass(frozen=True)
class Focused(Option):
    """Move the keyboard focus to this container."""

    def apply(self, container: "Container") -> None:
        container.focus_tracker.set_active(container)


def focused() -> Focused:
    return Focused()


__all__ = [
    "ChildOptions",
    "Option",
    "SplitOption",
    "align_horizontal",
    "align_vertical",
    "apply_options",
    "border",
    "border_color",
    "border_title",
    "border_title_align_center",
    "border_title_align_left",
    "border_title_align_right",
    "bottom",
    "clear",
    "focused",
    "focused_color",
    "id_",
    "key_focus_groups",
    "key_focus_groups_next",
    "key_focus_groups_previous",
    "key_focus_next",
    "key_focus_previous",
    "key_focus_skip",
    "left",
    "margin_bottom",
    "margin_bottom_percent",
    "margin_left",
    "margin_left_percent",
    "margin_right",
    "margin_right_percent",
    "margin_top",
    "margin_top_percent",
    "padding_bottom",
    "padding_bottom_percent",
    "padding_left",
    "padding_left_percent",
    "padding_right",
    "padding_right_percent",
    "padding_top",
    "padding_top_percent",
    "place_widget",
    "right",
    "split_fixed",
    "split_fixed_from_end",
    "split_horizontal",
    "split_percent",
    "split_percent_from_end",
    "split_vertical",
    "title_color",
    "title_focused_color",
    "top",
]
