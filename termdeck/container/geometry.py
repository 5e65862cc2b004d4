"""
Split and geometry resolution.

Turns a container tree plus the region available to its root into a
concrete region for every container:

- ``area``: the region handed to the container by its parent,
- ``usable``: the area after margin and border are removed; split
  containers divide this between their two children,
- ``content``: for widget containers, the usable region after padding;
  this is what the widget draws into.
"""

import logging
from typing import TYPE_CHECKING, List, Tuple

from textual.geometry import Region

from termdeck import area
from termdeck.exceptions import GeometryError

from .types import ContainerOptions, Spacing, SplitType

if TYPE_CHECKING:
    from .container import Container

logger = logging.getLogger(__name__)


def _round_half_up(numerator: int, denominator: int) -> int:
    return (2 * numerator + denominator) // (2 * denominator)


def split_lengths(length: int, options: ContainerOptions) -> Tuple[int, int]:
    """Divide a length between the first and second child of a split.

    Fixed splits give the fixed value to one side and the rest to the
    other, a fixed value larger than the length takes all of it.
    Percentage splits round to the nearest cell and, when there is room,
    always leave at least one cell on each side.

    Returns:
        (first, second) with first + second == length
    """
    if length < 0:
        raise GeometryError("cannot split a negative length", length=length)

    if options.split_fixed is not None:
        sized = min(options.split_fixed, length)
    else:
        sized = _round_half_up(length * options.effective_split_percent, 100)
        if length >= 2:
            sized = min(max(sized, 1), length - 1)

    if options.split_reversed:
        return length - sized, sized
    return sized, length - sized


def split_regions(region: Region, options: ContainerOptions) -> Tuple[Region, Region]:
    """Split a region into the regions of the first and second child."""
    if options.split is SplitType.VERTICAL:
        first, _ = split_lengths(region.width, options)
        return area.split_vertical(region, first)
    if options.split is SplitType.HORIZONTAL:
        first, _ = split_lengths(region.height, options)
        return area.split_horizontal(region, first)
    raise GeometryError("container is not split", container_id=options.id)


def apply_spacing(region: Region, spacing: Spacing) -> Region:
    """Shrink a region by a margin or padding.

    Each side uses its cell value if set, else its percentage of the
    height (top, bottom) or width (left, right) of the region.
    """
    if spacing.is_empty():
        return region
    top, right, bottom, left = spacing.to_cells(region.width, region.height)
    return area.shrink(region, top, right, bottom, left)


def _clear_geometry(container: "Container") -> None:
    for node in container.pre_order():
        node.area = None
        node.usable = None
        node.content = None


def resolve(container: "Container", region: Region) -> List[GeometryError]:
    """Recompute and store the regions of the container and its subtree.

    A failure clears the geometry of the subtree it happened in; the
    renderer draws nothing there. Other subtrees are still resolved.

    Returns:
        The geometry errors encountered, empty on success.
    """
    errors: List[GeometryError] = []
    _resolve(container, region, errors)
    return errors


def _resolve(container: "Container", region: Region, errors: List[GeometryError]) -> None:
    opts = container.options
    try:
        usable = apply_spacing(region, opts.margin)
        if opts.has_border:
            usable = area.exclude_border(usable)
        if container.is_leaf:
            content = apply_spacing(usable, opts.padding) if container.has_widget else usable
            children = None
        else:
            content = None
            children = split_regions(usable, opts)
    except GeometryError as e:
        context = {k: v for k, v in e.context.items() if k != "container_id"}
        error = GeometryError(e.message, container_id=opts.id, **context)
        logger.warning("Cannot resolve geometry of container %r: %s", opts.id, error)
        _clear_geometry(container)
        errors.append(error)
        return

    container.area = region
    container.usable = usable
    container.content = content
    if children is not None:
        first_region, second_region = children
        _resolve(container.first, first_region, errors)
        _resolve(container.second, second_region, errors)
