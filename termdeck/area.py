"""
Region arithmetic used by the container geometry resolver.

All functions are pure: they take a ``textual.geometry.Region`` and return
new regions, raising ``GeometryError`` instead of clamping when a request
cannot be satisfied.
"""

from typing import Tuple

from textual.geometry import Region

from termdeck.exceptions import GeometryError


def shrink(region: Region, top: int, right: int, bottom: int, left: int) -> Region:
    """Remove the given number of cells from each side of the region.

    Args:
        region: The region to shrink
        top, right, bottom, left: Cells to remove, all >= 0

    Returns:
        The shrunk region. Its width or height may be zero.

    Raises:
        GeometryError: On negative amounts or when the region would end up
            with a negative width or height.
    """
    for side, cells in (("top", top), ("right", right), ("bottom", bottom), ("left", left)):
        if cells < 0:
            raise GeometryError(f"cannot shrink {side} by a negative amount", cells=cells)

    if top + bottom > region.height:
        raise GeometryError(
            "cannot shrink region below zero height",
            region=tuple(region),
            top=top,
            bottom=bottom,
        )
    if left + right > region.width:
        raise GeometryError(
            "cannot shrink region below zero width",
            region=tuple(region),
            left=left,
            right=right,
        )

    return Region(
        region.x + left,
        region.y + top,
        region.width - left - right,
        region.height - top - bottom,
    )


def percent_of(length: int, percent: int) -> int:
    """Cells corresponding to a percentage of a length, rounded down."""
    return length * percent // 100


def shrink_percent(region: Region, top: int, right: int, bottom: int, left: int) -> Region:
    """Shrink each side by a percentage of the region.

    Top and bottom percentages are taken of the height, left and right of
    the width. Each value must be in the range 0 <= p <= 100.
    """
    for side, perc in (("top", top), ("right", right), ("bottom", bottom), ("left", left)):
        if perc < 0 or perc > 100:
            raise GeometryError(
                f"invalid {side} percentage, must be in range 0 <= p <= 100", percent=perc
            )

    return shrink(
        region,
        percent_of(region.height, top),
        percent_of(region.width, right),
        percent_of(region.height, bottom),
        percent_of(region.width, left),
    )


def exclude_border(region: Region) -> Region:
    """The region remaining inside a one cell wide border."""
    return shrink(region, 1, 1, 1, 1)


def split_vertical(region: Region, first_width: int) -> Tuple[Region, Region]:
    """Cut the region into a left part of first_width columns and the rest."""
    if first_width < 0 or first_width > region.width:
        raise GeometryError(
            "split offset outside of region", region=tuple(region), offset=first_width
        )
    left = Region(region.x, region.y, first_width, region.height)
    right = Region(region.x + first_width, region.y, region.width - first_width, region.height)
    return left, right


def split_horizontal(region: Region, first_height: int) -> Tuple[Region, Region]:
    """Cut the region into a top part of first_height rows and the rest."""
    if first_height < 0 or first_height > region.height:
        raise GeometryError(
            "split offset outside of region", region=tuple(region), offset=first_height
        )
    top = Region(region.x, region.y, region.width, first_height)
    bottom = Region(region.x, region.y + first_height, region.width, region.height - first_height)
    return top, bottom
