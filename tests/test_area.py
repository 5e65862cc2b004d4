"""Tests for region arithmetic."""

import pytest
from textual.geometry import Region

from termdeck import area
from termdeck.exceptions import GeometryError


class TestShrink:
    """Tests for shrinking by cells."""

    def test_shrink_each_side(self):
        """Each side is shrunk independently."""
        assert area.shrink(Region(0, 0, 10, 10), 1, 2, 3, 4) == Region(4, 1, 4, 6)

    def test_shrink_keeps_offset(self):
        """Shrinking is relative to the region's origin."""
        assert area.shrink(Region(5, 7, 10, 10), 1, 1, 1, 1) == Region(6, 8, 8, 8)

    def test_shrink_to_zero_height(self):
        """A region can be shrunk to exactly zero."""
        assert area.shrink(Region(0, 0, 4, 4), 2, 0, 2, 0) == Region(0, 2, 4, 0)

    def test_shrink_below_zero_height_raises(self):
        """Removing more rows than there are is an error, not a clamp."""
        with pytest.raises(GeometryError, match="zero height"):
            area.shrink(Region(0, 0, 4, 4), 3, 0, 2, 0)

    def test_shrink_below_zero_width_raises(self):
        with pytest.raises(GeometryError, match="zero width"):
            area.shrink(Region(0, 0, 4, 4), 0, 3, 0, 2)

    def test_negative_amount_raises(self):
        with pytest.raises(GeometryError, match="negative"):
            area.shrink(Region(0, 0, 4, 4), -1, 0, 0, 0)


class TestShrinkPercent:
    """Tests for shrinking by percentages."""

    def test_top_uses_height(self):
        """MarginTopPercent(50) on height 10 leaves height 5 from the top."""
        assert area.shrink_percent(Region(0, 0, 20, 10), 50, 0, 0, 0) == Region(0, 5, 20, 5)

    def test_left_uses_width(self):
        assert area.shrink_percent(Region(0, 0, 20, 10), 0, 0, 0, 10) == Region(2, 0, 18, 10)

    def test_half_and_half_is_zero(self):
        result = area.shrink_percent(Region(0, 0, 10, 10), 50, 0, 50, 0)
        assert result.height == 0

    def test_over_hundred_percent_total_raises(self):
        with pytest.raises(GeometryError):
            area.shrink_percent(Region(0, 0, 10, 10), 50, 0, 60, 0)

    def test_percentage_rounds_down(self):
        """Percentages of odd dimensions round down."""
        assert area.percent_of(7, 50) == 3

    @pytest.mark.parametrize("perc", [-1, 101])
    def test_out_of_range_raises(self, perc):
        with pytest.raises(GeometryError, match="percentage"):
            area.shrink_percent(Region(0, 0, 10, 10), perc, 0, 0, 0)


class TestSplitAndBorder:
    """Tests for border exclusion and cutting regions."""

    def test_exclude_border(self):
        assert area.exclude_border(Region(2, 3, 10, 5)) == Region(3, 4, 8, 3)

    def test_exclude_border_too_small(self):
        with pytest.raises(GeometryError):
            area.exclude_border(Region(0, 0, 1, 1))

    def test_split_vertical(self):
        left, right = area.split_vertical(Region(0, 0, 10, 4), 3)
        assert left == Region(0, 0, 3, 4)
        assert right == Region(3, 0, 7, 4)

    def test_split_horizontal(self):
        top, bottom = area.split_horizontal(Region(1, 1, 10, 4), 1)
        assert top == Region(1, 1, 10, 1)
        assert bottom == Region(1, 2, 10, 3)

    def test_split_offset_outside_raises(self):
        with pytest.raises(GeometryError):
            area.split_vertical(Region(0, 0, 10, 4), 11)
