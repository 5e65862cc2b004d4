"""Tests for keyboard focus tracking."""

import pytest
from textual.geometry import Region

from termdeck.container import Container
from termdeck.container.options import (
    bottom,
    clear,
    focused,
    id_,
    key_focus_groups,
    key_focus_groups_next,
    key_focus_groups_previous,
    key_focus_next,
    key_focus_previous,
    key_focus_skip,
    left,
    place_widget,
    right,
    split_horizontal,
    split_vertical,
    top,
)

from conftest import FakeWidget


def _ids(containers):
    return [c.options.id for c in containers]


@pytest.fixture
def grouped_tree():
    """Leaves X, Y and Z side by side; ``n``/``p`` move within groups 1 and 2."""
    return Container.new(
        key_focus_groups_next("n", 1, 2),
        key_focus_groups_previous("p", 1, 2),
        split_vertical(
            left(id_("X"), key_focus_groups(1)),
            right(
                split_vertical(
                    left(id_("Y"), key_focus_groups(2, 1)),
                    right(id_("Z"), key_focus_groups(2), key_focus_skip()),
                )
            ),
        ),
    )


class TestInitialFocus:
    def test_root_focused_by_default(self, abc_tree):
        assert abc_tree.focused
        assert abc_tree.focus_tracker.active is abc_tree

    def test_focused_option(self):
        root = Container.new(split_vertical(left(id_("l")), right(id_("r"), focused())))
        assert root.find("r").focused
        assert not root.focused

    def test_last_focused_wins(self):
        root = Container.new(split_vertical(left(id_("l"), focused()), right(id_("r"))))
        root.update("l", focused())
        root.update("r", focused())
        assert root.find("r").focused
        assert not root.find("l").focused

    def test_focus_shared_by_tree(self, abc_tree):
        abc_tree.find("C").focus()
        assert abc_tree.find("A").focus_tracker.active is abc_tree.find("C")


class TestTraversal:
    """Next and previous visit leaves in pre-order and wrap around."""

    def test_leaves_in_order(self, abc_tree):
        assert _ids(abc_tree.leaves()) == ["A", "B", "C"]

    def test_next_cycles(self, abc_tree):
        tracker = abc_tree.focus_tracker
        visited = []
        for _ in range(4):
            tracker.next()
            visited.append(tracker.active.options.id)
        assert visited == ["A", "B", "C", "A"]

    def test_previous_cycles(self, abc_tree):
        tracker = abc_tree.focus_tracker
        abc_tree.find("A").focus()
        tracker.previous()
        assert tracker.active.options.id == "C"
        tracker.previous()
        assert tracker.active.options.id == "B"

    def test_previous_from_root_goes_to_last(self, abc_tree):
        abc_tree.focus_tracker.previous()
        assert abc_tree.focus_tracker.active.options.id == "C"

    def test_skip_excluded(self, abc_tree):
        abc_tree.update("B", key_focus_skip())
        tracker = abc_tree.focus_tracker
        abc_tree.find("A").focus()
        tracker.next()
        assert tracker.active.options.id == "C"
        tracker.previous()
        assert tracker.active.options.id == "A"

    def test_empty_leaves_are_focusable(self):
        root = Container.new(split_horizontal(top(id_("t")), bottom(id_("b"))))
        root.focus_tracker.next()
        assert root.focus_tracker.active.options.id == "t"

    def test_nothing_focusable(self):
        root = Container.new(key_focus_skip())
        assert not root.focus_tracker.next()
        assert root.focused


class TestFocusGroups:
    """Group keys move the focus within one focus group."""

    def test_next_in_group(self, grouped_tree):
        tracker = grouped_tree.focus_tracker
        grouped_tree.find("X").focus()
        assert tracker.next_in_group("n")
        # X is only in group 1: X -> Y
        assert tracker.active.options.id == "Y"

    def test_container_group_order_breaks_ties(self, grouped_tree):
        """Y is in groups [2, 1]; the key maps to both so group 2 is used."""
        tracker = grouped_tree.focus_tracker
        grouped_tree.find("Y").focus()
        assert tracker.group_for_key("n", forward=True) == 2
        tracker.next_in_group("n")
        assert tracker.active.options.id == "Z"

    def test_skipped_containers_still_in_group(self, grouped_tree):
        tracker = grouped_tree.focus_tracker
        grouped_tree.find("Y").focus()
        tracker.next_in_group("n")
        assert tracker.active.options.id == "Z"
        tracker.next_in_group("n")
        assert tracker.active.options.id == "Y"

    def test_previous_in_group(self, grouped_tree):
        tracker = grouped_tree.focus_tracker
        grouped_tree.find("X").focus()
        tracker.previous_in_group("p")
        # Group 1 holds X and Y, wrapping backwards from X.
        assert tracker.active.options.id == "Y"

    def test_no_effect_outside_groups(self, abc_tree):
        abc_tree.apply(key_focus_groups_next("n", 1))
        abc_tree.update("B", key_focus_groups(1))
        abc_tree.update("C", key_focus_groups(1))
        tracker = abc_tree.focus_tracker
        abc_tree.find("A").focus()
        assert not tracker.next_in_group("n")
        assert tracker.active.options.id == "A"

    def test_unbound_key(self, grouped_tree):
        grouped_tree.find("X").focus()
        assert grouped_tree.focus_tracker.group_for_key("q", forward=True) is None


class TestHandleKey:
    def test_global_keys(self, abc_tree):
        abc_tree.apply(key_focus_next("tab"), key_focus_previous("shift+tab"))
        tracker = abc_tree.focus_tracker
        assert tracker.handle_key("Tab")
        assert tracker.active.options.id == "A"
        assert tracker.handle_key("shift+tab")
        assert tracker.active.options.id == "C"

    def test_group_key_consumed_without_effect(self, grouped_tree):
        """Bound keys are consumed even when the focus cannot move."""
        tracker = grouped_tree.focus_tracker
        assert tracker.handle_key("n")
        assert tracker.active is grouped_tree

    def test_other_keys_ignored(self, abc_tree):
        abc_tree.apply(key_focus_next("tab"))
        assert not abc_tree.focus_tracker.handle_key("enter")
        assert abc_tree.focused


class TestFocusAfterChanges:
    def test_removed_container_returns_focus_to_root(self, abc_tree):
        abc_tree.find("B").focus()
        abc_tree.update("BC", clear())
        assert abc_tree.focus_tracker.active is abc_tree

    def test_replaced_widget_keeps_focus(self, abc_tree):
        abc_tree.find("B").focus()
        abc_tree.update("B", place_widget(FakeWidget("new")))
        assert abc_tree.find("B").focused


class TestMouseFocus:
    def test_focus_at_point(self, abc_tree):
        abc_tree.resolve(Region(0, 0, 30, 10))
        tracker = abc_tree.focus_tracker
        assert tracker.focus_at(20, 3)
        assert tracker.active.options.id == "B"
        assert tracker.focus_at(0, 0)
        assert tracker.active.options.id == "A"

    def test_focus_outside_tree(self, abc_tree):
        abc_tree.resolve(Region(0, 0, 30, 10))
        assert not abc_tree.focus_tracker.focus_at(100, 100)
        assert abc_tree.focused

    def test_skipped_leaf_can_be_clicked(self, abc_tree):
        abc_tree.update("C", key_focus_skip())
        abc_tree.resolve(Region(0, 0, 30, 10))
        assert abc_tree.focus_tracker.focus_at(29, 9)
        assert abc_tree.find("C").focused
