"""
Keyboard focus tracking.

Exactly one container in a tree holds the keyboard focus. The tracker is
shared by every container of the tree and only keeps a weak reference to
the focused container; the tree owns its containers.

Focus moves between leaf containers in pre-order (first child before
second child), wrapping around at both ends:

- the global next/previous keys visit every leaf not marked with
  key_focus_skip(),
- a focus group key only visits leaves in one focus group, chosen from the
  focused container's groups in the order they were declared. Skipped
  leaves are still visited here.
"""

import logging
import weakref
from typing import TYPE_CHECKING, List, Optional

from .types import FocusGroup, Key, first_matching_group, normalize_key

if TYPE_CHECKING:
    from .container import Container

logger = logging.getLogger(__name__)


class FocusTracker:
    """Tracks which container of a tree has the keyboard focus."""

    def __init__(self, root: "Container") -> None:
        self._root = weakref.ref(root)
        self._active: Optional[weakref.ReferenceType] = None

    @property
    def root(self) -> "Container":
        root = self._root()
        if root is None:
            raise RuntimeError("the container tree no longer exists")
        return root

    @property
    def active(self) -> "Container":
        """The focused container, the root if none is focused.

        A focused container that has since been removed from the tree
        gives the focus back to the root.
        """
        container = self._active() if self._active is not None else None
        if container is None or not container.is_attached:
            return self.root
        return container

    def is_active(self, container: "Container") -> bool:
        return self.active is container

    def set_active(self, container: "Container") -> None:
        """Focus the container directly, regardless of skip flags and groups."""
        logger.debug("Focus set to container %r", container.options.id)
        self._active = weakref.ref(container)

    # =========================================================================
    # Traversal
    # =========================================================================

    def _move(self, candidates: List["Container"], forward: bool) -> bool:
        if not candidates:
            return False
        current = self.active
        if current in candidates:
            idx = candidates.index(current)
            target = candidates[(idx + (1 if forward else -1)) % len(candidates)]
        else:
            target = candidates[0] if forward else candidates[-1]
        self.set_active(target)
        return True

    def _focusable(self) -> List["Container"]:
        return [c for c in self.root.leaves() if not c.options.key_focus_skip]

    def _in_group(self, group: FocusGroup) -> List["Container"]:
        return [c for c in self.root.leaves() if group in c.options.key_focus_groups]

    def next(self) -> bool:
        """Focus the next leaf container. Returns whether focus moved."""
        return self._move(self._focusable(), forward=True)

    def previous(self) -> bool:
        """Focus the previous leaf container. Returns whether focus moved."""
        return self._move(self._focusable(), forward=False)

    def group_for_key(self, key: Key, forward: bool) -> Optional[FocusGroup]:
        """The focus group a group key acts on for the focused container."""
        global_opts = self.root.options.global_options
        mapping = global_opts.key_focus_groups_next if forward else global_opts.key_focus_groups_previous
        key_groups = mapping.get(normalize_key(key))
        if not key_groups:
            return None
        return first_matching_group(key_groups, self.active.options.key_focus_groups)

    def next_in_group(self, key: Key) -> bool:
        """Focus the next container in the focus group the key resolves to.

        Does nothing if the focused container isn't in any of the key's groups.
        """
        group = self.group_for_key(key, forward=True)
        if group is None:
            return False
        return self._move(self._in_group(group), forward=True)

    def previous_in_group(self, key: Key) -> bool:
        """Focus the previous container in the focus group the key resolves to."""
        group = self.group_for_key(key, forward=False)
        if group is None:
            return False
        return self._move(self._in_group(group), forward=False)

    # =========================================================================
    # Input
    # =========================================================================

    def handle_key(self, key: Key) -> bool:
        """Route a key press to the focus traversal it is bound to.

        Returns:
            True if the key is a focus key of this tree and was consumed.
        """
        key = normalize_key(key)
        global_opts = self.root.options.global_options
        if key == global_opts.key_focus_next:
            self.next()
            return True
        if key == global_opts.key_focus_previous:
            self.previous()
            return True
        if key in global_opts.key_focus_groups_next:
            self.next_in_group(key)
            return True
        if key in global_opts.key_focus_groups_previous:
            self.previous_in_group(key)
            return True
        return False

    def focus_at(self, x: int, y: int) -> bool:
        """Focus the leaf container whose resolved area contains the point.

        Used for mouse clicks. Returns whether a container was found.
        """
        target = self.root.leaf_at(x, y)
        if target is None:
            return False
        self.set_active(target)
        return True
