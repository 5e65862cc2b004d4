"""
The container tree.

A container is a node of a binary tree that partitions the terminal. It
either holds two sub containers (``first`` and ``second``), holds one
widget, or is an empty leaf. Never both sub containers and a widget.

Usage:
    root = Container.new(
        split_vertical(
            left(place_widget(sidebar), id_("sidebar")),
            right(place_widget(editor), focused()),
            split_fixed(30),
        ),
        key_focus_next("tab"),
        key_focus_previous("shift+tab"),
    )
    errors = root.resolve(Region(0, 0, 120, 40))
"""

import logging
import weakref
from dataclasses import replace
from typing import Any, Iterable, Iterator, List, Optional

from textual.geometry import Region

from termdeck.exceptions import ConfigurationError, GeometryError

from . import geometry
from .focus import FocusTracker
from .options import Option, apply_options
from .types import ContainerOptions
from .validate import validate_tree

logger = logging.getLogger(__name__)


class Container:
    """A node in the layout tree.

    Containers are normally created through ``Container.new()`` for the
    root and by split options for everything below it.

    Attributes:
        options: The configuration record of this container
        first: Left or top sub container, if split
        second: Right or bottom sub container, if split
        area: Region handed to this container on the last resolve
        usable: Area after margin and border
        content: Region for the widget after padding (leaves only)
    """

    def __init__(self, parent: Optional["Container"] = None) -> None:
        if parent is None:
            self.options = ContainerOptions()
            self.focus_tracker = FocusTracker(self)
            self._parent: Optional[weakref.ReferenceType] = None
        else:
            # Inherited options are copied once, global options are shared.
            self.options = ContainerOptions(
                global_options=parent.options.global_options,
                inherited=replace(parent.options.inherited),
            )
            self.focus_tracker = parent.focus_tracker
            self._parent = weakref.ref(parent)

        self.first: Optional[Container] = None
        self.second: Optional[Container] = None
        self._widget: Any = None

        self.area: Optional[Region] = None
        self.usable: Optional[Region] = None
        self.content: Optional[Region] = None

    @classmethod
    def new(cls, *options: Option) -> "Container":
        """Create a root container, apply the options and validate the tree.

        Raises:
            ConfigurationError: If an option is invalid or the tree fails
                validation.
        """
        root = cls()
        apply_options(root, options)
        validate_tree(root)
        return root

    def __repr__(self) -> str:
        if self.has_widget:
            kind = f"widget={self._widget!r}"
        elif self.is_leaf:
            kind = "empty"
        else:
            kind = f"split={self.options.split.value}"
        return f"<Container id={self.options.id!r} {kind}>"

    # =========================================================================
    # Structure
    # =========================================================================

    @property
    def parent(self) -> Optional["Container"]:
        return self._parent() if self._parent is not None else None

    @property
    def root(self) -> "Container":
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def is_attached(self) -> bool:
        """Whether the container is still reachable from the root of its tree."""
        node = self
        parent = node.parent
        while parent is not None:
            if parent.first is not node and parent.second is not node:
                return False
            node, parent = parent, parent.parent
        return node is self.focus_tracker.root

    @property
    def is_leaf(self) -> bool:
        return self.first is None and self.second is None

    @property
    def has_widget(self) -> bool:
        return self._widget is not None

    @property
    def widget(self) -> Any:
        return self._widget

    def detach_content(self) -> None:
        """Drop the widget and both sub containers."""
        self._widget = None
        self.first = None
        self.second = None

    def set_widget(self, widget: Any) -> None:
        if not self.is_leaf:
            raise ConfigurationError(
                "containers with sub containers cannot hold a widget",
                container_id=self.options.id,
            )
        self._widget = widget

    def create_children(
        self, first_options: Iterable[Option], second_options: Iterable[Option]
    ) -> None:
        """Replace the content with two new sub containers and configure them.

        The first sub container is configured before the second one.
        """
        self.detach_content()
        self.first = Container(parent=self)
        self.second = Container(parent=self)
        apply_options(self.first, first_options)
        apply_options(self.second, second_options)

    def apply(self, *options: Option) -> None:
        """Apply options to this container without validating the tree.

        Options are applied in order and the first failure stops the rest.
        Call ``validate()`` before resolving the tree again.
        """
        apply_options(self, options)

    def validate(self) -> None:
        """Validate the whole tree this container belongs to."""
        validate_tree(self.root)

    def update(self, container_id: str, *options: Option) -> None:
        """Apply options to the container with the given id and re-validate.

        Raises:
            ConfigurationError: If no container has the id, an option fails,
                or the updated tree fails validation.
        """
        target = self.root.find(container_id)
        if target is None:
            raise ConfigurationError("no container with this ID", container_id=container_id)
        logger.debug("Updating container %r with %d options", container_id, len(options))
        apply_options(target, options)
        validate_tree(self.root)

    # =========================================================================
    # Traversal
    # =========================================================================

    def pre_order(self) -> Iterator["Container"]:
        """This container and its descendants, parent first, first before second."""
        stack: List[Container] = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.second is not None:
                stack.append(node.second)
            if node.first is not None:
                stack.append(node.first)

    def leaves(self) -> List["Container"]:
        """Leaf containers of this subtree in left-to-right order."""
        return [c for c in self.pre_order() if c.is_leaf]

    def find(self, container_id: str) -> Optional["Container"]:
        """The container in this subtree with the given id, if any."""
        if not container_id:
            return None
        for container in self.pre_order():
            if container.options.id == container_id:
                return container
        return None

    def leaf_at(self, x: int, y: int) -> Optional["Container"]:
        """The leaf whose resolved area contains the point, if any."""
        for container in self.leaves():
            if container.area is not None and container.area.contains(x, y):
                return container
        return None

    # =========================================================================
    # Geometry and focus
    # =========================================================================

    def resolve(self, region: Region) -> List[GeometryError]:
        """Recompute the regions of this container and all its descendants.

        Returns:
            Geometry errors; subtrees that failed have no regions.
        """
        return geometry.resolve(self, region)

    @property
    def focused(self) -> bool:
        return self.focus_tracker.is_active(self)

    def focus(self) -> None:
        """Move the keyboard focus to this container."""
        self.focus_tracker.set_active(self)
