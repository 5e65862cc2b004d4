"""
Whole-tree validation.

Some invariants can't be checked by a single option because they span
the whole tree (unique ids) or several options (one sizing mode per
split). They are checked here, after the tree has been configured and
before it is used for geometry resolution.
"""

import logging
from typing import TYPE_CHECKING, List, Optional, Set

from termdeck.exceptions import ValidationError

if TYPE_CHECKING:
    from .container import Container

logger = logging.getLogger(__name__)


def _check_id(container: "Container", seen: Set[str]) -> Optional[str]:
    """Ids are either empty or unique."""
    container_id = container.options.id
    if not container_id:
        return None
    if container_id in seen:
        return f"duplicate container ID {container_id!r}"
    seen.add(container_id)
    return None


def _check_split_sizing(container: "Container") -> Optional[str]:
    """Only one of split_percent and split_fixed may be set.

    An explicit split_percent(50) counts as set even though it equals the
    default.
    """
    opts = container.options
    if opts.split_percent is not None and opts.split_fixed is not None:
        where = f" on container {opts.id!r}" if opts.id else ""
        return (
            f"only one of split_fixed({opts.split_fixed}) and "
            f"split_percent({opts.split_percent}) is allowed to be set per container{where}"
        )
    return None


def collect_problems(root: "Container") -> List[str]:
    """Walk the tree in pre-order and return every problem found."""
    problems: List[str] = []
    seen: Set[str] = set()
    for container in root.pre_order():
        for problem in (_check_id(container, seen), _check_split_sizing(container)):
            if problem:
                problems.append(problem)
    return problems


def validate_tree(root: "Container") -> None:
    """Validate the tree rooted at root.

    Raises:
        ValidationError: Listing all problems found in this pass.
    """
    problems = collect_problems(root)
    if problems:
        logger.debug("Container tree failed validation: %s", problems)
        raise ValidationError(problems)
