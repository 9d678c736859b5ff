"""Requirement Store

Holds the current requirement tree for one form and merges additional
requirement trees into it. The store is a plain owned cell: one caller
context (a form, a request handler) owns it, and cross-thread use needs
external locking.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from formcheck.config import get_settings
from formcheck.errors import ErrorCode
from formcheck.logging import store_logger
from .errors import RequirementTreeError
from .tree import Group, Leaf, RequirementNode, as_requirement_tree

log = store_logger()

TreeInput = Group | Mapping[str, Any]


def _conflict(existing: RequirementNode, incoming: RequirementNode, path: str) -> RequirementTreeError:
    return RequirementTreeError(
        f"Cannot merge a {type(incoming).__name__.lower()} into an existing "
        f"{type(existing).__name__.lower()}",
        path=path,
        code=ErrorCode.E2102_MERGE_CONFLICT,
    )


def _merge_groups(base: Group, incoming: Group, path: str) -> Group:
    # Each frame: (pending incoming items, base group, dotted path, merged children, parent children, key in parent)
    stack = [(iter(incoming.items()), base, path, dict(base.children), None, None)]
    while True:
        items, base_group, group_path, merged, parent, parent_key = stack[-1]
        for key, node in items:
            existing = base_group.get(key)
            node_path = f"{group_path}.{key}" if group_path else key
            match node, existing:
                case Leaf(), None:
                    merged[key] = Leaf(node.requirements)
                case Leaf(), Leaf():
                    merged[key] = existing.extend(node)
                case Group(), None | Group():
                    child_base = Group() if existing is None else existing
                    stack.append((iter(node.items()), child_base, node_path, dict(child_base.children), merged, key))
                    break
                case _:
                    raise _conflict(existing, node, node_path)
        else:
            stack.pop()
            group = Group(merged)
            if parent is None:
                return group
            parent[parent_key] = group


def merge_requirements(base: TreeInput, incoming: TreeInput) -> Group:
    """Deep-merge incoming into base, returning a new tree.

    Leaf onto leaf concatenates (base requirements first); group onto group
    merges key by key; keys missing from base are created. Neither input
    is modified.

    Raises:
        RequirementTreeError: if a key holds a leaf on one side and a group on the other.
    """
    return _merge_groups(as_requirement_tree(base), as_requirement_tree(incoming), "")


class RequirementStore:
    """Owned, replaceable requirement tree.

    Args:
        requirements: Initial tree, or None for an empty store
        initialize_on_add: When the store is empty, whether add_requirements
            seeds it from the incoming tree (True) or does nothing (False).
            Defaults to the FORMCHECK_ADD_INITIALIZES_EMPTY setting.
    """

    __slots__ = ("_requirements", "initialize_on_add")

    def __init__(self, requirements: TreeInput | None = None, *, initialize_on_add: bool | None = None):
        self._requirements: Group | None = None if requirements is None else as_requirement_tree(requirements)
        if initialize_on_add is None:
            initialize_on_add = get_settings().ADD_INITIALIZES_EMPTY
        self.initialize_on_add = initialize_on_add

    def get_requirements(self) -> Group | None:
        return self._requirements

    def set_requirements(self, requirements: TreeInput | None) -> None:
        """Replace the held tree; None empties the store."""
        self._requirements = None if requirements is None else as_requirement_tree(requirements)
        log.debug("requirements_set", fields=len(self._requirements) if self._requirements else 0)

    def add_requirements(self, requirements: TreeInput) -> None:
        """Merge requirements into the held tree.

        On an empty store this is a no-op unless initialize_on_add is set.
        A merge conflict raises and leaves the held tree untouched.
        """
        incoming = as_requirement_tree(requirements)
        if self._requirements is None:
            if not self.initialize_on_add:
                log.info("requirements_add_ignored", reason="empty_store", fields=len(incoming))
                return
            self._requirements = _merge_groups(Group(), incoming, "")
            log.debug("requirements_initialized", fields=len(incoming))
            return

        self._requirements = _merge_groups(self._requirements, incoming, "")
        log.debug("requirements_merged", fields=len(incoming), total=len(self._requirements))
