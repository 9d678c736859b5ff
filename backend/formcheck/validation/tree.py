"""Requirement Trees

A requirement tree maps field names to either a Leaf (an ordered list of
requirements for one value) or a Group (a nested tree for a nested value).
Both variants are frozen; merging and parsing always build new nodes and
share Requirement objects by reference.
"""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union

from formcheck.errors import ErrorCode
from .errors import RequirementTreeError
from .requirements import Requirement


@dataclass(frozen=True, slots=True)
class Leaf:
    """Requirements for a single scalar or list value, in evaluation order."""
    requirements: tuple[Requirement, ...] = ()

    def __iter__(self) -> Iterator[Requirement]: return iter(self.requirements)

    def __len__(self) -> int: return len(self.requirements)

    def extend(self, other: Leaf) -> Leaf:
        return Leaf(self.requirements + other.requirements)


@dataclass(frozen=True, slots=True)
class Group:
    """Nested requirement tree keyed by field name."""
    children: Mapping[str, RequirementNode] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "children", MappingProxyType(dict(self.children)))

    def __getitem__(self, key: str) -> RequirementNode: return self.children[key]

    def __contains__(self, key: object) -> bool: return key in self.children

    def __iter__(self) -> Iterator[str]: return iter(self.children)

    def __len__(self) -> int: return len(self.children)

    def get(self, key: str, default: RequirementNode | None = None) -> RequirementNode | None:
        return self.children.get(key, default)

    def items(self):
        return self.children.items()

    def with_child(self, key: str, node: RequirementNode) -> Group:
        return Group({**self.children, key: node})

    def to_plain(self) -> dict[str, Any]:
        """Nested dict/list view, the shape callers write trees in."""
        root: dict[str, Any] = {}
        stack = [(iter(self.children.items()), root)]
        while stack:
            items, out = stack[-1]
            for key, node in items:
                if isinstance(node, Group):
                    out[key] = {}
                    stack.append((iter(node.children.items()), out[key]))
                    break
                out[key] = list(node.requirements)
            else:
                stack.pop()
        return root


RequirementNode = Union[Leaf, Group]


def as_requirement(obj: Any, path: str = "") -> Requirement:
    """Coerce one requirement entry to a Requirement.

    Accepts a Requirement, a mapping with a callable "validate" key (and
    optional "message" and "condition" keys), or any object exposing a
    callable ``validate`` attribute.

    Raises:
        RequirementTreeError: if obj is none of those.
    """
    if isinstance(obj, Requirement):
        return obj
    if isinstance(obj, Mapping) and callable(obj.get("validate")):
        return Requirement(validate=obj["validate"], message=obj.get("message"),
            condition=obj.get("condition"))
    if callable(getattr(obj, "validate", None)):
        return Requirement(validate=obj.validate, message=getattr(obj, "message", None),
            condition=getattr(obj, "condition", None))
    raise RequirementTreeError(
        f"Expected a Requirement, got {type(obj).__name__}",
        path=path,
        code=ErrorCode.E2101_INVALID_REQUIREMENT,
    )


def _parse_entry(obj: Any, path: str) -> RequirementNode:
    if isinstance(obj, (Leaf, Group)):
        return obj
    if isinstance(obj, (list, tuple)):
        return Leaf(tuple(as_requirement(item, f"{path}[{i}]") for i, item in enumerate(obj)))
    raise RequirementTreeError(
        f"Expected a list of requirements or a nested mapping, got {type(obj).__name__}",
        path=path,
    )


def _parse_node(obj: Any, path: str) -> RequirementNode:
    if not isinstance(obj, Mapping):
        return _parse_entry(obj, path)

    # Each frame: (pending items, dotted path, built children, parent children, key in parent)
    stack = [(iter(obj.items()), path, {}, None, None)]
    while True:
        items, group_path, children, parent, parent_key = stack[-1]
        for key, child in items:
            key = str(key)
            child_path = f"{group_path}.{key}" if group_path else key
            if isinstance(child, Mapping):
                stack.append((iter(child.items()), child_path, {}, children, key))
                break
            children[key] = _parse_entry(child, child_path)
        else:
            stack.pop()
            group = Group(children)
            if parent is None:
                return group
            parent[parent_key] = group


def as_requirement_tree(obj: Mapping[str, Any] | Group) -> Group:
    """Parse plain nested dicts/lists into a Group.

    Lists and tuples become Leaf nodes, mappings become Group nodes. List
    entries go through as_requirement, so plain dicts such as
    ``{"message": "Required", "validate": fn}`` work in place of Requirement.
    Nesting depth is not limited by the interpreter's recursion limit.

    Raises:
        RequirementTreeError: if any entry is neither a requirement list nor a mapping.
    """
    node = _parse_node(obj, "")
    if not isinstance(node, Group):
        raise RequirementTreeError("A requirement tree must be a mapping at the root")
    return node
