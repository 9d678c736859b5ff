"""Validation Engine

validate_value applies a requirement list to one value; validate_values
walks a value tree and a requirement tree in lockstep. Neither raises for
failed requirements: failures are messages in the returned result.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from formcheck.logging import validation_logger
from .results import LeafResult, NodeResult
from .tree import Group, Leaf, RequirementNode, as_requirement, as_requirement_tree

log = validation_logger()

_EMPTY_GROUP = Group()


def validate_value(value: Any, requirements: Iterable[Any]) -> LeafResult:
    """Apply every requirement in order and collect failure messages.

    Evaluation does not stop at the first failure, so one field can report
    several messages. A falsy message is reported as "". Entries may be
    Requirement objects or anything as_requirement accepts, such as
    ``{"message": ..., "validate": ...}`` dicts.
    """
    checks = [as_requirement(req, f"[{i}]") for i, req in enumerate(requirements)]
    errors = tuple(req.message or "" for req in checks if not req.validate(value))
    return LeafResult(valid=not errors, errors=errors)


def _child_group(node: RequirementNode | None, field_path: str) -> Group:
    match node:
        case Group():
            return node
        case Leaf():
            log.warning("requirement_shape_mismatch", field=field_path, expected="group", found="leaf")
    return _EMPTY_GROUP


def _validate_field(value: Any, node: RequirementNode | None, field_path: str) -> LeafResult:
    match node:
        case Leaf():
            return validate_value(value, node)
        case Group():
            log.warning("requirement_shape_mismatch", field=field_path, expected="leaf", found="group")
    return LeafResult.unconstrained()


def _validate_group(values: Mapping[str, Any], group: Group, path: str) -> NodeResult:
    # Explicit stack so nesting depth is bounded by memory, not the recursion limit.
    # Each frame: (pending items, requirement group, dotted path, results, parent results, key in parent)
    stack = [(iter(values.items()), group, path, {}, None, None)]
    while True:
        items, node_group, node_path, results, parent, parent_key = stack[-1]
        for key, value in items:
            node = node_group.get(key)
            field_path = f"{node_path}.{key}" if node_path else str(key)
            if isinstance(value, Mapping):
                stack.append((iter(value.items()), _child_group(node, field_path), field_path, {}, results, key))
                break
            results[key] = _validate_field(value, node, field_path)
        else:
            stack.pop()
            outcome = NodeResult(valid=all(r.valid for r in results.values()), result=results)
            if parent is None:
                return outcome
            parent[parent_key] = outcome


def validate_values(
    values: Mapping[str, Any],
    requirements: Group | Mapping[str, Any] | None = None,
) -> NodeResult | None:
    """Validate a nested value tree against a requirement tree.

    Args:
        values: Field name -> scalar, list, or nested mapping
        requirements: Requirement tree (Group or plain nested dicts/lists)

    Returns:
        NodeResult for the root, or None when no requirement tree is given.
        Fields without requirements are reported valid.
    """
    if requirements is None:
        return None

    tree = requirements if isinstance(requirements, Group) else as_requirement_tree(requirements)
    outcome = _validate_group(values, tree, "")
    log.debug("values_validated", fields=len(outcome.result), valid=outcome.valid)
    return outcome
