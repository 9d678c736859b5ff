"""Validation Results

LeafResult reports one field, NodeResult one nesting level. Both are frozen
and serialize to the plain {"valid": ..., "errors": [...]} /
{"valid": ..., "result": {...}} shapes used by form front-ends.
"""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Union

from .errors import ValidationError, ValidationErrorDetail


@dataclass(frozen=True, slots=True)
class LeafResult:
    """Outcome for a single field.

    errors is None when the field had no requirements at all, and a
    (possibly empty) tuple of failure messages otherwise.
    """
    valid: bool
    errors: tuple[str, ...] | None = None

    @classmethod
    def unconstrained(cls) -> LeafResult: return cls(valid=True)

    def to_dict(self) -> dict[str, Any]:
        if self.errors is None: return {"valid": self.valid}
        return {"valid": self.valid, "errors": list(self.errors)}


@dataclass(frozen=True, slots=True)
class NodeResult:
    """Outcome for a nesting level; valid iff every descendant leaf is valid."""
    valid: bool
    result: Mapping[str, FieldResult]

    def __post_init__(self):
        object.__setattr__(self, "result", MappingProxyType(dict(self.result)))

    def __getitem__(self, key: str) -> FieldResult: return self.result[key]

    def __contains__(self, key: object) -> bool: return key in self.result

    def iter_leaves(self, prefix: str = "") -> Iterator[tuple[str, LeafResult]]:
        """Yield (dotted_path, LeafResult) for every leaf, depth first in key order."""
        stack = [(prefix, iter(self.result.items()))]
        while stack:
            base, items = stack[-1]
            for key, child in items:
                path = f"{base}.{key}" if base else str(key)
                if isinstance(child, NodeResult):
                    stack.append((path, iter(child.result.items())))
                    break
                yield path, child
            else:
                stack.pop()

    def field_errors(self) -> dict[str, list[str]]:
        """Failure messages keyed by dotted field path; valid fields are omitted."""
        return {path: list(leaf.errors) for path, leaf in self.iter_leaves() if leaf.errors}

    def to_dict(self, *, compact: bool = False) -> dict[str, Any]:
        """Serialize to plain dicts.

        With compact=True nested groups are emitted as their bare result
        mapping (no per-group "valid"), matching the shape produced by the
        JavaScript form hook this library replaces.
        """
        root: dict[str, Any] = {}
        stack = [(iter(self.result.items()), root)]
        while stack:
            items, out = stack[-1]
            for key, child in items:
                if isinstance(child, NodeResult):
                    inner: dict[str, Any] = {}
                    out[key] = inner if compact else {"valid": child.valid, "result": inner}
                    stack.append((iter(child.result.items()), inner))
                    break
                out[key] = child.to_dict()
            else:
                stack.pop()
        return {"valid": self.valid, "result": root}

    def to_validation_error(self, message: str = "Validation failed") -> ValidationError | None:
        """Convert to ValidationError if any field failed."""
        if self.valid: return None
        details = [
            ValidationErrorDetail(field_path=path, message=msg)
            for path, leaf in self.iter_leaves() if leaf.errors
            for msg in leaf.errors
        ]
        return ValidationError(message=message, details=details)

    def raise_if_invalid(self, message: str = "Validation failed") -> None:
        if (error := self.to_validation_error(message)) is not None:
            raise error


FieldResult = Union[LeafResult, NodeResult]
