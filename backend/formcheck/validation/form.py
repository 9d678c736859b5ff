"""Form Validator

Bundles the requirement factory, a RequirementStore and the validation
engine behind one object per form.

Usage:
    form = FormValidator()
    r = form.requirement

    form.set_requirements({
        "name": [r.required()],
        "age": [r.min_value(18, "You are underage")],
        "address": {"city": [r.required()]},
    })
    outcome = form.validate_values({"name": "Joe", "age": 15, "address": {"city": ""}})
    outcome.field_errors()  # {"age": ["You are underage"], "address.city": ["Required"]}
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .engine import validate_value, validate_values
from .requirements import Requirement, requirement
from .results import LeafResult, NodeResult
from .store import RequirementStore, TreeInput
from .tree import Group


class FormValidator:
    """Requirement store plus validation entry points for one form."""

    __slots__ = ("_store",)

    requirement = requirement

    def __init__(self, requirements: TreeInput | None = None, *, initialize_on_add: bool | None = None):
        self._store = RequirementStore(requirements, initialize_on_add=initialize_on_add)

    @property
    def requirements(self) -> Group | None:
        return self._store.get_requirements()

    def get_requirements(self) -> Group | None:
        return self._store.get_requirements()

    def set_requirements(self, requirements: TreeInput | None) -> None:
        self._store.set_requirements(requirements)

    def add_requirements(self, requirements: TreeInput) -> None:
        self._store.add_requirements(requirements)

    @staticmethod
    def validate_value(value: Any, requirements: Iterable[Requirement]) -> LeafResult:
        return validate_value(value, requirements)

    def validate_values(
        self,
        values: Mapping[str, Any],
        requirements: TreeInput | None = None,
    ) -> NodeResult | None:
        """Validate against the given tree, falling back to the held one.

        Returns None when neither is available.
        """
        return validate_values(values, requirements if requirements is not None else self._store.get_requirements())
