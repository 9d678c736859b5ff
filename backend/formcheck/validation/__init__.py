"""Declarative Form Validation

Requirement trees describe, per field, either an ordered list of
requirements or a nested group. Value trees are validated against them
level by level, producing per-field messages and a validity summary at
every nesting level.

Key Features:
- Pure requirement factories (required, email, min/max value, min/max length, pattern, custom)
- Collect-all evaluation: every failed requirement contributes its message
- Missing requirement entries are treated as valid
- Leaf | Group tagged union for requirement trees, with no nesting depth limit
- Requirements as Requirement objects or plain {"message", "validate"} dicts
- Mergeable requirement store for incrementally built forms

Usage:
    from formcheck.validation import requirement as r, validate_values

    outcome = validate_values(
        {"name": "Joe", "age": 15, "address": {"city": ""}},
        {
            "name": [r.required()],
            "age": [r.min_value(18, "You are underage")],
            "address": {"city": [r.required()]},
        },
    )
    outcome.valid                     # False
    outcome["age"].errors             # ("You are underage",)
    outcome["address"]["city"].errors # ("Required",)
"""

from .requirements import (
    Requirement,
    requirement,
    required,
    email,
    min_value,
    max_value,
    min_character,
    max_character,
    pattern,
    custom,
    is_blank,
    parse_leading_int,
)

from .tree import (
    Leaf,
    Group,
    RequirementNode,
    as_requirement,
    as_requirement_tree,
)

from .results import (
    LeafResult,
    NodeResult,
    FieldResult,
)

from .engine import (
    validate_value,
    validate_values,
)

from .store import (
    RequirementStore,
    merge_requirements,
)

from .form import FormValidator

from .errors import (
    ValidationError,
    ValidationErrorDetail,
    RequirementTreeError,
)

__all__ = [
    # Requirements
    "Requirement",
    "requirement",
    "required",
    "email",
    "min_value",
    "max_value",
    "min_character",
    "max_character",
    "pattern",
    "custom",
    "is_blank",
    "parse_leading_int",
    # Trees
    "Leaf",
    "Group",
    "RequirementNode",
    "as_requirement",
    "as_requirement_tree",
    # Results
    "LeafResult",
    "NodeResult",
    "FieldResult",
    # Engine
    "validate_value",
    "validate_values",
    # Store
    "RequirementStore",
    "merge_requirements",
    "FormValidator",
    # Errors
    "ValidationError",
    "ValidationErrorDetail",
    "RequirementTreeError",
]
