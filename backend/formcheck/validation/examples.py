"""Example Requirement Trees

Shows usage of the requirement factories, nested groups, custom
requirements and incremental merging.
"""
from __future__ import annotations

from .requirements import custom, email, max_character, min_character, min_value, pattern, required
from .tree import Group, as_requirement_tree

POSTAL_CODE = r"^\d{5}(-\d{4})?$"


def address_requirements() -> Group:
    """Postal address group."""
    return as_requirement_tree({
        "street": [required(), max_character(100)],
        "city": [required()],
        "postal_code": [required(), pattern(POSTAL_CODE, "Invalid postal code")],
    })


def signup_requirements() -> Group:
    """Signup form with a nested address."""
    return as_requirement_tree({
        "name": [required()],
        "email": [
            required(),
            email(),
            min_character(5),
            max_character(40, "Email is too long"),
            custom(lambda value: ".yahoo" not in str(value or ""), "Please use Gmail"),
        ],
        "age": [required(), min_value(18, "You are underage")],
        "hobbies": [required("Pick at least one hobby"), max_character(5, "Pick at most 5 hobbies")],
        "address": address_requirements(),
    })


def newsletter_requirements() -> Group:
    """Extra requirements a signup page adds when the newsletter box is ticked."""
    return as_requirement_tree({
        "email": [required("Email is needed for the newsletter")],
        "preferences": {"frequency": [required(), pattern(r"^(daily|weekly|monthly)$", "Unknown frequency")]},
    })
