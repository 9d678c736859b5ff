"""Requirement Factory

A Requirement pairs a predicate with the message reported when the
predicate fails. Factories are pure: every call builds a new, immutable
Requirement, so two calls with the same arguments give two distinct but
interchangeable instances.

Every factory except required() treats a blank value (None, "" or an empty
list/tuple) as valid, leaving emptiness to required() when both are composed.
"""
from __future__ import annotations

import math
import re
from collections.abc import Sized
from dataclasses import dataclass
from decimal import Decimal
from types import SimpleNamespace
from typing import Any, Callable

Predicate = Callable[[Any], bool]

# RFC 5322 simplified: dotted or quoted local part, dotted domain or bracketed IPv4
EMAIL_PATTERN = re.compile(
    r'(([^<>()\[\]\\.,;:\s@"]+(\.[^<>()\[\]\\.,;:\s@"]+)*)|(".+"))'
    r'@((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\])|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))'
)

_LEADING_INT = re.compile(r"\s*([+-]?)(?:0[xX]([0-9a-fA-F]+)|([0-9]+))")


@dataclass(frozen=True, slots=True, eq=False)
class Requirement:
    """A named predicate plus failure message.

    condition holds the factory parameter (threshold, pattern) for
    introspection; it is None for parameterless requirements.
    """
    validate: Predicate
    message: str | None = None
    condition: Any = None

    def __call__(self, value: Any) -> bool: return self.validate(value)

    def with_message(self, message: str) -> Requirement:
        return Requirement(validate=self.validate, message=message, condition=self.condition)


def is_blank(value: Any) -> bool:
    """True for None, "" and empty lists/tuples."""
    if value is None:
        return True
    if isinstance(value, (str, list, tuple)):
        return len(value) == 0
    return False


def parse_leading_int(value: Any) -> int | None:
    """Parse the leading integer of a value, ignoring trailing content.

    "42px" -> 42, "  -7" -> -7, "0x1A" -> 26, 3.9 -> 3, "abc" -> None.
    Booleans and non-scalars are not numbers.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        if isinstance(value, Decimal) and not value.is_finite():
            return None
        return int(value)
    if not isinstance(value, str):
        return None

    match = _LEADING_INT.match(value)
    if not match:
        return None
    sign, hex_digits, digits = match.groups()
    number = int(hex_digits, 16) if hex_digits else int(digits)
    return -number if sign == "-" else number


def _text_test(test: Callable[[str], bool]) -> Predicate:
    """Lift a string test to scalars (via str) and to each element of a list."""
    def predicate(value: Any) -> bool:
        if is_blank(value):
            return True
        if isinstance(value, (list, tuple)):
            return all(test(item if isinstance(item, str) else str(item)) for item in value)
        return test(value if isinstance(value, str) else str(value))
    return predicate


def _length_of(value: Any) -> int | None:
    return len(value) if isinstance(value, Sized) else None


# ============================================================================
# Factories
# ============================================================================

def required(message: str | None = None) -> Requirement:
    """Fails on None, "" and empty lists/tuples."""
    return Requirement(validate=lambda value: not is_blank(value), message=message or "Required")


def email(message: str | None = None) -> Requirement:
    return Requirement(
        validate=_text_test(lambda text: EMAIL_PATTERN.fullmatch(text) is not None),
        message=message or "Invalid Email",
    )


def min_value(condition: int | float, message: str | None = None) -> Requirement:
    """Leading integer of the value must be >= condition."""
    def validate(value: Any) -> bool:
        if is_blank(value):
            return True
        number = parse_leading_int(value)
        return number is not None and number >= condition

    return Requirement(validate=validate, message=message or f"Minimum Value ({condition})", condition=condition)


def max_value(condition: int | float, message: str | None = None) -> Requirement:
    """Leading integer of the value must be <= condition."""
    def validate(value: Any) -> bool:
        if is_blank(value):
            return True
        number = parse_leading_int(value)
        return number is not None and number <= condition

    return Requirement(validate=validate, message=message or f"Maximum Value ({condition})", condition=condition)


def min_character(condition: int, message: str | None = None) -> Requirement:
    """Character count (strings) or element count (sequences) must be >= condition."""
    def validate(value: Any) -> bool:
        if is_blank(value):
            return True
        length = _length_of(value)
        return length is not None and length >= condition

    return Requirement(validate=validate, message=message or f"Minimum Character ({condition})", condition=condition)


def max_character(condition: int, message: str | None = None) -> Requirement:
    """Character count (strings) or element count (sequences) must be <= condition."""
    def validate(value: Any) -> bool:
        if is_blank(value):
            return True
        length = _length_of(value)
        return length is not None and length <= condition

    return Requirement(validate=validate, message=message or f"Maximum Character ({condition})", condition=condition)


def pattern(condition: str | re.Pattern, message: str | None = None) -> Requirement:
    """Value must contain a match of condition (re.search semantics)."""
    compiled = condition if isinstance(condition, re.Pattern) else re.compile(condition)
    return Requirement(
        validate=_text_test(lambda text: compiled.search(text) is not None),
        message=message or "Invalid Pattern",
        condition=compiled,
    )


def custom(validate: Predicate, message: str | None = None, condition: Any = None) -> Requirement:
    """Wrap an arbitrary predicate.

    Usage:
        no_yahoo = custom(lambda v: ".yahoo" not in v, "Please use Gmail")
    """
    return Requirement(validate=validate, message=message, condition=condition)


requirement = SimpleNamespace(
    required=required,
    email=email,
    min_value=min_value,
    max_value=max_value,
    min_character=min_character,
    max_character=max_character,
    pattern=pattern,
    custom=custom,
)
