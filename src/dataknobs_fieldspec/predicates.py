"""Ready-made predicates for common rules.

Every function here either is a predicate (``value -> bool``) or builds one.
None of them treat None specially: absent values never reach a predicate.

Example:
    ```python
    from dataknobs_fieldspec import constraint
    from dataknobs_fieldspec.predicates import is_string, length_equals

    CODE_RULES = [
        constraint(is_string, "not_string"),
        constraint(length_equals(2), ("equal_length", 2)),
    ]
    ```
"""

from __future__ import annotations

import math
import re
from collections.abc import Collection
from numbers import Real
from re import Pattern as RegexPattern
from typing import Any

from .constraints import Predicate


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_bytes(value: Any) -> bool:
    return isinstance(value, (bytes, bytearray))


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_number(value: Any) -> bool:
    """Real numbers, excluding bools and NaN."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_mapping(value: Any) -> bool:
    return isinstance(value, dict)


def not_empty(value: Any) -> bool:
    """Objects with a length must have at least one element."""
    return not hasattr(value, "__len__") or len(value) > 0


def length_equals(length: int) -> Predicate:
    """Value must have exactly ``length`` elements."""
    if length < 0:
        raise ValueError(f"length cannot be negative: {length}")

    def check(value: Any) -> bool:
        return hasattr(value, "__len__") and len(value) == length

    check.__name__ = f"length_equals({length})"
    return check


def length_between(min: int | None = None, max: int | None = None) -> Predicate:
    """Value length must be within [min, max] (inclusive, either bound optional)."""
    if min is not None and min < 0:
        raise ValueError(f"min length cannot be negative: {min}")
    if max is not None and max < 0:
        raise ValueError(f"max length cannot be negative: {max}")
    if min is not None and max is not None and min > max:
        raise ValueError(f"min length ({min}) cannot be greater than max ({max})")

    def check(value: Any) -> bool:
        if not hasattr(value, "__len__"):
            return False
        length = len(value)
        if min is not None and length < min:
            return False
        return max is None or length <= max

    check.__name__ = f"length_between({min}, {max})"
    return check


def in_range(
    min: Real | None = None,
    max: Real | None = None,
    min_exclusive: bool = False,
    max_exclusive: bool = False,
) -> Predicate:
    """Numeric value must be within the given bounds (inclusive by default)."""
    if min is not None and max is not None and float(min) > float(max):  # type: ignore[arg-type]
        raise ValueError(f"min ({min}) cannot be greater than max ({max})")

    def check(value: Any) -> bool:
        if not is_number(value):
            return False
        number = float(value)
        if min is not None:
            low = float(min)  # type: ignore[arg-type]
            if number < low or (min_exclusive and number == low):
                return False
        if max is not None:
            high = float(max)  # type: ignore[arg-type]
            if number > high or (max_exclusive and number == high):
                return False
        return True

    check.__name__ = f"in_range({min}, {max})"
    return check


def matches(pattern: str | RegexPattern) -> Predicate:
    """String value must match the regex from its start (``re.match``)."""
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern

    def check(value: Any) -> bool:
        return isinstance(value, str) and regex.match(value) is not None

    check.__name__ = f"matches({regex.pattern!r})"
    return check


def one_of(values: Collection[Any], case_sensitive: bool = True) -> Predicate:
    """Value must be one of the allowed values."""
    if not values:
        raise ValueError("one_of requires at least one allowed value")
    allowed = list(values)
    if not case_sensitive:
        allowed = [v.lower() if isinstance(v, str) else v for v in allowed]

    def check(value: Any) -> bool:
        if not case_sensitive and isinstance(value, str):
            value = value.lower()
        return value in allowed

    check.__name__ = f"one_of({allowed!r})"
    return check


BUILTIN_PREDICATES: dict[str, Any] = {
    "is_string": is_string,
    "is_bytes": is_bytes,
    "is_integer": is_integer,
    "is_number": is_number,
    "is_boolean": is_boolean,
    "is_list": is_list,
    "is_mapping": is_mapping,
    "not_empty": not_empty,
}
"""Plain predicates, usable as-is."""

BUILTIN_PREDICATE_BUILDERS: dict[str, Any] = {
    "length_equals": length_equals,
    "length_between": length_between,
    "in_range": in_range,
    "matches": matches,
    "one_of": one_of,
}
"""Functions that take arguments and return a predicate."""


__all__ = [
    "is_string",
    "is_bytes",
    "is_integer",
    "is_number",
    "is_boolean",
    "is_list",
    "is_mapping",
    "not_empty",
    "length_equals",
    "length_between",
    "in_range",
    "matches",
    "one_of",
    "BUILTIN_PREDICATES",
    "BUILTIN_PREDICATE_BUILDERS",
]
