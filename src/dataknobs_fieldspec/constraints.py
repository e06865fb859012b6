"""Constraint: a predicate rule paired with the error it reports.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .exceptions import SpecificationError

Predicate = Callable[[Any], bool]
"""A callable returning True when a value satisfies the rule."""


@dataclass(frozen=True)
class Constraint:
    """A named predicate rule.

    The error identifier is opaque: any value the caller can compare or print
    works, for example ``"invalid_name"``, ``InvalidName`` or
    ``("name_too_long", 32)``. Embedding the rule's configuration in the
    identifier is often useful.

    Constraints are immutable, so one instance can be shared by many field
    specifications.
    """

    predicate: Predicate
    error: Any

    def check(self, value: Any) -> bool:
        """Return True if ``value`` satisfies this constraint."""
        return bool(self.predicate(value))

    def __repr__(self) -> str:
        name = getattr(self.predicate, "__name__", None) or repr(self.predicate)
        return f"Constraint({name}, error={self.error!r})"


def constraint(predicate: Predicate, error: Any) -> Constraint:
    """Create a new constraint.

    Example:
        ```python
        constraint(lambda v: isinstance(v, str), "not_string")
        constraint(lambda v: len(v) == 2, ("equal_length", 2))
        ```

    Args:
        predicate: Implements the rule to be verified
        error: Identifier reported when the predicate returns False

    Returns:
        Constraint instance

    Raises:
        SpecificationError: If predicate is not callable
    """
    if not callable(predicate):
        raise SpecificationError(
            f"Constraint predicate must be callable, got {type(predicate).__name__}",
            context={"error": error},
        )
    return Constraint(predicate=predicate, error=error)


__all__ = ["Constraint", "Predicate", "constraint"]
