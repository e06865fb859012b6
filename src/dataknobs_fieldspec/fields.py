"""Field specifications and their builders.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from .accessors import Accessor, as_accessor
from .constraints import Constraint
from .exceptions import AccessorError, SpecificationError


@dataclass(frozen=True)
class FieldSpec:
    """The verification contract for one field of a record type.

    Attributes:
        name: Key used to group this field's errors in a result. Usually the
            field's own name, but any identifier works (e.g. a JSON path).
        accessor: Extracts the field value from a record
        required: Whether an absent value is an error
        missing_error: Reported when a required field is absent. Unused for
            optional fields.
        constraints: Rules applied, in order, to a present value
    """

    name: Any
    accessor: Accessor
    required: bool = False
    missing_error: Any = None
    constraints: tuple[Constraint, ...] = ()

    def extract(self, record: Any) -> Any:
        """Read this field's value from ``record``.

        Raises:
            AccessorError: If the accessor cannot address the record
        """
        try:
            return self.accessor.extract(record)
        except (LookupError, AttributeError, TypeError) as e:
            raise AccessorError(self.name, self.accessor, record, str(e)) from e

    def check(self, value: Any) -> list[Any]:
        """Collect the errors of every constraint ``value`` violates.

        Every constraint is evaluated exactly once, in declaration order.
        """
        return [c.error for c in self.constraints if not c.check(value)]


def _constraint_tuple(name: Any, constraints: Iterable[Constraint] | None) -> tuple[Constraint, ...]:
    if constraints is None:
        return ()
    result = tuple(constraints)
    for item in result:
        if not isinstance(item, Constraint):
            raise SpecificationError(
                f"Field {name!r}: expected Constraint, got {type(item).__name__}",
                context={"field_name": name},
            )
    return result


def required_field(
    name: Any,
    accessor: Accessor | int | str | Callable[[Any], Any],
    missing_error: Any,
    constraints: Iterable[Constraint] | None = None,
) -> FieldSpec:
    """Create the specification for a required field.

    Example:
        ```python
        required_field("country_code", "country_code", "missing_country_code", [
            constraint(is_string, "not_string"),
            constraint(length_equals(2), ("equal_length", 2)),
        ])
        ```

    Args:
        name: Key used to group the errors
        accessor: How to read the field (Accessor, index, name or callable)
        missing_error: Error reported if the value is absent
        constraints: Constraints verified when the value is present

    Returns:
        FieldSpec with ``required=True``
    """
    return FieldSpec(
        name=name,
        accessor=as_accessor(accessor),
        required=True,
        missing_error=missing_error,
        constraints=_constraint_tuple(name, constraints),
    )


def optional_field(
    name: Any,
    accessor: Accessor | int | str | Callable[[Any], Any],
    constraints: Iterable[Constraint] | None = None,
) -> FieldSpec:
    """Create the specification for an optional field.

    When the value is absent, the constraints are not verified and no error
    is reported.

    Args:
        name: Key used to group the errors
        accessor: How to read the field (Accessor, index, name or callable)
        constraints: Constraints verified when the value is present

    Returns:
        FieldSpec with ``required=False``
    """
    return FieldSpec(
        name=name,
        accessor=as_accessor(accessor),
        required=False,
        constraints=_constraint_tuple(name, constraints),
    )


__all__ = ["FieldSpec", "required_field", "optional_field"]
