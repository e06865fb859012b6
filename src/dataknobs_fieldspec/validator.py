"""Validation engine: evaluate a record against an ordered list of field specs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Any

from .exceptions import ConfigurationError, SpecificationError
from .fields import FieldSpec
from .result import FieldErrors, ValidationResult

logger = logging.getLogger(__name__)


class ErrorOrder(Enum):
    """Ordering of field buckets, and of errors within a bucket.

    DECLARATION follows the order in which fields and constraints were
    declared. REVERSED reports both in reverse declaration order, which is
    what a fold that prepends to its accumulator produces.
    """

    DECLARATION = "declaration"
    REVERSED = "reversed"

    @classmethod
    def parse(cls, value: ErrorOrder | str) -> ErrorOrder:
        """Accept an ErrorOrder or its (case-insensitive) string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as e:
            raise ConfigurationError(
                f"Unknown error order: {value!r}",
                context={"allowed": [o.value for o in cls]},
            ) from e


def _field_errors(spec: FieldSpec, record: Any) -> list[Any]:
    value = spec.extract(record)
    if value is None:
        if spec.required:
            return [spec.missing_error]
        return []
    return spec.check(value)


def validate(
    record: Any,
    specs: Sequence[FieldSpec],
    order: ErrorOrder | str = ErrorOrder.DECLARATION,
) -> ValidationResult:
    """Validate a record against its specification.

    Fields not listed in ``specs`` are never inspected. A required field whose
    value is absent yields exactly its ``missing_error``; its constraints are
    not evaluated. An absent optional field yields nothing.

    Args:
        record: Holds the data to validate; never modified
        specs: Ordered field specifications
        order: Ordering of buckets and of errors within a bucket

    Returns:
        ValidationResult.success() when no field fails, otherwise a failure
        with one (name, errors) bucket per failing field

    Raises:
        AccessorError: If a field accessor cannot address the record
    """
    order = ErrorOrder.parse(order)
    buckets: list[FieldErrors] = []

    for spec in specs:
        errors = _field_errors(spec, record)
        if not errors:
            continue
        for name, existing in buckets:
            if name == spec.name:
                existing.extend(errors)
                break
        else:
            buckets.append((spec.name, errors))

    if not buckets:
        return ValidationResult.success()

    if order is ErrorOrder.REVERSED:
        buckets = [(name, errors[::-1]) for name, errors in reversed(buckets)]
    return ValidationResult.failure(buckets)


class Validator:
    """A specification bound to an ordering policy, reusable across records.

    Example:
        ```python
        COUNTRY = Validator([
            required_field("name", "name", "missing_name"),
            optional_field("currency", "currency", [
                constraint(length_equals(3), ("equal_length", 3)),
            ]),
        ], name="country")

        if not COUNTRY.validate(record):
            ...
        ```
    """

    def __init__(
        self,
        specs: Iterable[FieldSpec],
        name: str | None = None,
        order: ErrorOrder | str = ErrorOrder.DECLARATION,
    ):
        """Initialize the validator.

        Args:
            specs: Field specifications, in declaration order
            name: Optional name for identification in logs
            order: Ordering of buckets and of errors within a bucket

        Raises:
            SpecificationError: If specs holds something other than FieldSpec
        """
        self.specs: tuple[FieldSpec, ...] = tuple(specs)
        for spec in self.specs:
            if not isinstance(spec, FieldSpec):
                raise SpecificationError(
                    f"Expected FieldSpec, got {type(spec).__name__}",
                    context={"validator": name},
                )
        self.name = name or "unnamed"
        self.order = ErrorOrder.parse(order)

    def __len__(self) -> int:
        return len(self.specs)

    def __repr__(self) -> str:
        return f"Validator({self.name!r}, fields={self.field_names!r}, order={self.order.value})"

    @property
    def field_names(self) -> list[Any]:
        """Names of the specified fields, in declaration order."""
        return [spec.name for spec in self.specs]

    def validate(self, record: Any) -> ValidationResult:
        """Validate one record; see :func:`validate`."""
        result = validate(record, self.specs, self.order)
        if not result.valid:
            logger.debug(f"{self.name}: record failed on {result.fields()}")
        return result

    def is_valid(self, record: Any) -> bool:
        """Return True if the record passes every field specification."""
        return self.validate(record).valid

    def validate_many(
        self,
        records: Iterable[Any],
        stop_on_error: bool = False,
    ) -> list[ValidationResult]:
        """Validate multiple records.

        Args:
            records: Records to validate
            stop_on_error: If True, stop after the first failing record

        Returns:
            One ValidationResult per validated record
        """
        results = []

        for record in records:
            result = self.validate(record)
            results.append(result)

            if not result.valid and stop_on_error:
                break

        logger.debug(
            f"{self.name}: validated {len(results)} records, "
            f"{sum(1 for r in results if not r.valid)} failed"
        )
        return results


__all__ = ["ErrorOrder", "Validator", "validate"]
