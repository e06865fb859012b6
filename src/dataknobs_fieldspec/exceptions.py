"""Exception hierarchy for the dataknobs_fieldspec package.

Validation failures are never raised by the engine; they are returned as
:class:`~dataknobs_fieldspec.result.ValidationResult` values. The exceptions
here signal problems with the *specification* or its configuration, which are
programmer errors rather than bad input data.

Example:
    ```python
    from dataknobs_fieldspec.exceptions import AccessorError, FieldSpecError

    try:
        result = validate(record, COUNTRY_SPEC)
    except AccessorError as e:
        logger.error(f"Specification does not fit record: {e}")
        logger.error(f"Context: {e.context}")
    ```
"""

from __future__ import annotations

from typing import Any


class FieldSpecError(Exception):
    """Base exception for the fieldspec package.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context (field names, types, etc.)
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}
        self.details = self.context


class SpecificationError(FieldSpecError):
    """Raised when a specification is malformed.

    Typical causes are a non-callable predicate or accessor, or a constraint
    list holding something other than :class:`Constraint` instances.
    """

    pass


class AccessorError(SpecificationError):
    """Raised when a field accessor cannot address the record it is given.

    This is distinct from a validation failure: the data may be fine, but the
    specification does not match the shape of the record.
    """

    def __init__(self, field_name: Any, accessor: Any, record: Any, reason: str):
        self.field_name = field_name
        self.accessor = accessor
        self.record_type = type(record).__name__
        super().__init__(
            f"Field {field_name!r}: {accessor!r} cannot address "
            f"{self.record_type} record: {reason}",
            context={
                "field_name": field_name,
                "accessor": repr(accessor),
                "record_type": self.record_type,
            },
        )


class ConfigurationError(FieldSpecError):
    """Raised when a configuration document cannot be turned into a specification."""

    pass


class NotFoundError(FieldSpecError):
    """Raised when a named item is not registered."""

    pass


class RecordValidationError(FieldSpecError):
    """Raised on request for callers that prefer exceptions over result values.

    See :meth:`ValidationResult.raise_for_errors`.
    """

    def __init__(self, errors: list[tuple[Any, list[Any]]]):
        self.errors = errors
        names = ", ".join(repr(name) for name, _ in errors)
        super().__init__(
            f"Record failed validation on field(s): {names}",
            context={"errors": errors},
        )


__all__ = [
    "FieldSpecError",
    "SpecificationError",
    "AccessorError",
    "ConfigurationError",
    "NotFoundError",
    "RecordValidationError",
]
