"""Validation result type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .exceptions import RecordValidationError

FieldErrors = tuple[Any, list[Any]]
"""A ``(name, errors)`` bucket; ``errors`` is never empty."""


@dataclass
class ValidationResult:
    """Outcome of validating one record against a specification.

    Either a success (``valid`` is True, ``errors`` empty) or a failure holding
    an ordered list of ``(name, errors)`` buckets, one per failing field.
    """

    valid: bool
    errors: list[FieldErrors] = field(default_factory=list)

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.valid

    @classmethod
    def success(cls) -> ValidationResult:
        """Create a successful validation result."""
        return cls(valid=True, errors=[])

    @classmethod
    def failure(cls, errors: list[FieldErrors]) -> ValidationResult:
        """Create a failed validation result.

        Args:
            errors: Non-empty list of (name, errors) buckets

        Returns:
            Failed ValidationResult

        Raises:
            ValueError: If errors is empty or holds an empty bucket
        """
        if not errors:
            raise ValueError("A failed result needs at least one field error")
        for name, field_errors in errors:
            if not field_errors:
                raise ValueError(f"Field {name!r} has an empty error list")
        return cls(valid=False, errors=errors)

    def fields(self) -> list[Any]:
        """Names of the failing fields, in result order."""
        return [name for name, _ in self.errors]

    def errors_for(self, name: Any) -> list[Any]:
        """Errors reported for ``name``; empty if the field passed."""
        for bucket_name, field_errors in self.errors:
            if bucket_name == name:
                return list(field_errors)
        return []

    def to_dict(self) -> dict[Any, list[Any]]:
        """Map each failing field name to its errors.

        Field names must be hashable for this view.
        """
        return {name: list(field_errors) for name, field_errors in self.errors}

    def raise_for_errors(self) -> ValidationResult:
        """Raise RecordValidationError on failure; return self otherwise."""
        if not self.valid:
            raise RecordValidationError(self.errors)
        return self


__all__ = ["FieldErrors", "ValidationResult"]
