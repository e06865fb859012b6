"""Declarative, rule-agnostic field validation for records.

Describe a record type once, as an ordered list of field specifications, then
validate any number of records against it:

- **Constraints**: a predicate paired with the error it reports
- **Field specs**: required or optional fields, each with its constraints
- **Validation**: per-field error buckets, or success
- **Configuration**: build specifications from YAML/JSON with named predicates

Example:
    ```python
    from dataknobs_fieldspec import (
        constraint, optional_field, required_field, validate,
    )
    from dataknobs_fieldspec.predicates import is_string, length_equals

    COUNTRY_SPEC = [
        required_field("code", "code", "missing_code", [
            constraint(is_string, "not_string"),
            constraint(length_equals(2), ("equal_length", 2)),
        ]),
        optional_field("currency", "currency", [
            constraint(length_equals(3), ("equal_length", 3)),
        ]),
    ]

    result = validate({"code": "NL", "currency": "EURO"}, COUNTRY_SPEC)
    result.errors
    # [('currency', [('equal_length', 3)])]
    ```
"""

from dataknobs_fieldspec.accessors import (
    Accessor,
    AttributeAccessor,
    CallableAccessor,
    IndexAccessor,
    KeyAccessor,
    NameAccessor,
    as_accessor,
)
from dataknobs_fieldspec.constraints import Constraint, Predicate, constraint
from dataknobs_fieldspec.exceptions import (
    AccessorError,
    ConfigurationError,
    FieldSpecError,
    NotFoundError,
    RecordValidationError,
    SpecificationError,
)
from dataknobs_fieldspec.factory import SpecificationFactory, specification_factory
from dataknobs_fieldspec.fields import FieldSpec, optional_field, required_field
from dataknobs_fieldspec.registry import PredicateRegistry
from dataknobs_fieldspec.result import FieldErrors, ValidationResult
from dataknobs_fieldspec.validator import ErrorOrder, Validator, validate

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Builders
    "Constraint",
    "Predicate",
    "constraint",
    "FieldSpec",
    "required_field",
    "optional_field",
    # Accessors
    "Accessor",
    "IndexAccessor",
    "KeyAccessor",
    "AttributeAccessor",
    "NameAccessor",
    "CallableAccessor",
    "as_accessor",
    # Validation
    "validate",
    "Validator",
    "ErrorOrder",
    "ValidationResult",
    "FieldErrors",
    # Configuration
    "PredicateRegistry",
    "SpecificationFactory",
    "specification_factory",
    # Exceptions
    "FieldSpecError",
    "SpecificationError",
    "AccessorError",
    "ConfigurationError",
    "NotFoundError",
    "RecordValidationError",
]
