"""Field accessors: strategies for pulling one field's value out of a record.

An accessor never decides whether a value is valid; it only answers "what is
the value of this field in this record". A value of ``None`` means the field
is absent. Accessors raise ``LookupError``, ``AttributeError`` or
``TypeError`` when they cannot address a record at all; the validation engine
turns those into :class:`~dataknobs_fieldspec.exceptions.AccessorError`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from .exceptions import SpecificationError


class Accessor(ABC):
    """Base class for all field accessors."""

    @abstractmethod
    def extract(self, record: Any) -> Any:
        """Return the field's value in ``record``, or None if it is absent.

        Args:
            record: Record to read from

        Returns:
            The field value, None when absent
        """
        pass

    def __call__(self, record: Any) -> Any:
        return self.extract(record)

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and vars(self) == vars(other)

    def __hash__(self) -> int:
        return hash((type(self), tuple(sorted(vars(self).items(), key=lambda kv: kv[0]))))


class IndexAccessor(Accessor):
    """Positional access into tuples, named tuples and other sequences.

    Index 0 is the first element. Out-of-range indexes are an addressing
    error, not an absent value.
    """

    def __init__(self, index: int):
        if isinstance(index, bool) or not isinstance(index, int):
            raise SpecificationError(
                f"Index must be an int, got {type(index).__name__}",
                context={"index": index},
            )
        self.index = index

    def extract(self, record: Any) -> Any:
        if isinstance(record, (str, bytes)) or not isinstance(record, Sequence):
            raise TypeError(f"{type(record).__name__} is not a positional record")
        return record[self.index]

    def __repr__(self) -> str:
        return f"IndexAccessor({self.index})"


class KeyAccessor(Accessor):
    """Keyed access into mappings.

    A missing key counts as an absent value, the same as an explicit None.
    """

    def __init__(self, key: Any):
        self.key = key

    def extract(self, record: Any) -> Any:
        if not isinstance(record, Mapping):
            raise TypeError(f"{type(record).__name__} is not a mapping")
        return record.get(self.key)

    def __repr__(self) -> str:
        return f"KeyAccessor({self.key!r})"


class AttributeAccessor(Accessor):
    """Attribute access on objects (dataclasses, plain classes, named tuples).

    The attribute must exist; a None value counts as absent.
    """

    def __init__(self, attribute: str):
        self.attribute = attribute

    def extract(self, record: Any) -> Any:
        return getattr(record, self.attribute)

    def __repr__(self) -> str:
        return f"AttributeAccessor({self.attribute!r})"


class NameAccessor(Accessor):
    """Access by field name: mapping key for mappings, attribute otherwise."""

    def __init__(self, name: str):
        self.name = name

    def extract(self, record: Any) -> Any:
        if isinstance(record, Mapping):
            return record.get(self.name)
        return getattr(record, self.name)

    def __repr__(self) -> str:
        return f"NameAccessor({self.name!r})"


class CallableAccessor(Accessor):
    """Wraps any ``record -> value`` callable, such as ``operator.itemgetter``."""

    def __init__(self, func: Callable[[Any], Any]):
        self.func = func

    def extract(self, record: Any) -> Any:
        return self.func(record)

    def __repr__(self) -> str:
        name = getattr(self.func, "__name__", None) or repr(self.func)
        return f"CallableAccessor({name})"


def as_accessor(accessor: Accessor | int | str | Callable[[Any], Any]) -> Accessor:
    """Normalize the accessor forms accepted by the field builders.

    Args:
        accessor: An Accessor, a positional index, a field name, or a callable

    Returns:
        An Accessor instance

    Raises:
        SpecificationError: If the value cannot be used as an accessor
    """
    if isinstance(accessor, Accessor):
        return accessor
    if isinstance(accessor, bool):
        raise SpecificationError("A bool is not a valid accessor", context={"accessor": accessor})
    if isinstance(accessor, int):
        return IndexAccessor(accessor)
    if isinstance(accessor, str):
        return NameAccessor(accessor)
    if callable(accessor):
        return CallableAccessor(accessor)
    raise SpecificationError(
        f"Cannot use {type(accessor).__name__} as a field accessor",
        context={"accessor": repr(accessor)},
    )


__all__ = [
    "Accessor",
    "IndexAccessor",
    "KeyAccessor",
    "AttributeAccessor",
    "NameAccessor",
    "CallableAccessor",
    "as_accessor",
]
