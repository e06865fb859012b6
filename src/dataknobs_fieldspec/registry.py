"""Named predicate registry used to build specifications from configuration.

Configuration documents refer to predicates by name. A registry maps each
name either to a plain predicate (``is_string``) or to a builder that takes
arguments and returns a predicate (``length_equals(2)``).

Example:
    ```python
    from dataknobs_fieldspec.registry import PredicateRegistry

    registry = PredicateRegistry.with_builtins()
    registry.register("is_iso_currency", lambda v: v in CURRENCIES)
    predicate = registry.resolve("length_equals", args=[3])
    ```
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from typing import Any

from .constraints import Predicate
from .exceptions import ConfigurationError, NotFoundError, SpecificationError
from .predicates import BUILTIN_PREDICATE_BUILDERS, BUILTIN_PREDICATES


class PredicateRegistry:
    """Thread-safe registry of named predicates and predicate builders.

    Attributes:
        name: Name of the registry (for error messages)
    """

    def __init__(self, name: str = "predicates"):
        self._name = name
        self._predicates: dict[str, Predicate] = {}
        self._builders: dict[str, Callable[..., Predicate]] = {}
        self._lock = threading.RLock()

    @classmethod
    def with_builtins(cls, name: str = "predicates") -> PredicateRegistry:
        """Create a registry pre-populated with the predicates module's rules."""
        registry = cls(name)
        for key, predicate in BUILTIN_PREDICATES.items():
            registry.register(key, predicate)
        for key, builder in BUILTIN_PREDICATE_BUILDERS.items():
            registry.register_builder(key, builder)
        return registry

    @property
    def name(self) -> str:
        """Get registry name."""
        return self._name

    def _check_free(self, key: str, allow_overwrite: bool) -> None:
        if not allow_overwrite and (key in self._predicates or key in self._builders):
            raise SpecificationError(
                f"Predicate '{key}' already registered in {self._name}",
                context={"key": key, "registry": self._name},
            )

    def register(self, key: str, predicate: Predicate, allow_overwrite: bool = False) -> None:
        """Register a plain predicate by name.

        Raises:
            SpecificationError: If predicate is not callable, or key is taken
                and allow_overwrite is False
        """
        if not callable(predicate):
            raise SpecificationError(
                f"Predicate '{key}' must be callable",
                context={"key": key, "registry": self._name},
            )
        with self._lock:
            self._check_free(key, allow_overwrite)
            self._builders.pop(key, None)
            self._predicates[key] = predicate

    def register_builder(
        self,
        key: str,
        builder: Callable[..., Predicate],
        allow_overwrite: bool = False,
    ) -> None:
        """Register a function that builds a predicate from arguments.

        Raises:
            SpecificationError: If builder is not callable, or key is taken
                and allow_overwrite is False
        """
        if not callable(builder):
            raise SpecificationError(
                f"Predicate builder '{key}' must be callable",
                context={"key": key, "registry": self._name},
            )
        with self._lock:
            self._check_free(key, allow_overwrite)
            self._predicates.pop(key, None)
            self._builders[key] = builder

    def unregister(self, key: str) -> None:
        """Remove a predicate or builder.

        Raises:
            NotFoundError: If key is not registered
        """
        with self._lock:
            if key in self._predicates:
                del self._predicates[key]
            elif key in self._builders:
                del self._builders[key]
            else:
                raise NotFoundError(
                    f"Predicate not found: {key}",
                    context={"key": key, "registry": self._name},
                )

    def has(self, key: str) -> bool:
        with self._lock:
            return key in self._predicates or key in self._builders

    def list_keys(self) -> list[str]:
        with self._lock:
            return sorted([*self._predicates, *self._builders])

    def count(self) -> int:
        with self._lock:
            return len(self._predicates) + len(self._builders)

    def resolve(
        self,
        key: str,
        args: Sequence[Any] | None = None,
        kwargs: dict[str, Any] | None = None,
    ) -> Predicate:
        """Turn a name (plus builder arguments) into a predicate.

        Args:
            key: Registered name
            args: Positional arguments for a builder
            kwargs: Keyword arguments for a builder

        Returns:
            A predicate callable

        Raises:
            NotFoundError: If key is not registered
            ConfigurationError: If arguments are given to a plain predicate, or
                the builder rejects them
        """
        with self._lock:
            predicate = self._predicates.get(key)
            builder = self._builders.get(key)
            if predicate is None and builder is None:
                raise NotFoundError(
                    f"Predicate not found: {key}",
                    context={"key": key, "registry": self._name, "available_keys": self.list_keys()},
                )

        if predicate is not None:
            if args or kwargs:
                raise ConfigurationError(
                    f"Predicate '{key}' takes no arguments",
                    context={"key": key, "args": args, "kwargs": kwargs},
                )
            return predicate

        try:
            return builder(*(args or ()), **(kwargs or {}))  # type: ignore[misc]
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Cannot build predicate '{key}': {e}",
                context={"key": key, "args": args, "kwargs": kwargs},
            ) from e

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __len__(self) -> int:
        return self.count()

    def __repr__(self) -> str:
        return f"PredicateRegistry(name='{self._name}', count={self.count()})"


__all__ = ["PredicateRegistry"]
