"""Build validators from configuration dictionaries or YAML/JSON files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from .accessors import Accessor, AttributeAccessor, IndexAccessor, KeyAccessor, NameAccessor
from .constraints import Constraint, constraint
from .exceptions import ConfigurationError, NotFoundError, SpecificationError
from .fields import FieldSpec, optional_field, required_field
from .registry import PredicateRegistry
from .validator import ErrorOrder, Validator

logger = logging.getLogger(__name__)

_FIELD_KEYS = {"name", "accessor", "required", "missing_error", "constraints", "description"}


def _as_identifier(value: Any) -> Any:
    """Lists in configuration become tuples so identifiers stay hashable."""
    if isinstance(value, list):
        return tuple(_as_identifier(v) for v in value)
    return value


class SpecificationFactory:
    """Factory for creating validators from configuration.

    Configuration Options:
        name (str): Validator name
        order (str): "declaration" (default) or "reversed"
        fields (list): List of field definitions

    Field Definition Options:
        name: Key used to group errors (required)
        accessor: Field name, integer index, or a mapping with one of
            ``key``, ``attribute`` or ``index`` (default: the field name)
        required (bool): Whether the field is required (default: False)
        missing_error: Error for an absent required field
            (default: ``"missing_<name>"``)
        constraints (list): Constraint definitions

    Constraint Definition Options:
        predicate (str): Name registered in the predicate registry
        args (list): Positional arguments for a predicate builder
        kwargs (dict): Keyword arguments for a predicate builder
        error: Error identifier; lists are converted to tuples

    Example Configuration:
        name: country
        fields:
          - name: code
            required: true
            missing_error: missing_code
            constraints:
              - predicate: is_string
                error: not_string
              - predicate: length_equals
                args: [2]
                error: [equal_length, 2]
          - name: currency
            constraints:
              - predicate: length_equals
                args: [3]
                error: [equal_length, 3]
    """

    def __init__(self, registry: PredicateRegistry | None = None):
        """Initialize the factory.

        Args:
            registry: Predicate registry; defaults to one holding the built-ins
        """
        self.registry = registry or PredicateRegistry.with_builtins()

    def create(self, **config: Any) -> Validator:
        """Create a Validator from configuration.

        Args:
            **config: Validator configuration

        Returns:
            Validator instance

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        name = config.get("name", "unnamed_spec")
        order = ErrorOrder.parse(config.get("order", ErrorOrder.DECLARATION))
        fields = config.get("fields", [])
        if not isinstance(fields, list):
            raise ConfigurationError(
                f"'fields' must be a list in spec '{name}'",
                context={"spec": name, "type": type(fields).__name__},
            )

        logger.info(f"Creating specification: {name}")
        specs = self.build_fields(fields)
        return Validator(specs, name=name, order=order)

    def from_file(self, path: str | Path) -> Validator:
        """Create a Validator from a YAML or JSON file.

        Args:
            path: Path to configuration file

        Returns:
            Validator instance
        """
        path = Path(path).resolve()

        if not path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {path}", context={"path": str(path)}
            )

        suffix = path.suffix.lower()
        with open(path) as f:
            if suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise ConfigurationError(
                    f"Unsupported file format: {suffix}", context={"path": str(path)}
                )

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file must hold a mapping: {path}", context={"path": str(path)}
            )
        data.setdefault("name", path.stem)
        return self.create(**data)

    def build_fields(self, field_configs: list[dict[str, Any]]) -> list[FieldSpec]:
        """Build field specifications from configuration.

        Args:
            field_configs: List of field configurations

        Returns:
            List of FieldSpec, in configuration order
        """
        specs = []
        for field_config in field_configs:
            spec = self._build_field(field_config)
            if spec is not None:
                specs.append(spec)
        return specs

    def _build_field(self, field_config: dict[str, Any]) -> FieldSpec | None:
        if not isinstance(field_config, dict):
            raise ConfigurationError(
                f"Field configuration must be a mapping, got {type(field_config).__name__}",
                context={"field": field_config},
            )
        field_name = field_config.get("name")
        if field_name is None:
            logger.warning("Field configuration missing 'name', skipping")
            return None

        unknown = set(field_config) - _FIELD_KEYS
        if unknown:
            logger.warning(f"Field '{field_name}': ignoring unknown keys {sorted(unknown)}")

        accessor = self._build_accessor(field_name, field_config.get("accessor", field_name))
        constraints = self._build_constraints(field_name, field_config.get("constraints") or [])

        if field_config.get("required", False):
            missing_error = _as_identifier(
                field_config.get("missing_error", f"missing_{field_name}")
            )
            return required_field(field_name, accessor, missing_error, constraints)
        return optional_field(field_name, accessor, constraints)

    def _build_accessor(self, field_name: Any, config: Any) -> Accessor:
        if isinstance(config, int) and not isinstance(config, bool):
            return IndexAccessor(config)
        elif isinstance(config, str):
            return NameAccessor(config)
        elif isinstance(config, dict) and len(config) == 1:
            kind, target = next(iter(config.items()))
            if kind == "key":
                return KeyAccessor(target)
            if kind == "attribute":
                return AttributeAccessor(target)
            if kind == "index":
                try:
                    return IndexAccessor(target)
                except SpecificationError as e:
                    raise ConfigurationError(
                        f"Field '{field_name}': invalid accessor {config!r}",
                        context={"field_name": field_name, **e.context},
                    ) from e

        raise ConfigurationError(
            f"Field '{field_name}': invalid accessor {config!r}",
            context={"field_name": field_name, "allowed": ["<name>", "<index>", "key", "attribute", "index"]},
        )

    def _build_constraints(
        self, field_name: Any, constraint_configs: list[dict[str, Any]]
    ) -> list[Constraint]:
        """Build constraint objects from configuration.

        Args:
            field_name: Owning field, for error messages
            constraint_configs: List of constraint configurations

        Returns:
            List of Constraint objects
        """
        constraints: list[Constraint] = []
        if not isinstance(constraint_configs, list):
            raise ConfigurationError(
                f"Field '{field_name}': 'constraints' must be a list",
                context={"field_name": field_name, "type": type(constraint_configs).__name__},
            )

        for config in constraint_configs:
            if not isinstance(config, dict):
                raise ConfigurationError(
                    f"Field '{field_name}': constraint must be a mapping, got {config!r}",
                    context={"field_name": field_name, "constraint": config},
                )
            predicate_name = config.get("predicate")
            if not predicate_name:
                raise ConfigurationError(
                    f"Field '{field_name}': constraint missing 'predicate'",
                    context={"field_name": field_name, "constraint": config},
                )
            if "error" not in config:
                raise ConfigurationError(
                    f"Field '{field_name}': constraint '{predicate_name}' missing 'error'",
                    context={"field_name": field_name, "predicate": predicate_name},
                )

            try:
                predicate = self.registry.resolve(
                    predicate_name, args=config.get("args"), kwargs=config.get("kwargs")
                )
            except NotFoundError as e:
                raise ConfigurationError(
                    f"Field '{field_name}': unknown predicate '{predicate_name}'",
                    context={"field_name": field_name, **e.context},
                ) from e

            constraints.append(constraint(predicate, _as_identifier(config["error"])))

        return constraints


specification_factory = SpecificationFactory()


__all__ = ["SpecificationFactory", "specification_factory"]
