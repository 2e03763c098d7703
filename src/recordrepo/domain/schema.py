"""
Entity Schema Definitions
Declared fields and primary keys of the entities a record store holds
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Mapping, Optional

from recordrepo.exceptions import SchemaError


@dataclass(frozen=True)
class FieldSpec:
    """
    A single declared field of an entity.

    Attributes:
        name: Field name as stored in records
        type_: Python type of stored values (str, int, float, Decimal, bool, date, datetime, UUID)
        nullable: Whether None is an allowed value
        primary_key: Whether the field is part of the primary key
        length: Optional maximum length for string fields
    """

    name: str
    type_: type = str
    nullable: bool = True
    primary_key: bool = False
    length: Optional[int] = None


@dataclass(frozen=True)
class EntitySchema:
    """
    Declared shape of one entity type.

    Invariants:
        - at least one field and at least one primary-key field
        - field names are unique
        - primary-key fields are not nullable
    """

    name: str
    fields: tuple[FieldSpec, ...]
    _by_name: Mapping[str, FieldSpec] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Entity schema name must be non-empty")
        if not self.fields:
            raise ValueError(f"Entity schema '{self.name}' declares no fields")

        by_name: dict[str, FieldSpec] = {}
        for spec in self.fields:
            if spec.name in by_name:
                raise ValueError(f"Duplicate field '{spec.name}' in entity schema '{self.name}'")
            if spec.primary_key and spec.nullable:
                raise ValueError(f"Primary key field '{spec.name}' of '{self.name}' must not be nullable")
            by_name[spec.name] = spec
        if not any(spec.primary_key for spec in self.fields):
            raise ValueError(f"Entity schema '{self.name}' declares no primary key")

        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(self, "_by_name", by_name)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    @property
    def primary_key(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields if spec.primary_key)

    def field(self, name: str) -> FieldSpec:
        try:
            return self._by_name[name]
        except KeyError:
            raise SchemaError(
                f"Field '{name}' is not declared by entity '{self.name}'",
                entity_name=self.name,
                details={"field": name},
            ) from None

    def has_field(self, name: str) -> bool:
        return name in self._by_name

    def validate_fields(self, names: Iterable[str], *, operation: Optional[str] = None) -> None:
        """Raise SchemaError if any of ``names`` is not a declared field."""
        unknown = sorted(n for n in set(names) if not self.has_field(n))
        if unknown:
            raise SchemaError(
                f"Entity '{self.name}' does not declare field(s): {', '.join(unknown)}",
                entity_name=self.name,
                operation=operation,
                details={"fields": unknown},
            )

    def key_of(self, values: Mapping[str, Any]) -> tuple[Any, ...]:
        """Primary-key tuple of a record; absent components are None."""
        return tuple(values.get(name) for name in self.primary_key)


class SchemaRegistry:
    """Name -> EntitySchema lookup shared by gateways."""

    def __init__(self, schemas: Iterable[EntitySchema] = ()) -> None:
        self._schemas: dict[str, EntitySchema] = {}
        for schema in schemas:
            self.register(schema)

    def register(self, schema: EntitySchema) -> EntitySchema:
        existing = self._schemas.get(schema.name)
        if existing is not None and existing != schema:
            raise ValueError(f"A different schema named '{schema.name}' is already registered")
        self._schemas[schema.name] = schema
        return schema

    def get(self, name: str) -> EntitySchema:
        try:
            return self._schemas[name]
        except KeyError:
            raise SchemaError(
                f"Entity '{name}' is not registered",
                entity_name=name,
                code="unknown_entity",
            ) from None

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __iter__(self) -> Iterator[EntitySchema]:
        return iter(self._schemas.values())

    def __len__(self) -> int:
        return len(self._schemas)


__all__ = ["FieldSpec", "EntitySchema", "SchemaRegistry"]
