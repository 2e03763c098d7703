"""
In-memory record store gateway.

Ordered per-entity tables keyed by primary-key tuple. Useful as the store
behind tests and as a reference for gateway semantics.
"""
from __future__ import annotations

import threading
from typing import Any, Optional

from recordrepo.domain.condition import Condition
from recordrepo.domain.record import EntityRecord
from recordrepo.domain.schema import EntitySchema, SchemaRegistry
from recordrepo.exceptions import ConversionError, SchemaError, StoreAccessError
from recordrepo.observability.logger import get_logger
from recordrepo.utils.coercion import coerce

logger = get_logger(__name__)


class InMemoryStoreGateway:
    """
    Thread-safe StoreGateway backed by dicts.

    - query order is insertion order; a replaced record keeps its position
    - a single integer primary key left empty on upsert is assigned max + 1
    """

    def __init__(self, registry: SchemaRegistry) -> None:
        self._registry = registry
        self._tables: dict[str, dict[tuple[Any, ...], dict[str, Any]]] = {}
        self._lock = threading.RLock()

    @property
    def registry(self) -> SchemaRegistry:
        return self._registry

    def query_one(self, entity_name: str, condition: Condition) -> Optional[EntityRecord]:
        schema = self._schema(entity_name, condition, "query_one")
        with self._lock:
            for row in self._table(schema).values():
                if condition.matches(row):
                    return EntityRecord(entity_name, row)
        return None

    def query_all(self, entity_name: str, condition: Condition) -> list[EntityRecord]:
        schema = self._schema(entity_name, condition, "query_all")
        with self._lock:
            return [
                EntityRecord(entity_name, row)
                for row in self._table(schema).values()
                if condition.matches(row)
            ]

    def upsert(self, entity_name: str, record: EntityRecord) -> None:
        schema = self._registry.get(entity_name)
        schema.validate_fields(record.keys(), operation="upsert")

        with self._lock:
            table = self._table(schema)
            key = self._normalize_key(schema, record)
            if any(part is None for part in key):
                key = self._next_key(schema, table)

            row = dict.fromkeys(schema.field_names)
            existing = table.get(key)
            if existing is not None:
                row.update(existing)
            row.update(record)
            row.update(zip(schema.primary_key, key))
            self._check_nullability(schema, row)
            table[key] = row
            record.update(row)

        logger.debug("Record upserted", entity=entity_name, key=key, replaced=existing is not None)

    def delete_where(self, entity_name: str, condition: Condition) -> int:
        schema = self._schema(entity_name, condition, "delete_where")
        with self._lock:
            table = self._table(schema)
            doomed = [key for key, row in table.items() if condition.matches(row)]
            for key in doomed:
                del table[key]
        logger.debug("Records deleted", entity=entity_name, count=len(doomed))
        return len(doomed)

    def count(self, entity_name: str, condition: Condition) -> int:
        schema = self._schema(entity_name, condition, "count")
        with self._lock:
            return sum(1 for row in self._table(schema).values() if condition.matches(row))

    # --- helpers ---------------------------------------------------------------

    def _schema(self, entity_name: str, condition: Condition, operation: str) -> EntitySchema:
        schema = self._registry.get(entity_name)
        schema.validate_fields(condition.field_names(), operation=operation)
        return schema

    def _table(self, schema: EntitySchema) -> dict[tuple[Any, ...], dict[str, Any]]:
        return self._tables.setdefault(schema.name, {})

    @staticmethod
    def _normalize_key(schema: EntitySchema, record: EntityRecord) -> tuple[Any, ...]:
        """Key parts coerced to their declared types, so "1" and 1 name one row."""
        key = []
        for name, part in zip(schema.primary_key, schema.key_of(record)):
            try:
                key.append(None if part is None else coerce(part, schema.field(name).type_, field=name))
            except ConversionError as e:
                raise SchemaError(
                    f"Primary key field '{name}' of '{schema.name}' got {part!r}",
                    entity_name=schema.name,
                    operation="upsert",
                    details={"field": name},
                ) from e
        return tuple(key)

    @staticmethod
    def _next_key(schema: EntitySchema, table: dict[tuple[Any, ...], dict[str, Any]]) -> tuple[Any, ...]:
        pk = schema.primary_key
        if len(pk) != 1 or schema.field(pk[0]).type_ is not int:
            raise StoreAccessError(
                f"Record of '{schema.name}' has no value for primary key {', '.join(pk)}",
                entity_name=schema.name,
                operation="upsert",
                code="missing_primary_key",
            )
        return (max((key[0] for key in table), default=0) + 1,)

    @staticmethod
    def _check_nullability(schema: EntitySchema, row: dict[str, Any]) -> None:
        missing = [spec.name for spec in schema.fields if not spec.nullable and row.get(spec.name) is None]
        if missing:
            raise StoreAccessError(
                f"Record of '{schema.name}' violates NOT NULL on {', '.join(missing)}",
                entity_name=schema.name,
                operation="upsert",
                code="constraint_violation",
                details={"fields": missing},
            )


__all__ = ["InMemoryStoreGateway"]
