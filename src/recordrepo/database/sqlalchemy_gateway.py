"""
SQLAlchemy Implementation of the Record Store Gateway
Sync SQLAlchemy Core tables derived from the schema registry
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence
from uuid import UUID

import sqlalchemy as sa
from sqlalchemy import Column, Engine, MetaData, Table, delete, func, insert, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, SQLAlchemyError

from recordrepo.domain import condition as cond
from recordrepo.domain.condition import Condition
from recordrepo.domain.record import EntityRecord
from recordrepo.domain.schema import EntitySchema, FieldSpec, SchemaRegistry
from recordrepo.exceptions import StoreAccessError
from recordrepo.observability.logger import get_logger

logger = get_logger(__name__)

# Dialects with a native INSERT .. ON CONFLICT DO UPDATE
_UPSERT_INSERTS: Mapping[str, Any] = {
    "sqlite": sqlite_insert,
    "postgresql": pg_insert,
}

_COLUMN_TYPES: Mapping[type, Any] = {
    str: sa.String,
    int: sa.Integer,
    float: sa.Float,
    Decimal: sa.Numeric,
    bool: sa.Boolean,
    date: sa.Date,
    datetime: sa.DateTime,
    UUID: sa.Uuid,
}


def build_table(schema: EntitySchema, metadata: MetaData) -> Table:
    """Declare a Core table mirroring ``schema``."""
    single_int_pk = len(schema.primary_key) == 1 and schema.field(schema.primary_key[0]).type_ is int
    return Table(
        schema.name,
        metadata,
        *(_build_column(spec, autoincrement=single_int_pk) for spec in schema.fields),
    )


def _build_column(spec: FieldSpec, *, autoincrement: bool) -> Column:
    try:
        type_cls = _COLUMN_TYPES[spec.type_]
    except KeyError:
        raise ValueError(f"Unsupported field type {spec.type_!r} for field '{spec.name}'") from None
    col_type = type_cls(spec.length) if type_cls is sa.String and spec.length else type_cls()
    return Column(
        spec.name,
        col_type,
        primary_key=spec.primary_key,
        nullable=spec.nullable,
        autoincrement=autoincrement if spec.primary_key else False,
    )


def compile_condition(condition: Condition, table: Table) -> sa.ColumnElement[bool]:
    """Translate a Condition tree into a SQL boolean expression over ``table``."""
    if isinstance(condition, cond.Always):
        return sa.true()
    if isinstance(condition, cond.All):
        if not condition.conditions:
            return sa.true()
        return sa.and_(*(compile_condition(c, table) for c in condition.conditions))
    if isinstance(condition, cond.AnyOf):
        if not condition.conditions:
            return sa.false()
        return sa.or_(*(compile_condition(c, table) for c in condition.conditions))
    if isinstance(condition, cond.Not):
        return sa.not_(compile_condition(condition.condition, table))
    if isinstance(condition, cond.Comparison):
        return _compile_comparison(condition, table.c[condition.field])
    raise TypeError(f"Unsupported condition node {type(condition).__name__}")


def _compile_comparison(c: cond.Comparison, col: Column) -> sa.ColumnElement[bool]:
    op, value = c.op, c.value
    if op == cond.EQ:
        return col.is_(None) if value is None else col == value
    if op == cond.NE:
        # NULL != value holds, matching in-memory evaluation
        return col.is_not(None) if value is None else sa.or_(col != value, col.is_(None))
    if op == cond.IS_NULL:
        return col.is_(None) if value else col.is_not(None)
    if op == cond.IN:
        present = [v for v in value if v is not None]
        expr = col.in_(present)
        return sa.or_(expr, col.is_(None)) if len(present) != len(value) else expr
    if value is None:
        return sa.false()
    if op == cond.LIKE:
        return col.ilike(value)
    if op == cond.LT:
        return col < value
    if op == cond.LE:
        return col <= value
    if op == cond.GT:
        return col > value
    return col >= value


class SQLAlchemyStoreGateway:
    """
    StoreGateway over a relational database.

    Every call runs in its own ``engine.begin()`` transaction. Query order
    is primary-key order. On SQLite and PostgreSQL upsert is one
    INSERT .. ON CONFLICT statement. Table creation is left to the caller
    through ``metadata``.
    """

    def __init__(self, engine: Engine, registry: SchemaRegistry, metadata: Optional[MetaData] = None) -> None:
        self._engine = engine
        self._registry = registry
        self.metadata = metadata or MetaData()
        self._tables: dict[str, Table] = {}
        for schema in registry:
            self._table(schema)

    @property
    def registry(self) -> SchemaRegistry:
        return self._registry

    def create_tables(self) -> None:
        """Create missing tables for every registered entity (tests and local setups)."""
        for schema in self._registry:
            self._table(schema)
        self.metadata.create_all(self._engine)

    def query_one(self, entity_name: str, condition: Condition) -> Optional[EntityRecord]:
        schema, table = self._resolve(entity_name, condition, "query_one")
        try:
            stmt = (
                select(table)
                .where(compile_condition(condition, table))
                .order_by(*self._pk_columns(schema, table))
                .limit(1)
            )
            with self._engine.begin() as conn:
                row = conn.execute(stmt).mappings().first()
        except SQLAlchemyError as e:
            raise self._map_error(e, entity_name, "query_one")
        return EntityRecord(entity_name, row) if row is not None else None

    def query_all(self, entity_name: str, condition: Condition) -> list[EntityRecord]:
        schema, table = self._resolve(entity_name, condition, "query_all")
        try:
            stmt = (
                select(table)
                .where(compile_condition(condition, table))
                .order_by(*self._pk_columns(schema, table))
            )
            with self._engine.begin() as conn:
                rows = conn.execute(stmt).mappings().all()
        except SQLAlchemyError as e:
            raise self._map_error(e, entity_name, "query_all")
        return [EntityRecord(entity_name, row) for row in rows]

    def upsert(self, entity_name: str, record: EntityRecord) -> None:
        schema = self._registry.get(entity_name)
        schema.validate_fields(record.keys(), operation="upsert")
        table = self._table(schema)
        pk = schema.primary_key
        key = schema.key_of(record)
        values = record.as_dict()

        if any(part is None for part in key):
            if len(pk) != 1 or schema.field(pk[0]).type_ is not int:
                raise StoreAccessError(
                    f"Record of '{entity_name}' has no value for primary key {', '.join(pk)}",
                    entity_name=entity_name,
                    operation="upsert",
                    code="missing_primary_key",
                )
            values.pop(pk[0], None)

        dialect_insert = _UPSERT_INSERTS.get(self._engine.dialect.name)
        try:
            with self._engine.begin() as conn:
                if not values.keys() >= set(pk):
                    result = conn.execute(insert(table).values(**values))
                    key = tuple(result.inserted_primary_key)
                elif dialect_insert is not None:
                    conn.execute(self._upsert_statement(dialect_insert, table, pk, values))
                else:
                    self._select_then_write(conn, schema, table, key, values)

                # read back store-assigned and normalized values
                pk_cond = self._pk_condition(table, pk, key)
                row = conn.execute(select(table).where(pk_cond)).mappings().one()
        except SQLAlchemyError as e:
            raise self._map_error(e, entity_name, "upsert")

        record.update(row)
        logger.debug("Record upserted", entity=entity_name, key=key)

    def delete_where(self, entity_name: str, condition: Condition) -> int:
        _, table = self._resolve(entity_name, condition, "delete_where")
        try:
            with self._engine.begin() as conn:
                result = conn.execute(delete(table).where(compile_condition(condition, table)))
        except SQLAlchemyError as e:
            raise self._map_error(e, entity_name, "delete_where")
        logger.debug("Records deleted", entity=entity_name, count=result.rowcount)
        return result.rowcount

    def count(self, entity_name: str, condition: Condition) -> int:
        _, table = self._resolve(entity_name, condition, "count")
        try:
            stmt = select(func.count()).select_from(table).where(compile_condition(condition, table))
            with self._engine.begin() as conn:
                return int(conn.execute(stmt).scalar_one())
        except SQLAlchemyError as e:
            raise self._map_error(e, entity_name, "count")

    # --- helpers ---------------------------------------------------------------

    def _resolve(self, entity_name: str, condition: Condition, operation: str) -> tuple[EntitySchema, Table]:
        schema = self._registry.get(entity_name)
        schema.validate_fields(condition.field_names(), operation=operation)
        return schema, self._table(schema)

    def _table(self, schema: EntitySchema) -> Table:
        table = self._tables.get(schema.name)
        if table is None:
            table = self._tables[schema.name] = build_table(schema, self.metadata)
        return table

    @staticmethod
    def _upsert_statement(dialect_insert: Any, table: Table, pk: Sequence[str], values: dict[str, Any]) -> Any:
        """Single-statement insert-or-replace keyed on the primary key."""
        stmt = dialect_insert(table).values(**values)
        changes = {k: v for k, v in values.items() if k not in pk}
        if changes:
            return stmt.on_conflict_do_update(index_elements=list(pk), set_=changes)
        return stmt.on_conflict_do_nothing(index_elements=list(pk))

    def _select_then_write(
        self,
        conn: sa.Connection,
        schema: EntitySchema,
        table: Table,
        key: tuple[Any, ...],
        values: dict[str, Any],
    ) -> None:
        # dialects without ON CONFLICT; not atomic against concurrent inserts
        pk_cond = self._pk_condition(table, schema.primary_key, key)
        exists = conn.execute(select(*self._pk_columns(schema, table)).where(pk_cond)).first() is not None
        if not exists:
            conn.execute(insert(table).values(**values))
            return
        changes = {k: v for k, v in values.items() if k not in schema.primary_key}
        if changes:
            conn.execute(update(table).where(pk_cond).values(**changes))

    @staticmethod
    def _pk_columns(schema: EntitySchema, table: Table) -> list[Column]:
        return [table.c[name] for name in schema.primary_key]

    @staticmethod
    def _pk_condition(table: Table, pk: Sequence[str], key: Sequence[Any]) -> sa.ColumnElement[bool]:
        return sa.and_(*(table.c[name] == value for name, value in zip(pk, key)))

    def _map_error(self, error: SQLAlchemyError, entity_name: str, operation: str) -> StoreAccessError:
        """Map database errors to store access errors."""
        if isinstance(error, IntegrityError):
            code = "constraint_violation"
        elif isinstance(error, OperationalError) or (isinstance(error, DBAPIError) and error.connection_invalidated):
            code = "store_unavailable"
        else:
            code = "store_error"
        logger.error("Database operation failed", entity=entity_name, operation=operation, code=code, error=str(error))
        return StoreAccessError(
            f"{operation} on '{entity_name}' failed: {error}",
            entity_name=entity_name,
            operation=operation,
            code=code,
        )


__all__ = ["SQLAlchemyStoreGateway", "build_table", "compile_condition"]
