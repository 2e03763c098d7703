"""
recordrepo - typed domain objects over a generic entity record store
Mapper and Repository contracts, conditions, results and store gateways
"""

from recordrepo.database import (
    FieldMapper,
    InMemoryStoreGateway,
    Mapper,
    Repository,
    SQLAlchemyStoreGateway,
    StoreGateway,
    create_database_engine,
)
from recordrepo.domain import (
    Condition,
    EntityRecord,
    EntitySchema,
    Failure,
    FieldSpec,
    Result,
    SchemaRegistry,
    Success,
    field,
    where,
)
from recordrepo.exceptions import ConversionError, RecordRepoError, SchemaError, StoreAccessError

__all__ = [
    # Domain
    "EntityRecord",
    "EntitySchema",
    "FieldSpec",
    "SchemaRegistry",
    "Condition",
    "field",
    "where",
    "Result",
    "Success",
    "Failure",
    # Mapping / persistence
    "Mapper",
    "FieldMapper",
    "Repository",
    "StoreGateway",
    "InMemoryStoreGateway",
    "SQLAlchemyStoreGateway",
    "create_database_engine",
    # Errors
    "RecordRepoError",
    "ConversionError",
    "StoreAccessError",
    "SchemaError",
]
