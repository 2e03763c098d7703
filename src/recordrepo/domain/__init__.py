"""
Record Domain Layer
Records, schemas, conditions and results shared by mappers, repositories and gateways
"""
from recordrepo.domain.condition import All, AnyOf, Comparison, Condition, FieldRef, Not, field, where
from recordrepo.domain.record import EntityRecord
from recordrepo.domain.result import Failure, Result, Success
from recordrepo.domain.schema import EntitySchema, FieldSpec, SchemaRegistry

__all__ = [
    "EntityRecord",
    "EntitySchema",
    "FieldSpec",
    "SchemaRegistry",
    "Condition",
    "Comparison",
    "All",
    "AnyOf",
    "Not",
    "FieldRef",
    "field",
    "where",
    "Result",
    "Success",
    "Failure",
]
