from recordrepo.example_type.entity import ExampleType
from recordrepo.example_type.mapper import ExampleTypeMapper
from recordrepo.example_type.repository import ExampleTypeRepository
from recordrepo.example_type.schema import EXAMPLE_TYPE, EXAMPLE_TYPE_SCHEMA

__all__ = [
    "ExampleType",
    "ExampleTypeMapper",
    "ExampleTypeRepository",
    "EXAMPLE_TYPE",
    "EXAMPLE_TYPE_SCHEMA",
]
