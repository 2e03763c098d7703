from .base_mapper import FieldMapper, Mapper
from .base_repository import Repository
from .engine import create_database_engine
from .gateway import StoreGateway
from .memory_gateway import InMemoryStoreGateway
from .sqlalchemy_gateway import SQLAlchemyStoreGateway

__all__ = [
    "Mapper",
    "FieldMapper",
    "Repository",
    "StoreGateway",
    "InMemoryStoreGateway",
    "SQLAlchemyStoreGateway",
    "create_database_engine",
]
