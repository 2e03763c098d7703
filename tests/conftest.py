from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

import pytest

from recordrepo.database.base_mapper import FieldMapper
from recordrepo.database.base_repository import Repository
from recordrepo.database.engine import create_database_engine
from recordrepo.database.memory_gateway import InMemoryStoreGateway
from recordrepo.database.sqlalchemy_gateway import SQLAlchemyStoreGateway
from recordrepo.domain.schema import EntitySchema, FieldSpec, SchemaRegistry
from recordrepo.example_type import EXAMPLE_TYPE_SCHEMA, ExampleTypeRepository
from recordrepo.exceptions import StoreAccessError


@dataclass
class Product:
    id: Optional[int] = None
    name: str = ""
    price: Decimal = Decimal("0")
    in_stock: bool = False
    released: Optional[date] = None


PRODUCT_SCHEMA = EntitySchema(
    name="Product",
    fields=(
        FieldSpec("id", int, nullable=False, primary_key=True),
        FieldSpec("name", str, nullable=False, length=80),
        FieldSpec("price", Decimal),
        FieldSpec("in_stock", bool),
        FieldSpec("released", date),
    ),
)


class FailingGateway:
    """Gateway double that fails every call and counts them."""

    def __init__(self, code: str = "store_unavailable") -> None:
        self.code = code
        self.calls: list[str] = []

    def _fail(self, operation: str, entity_name: str):
        self.calls.append(operation)
        raise StoreAccessError("store is down", entity_name=entity_name, operation=operation, code=self.code)

    def query_one(self, entity_name, condition):
        self._fail("query_one", entity_name)

    def query_all(self, entity_name, condition):
        self._fail("query_all", entity_name)

    def upsert(self, entity_name, record):
        self._fail("upsert", entity_name)

    def delete_where(self, entity_name, condition):
        self._fail("delete_where", entity_name)

    def count(self, entity_name, condition):
        self._fail("count", entity_name)


@pytest.fixture
def product_cls():
    return Product


@pytest.fixture
def registry():
    return SchemaRegistry([PRODUCT_SCHEMA, EXAMPLE_TYPE_SCHEMA])


@pytest.fixture
def memory_gateway(registry):
    return InMemoryStoreGateway(registry)


@pytest.fixture
def sqlite_gateway(registry):
    engine = create_database_engine("sqlite+pysqlite:///:memory:", echo=False)
    gateway = SQLAlchemyStoreGateway(engine, registry)
    gateway.create_tables()
    yield gateway
    engine.dispose()


@pytest.fixture(params=["memory", "sqlite"])
def gateway(request):
    return request.getfixturevalue(f"{request.param}_gateway")


@pytest.fixture
def failing_gateway():
    return FailingGateway()


@pytest.fixture
def product_mapper():
    return FieldMapper(Product, "Product")


@pytest.fixture
def product_repo(gateway, product_mapper):
    return Repository(Product, "Product", gateway, product_mapper)


@pytest.fixture
def example_types(gateway):
    return ExampleTypeRepository(gateway)
