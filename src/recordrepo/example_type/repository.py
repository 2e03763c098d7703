from __future__ import annotations

from typing import Any, List, Mapping, Optional

from recordrepo.database.base_mapper import Mapper
from recordrepo.database.base_repository import Repository
from recordrepo.database.gateway import StoreGateway
from recordrepo.domain.condition import Condition, where
from recordrepo.domain.result import Result
from recordrepo.example_type.entity import ExampleType
from recordrepo.example_type.mapper import ExampleTypeMapper
from recordrepo.example_type.schema import EXAMPLE_TYPE
from recordrepo.exceptions import StoreAccessError


class ExampleTypeRepository:
    """
    ExampleType queries composed around a generic Repository.

    The generic contract is forwarded unchanged; the tree lookups are
    additions expressed as conditions over the record schema.
    """

    def __init__(self, gateway: StoreGateway, mapper: Optional[Mapper[ExampleType]] = None) -> None:
        self._repo: Repository[ExampleType] = Repository(
            ExampleType,
            EXAMPLE_TYPE,
            gateway,
            mapper or ExampleTypeMapper(),
        )

    @property
    def generic(self) -> Repository[ExampleType]:
        return self._repo

    # --- generic contract ------------------------------------------------------

    def find_one(self, condition: Condition) -> Result[Optional[ExampleType], StoreAccessError]:
        return self._repo.find_one(condition)

    def find_many(self, condition: Condition) -> Result[List[ExampleType], StoreAccessError]:
        return self._repo.find_many(condition)

    def find_all(self) -> Result[List[ExampleType], StoreAccessError]:
        return self._repo.find_all()

    def find_by_id(self, identifier: Mapping[str, Any]) -> Result[Optional[ExampleType], StoreAccessError]:
        return self._repo.find_by_id(identifier)

    def count(self, condition: Optional[Condition] = None) -> Result[int, StoreAccessError]:
        return self._repo.count(condition)

    def exists(self, condition: Condition) -> Result[bool, StoreAccessError]:
        return self._repo.exists(condition)

    def create_or_update(self, value: ExampleType) -> Result[ExampleType, StoreAccessError]:
        return self._repo.create_or_update(value)

    def delete_by_id(self, identifier: Mapping[str, Any]) -> Result[int, StoreAccessError]:
        return self._repo.delete_by_id(identifier)

    def delete_many(self, condition: Condition) -> Result[int, StoreAccessError]:
        return self._repo.delete_many(condition)

    # --- ExampleType queries ---------------------------------------------------

    def get(self, type_id: str) -> Result[Optional[ExampleType], StoreAccessError]:
        return self._repo.find_one(where(exampleTypeId=type_id))

    def find_children(self, parent_id: str) -> Result[List[ExampleType], StoreAccessError]:
        return self._repo.find_many(where(parentTypeId=parent_id))

    def find_roots(self) -> Result[List[ExampleType], StoreAccessError]:
        return self._repo.find_many(where(parentTypeId=None))

    def remove(self, type_id: str) -> Result[int, StoreAccessError]:
        return self._repo.delete_by_id({"exampleTypeId": type_id})
