# src/recordrepo/database/base_repository.py
"""
Generic repository: typed CRUD over a record store gateway.

Every store interaction returns a Result. ``Success`` carries the data
(``None`` / ``[]`` mean "nothing matched"), ``Failure`` carries the
StoreAccessError that made the gateway fail. ConversionError raised by the
mapper is never wrapped; it propagates to the caller.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, List, Mapping, Optional, TypeVar

from recordrepo.database.base_mapper import Mapper
from recordrepo.database.gateway import StoreGateway
from recordrepo.domain.condition import Condition
from recordrepo.domain.record import EntityRecord
from recordrepo.domain.result import Failure, Result, Success
from recordrepo.exceptions import StoreAccessError
from recordrepo.observability.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")  # Domain object type


class Repository(Generic[T]):
    """
    Typed CRUD facade for one entity.

    The factory, entity name, gateway and mapper are fixed at construction.
    Each operation performs at most one gateway call; the repository keeps
    no reference to the objects it returns.
    """

    __slots__ = ("_factory", "_entity_name", "_gateway", "_mapper")

    def __init__(
        self,
        factory: Callable[[], T],
        entity_name: str,
        gateway: StoreGateway,
        mapper: Mapper[T],
    ) -> None:
        if factory is None or gateway is None or mapper is None:
            raise ValueError("factory, gateway and mapper are required")
        if not entity_name:
            raise ValueError("entity_name must be a non-empty string")
        self._factory = factory
        self._entity_name = entity_name
        self._gateway = gateway
        self._mapper = mapper

    @property
    def factory(self) -> Callable[[], T]:
        return self._factory

    @property
    def entity_name(self) -> str:
        return self._entity_name

    @property
    def gateway(self) -> StoreGateway:
        return self._gateway

    @property
    def mapper(self) -> Mapper[T]:
        return self._mapper

    # --- reads -----------------------------------------------------------------

    def find_one(self, condition: Condition) -> Result[Optional[T], StoreAccessError]:
        """First entity matching ``condition``; Success(None) when nothing matches."""
        try:
            record = self._gateway.query_one(self._entity_name, condition)
        except StoreAccessError as e:
            return self._failure("find_one", e)
        if record is None:
            return Success(None)
        return Success(self._to_domain(record))

    def find_many(self, condition: Condition) -> Result[List[T], StoreAccessError]:
        """Every entity matching ``condition``, in gateway order."""
        try:
            records = self._gateway.query_all(self._entity_name, condition)
        except StoreAccessError as e:
            return self._failure("find_many", e)
        return Success([self._to_domain(record) for record in records])

    def find_all(self) -> Result[List[T], StoreAccessError]:
        return self.find_many(Condition.always())

    def find_by_id(self, identifier: Mapping[str, Any]) -> Result[Optional[T], StoreAccessError]:
        return self.find_one(self._identity(identifier))

    def count(self, condition: Optional[Condition] = None) -> Result[int, StoreAccessError]:
        try:
            total = self._gateway.count(self._entity_name, condition or Condition.always())
        except StoreAccessError as e:
            return self._failure("count", e)
        return Success(total)

    def exists(self, condition: Condition) -> Result[bool, StoreAccessError]:
        return self.count(condition).map(lambda total: total > 0)

    # --- writes ----------------------------------------------------------------

    def create_or_update(self, value: T) -> Result[T, StoreAccessError]:
        """
        Insert ``value`` or replace the stored entity with the same primary key.

        Store-assigned or normalized fields are read back into ``value``,
        which is returned on success.
        """
        record = EntityRecord(self._entity_name)
        self._mapper.to_record(record, value)
        try:
            self._gateway.upsert(self._entity_name, record)
        except StoreAccessError as e:
            return self._failure("create_or_update", e)
        self._mapper.from_record(value, record)
        return Success(value)

    def delete_by_id(self, identifier: Mapping[str, Any]) -> Result[int, StoreAccessError]:
        """Delete every record whose fields equal ``identifier``; Success carries the count."""
        return self._delete(self._identity(identifier), "delete_by_id")

    def delete_many(self, condition: Condition) -> Result[int, StoreAccessError]:
        return self._delete(condition, "delete_many")

    # --- helpers ---------------------------------------------------------------

    def _delete(self, condition: Condition, operation: str) -> Result[int, StoreAccessError]:
        try:
            deleted = self._gateway.delete_where(self._entity_name, condition)
        except StoreAccessError as e:
            return self._failure(operation, e)
        logger.debug("Entities deleted", entity=self._entity_name, operation=operation, count=deleted)
        return Success(deleted)

    def _to_domain(self, record: EntityRecord) -> T:
        instance = self._factory()
        self._mapper.from_record(instance, record)
        return instance

    @staticmethod
    def _identity(identifier: Mapping[str, Any]) -> Condition:
        if not identifier:
            raise ValueError("identifier must name at least one field")
        return Condition.equals(identifier)

    def _failure(self, operation: str, error: StoreAccessError) -> Failure[StoreAccessError]:
        logger.warning(
            "Store access failed",
            entity=self._entity_name,
            operation=operation,
            code=error.code,
            error=error.message,
        )
        return Failure(error)


__all__ = ["Repository"]
