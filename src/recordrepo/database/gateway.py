"""
Record Store Gateway Interface (Protocol)
Contract every store facade offers to the repository layer
"""
from __future__ import annotations

from typing import Optional, Protocol, Sequence, runtime_checkable

from recordrepo.domain.condition import Condition
from recordrepo.domain.record import EntityRecord


@runtime_checkable
class StoreGateway(Protocol):
    """
    Query / insert-or-replace / delete facade over a record store.

    Every method may fail; failures are raised as StoreAccessError
    (SchemaError for undeclared entities or fields). Implementations
    own their transaction scope, one call is one unit of work.
    """

    def query_one(self, entity_name: str, condition: Condition) -> Optional[EntityRecord]:
        """
        Return the first record matching ``condition``.

        Args:
            entity_name: Registered entity name
            condition: Filter over the entity's fields

        Returns:
            First matching record in store order, or None
        """
        ...

    def query_all(self, entity_name: str, condition: Condition) -> Sequence[EntityRecord]:
        """
        Return every record matching ``condition`` in store-defined order.
        """
        ...

    def upsert(self, entity_name: str, record: EntityRecord) -> None:
        """
        Insert ``record`` or replace the stored record with the same primary key.

        Fields absent from ``record`` keep their stored values on replace.
        Store-assigned values (e.g. generated keys) are written back into ``record``.
        """
        ...

    def delete_where(self, entity_name: str, condition: Condition) -> int:
        """
        Delete every record matching ``condition``.

        Returns:
            Number of records deleted
        """
        ...

    def count(self, entity_name: str, condition: Condition) -> int:
        """
        Count records matching ``condition``.
        """
        ...


__all__ = ["StoreGateway"]
