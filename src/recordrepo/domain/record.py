"""
Generic Entity Record
Dynamically-typed, schema-tagged field -> value record exchanged with the store gateway
"""
from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Iterator, Mapping, Optional


class EntityRecord(MutableMapping):
    """
    Untyped record tagged with the name of the entity it belongs to.

    Gateways produce these on read; the repository creates an empty one
    before every write. Field names are checked against the entity schema
    by the gateway, not here.
    """

    __slots__ = ("_entity_name", "_fields")

    def __init__(self, entity_name: str, fields: Optional[Mapping[str, Any]] = None) -> None:
        if not entity_name:
            raise ValueError("entity_name must be a non-empty string")
        self._entity_name = entity_name
        self._fields: dict[str, Any] = dict(fields or {})

    @property
    def entity_name(self) -> str:
        return self._entity_name

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._fields[key] = value

    def __delitem__(self, key: str) -> None:
        del self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EntityRecord):
            return NotImplemented
        return self._entity_name == other._entity_name and self._fields == other._fields

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"EntityRecord({self._entity_name!r}, {self._fields!r})"

    def copy(self) -> EntityRecord:
        return EntityRecord(self._entity_name, self._fields)

    def as_dict(self) -> dict[str, Any]:
        return dict(self._fields)


__all__ = ["EntityRecord"]
