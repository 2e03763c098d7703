from __future__ import annotations

import dataclasses
from types import MappingProxyType
from typing import Any, Generic, Mapping, MutableMapping, Optional, Protocol, Sequence, TypeVar, get_type_hints

from recordrepo.domain.record import EntityRecord
from recordrepo.exceptions import ConversionError
from recordrepo.utils.coercion import coerce

T = TypeVar("T")  # Domain object type


class Mapper(Protocol[T]):
    """Converts a domain object to and from generic records and presentation maps.

    Implementations MUST be stateless (no I/O, no store access, no mutable
    instance state), so one instance can serve concurrent callers.
    Every method raises ConversionError when a present value cannot be
    coerced; missing keys leave the destination untouched.
    """

    def from_map(self, dest: T, src: Mapping[str, Any]) -> None:
        """Overwrite mapped fields of ``dest`` from a presentation map."""
        ...

    def to_map(self, dest: MutableMapping[str, Any], src: T) -> None:
        """Write mapped fields of ``src`` into ``dest``; unrelated keys are kept."""
        ...

    def from_record(self, dest: T, src: EntityRecord) -> None:
        """Overwrite mapped fields of ``dest`` from a store record."""
        ...

    def to_record(self, dest: EntityRecord, src: T) -> None:
        """Write mapped fields of ``src`` into a store record."""
        ...


class FieldMapper(Generic[T]):
    """
    Default mapper: name-matched field copy with per-field type coercion.

    Domain field names are used unchanged as presentation keys and record
    field names. Target types come from the domain type's annotations.
    """

    def __init__(self, domain_type: type[T], entity_name: str, fields: Optional[Sequence[str]] = None) -> None:
        hints = get_type_hints(domain_type)
        if fields is None:
            if dataclasses.is_dataclass(domain_type):
                fields = [f.name for f in dataclasses.fields(domain_type)]
            else:
                fields = [name for name in hints if not name.startswith("_")]
        unknown = [name for name in fields if name not in hints]
        if unknown:
            raise ValueError(f"{domain_type.__name__} has no annotated field(s): {', '.join(unknown)}")

        self._domain_type = domain_type
        self._entity_name = entity_name
        self._types: Mapping[str, Any] = MappingProxyType({name: hints[name] for name in fields})

    @property
    def domain_type(self) -> type[T]:
        return self._domain_type

    @property
    def entity_name(self) -> str:
        return self._entity_name

    @property
    def field_types(self) -> Mapping[str, Any]:
        return self._types

    def from_map(self, dest: T, src: Mapping[str, Any]) -> None:
        self._assign(dest, src)

    def to_map(self, dest: MutableMapping[str, Any], src: T) -> None:
        for name in self._types:
            dest[name] = getattr(src, name)

    def from_record(self, dest: T, src: EntityRecord) -> None:
        self.check_entity(src)
        self._assign(dest, src)

    def to_record(self, dest: EntityRecord, src: T) -> None:
        self.check_entity(dest)
        for name in self._types:
            dest[name] = getattr(src, name)

    def check_entity(self, record: EntityRecord) -> None:
        if record.entity_name != self._entity_name:
            raise ConversionError(
                "entity_name",
                record.entity_name,
                self._entity_name,
                message=f"Record of '{record.entity_name}' cannot map to {self._domain_type.__name__} "
                        f"(expected '{self._entity_name}')",
            )

    def _assign(self, dest: T, src: Mapping[str, Any]) -> None:
        # convert everything first so a failure leaves dest untouched
        values = {
            name: coerce(src[name], target, field=name)
            for name, target in self._types.items()
            if name in src
        }
        for name, value in values.items():
            setattr(dest, name, value)


__all__ = ["Mapper", "FieldMapper", "T"]
