from __future__ import annotations

from typing import Any, Mapping, MutableMapping

from recordrepo.database.base_mapper import FieldMapper
from recordrepo.domain.record import EntityRecord
from recordrepo.example_type.entity import ExampleType
from recordrepo.example_type.schema import EXAMPLE_TYPE
from recordrepo.utils.coercion import coerce

# domain field -> record field
RECORD_FIELDS: Mapping[str, str] = {
    "id": "exampleTypeId",
    "parent_id": "parentTypeId",
    "description": "description",
}


class ExampleTypeMapper:
    """
    Maps ExampleType to the ExampleType record schema.

    Presentation keys match the domain field names and are handled by the
    default FieldMapper; ``to_map`` also writes the derived ``is_root`` key,
    which ``from_map`` ignores. Record fields use the schema's names.
    """

    def __init__(self) -> None:
        self._default: FieldMapper[ExampleType] = FieldMapper(ExampleType, EXAMPLE_TYPE)

    def from_map(self, dest: ExampleType, src: Mapping[str, Any]) -> None:
        self._default.from_map(dest, src)

    def to_map(self, dest: MutableMapping[str, Any], src: ExampleType) -> None:
        self._default.to_map(dest, src)
        dest["is_root"] = src.is_root

    def from_record(self, dest: ExampleType, src: EntityRecord) -> None:
        self._default.check_entity(src)
        types = self._default.field_types
        values = {
            name: coerce(src[column], types[name], field=column)
            for name, column in RECORD_FIELDS.items()
            if column in src
        }
        for name, value in values.items():
            setattr(dest, name, value)

    def to_record(self, dest: EntityRecord, src: ExampleType) -> None:
        self._default.check_entity(dest)
        for name, column in RECORD_FIELDS.items():
            dest[column] = getattr(src, name)
