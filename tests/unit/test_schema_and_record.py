import pytest

from recordrepo.domain.record import EntityRecord
from recordrepo.domain.schema import EntitySchema, FieldSpec, SchemaRegistry
from recordrepo.example_type import EXAMPLE_TYPE_SCHEMA
from recordrepo.exceptions import SchemaError, StoreAccessError


def test_schema_exposes_fields_and_key():
    assert EXAMPLE_TYPE_SCHEMA.field_names == ("exampleTypeId", "parentTypeId", "description")
    assert EXAMPLE_TYPE_SCHEMA.primary_key == ("exampleTypeId",)
    assert EXAMPLE_TYPE_SCHEMA.key_of({"exampleTypeId": "A"}) == ("A",)
    assert EXAMPLE_TYPE_SCHEMA.key_of({}) == (None,)
    assert EXAMPLE_TYPE_SCHEMA.has_field("parentTypeId")
    assert not EXAMPLE_TYPE_SCHEMA.has_field("parent_id")


def test_schema_invariants():
    with pytest.raises(ValueError):
        EntitySchema("Empty", ())
    with pytest.raises(ValueError):
        EntitySchema("NoKey", (FieldSpec("a"),))
    with pytest.raises(ValueError):
        EntitySchema("Dup", (FieldSpec("a", nullable=False, primary_key=True), FieldSpec("a")))
    with pytest.raises(ValueError):
        EntitySchema("NullKey", (FieldSpec("a", primary_key=True),))


def test_validate_fields_reports_unknown_names():
    EXAMPLE_TYPE_SCHEMA.validate_fields(["description"])
    with pytest.raises(SchemaError) as exc:
        EXAMPLE_TYPE_SCHEMA.validate_fields(["description", "bogus"], operation="upsert")
    assert isinstance(exc.value, StoreAccessError)
    assert exc.value.code == "schema_violation"
    assert exc.value.details == {"fields": ["bogus"]}
    assert exc.value.operation == "upsert"


def test_registry_lookup():
    registry = SchemaRegistry([EXAMPLE_TYPE_SCHEMA])
    assert "ExampleType" in registry
    assert registry.get("ExampleType") is EXAMPLE_TYPE_SCHEMA
    assert len(registry) == 1
    registry.register(EXAMPLE_TYPE_SCHEMA)
    with pytest.raises(SchemaError) as exc:
        registry.get("Missing")
    assert exc.value.code == "unknown_entity"
    with pytest.raises(ValueError):
        registry.register(EntitySchema("ExampleType", (FieldSpec("x", nullable=False, primary_key=True),)))


def test_entity_record_is_a_tagged_mapping():
    rec = EntityRecord("ExampleType")
    assert len(rec) == 0
    rec["exampleTypeId"] = "A"
    rec["description"] = "root"
    assert dict(rec) == {"exampleTypeId": "A", "description": "root"}
    assert rec.entity_name == "ExampleType"

    clone = rec.copy()
    assert clone == rec
    clone["description"] = "changed"
    assert rec["description"] == "root"

    assert EntityRecord("Other", rec) != rec
    del rec["description"]
    assert "description" not in rec

    plain = clone.as_dict()
    assert type(plain) is dict and plain == {"exampleTypeId": "A", "description": "changed"}
    plain["description"] = "detached"
    assert clone["description"] == "changed"


def test_entity_record_requires_name():
    with pytest.raises(ValueError):
        EntityRecord("")
