from recordrepo.domain.schema import EntitySchema, FieldSpec

EXAMPLE_TYPE = "ExampleType"

EXAMPLE_TYPE_SCHEMA = EntitySchema(
    name=EXAMPLE_TYPE,
    fields=(
        FieldSpec("exampleTypeId", str, nullable=False, primary_key=True, length=20),
        FieldSpec("parentTypeId", str, length=20),
        FieldSpec("description", str, length=255),
    ),
)
