# src/recordrepo/error_codes.py
# Central mapping of error codes to default messages.
# Keep keys stable, callers branch on them.
ERROR_CODES = {
    # ─── Generic ───────────────────────────────────────────────────────────
    "recordrepo_error": {
        "message": "Record repository error."
    },

    # ─── Conversion ────────────────────────────────────────────────────────
    "conversion_error": {
        "message": "Value could not be converted to the target field type."
    },

    # ─── Store access ──────────────────────────────────────────────────────
    "store_error": {
        "message": "Record store operation failed."
    },
    "store_unavailable": {
        "message": "Record store could not be reached."
    },
    "constraint_violation": {
        "message": "Record store constraint violated."
    },
    "missing_primary_key": {
        "message": "Record is missing a primary key value."
    },

    # ─── Schema ────────────────────────────────────────────────────────────
    "schema_violation": {
        "message": "Field is not declared by the entity schema."
    },
    "unknown_entity": {
        "message": "Entity is not registered in the schema registry."
    },
}


def message_for(code: str) -> str:
    return str(ERROR_CODES.get(code, {}).get("message", code))
