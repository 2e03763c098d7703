from typing import Any, Dict, Optional

from recordrepo.error_codes import message_for


# ───────────────────────────── Base ─────────────────────────────────────────
class RecordRepoError(Exception):
    """Base class for all errors raised by the mapper and repository layers."""
    code: str = "recordrepo_error"
    message: str
    details: Optional[Dict[str, Any]]

    def __init__(
        self,
        message: str = "",
        *,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        if code is not None:
            self.code = code
        self.message = message or message_for(self.code)
        self.details = details or None
        super().__init__(self.message)


# ───────────────────────────── Conversion ───────────────────────────────────
class ConversionError(RecordRepoError):
    """A present value could not be coerced into the destination field's type."""
    code = "conversion_error"

    def __init__(
        self,
        field: str,
        value: Any,
        target: Any,
        *,
        message: Optional[str] = None,
    ) -> None:
        self.field = field
        self.value = value
        self.target = target
        super().__init__(
            message or f"Cannot convert {value!r} for field '{field}' to {_type_name(target)}",
            details={"field": field, "value": repr(value), "target": _type_name(target)},
        )


# ───────────────────────────── Store access ─────────────────────────────────
class StoreAccessError(RecordRepoError):
    """The record store gateway failed (connectivity, constraint violation, etc.)."""
    code = "store_error"

    def __init__(
        self,
        message: str = "",
        *,
        entity_name: Optional[str] = None,
        operation: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.entity_name = entity_name
        self.operation = operation
        super().__init__(message, code=code, details=details)


class SchemaError(StoreAccessError):
    """A record or condition references a field or entity the schema does not declare."""
    code = "schema_violation"


def _type_name(target: Any) -> str:
    return getattr(target, "__name__", None) or repr(target)


__all__ = [
    "RecordRepoError",
    "ConversionError",
    "StoreAccessError",
    "SchemaError",
]
