# /src/recordrepo/utils/coercion.py
"""
Field value coercion backed by pydantic's lax validation rules
("42" -> int, "2024-01-31" -> date, "true" -> bool, str -> UUID/Enum, ...).
"""

from __future__ import annotations

import functools
import types
from typing import Any, Union, get_args, get_origin

from pydantic import TypeAdapter, ValidationError

from recordrepo.exceptions import ConversionError


@functools.lru_cache(maxsize=None)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def is_optional(target: Any) -> bool:
    if target is Any or target is None or target is type(None):
        return True
    origin = get_origin(target)
    if origin is Union or origin is types.UnionType:
        return type(None) in get_args(target)
    return False


def _accepts_str(target: Any) -> bool:
    return target is str or str in get_args(target)


def coerce(value: Any, target: Any, *, field: str) -> Any:
    """
    Coerce ``value`` to ``target`` or raise ConversionError naming ``field``.

    Blank strings become None for optional non-string targets.
    """
    if target is Any:
        return value
    if value is None:
        if is_optional(target):
            return None
        raise ConversionError(field, value, target, message=f"Field '{field}' does not accept None")
    if isinstance(value, str) and value.strip() == "" and is_optional(target) and not _accepts_str(target):
        return None
    try:
        return _adapter(target).validate_python(value)
    except ValidationError as e:
        raise ConversionError(field, value, target) from e


__all__ = ["coerce", "is_optional"]
