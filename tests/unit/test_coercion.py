from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID

import pytest

from recordrepo.exceptions import ConversionError
from recordrepo.utils.coercion import coerce, is_optional


class Color(Enum):
    RED = "red"
    BLUE = "blue"


@pytest.mark.parametrize(
    "value,target,expected",
    [
        ("42", int, 42),
        ("1.5", float, 1.5),
        ("9.99", Decimal, Decimal("9.99")),
        ("true", bool, True),
        ("0", bool, False),
        ("2024-01-31", date, date(2024, 1, 31)),
        ("2024-01-31T10:30:00", datetime, datetime(2024, 1, 31, 10, 30)),
        ("12345678-1234-5678-1234-567812345678", UUID, UUID("12345678-1234-5678-1234-567812345678")),
        ("red", Color, Color.RED),
        ("7", Optional[int], 7),
        ("text", str, "text"),
    ],
)
def test_coerces_strings_to_field_types(value, target, expected):
    assert coerce(value, target, field="f") == expected


def test_already_typed_values_pass_through():
    d = date(2024, 2, 1)
    assert coerce(d, date, field="f") == d
    assert coerce(5, int, field="f") == 5


def test_none_and_blank_handling():
    assert coerce(None, Optional[int], field="f") is None
    assert coerce("", Optional[int], field="f") is None
    assert coerce("  ", Optional[date], field="f") is None
    assert coerce("", Optional[str], field="f") == ""
    with pytest.raises(ConversionError):
        coerce(None, int, field="f")


def test_uncoercible_value_raises_conversion_error():
    with pytest.raises(ConversionError) as exc:
        coerce("abc", int, field="quantity")
    err = exc.value
    assert err.code == "conversion_error"
    assert err.field == "quantity"
    assert err.value == "abc"
    assert err.target is int
    assert "quantity" in err.message


def test_is_optional():
    assert is_optional(Optional[int])
    assert is_optional(int | None)
    assert not is_optional(int)
