"""
Query Conditions
Immutable predicate trees over record field/value pairs.

Conditions are built here and interpreted by the store gateway: the
in-memory gateway evaluates them with ``matches``, the SQLAlchemy gateway
compiles them into SQL expressions.

Usage:
    Condition.equals({"exampleTypeId": "A"})
    where(parentTypeId="A") & ~field("description").is_null()
    field("rank").ge(3) | field("name").like("foo%")
"""
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Iterable, Iterator, Mapping

# Comparison operators understood by every gateway
EQ = "eq"
NE = "ne"
LT = "lt"
LE = "le"
GT = "gt"
GE = "ge"
IN = "in"
LIKE = "like"
IS_NULL = "is_null"

OPERATORS = frozenset({EQ, NE, LT, LE, GT, GE, IN, LIKE, IS_NULL})


class Condition(ABC):
    """Base class of all predicate nodes."""

    @abstractmethod
    def matches(self, values: Mapping[str, Any]) -> bool:
        ...

    @abstractmethod
    def field_names(self) -> frozenset[str]:
        ...

    def __and__(self, other: Condition) -> Condition:
        return All.of(self, other)

    def __or__(self, other: Condition) -> Condition:
        return AnyOf.of(self, other)

    def __invert__(self) -> Condition:
        return Not(self)

    @staticmethod
    def always() -> Condition:
        return ALWAYS

    @staticmethod
    def equals(fields: Mapping[str, Any]) -> Condition:
        """Conjunction of field == value for every item of ``fields``."""
        parts = [Comparison(name, EQ, value) for name, value in fields.items()]
        if not parts:
            return ALWAYS
        if len(parts) == 1:
            return parts[0]
        return All(tuple(parts))


@dataclass(frozen=True)
class Always(Condition):
    """Unconditioned, always-true predicate."""

    def matches(self, values: Mapping[str, Any]) -> bool:
        return True

    def field_names(self) -> frozenset[str]:
        return frozenset()


ALWAYS = Always()


@dataclass(frozen=True)
class Comparison(Condition):
    field: str
    op: str
    value: Any = None

    def __post_init__(self) -> None:
        if self.op not in OPERATORS:
            raise ValueError(f"Unsupported operator '{self.op}'")
        if self.op == IN:
            object.__setattr__(self, "value", tuple(self.value))

    def matches(self, values: Mapping[str, Any]) -> bool:
        actual = values.get(self.field)
        op = self.op
        if op == EQ:
            return actual == self.value
        if op == NE:
            return actual != self.value
        if op == IS_NULL:
            return (actual is None) == bool(self.value)
        if op == IN:
            return actual in self.value
        # ordering comparisons and LIKE never match NULL, as in SQL
        if actual is None or self.value is None:
            return False
        if op == LIKE:
            return _like_pattern(self.value).fullmatch(str(actual)) is not None
        try:
            if op == LT:
                return actual < self.value
            if op == LE:
                return actual <= self.value
            if op == GT:
                return actual > self.value
            return actual >= self.value
        except TypeError:
            return False

    def field_names(self) -> frozenset[str]:
        return frozenset((self.field,))


@dataclass(frozen=True)
class All(Condition):
    """Conjunction; an empty conjunction is true."""

    conditions: tuple[Condition, ...]

    @classmethod
    def of(cls, *conditions: Condition) -> All:
        return cls(tuple(_flatten(cls, conditions)))

    def matches(self, values: Mapping[str, Any]) -> bool:
        return all(c.matches(values) for c in self.conditions)

    def field_names(self) -> frozenset[str]:
        return frozenset().union(*(c.field_names() for c in self.conditions))


@dataclass(frozen=True)
class AnyOf(Condition):
    """Disjunction; an empty disjunction is false."""

    conditions: tuple[Condition, ...]

    @classmethod
    def of(cls, *conditions: Condition) -> AnyOf:
        return cls(tuple(_flatten(cls, conditions)))

    def matches(self, values: Mapping[str, Any]) -> bool:
        return any(c.matches(values) for c in self.conditions)

    def field_names(self) -> frozenset[str]:
        return frozenset().union(*(c.field_names() for c in self.conditions))


@dataclass(frozen=True)
class Not(Condition):
    condition: Condition

    def matches(self, values: Mapping[str, Any]) -> bool:
        return not self.condition.matches(values)

    def field_names(self) -> frozenset[str]:
        return self.condition.field_names()


class FieldRef:
    """Builder for comparisons on a single field."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def eq(self, value: Any) -> Comparison:
        return Comparison(self.name, EQ, value)

    def ne(self, value: Any) -> Comparison:
        return Comparison(self.name, NE, value)

    def lt(self, value: Any) -> Comparison:
        return Comparison(self.name, LT, value)

    def le(self, value: Any) -> Comparison:
        return Comparison(self.name, LE, value)

    def gt(self, value: Any) -> Comparison:
        return Comparison(self.name, GT, value)

    def ge(self, value: Any) -> Comparison:
        return Comparison(self.name, GE, value)

    def in_(self, values: Iterable[Any]) -> Comparison:
        return Comparison(self.name, IN, tuple(values))

    def like(self, pattern: str) -> Comparison:
        return Comparison(self.name, LIKE, pattern)

    def is_null(self, flag: bool = True) -> Comparison:
        return Comparison(self.name, IS_NULL, flag)


def field(name: str) -> FieldRef:
    return FieldRef(name)


def where(**fields: Any) -> Condition:
    return Condition.equals(fields)


def _flatten(kind: type, conditions: Iterable[Condition]) -> Iterator[Condition]:
    for c in conditions:
        if isinstance(c, kind):
            yield from c.conditions  # type: ignore[attr-defined]
        elif kind is All and isinstance(c, Always):
            continue
        else:
            yield c


@lru_cache(maxsize=256)
def _like_pattern(pattern: str) -> re.Pattern[str]:
    out = []
    for ch in pattern:
        if ch == "%":
            out.append(".*")
        elif ch == "_":
            out.append(".")
        else:
            out.append(re.escape(ch))
    # LIKE ignores case on every gateway
    return re.compile("".join(out), re.DOTALL | re.IGNORECASE)


__all__ = [
    "Condition",
    "Always",
    "ALWAYS",
    "Comparison",
    "All",
    "AnyOf",
    "Not",
    "FieldRef",
    "field",
    "where",
    "OPERATORS",
]
