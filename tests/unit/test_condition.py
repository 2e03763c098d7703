import pytest

from recordrepo.domain.condition import ALWAYS, All, AnyOf, Comparison, Condition, Not, field, where


ROW = {"id": 3, "name": "widget", "parent": None}


def test_always_matches_everything():
    assert Condition.always() is ALWAYS
    assert ALWAYS.matches({})
    assert ALWAYS.field_names() == frozenset()


def test_equals_builds_conjunction():
    c = Condition.equals({"id": 3, "name": "widget"})
    assert isinstance(c, All)
    assert c.matches(ROW)
    assert not c.matches({**ROW, "name": "gadget"})
    assert c.field_names() == {"id", "name"}


def test_equals_single_and_empty():
    assert Condition.equals({"id": 3}) == Comparison("id", "eq", 3)
    assert Condition.equals({}) is ALWAYS
    assert where(id=3) == Comparison("id", "eq", 3)


def test_none_equality_and_missing_fields():
    assert where(parent=None).matches(ROW)
    assert where(missing=None).matches(ROW)
    assert field("parent").is_null().matches(ROW)
    assert not field("name").is_null().matches(ROW)
    assert field("name").is_null(False).matches(ROW)


def test_ordering_never_matches_null():
    assert field("id").gt(2).matches(ROW)
    assert field("id").le(3).matches(ROW)
    assert not field("id").lt(3).matches(ROW)
    assert not field("parent").lt(10).matches(ROW)
    assert not field("parent").ge(0).matches(ROW)


def test_ne_in_and_like():
    assert field("name").ne("gadget").matches(ROW)
    assert field("parent").ne("x").matches(ROW)
    assert field("id").in_([1, 3]).matches(ROW)
    assert not field("id").in_([]).matches(ROW)
    assert field("name").like("wid%").matches(ROW)
    assert field("name").like("w_dget").matches(ROW)
    assert not field("name").like("gad%").matches(ROW)
    assert not field("name").like("w.dget").matches(ROW)


def test_like_ignores_case():
    assert field("name").like("WID%").matches(ROW)
    assert field("name").like("Widget").matches(ROW)
    assert not field("name").like("WIDGETS").matches(ROW)


def test_condition_base_is_abstract():
    with pytest.raises(TypeError):
        Condition()


def test_boolean_composition_flattens():
    a, b, c = where(id=3), where(name="widget"), where(parent=1)
    conj = a & b & c
    assert isinstance(conj, All) and len(conj.conditions) == 3
    assert not conj.matches(ROW)

    disj = a | b | c
    assert isinstance(disj, AnyOf) and len(disj.conditions) == 3
    assert disj.matches(ROW)

    assert (~c).matches(ROW)
    assert isinstance(~c, Not)
    assert (a & ~c).field_names() == {"id", "parent"}


def test_always_drops_out_of_conjunctions():
    assert (ALWAYS & where(id=3)) == All((Comparison("id", "eq", 3),))
    assert AnyOf(()).matches(ROW) is False


def test_unknown_operator_rejected():
    with pytest.raises(ValueError):
        Comparison("id", "between", (1, 2))
