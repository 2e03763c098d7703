from datetime import date
from decimal import Decimal

from recordrepo.domain.condition import field, where
from recordrepo.domain.result import Success


def test_round_trip_through_store(product_repo, product_cls):
    original = product_cls(name="Lamp", price=Decimal("19.90"), in_stock=True, released=date(2023, 5, 1))
    saved = product_repo.create_or_update(original).unwrap()
    assert saved.id is not None

    found = product_repo.find_by_id({"id": saved.id}).unwrap()
    assert found == saved
    assert found is not saved


def test_find_many_matches_count(product_repo, product_cls):
    for name, price in (("a", "1"), ("b", "2"), ("c", "3")):
        product_repo.create_or_update(product_cls(name=name, price=Decimal(price)))

    cheap = product_repo.find_many(field("price").lt(Decimal("3"))).unwrap()
    assert [p.name for p in cheap] == ["a", "b"]
    assert product_repo.count(field("price").lt(Decimal("3"))) == Success(len(cheap))
    assert product_repo.find_many(where(name="nothing")) == Success([])


def test_upsert_twice_stores_one_record(product_repo, product_cls):
    product_repo.create_or_update(product_cls(id=10, name="Desk"))
    product_repo.create_or_update(product_cls(id=10, name="Desk"))
    assert product_repo.count() == Success(1)

    assert product_repo.delete_by_id({"id": 10}) == Success(1)
    assert product_repo.find_by_id({"id": 10}) == Success(None)
