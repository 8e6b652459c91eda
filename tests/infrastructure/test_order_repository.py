"""Tests for OrderRepository."""

from sqlalchemy.engine import Engine

from cashrun.infrastructure.repositories.orders import OrderRepository
from tests.conftest import make_order


class TestOrderRepository:
    def test_insert_and_get(self, db_engine: Engine) -> None:
        repo = OrderRepository(db_engine)
        repo.insert_order(make_order(requested_amount=120.0, delivery_style="COUNTED"))
        order = repo.get_order("order-1")
        assert order is not None
        assert order.status == "Pending"
        assert order.requested_amount == 120.0
        assert order.delivery_style == "COUNTED"

    def test_get_missing(self, db_engine: Engine) -> None:
        assert OrderRepository(db_engine).get_order("nope") is None

    def test_list_newest_first(self, db_engine: Engine) -> None:
        repo = OrderRepository(db_engine)
        repo.insert_order(make_order(id="o1", created_at="2026-01-01T00:00:00"))
        repo.insert_order(make_order(id="o2", created_at="2026-01-02T00:00:00"))
        repo.insert_order(
            make_order("Completed", id="o3", created_at="2026-01-03T00:00:00")
        )
        assert [o.id for o in repo.list_orders()] == ["o3", "o2", "o1"]
        assert [o.id for o in repo.list_orders(status="Pending")] == ["o2", "o1"]
        assert [o.id for o in repo.list_orders(limit=1)] == ["o3"]

    def test_unexpected_status_loads(self, db_engine: Engine) -> None:
        repo = OrderRepository(db_engine)
        repo.insert_order(make_order("Teleported"))
        order = repo.get_order("order-1")
        assert order is not None
        assert order.status == "Teleported"

    def test_no_events(self, db_engine: Engine) -> None:
        repo = OrderRepository(db_engine)
        repo.insert_order(make_order())
        assert repo.list_events("order-1") == []
