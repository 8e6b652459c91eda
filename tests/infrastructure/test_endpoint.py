"""Tests for the SQL-backed transition endpoint."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError

from cashrun.domain.errors import NetworkError
from cashrun.domain.models import TransitionMetadata, TransitionRequest
from cashrun.infrastructure.endpoint import SqlTransitionEndpoint
from cashrun.infrastructure.repositories.orders import OrderRepository
from tests.conftest import make_order

NOW = "2026-03-01T12:00:00+00:00"


def _request(
    next_status: str,
    *,
    actor: str = "runner-1",
    reason: str | None = None,
    action_id: str | None = None,
    order_id: str = "order-1",
) -> TransitionRequest:
    return TransitionRequest(
        order_id=order_id,
        next_status=next_status,
        metadata=TransitionMetadata(actor_id=actor, reason=reason),
        client_action_id=action_id,
    )


@pytest.fixture
def endpoint(db_engine: Engine) -> SqlTransitionEndpoint:
    OrderRepository(db_engine).insert_order(make_order())
    return SqlTransitionEndpoint(db_engine, clock=lambda: NOW)


class TestApply:
    def test_accept_stamps_and_assigns_runner(self, endpoint: SqlTransitionEndpoint) -> None:
        response = endpoint.request_transition(_request("Runner Accepted"))
        assert response.ok
        assert response.order is not None
        assert response.order.status == "Runner Accepted"
        assert response.order.runner_accepted_at == NOW
        assert response.order.runner_id == "runner-1"

    def test_full_happy_path(self, endpoint: SqlTransitionEndpoint) -> None:
        for status in (
            "Runner Accepted",
            "Runner at ATM",
            "Cash Withdrawn",
            "Pending Handoff",
            "Completed",
        ):
            response = endpoint.request_transition(_request(status))
            assert response.ok, response.message
        assert response.order is not None
        assert response.order.handoff_completed_at == NOW
        assert response.order.cash_withdrawn_at == NOW

    def test_illegal_edge_rejected(self, endpoint: SqlTransitionEndpoint) -> None:
        response = endpoint.request_transition(_request("Cash Withdrawn"))
        assert not response.ok
        assert response.order is None
        assert response.message == "Illegal transition: Pending -> Cash Withdrawn"

    def test_missing_order(self, endpoint: SqlTransitionEndpoint) -> None:
        response = endpoint.request_transition(_request("Runner Accepted", order_id="ghost"))
        assert not response.ok
        assert "not found" in (response.message or "")

    def test_cancel_records_reason(self, endpoint: SqlTransitionEndpoint) -> None:
        response = endpoint.request_transition(
            _request("Cancelled", actor="cust-1", reason="Changed my mind")
        )
        assert response.order is not None
        assert response.order.cancelled_at == NOW
        assert response.order.cancellation_reason == "Changed my mind"

    def test_cancel_default_reason(self, endpoint: SqlTransitionEndpoint) -> None:
        response = endpoint.request_transition(_request("Cancelled", actor="cust-1"))
        assert response.order is not None
        assert response.order.cancellation_reason == "Cancelled by cust-1"

    def test_terminal_is_final(self, endpoint: SqlTransitionEndpoint) -> None:
        endpoint.request_transition(_request("Cancelled"))
        response = endpoint.request_transition(_request("Runner Accepted"))
        assert not response.ok


class TestIdempotency:
    def test_repeated_action_applies_once(
        self, endpoint: SqlTransitionEndpoint, db_engine: Engine
    ) -> None:
        first = endpoint.request_transition(_request("Runner Accepted", action_id="act-1"))
        second = endpoint.request_transition(_request("Runner Accepted", action_id="act-1"))
        assert first.ok and second.ok
        assert second.order == first.order
        assert len(OrderRepository(db_engine).list_events("order-1")) == 1

    def test_distinct_actions_both_checked(self, endpoint: SqlTransitionEndpoint) -> None:
        assert endpoint.request_transition(_request("Runner Accepted", action_id="a")).ok
        assert not endpoint.request_transition(_request("Runner Accepted", action_id="b")).ok


class TestAudit:
    def test_event_written(self, endpoint: SqlTransitionEndpoint, db_engine: Engine) -> None:
        endpoint.request_transition(
            _request("Cancelled", actor="cust-1", reason="late", action_id="act-9")
        )
        (event,) = OrderRepository(db_engine).list_events("order-1")
        assert event["from_status"] == "Pending"
        assert event["to_status"] == "Cancelled"
        assert event["actor_id"] == "cust-1"
        assert event["client_action_id"] == "act-9"
        assert event["created_at"] == NOW
        assert event["metadata"] == {"reason": "late", "flags": {}}

    def test_rejection_writes_nothing(
        self, endpoint: SqlTransitionEndpoint, db_engine: Engine
    ) -> None:
        endpoint.request_transition(_request("Completed"))
        assert OrderRepository(db_engine).list_events("order-1") == []


class TestTransport:
    def test_operational_error_is_network_error(self) -> None:
        engine = MagicMock()
        engine.begin.side_effect = OperationalError("SELECT 1", {}, Exception("locked"))
        endpoint = SqlTransitionEndpoint(engine)
        with pytest.raises(NetworkError) as exc_info:
            endpoint.request_transition(_request("Runner Accepted"))
        assert exc_info.value.retryable
