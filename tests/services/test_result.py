"""Tests for ServiceResult, ServiceError, and error folding."""

import json

from cashrun.domain.errors import InvalidTransitionError, NetworkError
from cashrun.services.result import ServiceError, ServiceResult, error_result


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="advance_order", data={"id": "o1"})
        assert result.ok is True
        assert result.data == {"id": "o1"}
        assert result.warnings == []
        assert result.error is None

    def test_error_construction(self) -> None:
        result = ServiceResult(
            ok=False, op="get_order", error=ServiceError(code="NOT_FOUND", message="gone")
        )
        assert result.error is not None
        assert result.error.retryable is False
        assert result.error.detail == {}

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="test", data={"key": "value"}, warnings=["w"])
        parsed = json.loads(result.model_dump_json())
        assert parsed["data"]["key"] == "value"
        assert parsed["warnings"] == ["w"]


class TestErrorResult:
    def test_folds_code_and_detail(self) -> None:
        result = error_result("advance_order", InvalidTransitionError("Pending", "Completed"))
        assert not result.ok
        assert result.op == "advance_order"
        assert result.error is not None
        assert result.error.code == "INVALID_TRANSITION"
        assert result.error.detail == {"current": "Pending", "target": "Completed"}

    def test_retryable_flag(self) -> None:
        result = error_result("advance_order", NetworkError("down", order_id="o1"))
        assert result.error is not None
        assert result.error.retryable is True
        assert result.error.detail == {"order_id": "o1"}
