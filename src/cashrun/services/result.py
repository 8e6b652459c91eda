"""ServiceResult and ServiceError: the contract between services and adapters.

Service operations invoked by the CLI return ServiceResult; the core
components underneath raise :mod:`cashrun.domain.errors` exceptions,
which :func:`error_result` folds into a failed result.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from cashrun.domain.errors import CashrunError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    retryable: bool = False
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for adapter-facing service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"advance_order"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None


def error_result(op: str, exc: CashrunError) -> ServiceResult:
    """Fold a domain exception into a failed ServiceResult."""
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(
            code=exc.code,
            message=exc.message,
            retryable=exc.retryable,
            detail=exc.detail,
        ),
    )
