"""Pydantic models for orders, ATMs and assignment results.

Models are frozen; a new snapshot from the store replaces the old one
rather than being mutated in place.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from cashrun.domain.delivery import resolve_delivery_style
from cashrun.domain.types import AtmStatus, DeliveryStyle


class Order(BaseModel):
    """A cash-delivery order as stored by the authoritative store.

    ``status`` is kept as a plain string so rows carrying an unexpected
    value still load; projections degrade on it instead of failing.
    """

    model_config = {"frozen": True}

    id: str
    status: str
    customer_id: str
    runner_id: str | None = None
    customer_address_id: str | None = None
    requested_amount: float = 0.0
    delivery_style: str | None = None
    delivery_mode: str | None = None
    atm_id: str | None = None
    created_at: str | None = None
    runner_accepted_at: str | None = None
    runner_at_atm_at: str | None = None
    cash_withdrawn_at: str | None = None
    handoff_completed_at: str | None = None
    cancelled_at: str | None = None
    cancellation_reason: str | None = None

    @property
    def effective_style(self) -> DeliveryStyle:
        return resolve_delivery_style(self.delivery_style, self.delivery_mode)


class AtmLocation(BaseModel):
    """A cash-withdrawal location candidate."""

    model_config = {"frozen": True}

    id: str
    name: str
    address: str = ""
    lat: float
    lng: float
    status: AtmStatus = AtmStatus.ACTIVE


class AddressAtmPreference(BaseModel):
    """Ranking hint: how often an address has been served from an ATM."""

    model_config = {"frozen": True}

    customer_address_id: str
    atm_id: str
    times_used: int = 1
    last_used_at: str


class AtmAssignmentResult(BaseModel):
    """The ATM picked for a new order."""

    model_config = {"frozen": True, "populate_by_name": True}

    atm_id: str = Field(alias="atmId")
    atm_name: str = Field(alias="atmName")
    atm_address: str = Field(alias="atmAddress")
    atm_lat: float = Field(alias="atmLat")
    atm_lng: float = Field(alias="atmLng")
    distance_meters: int = Field(alias="distanceMeters")
    from_cache: bool = Field(default=False, alias="fromCache")


class TransitionMetadata(BaseModel):
    """Caller context attached to a transition request."""

    model_config = {"frozen": True, "populate_by_name": True}

    actor_id: str = Field(alias="actorId")
    reason: str | None = None
    flags: dict[str, Any] = Field(default_factory=dict)


class TransitionRequest(BaseModel):
    """Payload sent to the authoritative store to move an order."""

    model_config = {"frozen": True, "populate_by_name": True}

    order_id: str = Field(alias="orderId")
    next_status: str = Field(alias="nextStatus")
    metadata: TransitionMetadata
    client_action_id: str | None = Field(default=None, alias="clientActionId")


class TransitionResponse(BaseModel):
    """Reply from the authoritative store: the updated order or a rejection."""

    model_config = {"frozen": True}

    ok: bool
    order: Order | None = None
    message: str | None = None
