"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, cashrun.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    db_name: str = "cashrun.db"
    echo: bool = False


class AtmConfig(BaseModel):
    """[atm] section."""

    model_config = {"frozen": True}

    sample_limit: int = Field(default=100, gt=0)
    earth_radius_m: float = 6_371_000.0


class TransitionsConfig(BaseModel):
    """[transitions] section."""

    model_config = {"frozen": True}

    generate_action_ids: bool = True


class CashrunConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    store: StoreConfig = Field(default_factory=StoreConfig)
    atm: AtmConfig = Field(default_factory=AtmConfig)
    transitions: TransitionsConfig = Field(default_factory=TransitionsConfig)
