"""Mini README: Centralised configuration for the fuel station simulator.

Structure:
    * FuelStationSettings - pydantic settings model for runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Every field can be overridden with a ``FUELSTATION_`` prefixed
    environment variable (or a ``.env`` file), e.g.
    ``FUELSTATION_DIESEL_PRICE=90.10``. Settings are validated once and
    cached for the lifetime of the process.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FuelStationSettings(BaseSettings):
    """Runtime configuration for the station, its ledger and interfaces."""

    model_config = SettingsConfigDict(
        env_prefix="FUELSTATION_",
        env_file=".env",
        case_sensitive=False,
    )

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level name (DEBUG, INFO, WARNING, ...).",
        pattern=r"(?i)^(debug|info|warning|error|critical)$",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the web service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the web service exposes.",
        ge=1,
        le=65535,
    )
    station_name: str = Field("ABC Fuel Station", description="Printed on receipts.")
    station_address: str = Field("123 Main Road", description="Printed on receipts.")

    ledger_initial_capacity: int = Field(
        50,
        description="Transaction slots preallocated when the ledger starts.",
        ge=1,
    )
    ledger_fallback_increment: int = Field(
        50,
        description="Slots added when doubling the ledger storage cannot be satisfied.",
        ge=1,
    )
    low_stock_threshold: float = Field(
        5000.0,
        description="Stock level below which a fuel is reported as running low.",
        ge=0,
    )

    petrol_price: float = Field(102.50, description="Price per litre of petrol.", gt=0)
    diesel_price: float = Field(88.75, description="Price per litre of diesel.", gt=0)
    cng_price: float = Field(75.00, description="Price per kg of CNG.", gt=0)

    petrol_opening_stock: float = Field(50000.0, description="Opening petrol stock in litres.", ge=0)
    diesel_opening_stock: float = Field(50000.0, description="Opening diesel stock in litres.", ge=0)
    cng_opening_stock: float = Field(20000.0, description="Opening CNG stock in kg.", ge=0)


@lru_cache()
def get_settings() -> FuelStationSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return FuelStationSettings()
