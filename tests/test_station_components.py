"""Mini README: Tests for the catalogue, inventory, pump registry and station.

These cover tolerant enum parsing, stock deduction limits, supply handling,
the default six pump layout and construction of a station from settings.
"""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from fuelstation import Station
from fuelstation.catalog import FuelType, PaymentMode, PumpStatus, VehicleType
from fuelstation.configuration import FuelStationSettings
from fuelstation.inventory import InsufficientStockError, Inventory
from fuelstation.logging_utils import configure_root_logger, get_logger
from fuelstation.pumps import PumpRegistry, UnknownPumpError


def test_enums_parse_values_names_and_labels() -> None:
    """Enums accept values, member names and display labels in any casing."""

    assert FuelType.from_str("Diesel") is FuelType.DIESEL
    assert PaymentMode.from_str("credit card") is PaymentMode.CARD
    assert VehicleType.from_str("two_wheeler") is VehicleType.TWO_WHEELER
    assert PumpStatus.from_str(" MAINTENANCE ") is PumpStatus.MAINTENANCE
    assert FuelType.CNG.unit == "kg"
    with pytest.raises(ValueError):
        FuelType.from_str("kerosene")


def test_inventory_deducts_and_rejects_overdraw() -> None:
    """Deductions reduce stock and overdraws are refused."""

    inventory = Inventory.from_settings(FuelStationSettings())

    remaining = inventory.deduct(FuelType.CNG, 500.0)

    assert remaining == pytest.approx(19500.0)
    with pytest.raises(InsufficientStockError) as excinfo:
        inventory.deduct(FuelType.CNG, 20000.0)
    assert excinfo.value.available == pytest.approx(19500.0)
    assert inventory.current_stock(FuelType.CNG) == pytest.approx(19500.0)


def test_inventory_supply_and_low_stock_signal() -> None:
    """Supplies raise stock and clear the low-stock signal."""

    inventory = Inventory.from_settings(FuelStationSettings(petrol_opening_stock=4000.0))

    assert [stock.fuel_type for stock in inventory.low_stock(5000.0)] == [FuelType.PETROL]
    inventory.add_supply(FuelType.PETROL, 1500.0)
    assert inventory.low_stock(5000.0) == []
    with pytest.raises(ValueError):
        inventory.add_supply(FuelType.PETROL, 0)


def test_close_day_copies_current_stock() -> None:
    """Closing the day copies current stock into closing stock."""

    inventory = Inventory.from_settings(FuelStationSettings())
    inventory.deduct(FuelType.PETROL, 100.0)

    closing = inventory.close_day()

    assert closing[FuelType.PETROL] == pytest.approx(49900.0)
    assert inventory.stock(FuelType.PETROL).opening_stock == pytest.approx(50000.0)


def test_default_pump_layout() -> None:
    """The default layout has two active pumps per fuel."""

    registry = PumpRegistry.default_layout()

    assert registry.pump_ids() == [1, 2, 3, 4, 5, 6]
    assert [registry.fuel_type_of(pump_id) for pump_id in registry.pump_ids()] == [
        FuelType.PETROL,
        FuelType.PETROL,
        FuelType.DIESEL,
        FuelType.DIESEL,
        FuelType.CNG,
        FuelType.CNG,
    ]
    assert all(registry.status_of(pump_id) is PumpStatus.ACTIVE for pump_id in registry.pump_ids())


def test_pump_status_changes_and_unknown_pumps() -> None:
    """Status changes stick and unknown pump ids raise."""

    registry = PumpRegistry.default_layout()

    pump = registry.set_status(4, "maintenance")

    assert pump.status is PumpStatus.MAINTENANCE
    assert not pump.is_active
    with pytest.raises(UnknownPumpError):
        registry.status_of(7)


def test_station_created_from_settings() -> None:
    """Station construction honours the supplied settings."""

    settings = FuelStationSettings(ledger_initial_capacity=8, station_name="Ring Road Fuels")

    station = Station.create(settings)

    assert station.ledger.capacity == 8
    assert len(station.ledger) == 0
    assert station.name == "Ring Road Fuels"
    assert station.inventory.unit_price(FuelType.DIESEL) == pytest.approx(88.75)


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Settings pick up FUELSTATION_ environment variables."""

    monkeypatch.setenv("FUELSTATION_DIESEL_PRICE", "90.10")
    monkeypatch.setenv("FUELSTATION_LEDGER_INITIAL_CAPACITY", "16")

    settings = FuelStationSettings()

    assert settings.diesel_price == pytest.approx(90.10)
    assert settings.ledger_initial_capacity == 16


@pytest.mark.parametrize("quantity", [float("nan"), float("inf"), -1.0])
def test_inventory_rejects_non_finite_quantities(quantity: float) -> None:
    """Supplies and deductions must be positive finite quantities."""

    inventory = Inventory.from_settings(FuelStationSettings())

    with pytest.raises(ValueError):
        inventory.add_supply(FuelType.DIESEL, quantity)
    with pytest.raises(ValueError):
        inventory.deduct(FuelType.DIESEL, quantity)
    assert inventory.current_stock(FuelType.DIESEL) == pytest.approx(50000.0)


def test_log_level_is_applied_by_entry_points(monkeypatch: pytest.MonkeyPatch) -> None:
    """Importing the package ignores the log level; entry points apply it."""

    root_logger = logging.getLogger()
    monkeypatch.setattr(root_logger, "level", root_logger.level)

    configure_root_logger("DEBUG")
    assert root_logger.level == logging.DEBUG
    configure_root_logger()
    assert root_logger.level == logging.DEBUG


def test_invalid_log_level_is_rejected_by_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """A bad FUELSTATION_LOG_LEVEL fails settings validation, not package import."""

    monkeypatch.setenv("FUELSTATION_LOG_LEVEL", "chatty")

    with pytest.raises(ValidationError):
        FuelStationSettings()
    assert get_logger("fuelstation.tests").name == "fuelstation.tests"
