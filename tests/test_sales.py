"""Mini README: Tests for sale validation and processing.

Structure:
    * quantity and amount entry both derive the other figure from the price.
    * rejected sales (inactive pump, bad figures, short stock) change nothing.
    * a ledger storage failure leaves inventory untouched.
"""

from __future__ import annotations

from datetime import datetime

import pytest

from fuelstation import Station
from fuelstation.catalog import FuelType, PaymentMode, PumpStatus, VehicleType
from fuelstation.configuration import FuelStationSettings
from fuelstation.inventory import InsufficientStockError
from fuelstation.ledger import AggregateDimension, StorageExhaustedError
from fuelstation.pumps import UnknownPumpError
from fuelstation.sales import InvalidSaleError, PumpUnavailableError, SaleProcessor, SaleRequest


@pytest.fixture()
def station() -> Station:
    return Station.create(FuelStationSettings(), clock=lambda: datetime(2025, 11, 2, 12, 0, 0))


def test_quantity_sale_records_and_deducts_stock(station: Station) -> None:
    """A quantity sale is priced, recorded and deducted from stock."""

    processor = SaleProcessor(station)

    transaction = processor.process(
        SaleRequest(
            pump_id=3,
            vehicle_type=VehicleType.COMMERCIAL,
            payment_mode=PaymentMode.CARD,
            quantity=25.0,
        )
    )

    assert transaction.transaction_id == "TXN202511021200001"
    assert transaction.fuel_type is FuelType.DIESEL
    assert transaction.amount == pytest.approx(2218.75)
    assert station.inventory.current_stock(FuelType.DIESEL) == pytest.approx(49975.0)
    assert station.ledger.list_transactions() == [transaction]
    pump_totals = station.ledger.snapshot(AggregateDimension.PUMP)[3]
    assert pump_totals.transaction_count == 1
    assert pump_totals.amount == pytest.approx(2218.75)


def test_amount_sale_derives_quantity(station: Station) -> None:
    """An amount sale derives the dispensed quantity from the unit price."""

    transaction = SaleProcessor(station).process(
        SaleRequest(
            pump_id=5,
            vehicle_type=VehicleType.FOUR_WHEELER,
            payment_mode=PaymentMode.WALLET,
            amount=750.0,
        )
    )

    assert transaction.fuel_type is FuelType.CNG
    assert transaction.quantity == pytest.approx(10.0)
    assert station.ledger.snapshot("payment")[PaymentMode.WALLET] == pytest.approx(750.0)


@pytest.mark.parametrize(
    "figures",
    [{}, {"quantity": 1.0, "amount": 10.0}, {"quantity": 0.0}, {"amount": -5.0}],
)
def test_invalid_figures_are_rejected(station: Station, figures) -> None:
    """Missing, doubled or non-positive figures never reach the ledger."""

    request = SaleRequest(pump_id=1, vehicle_type=VehicleType.TWO_WHEELER, payment_mode=PaymentMode.CASH, **figures)

    with pytest.raises(InvalidSaleError):
        SaleProcessor(station).process(request)
    assert len(station.ledger) == 0


def test_inactive_and_unknown_pumps_are_rejected(station: Station) -> None:
    """Sales on inactive or unknown pumps are refused."""

    processor = SaleProcessor(station)
    station.pumps.set_status(2, PumpStatus.INACTIVE)

    with pytest.raises(PumpUnavailableError):
        processor.process(SaleRequest(2, VehicleType.TWO_WHEELER, PaymentMode.CASH, quantity=1.0))
    with pytest.raises(UnknownPumpError):
        processor.process(SaleRequest(9, VehicleType.TWO_WHEELER, PaymentMode.CASH, quantity=1.0))
    assert len(station.ledger) == 0


def test_insufficient_stock_is_rejected(station: Station) -> None:
    """A sale larger than the stock on hand is refused without side effects."""

    with pytest.raises(InsufficientStockError):
        SaleProcessor(station).process(
            SaleRequest(6, VehicleType.COMMERCIAL, PaymentMode.CASH, quantity=20000.5)
        )
    assert station.inventory.current_stock(FuelType.CNG) == pytest.approx(20000.0)
    assert len(station.ledger) == 0


def test_storage_failure_keeps_inventory() -> None:
    """When the ledger cannot grow, stock stays as it was."""

    def allocator(size):
        if size > 1:
            raise MemoryError("simulated exhaustion")
        return [None] * size

    station = Station.create(FuelStationSettings(ledger_initial_capacity=1), allocator=allocator)
    processor = SaleProcessor(station)
    processor.process(SaleRequest(1, VehicleType.TWO_WHEELER, PaymentMode.CASH, quantity=2.0))

    with pytest.raises(StorageExhaustedError):
        processor.process(SaleRequest(1, VehicleType.TWO_WHEELER, PaymentMode.CASH, quantity=3.0))

    assert station.inventory.current_stock(FuelType.PETROL) == pytest.approx(49998.0)
    assert len(station.ledger) == 1


@pytest.mark.parametrize("field", ["quantity", "amount"])
@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_figures_are_rejected(station: Station, field: str, value: float) -> None:
    """NaN and infinite figures are refused before any totals or stock change."""

    request = SaleRequest(1, VehicleType.TWO_WHEELER, PaymentMode.CASH, **{field: value})

    with pytest.raises(InvalidSaleError):
        SaleProcessor(station).process(request)

    assert len(station.ledger) == 0
    assert station.inventory.current_stock(FuelType.PETROL) == pytest.approx(50000.0)
    assert station.ledger.totals().amount == 0.0
