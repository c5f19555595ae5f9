"""Mini README: Sale validation and processing for the forecourt.

Structure:
    * SaleRequest - what an attendant enters: pump, vehicle, payment and
      either a quantity or an amount.
    * InvalidSaleError / PumpUnavailableError - request rejections.
    * SaleProcessor - validates a request against the station, records the
      sale in the ledger and deducts the sold fuel from stock.

Validation runs in the order an attendant experiences it: the pump must
exist and be active, the entered figure must be positive, and the stock
must cover the quantity. Only a fully validated candidate reaches the
ledger. Stock is deducted after the ledger accepts the sale, so a ledger
storage failure leaves the inventory untouched.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .catalog import PaymentMode, VehicleType
from .inventory import InsufficientStockError
from .ledger import Transaction, TransactionCandidate
from .logging_utils import get_logger
from .station import Station

LOGGER = get_logger(__name__)


class InvalidSaleError(ValueError):
    """The sale request is malformed (missing or non-positive figures)."""


class PumpUnavailableError(ValueError):
    """The selected pump exists but is not active."""


@dataclass(frozen=True, slots=True)
class SaleRequest:
    """Attendant input for one sale. Exactly one of quantity or amount is set."""

    pump_id: int
    vehicle_type: VehicleType
    payment_mode: PaymentMode
    quantity: Optional[float] = None
    amount: Optional[float] = None
    timestamp: Optional[datetime] = None


class SaleProcessor:
    """Turn sale requests into recorded transactions for one station."""

    def __init__(self, station: Station) -> None:
        self.station = station

    def build_candidate(self, request: SaleRequest) -> TransactionCandidate:
        """Validate ``request`` and return the candidate the ledger will record."""

        pump = self.station.pumps.get(request.pump_id)
        if not pump.is_active:
            raise PumpUnavailableError(f"Pump {pump.pump_id} is {pump.status.label.lower()}, not active")

        if (request.quantity is None) == (request.amount is None):
            raise InvalidSaleError("Provide either a quantity or an amount, not both.")

        unit_price = self.station.inventory.unit_price(pump.fuel_type)
        if request.quantity is not None:
            quantity = float(request.quantity)
            if not math.isfinite(quantity) or quantity <= 0:
                raise InvalidSaleError("Quantity must be a positive finite number.")
            amount = quantity * unit_price
        else:
            amount = float(request.amount)
            if not math.isfinite(amount) or amount <= 0:
                raise InvalidSaleError("Amount must be a positive finite number.")
            quantity = amount / unit_price

        available = self.station.inventory.current_stock(pump.fuel_type)
        if quantity > available:
            raise InsufficientStockError(pump.fuel_type, quantity, available)

        return TransactionCandidate(
            pump_id=pump.pump_id,
            fuel_type=pump.fuel_type,
            vehicle_type=VehicleType.from_str(request.vehicle_type),
            payment_mode=PaymentMode.from_str(request.payment_mode),
            quantity=quantity,
            amount=amount,
            timestamp=request.timestamp,
        )

    def process(self, request: SaleRequest) -> Transaction:
        """Validate, record and deduct stock for a sale; return the stored transaction."""

        candidate = self.build_candidate(request)
        transaction = self.station.ledger.record(candidate)
        self.station.inventory.deduct(transaction.fuel_type, transaction.quantity)

        for stock in self.station.low_stock():
            LOGGER.warning(
                "Low stock for %s: %.2f %s left (threshold %.2f)",
                stock.fuel_type.label,
                stock.current_stock,
                stock.fuel_type.unit,
                self.station.low_stock_threshold,
            )
        return transaction
