"""Mini README: Per-fuel stock tracking for the station forecourt.

Structure:
    * FuelStock - price and opening/current/closing stock for one fuel.
    * InsufficientStockError - raised when a deduction exceeds current stock.
    * Inventory - owns one ``FuelStock`` per ``FuelType``.

The inventory is mutated only by supply additions and sale deductions. The
low-stock signal is a pure read so reporting can call it freely.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping

from .catalog import FuelType
from .configuration import FuelStationSettings
from .logging_utils import get_logger

LOGGER = get_logger(__name__)


def _require_positive(quantity: float, what: str) -> None:
    if not math.isfinite(quantity) or quantity <= 0:
        raise ValueError(f"{what} must be a positive finite number.")


class InsufficientStockError(ValueError):
    """Requested quantity is larger than the stock on hand."""

    def __init__(self, fuel_type: FuelType, requested: float, available: float) -> None:
        super().__init__(
            f"Insufficient {fuel_type.label} stock: requested {requested:.3f} "
            f"{fuel_type.unit}, available {available:.3f}"
        )
        self.fuel_type = fuel_type
        self.requested = requested
        self.available = available


@dataclass(slots=True)
class FuelStock:
    """Price and stock levels for one fuel type."""

    fuel_type: FuelType
    unit_price: float
    opening_stock: float
    current_stock: float
    closing_stock: float

    @classmethod
    def opening(cls, fuel_type: FuelType, unit_price: float, stock: float) -> "FuelStock":
        return cls(
            fuel_type=fuel_type,
            unit_price=unit_price,
            opening_stock=stock,
            current_stock=stock,
            closing_stock=stock,
        )

    def as_dict(self) -> Dict[str, object]:
        return {
            "fuel_type": self.fuel_type.value,
            "label": self.fuel_type.label,
            "unit": self.fuel_type.unit,
            "unit_price": self.unit_price,
            "opening_stock": self.opening_stock,
            "current_stock": self.current_stock,
            "closing_stock": self.closing_stock,
        }


class Inventory:
    """Track stock for every fuel the station sells."""

    def __init__(self, stocks: Iterable[FuelStock]) -> None:
        self._stocks: Dict[FuelType, FuelStock] = {stock.fuel_type: stock for stock in stocks}
        missing = [fuel.label for fuel in FuelType if fuel not in self._stocks]
        if missing:
            raise ValueError(f"Inventory is missing stock entries for: {', '.join(missing)}")
        LOGGER.debug("Inventory initialised for %s fuels", len(self._stocks))

    @classmethod
    def from_settings(cls, settings: FuelStationSettings) -> "Inventory":
        """Build the opening inventory from configured prices and stocks."""

        return cls(
            [
                FuelStock.opening(FuelType.PETROL, settings.petrol_price, settings.petrol_opening_stock),
                FuelStock.opening(FuelType.DIESEL, settings.diesel_price, settings.diesel_opening_stock),
                FuelStock.opening(FuelType.CNG, settings.cng_price, settings.cng_opening_stock),
            ]
        )

    def stock(self, fuel_type: FuelType) -> FuelStock:
        return self._stocks[FuelType.from_str(fuel_type)]

    def stocks(self) -> List[FuelStock]:
        """Return stock entries in catalogue order."""

        return [self._stocks[fuel] for fuel in FuelType]

    def current_stock(self, fuel_type: FuelType) -> float:
        return self.stock(fuel_type).current_stock

    def unit_price(self, fuel_type: FuelType) -> float:
        return self.stock(fuel_type).unit_price

    def deduct(self, fuel_type: FuelType, quantity: float) -> float:
        """Remove sold fuel from stock and return the remaining quantity."""

        stock = self.stock(fuel_type)
        _require_positive(quantity, "Deducted quantity")
        if quantity > stock.current_stock:
            raise InsufficientStockError(stock.fuel_type, quantity, stock.current_stock)
        stock.current_stock -= quantity
        LOGGER.debug(
            "Deducted %.3f %s of %s, %.3f remaining",
            quantity,
            stock.fuel_type.unit,
            stock.fuel_type.label,
            stock.current_stock,
        )
        return stock.current_stock

    def add_supply(self, fuel_type: FuelType, quantity: float) -> float:
        """Receive a delivery and return the new stock level."""

        stock = self.stock(fuel_type)
        _require_positive(quantity, "Supply quantity")
        stock.current_stock += quantity
        LOGGER.info(
            "Supply added: %.2f %s of %s, new stock %.2f",
            quantity,
            stock.fuel_type.unit,
            stock.fuel_type.label,
            stock.current_stock,
        )
        return stock.current_stock

    def low_stock(self, threshold: float) -> List[FuelStock]:
        """Return fuels whose current stock is strictly below ``threshold``."""

        return [stock for stock in self.stocks() if stock.current_stock < threshold]

    def close_day(self) -> Mapping[FuelType, float]:
        """Freeze the current stock as the closing stock for reporting."""

        closing: Dict[FuelType, float] = {}
        for stock in self.stocks():
            stock.closing_stock = stock.current_stock
            closing[stock.fuel_type] = stock.closing_stock
        return closing
