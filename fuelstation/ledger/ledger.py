"""Mini README: Append-only transaction ledger with streaming aggregates.

Structure:
    * TransactionCandidate - validated sale waiting to be recorded.
    * Transaction - immutable recorded sale with its assigned identifier.
    * AggregateDimension - the four summary views kept by the ledger.
    * FuelTotals / PumpTotals / HourTotals - aggregate bucket values.
    * TransactionLedger - records candidates and serves listings and snapshots.

Every call to ``record`` appends to a ``TransactionStore`` and updates the
fuel, pump, hour and payment aggregates exactly once, so reports never need
to rescan the history. ``record`` either completes all of these steps or
raises ``StorageExhaustedError`` without touching any state, including the
identifier sequence.

Identifiers look like ``TXN`` + ``YYYYMMDDHH`` of the sale + a five digit
sequence number, e.g. ``TXN202511021200001``. The sequence belongs to the
ledger instance and never resets, so identifiers stay unique even when many
sales share a timestamp.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Union

import numpy as np

from ..catalog import FuelType, PaymentMode, VehicleType
from ..logging_utils import get_logger
from .store import (
    DEFAULT_FALLBACK_INCREMENT,
    DEFAULT_INITIAL_CAPACITY,
    Allocator,
    TransactionStore,
)

LOGGER = get_logger(__name__)

ID_PREFIX = "TXN"
HOURS_PER_DAY = 24


@dataclass(frozen=True, slots=True)
class TransactionCandidate:
    """A validated sale that has not been assigned an identifier yet."""

    pump_id: int
    fuel_type: FuelType
    vehicle_type: VehicleType
    payment_mode: PaymentMode
    quantity: float
    amount: float
    timestamp: Optional[datetime] = None


@dataclass(frozen=True, slots=True)
class Transaction:
    """A recorded sale. Never modified after it enters the ledger."""

    transaction_id: str
    timestamp: datetime
    pump_id: int
    fuel_type: FuelType
    vehicle_type: VehicleType
    payment_mode: PaymentMode
    quantity: float
    amount: float

    def as_dict(self) -> Dict[str, object]:
        """Export the transaction with serialisable values."""

        return {
            "transaction_id": self.transaction_id,
            "timestamp": self.timestamp.isoformat(timespec="seconds"),
            "pump_id": self.pump_id,
            "fuel_type": self.fuel_type.value,
            "vehicle_type": self.vehicle_type.value,
            "payment_mode": self.payment_mode.value,
            "quantity": self.quantity,
            "amount": self.amount,
        }


class AggregateDimension(str, Enum):
    FUEL = "fuel"
    PUMP = "pump"
    HOUR = "hour"
    PAYMENT = "payment"

    @classmethod
    def from_str(cls, value: Union[str, "AggregateDimension"]) -> "AggregateDimension":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as error:
            raise ValueError(f"Unsupported aggregate dimension: {value}") from error


@dataclass(frozen=True, slots=True)
class FuelTotals:
    quantity: float = 0.0
    amount: float = 0.0


@dataclass(frozen=True, slots=True)
class HourTotals:
    quantity: float = 0.0
    amount: float = 0.0


@dataclass(frozen=True, slots=True)
class PumpTotals:
    transaction_count: int = 0
    quantity: float = 0.0
    amount: float = 0.0


class TransactionLedger:
    """Own the transaction history and its incrementally maintained summaries."""

    def __init__(
        self,
        *,
        pump_ids: Iterable[int] = (),
        initial_capacity: int = DEFAULT_INITIAL_CAPACITY,
        fallback_increment: int = DEFAULT_FALLBACK_INCREMENT,
        allocator: Optional[Allocator] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store: TransactionStore[Transaction] = TransactionStore(
            initial_capacity,
            fallback_increment=fallback_increment,
            allocator=allocator,
        )
        self._clock = clock
        self._sequence = 0

        self._fuel_totals: Dict[FuelType, FuelTotals] = {fuel: FuelTotals() for fuel in FuelType}
        self._pump_totals: Dict[int, PumpTotals] = {int(pump_id): PumpTotals() for pump_id in pump_ids}
        self._payment_totals: Dict[PaymentMode, float] = {mode: 0.0 for mode in PaymentMode}
        self._hour_quantity = np.zeros(HOURS_PER_DAY, dtype=np.float64)
        self._hour_amount = np.zeros(HOURS_PER_DAY, dtype=np.float64)
        LOGGER.debug(
            "Transaction ledger initialised with capacity %s and %s known pumps",
            self._store.capacity,
            len(self._pump_totals),
        )

    @property
    def capacity(self) -> int:
        return self._store.capacity

    def __len__(self) -> int:
        return len(self._store)

    def get(self, index: int) -> Transaction:
        """Return the transaction recorded at ``index`` (insertion order)."""

        return self._store[index]

    def _format_id(self, timestamp: datetime, sequence: int) -> str:
        return f"{ID_PREFIX}{timestamp:%Y%m%d%H}{sequence:05d}"

    def record(self, candidate: TransactionCandidate) -> Transaction:
        """Append a candidate, update every aggregate and return the stored record.

        Raises ``StorageExhaustedError`` when no slot can be obtained; the
        ledger is then exactly as it was before the call.
        """

        self._store.reserve_one()

        timestamp = candidate.timestamp if candidate.timestamp is not None else self._clock()
        sequence = self._sequence + 1
        transaction = Transaction(
            transaction_id=self._format_id(timestamp, sequence),
            timestamp=timestamp,
            pump_id=candidate.pump_id,
            fuel_type=candidate.fuel_type,
            vehicle_type=candidate.vehicle_type,
            payment_mode=candidate.payment_mode,
            quantity=candidate.quantity,
            amount=candidate.amount,
        )
        self._store.append(transaction)
        self._sequence = sequence
        self._apply(transaction)
        LOGGER.info(
            "Recorded %s: pump %s %s %.3f %s for %.2f (%s)",
            transaction.transaction_id,
            transaction.pump_id,
            transaction.fuel_type.label,
            transaction.quantity,
            transaction.fuel_type.unit,
            transaction.amount,
            transaction.payment_mode.label,
        )
        return transaction

    def _apply(self, transaction: Transaction) -> None:
        fuel = self._fuel_totals[transaction.fuel_type]
        self._fuel_totals[transaction.fuel_type] = FuelTotals(
            quantity=fuel.quantity + transaction.quantity,
            amount=fuel.amount + transaction.amount,
        )

        pump = self._pump_totals.get(transaction.pump_id, PumpTotals())
        self._pump_totals[transaction.pump_id] = PumpTotals(
            transaction_count=pump.transaction_count + 1,
            quantity=pump.quantity + transaction.quantity,
            amount=pump.amount + transaction.amount,
        )

        self._payment_totals[transaction.payment_mode] += transaction.amount

        hour = transaction.timestamp.hour
        self._hour_quantity[hour] += transaction.quantity
        self._hour_amount[hour] += transaction.amount

    def list_transactions(self) -> List[Transaction]:
        """Return every transaction, most recently recorded first."""

        return list(reversed(self._store))

    def snapshot(self, dimension: Union[str, AggregateDimension]) -> Dict[object, object]:
        """Return a copy of one aggregate view; cost does not depend on ledger size."""

        dimension = AggregateDimension.from_str(dimension)
        if dimension is AggregateDimension.FUEL:
            return dict(self._fuel_totals)
        if dimension is AggregateDimension.PUMP:
            return {pump_id: self._pump_totals[pump_id] for pump_id in sorted(self._pump_totals)}
        if dimension is AggregateDimension.HOUR:
            return {
                hour: HourTotals(
                    quantity=float(self._hour_quantity[hour]),
                    amount=float(self._hour_amount[hour]),
                )
                for hour in range(HOURS_PER_DAY)
            }
        return dict(self._payment_totals)

    def totals(self) -> FuelTotals:
        """Overall quantity and revenue across every fuel."""

        return FuelTotals(
            quantity=sum(totals.quantity for totals in self._fuel_totals.values()),
            amount=sum(totals.amount for totals in self._fuel_totals.values()),
        )
