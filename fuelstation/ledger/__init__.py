"""Mini README: Transaction ledger package.

``store`` holds the growable slot buffer and its capacity policy; ``ledger``
builds the append-only transaction log and its fuel, pump, hour and payment
aggregates on top of it.
"""

from .ledger import (
    AggregateDimension,
    FuelTotals,
    HourTotals,
    PumpTotals,
    Transaction,
    TransactionCandidate,
    TransactionLedger,
)
from .store import StorageExhaustedError, TransactionStore

__all__ = [
    "AggregateDimension",
    "FuelTotals",
    "HourTotals",
    "PumpTotals",
    "StorageExhaustedError",
    "Transaction",
    "TransactionCandidate",
    "TransactionLedger",
    "TransactionStore",
]
