"""Mini README: The station aggregate tying inventory, pumps and ledger together.

Structure:
    * Station - explicitly constructed owner of the Inventory, PumpRegistry
      and TransactionLedger for one run of the program.

There is no process-wide state: the console and the web interface each build
a ``Station`` at start-up and hand it to the sale processor and the report
builder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

from .configuration import FuelStationSettings, get_settings
from .inventory import FuelStock, Inventory
from .ledger import TransactionLedger
from .ledger.store import Allocator
from .logging_utils import get_logger
from .pumps import PumpRegistry

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class Station:
    """Inventory, pumps and transaction ledger for a single trading session."""

    inventory: Inventory
    pumps: PumpRegistry
    ledger: TransactionLedger
    name: str = "ABC Fuel Station"
    address: str = "123 Main Road"
    low_stock_threshold: float = 5000.0
    opened_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def create(
        cls,
        settings: Optional[FuelStationSettings] = None,
        *,
        allocator: Optional[Allocator] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> "Station":
        """Build a station with opening stock, the default pump layout and an empty ledger."""

        settings = settings or get_settings()
        pumps = PumpRegistry.default_layout()
        ledger = TransactionLedger(
            pump_ids=pumps.pump_ids(),
            initial_capacity=settings.ledger_initial_capacity,
            fallback_increment=settings.ledger_fallback_increment,
            allocator=allocator,
            clock=clock,
        )
        station = cls(
            inventory=Inventory.from_settings(settings),
            pumps=pumps,
            ledger=ledger,
            name=settings.station_name,
            address=settings.station_address,
            low_stock_threshold=settings.low_stock_threshold,
            opened_at=clock(),
        )
        LOGGER.info(
            "Station '%s' opened with %s pumps and ledger capacity %s",
            station.name,
            len(pumps.pump_ids()),
            ledger.capacity,
        )
        return station

    def low_stock(self) -> List[FuelStock]:
        """Fuels currently below the configured low-stock threshold."""

        return self.inventory.low_stock(self.low_stock_threshold)
