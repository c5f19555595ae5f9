"""Mini README: Registry of the station's dispensing pumps.

Structure:
    * Pump - dataclass binding a pump id to one fuel type and a status.
    * UnknownPumpError - lookup failure for an id the station does not have.
    * PumpRegistry - fixed set of pumps with status management.

The pump set is fixed at construction. Only the status of a pump changes
afterwards; sale statistics per pump live in the transaction ledger's
pump-wise aggregate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List

from .catalog import FuelType, PumpStatus
from .logging_utils import get_logger

LOGGER = get_logger(__name__)

DEFAULT_PUMPS_PER_FUEL = 2


class UnknownPumpError(KeyError):
    """Raised when a pump id is not registered with the station."""

    def __init__(self, pump_id: object) -> None:
        super().__init__(f"Pump {pump_id} is not registered")
        self.pump_id = pump_id

    def __str__(self) -> str:
        return str(self.args[0])


@dataclass(slots=True)
class Pump:
    """A dispensing unit bound to a single fuel."""

    pump_id: int
    fuel_type: FuelType
    status: PumpStatus = PumpStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status is PumpStatus.ACTIVE

    def as_dict(self) -> Dict[str, object]:
        return {
            "pump_id": self.pump_id,
            "fuel_type": self.fuel_type.value,
            "fuel_label": self.fuel_type.label,
            "status": self.status.value,
            "status_label": self.status.label,
        }


class PumpRegistry:
    """Map pump identifiers to pumps and manage their status."""

    def __init__(self, pumps: Iterable[Pump]) -> None:
        self._pumps: Dict[int, Pump] = {}
        for pump in pumps:
            if pump.pump_id in self._pumps:
                raise ValueError(f"Pump {pump.pump_id} is registered twice.")
            self._pumps[pump.pump_id] = pump
        LOGGER.debug("Pump registry initialised with %s pumps", len(self._pumps))

    @classmethod
    def default_layout(cls, pumps_per_fuel: int = DEFAULT_PUMPS_PER_FUEL) -> "PumpRegistry":
        """Number pumps from 1, grouped by fuel in catalogue order, all active."""

        pumps: List[Pump] = []
        for fuel_type in FuelType:
            for _ in range(pumps_per_fuel):
                pumps.append(Pump(pump_id=len(pumps) + 1, fuel_type=fuel_type))
        return cls(pumps)

    def get(self, pump_id: int) -> Pump:
        try:
            return self._pumps[int(pump_id)]
        except (KeyError, TypeError, ValueError) as error:
            raise UnknownPumpError(pump_id) from error

    def list_pumps(self) -> List[Pump]:
        return [self._pumps[pump_id] for pump_id in sorted(self._pumps)]

    def pump_ids(self) -> List[int]:
        return sorted(self._pumps)

    def status_of(self, pump_id: int) -> PumpStatus:
        return self.get(pump_id).status

    def fuel_type_of(self, pump_id: int) -> FuelType:
        return self.get(pump_id).fuel_type

    def set_status(self, pump_id: int, status: PumpStatus) -> Pump:
        """Change a pump's status and return the updated pump."""

        pump = self.get(pump_id)
        pump.status = PumpStatus.from_str(status)
        LOGGER.info("Pump %s status set to %s", pump.pump_id, pump.status.label)
        return pump
