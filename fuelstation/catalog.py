"""Mini README: Closed enumerations shared by every station component.

Structure:
    * FuelType - Petrol, Diesel and CNG with their dispensing unit.
    * PumpStatus - operational state of a dispensing pump.
    * VehicleType - vehicle category recorded on each sale.
    * PaymentMode - how a sale was settled.

Each enum stores a short machine value and carries a ``label`` for display.
``from_str`` accepts the value, the member name or the label in any casing
so both form posts and console input go through one helper.
"""

from __future__ import annotations

from enum import Enum


class _LabelledEnum(str, Enum):
    """String enum with a human readable label and tolerant parsing."""

    def __new__(cls, value: str, label: str):
        member = str.__new__(cls, value)
        member._value_ = value
        member.label = label
        return member

    @classmethod
    def from_str(cls, value: object):
        """Coerce a value, member name or label (any casing) into a member."""

        if isinstance(value, cls):
            return value
        normalised = str(value).strip().lower()
        for member in cls:
            if normalised in {member.value, member.name.lower(), member.label.lower()}:
                return member
        raise ValueError(f"Unsupported {cls.__name__}: {value!r}")


class FuelType(_LabelledEnum):
    """Fuels sold at the station."""

    PETROL = ("petrol", "Petrol")
    DIESEL = ("diesel", "Diesel")
    CNG = ("cng", "CNG")

    @property
    def unit(self) -> str:
        """Dispensing unit; CNG is sold by weight."""

        return "kg" if self is FuelType.CNG else "liters"


class PumpStatus(_LabelledEnum):
    ACTIVE = ("active", "Active")
    INACTIVE = ("inactive", "Inactive")
    MAINTENANCE = ("maintenance", "Maintenance")


class VehicleType(_LabelledEnum):
    TWO_WHEELER = ("2w", "2-Wheeler")
    FOUR_WHEELER = ("4w", "4-Wheeler")
    COMMERCIAL = ("commercial", "Commercial")


class PaymentMode(_LabelledEnum):
    CASH = ("cash", "Cash")
    CARD = ("card", "Credit Card")
    WALLET = ("wallet", "Digital Wallet")
