"""Mini README: Read-only summaries, receipts and the daily report.

Structure:
    * ReportBuilder - derives dictionaries and printable text from a Station.

Everything here is read from ledger snapshots and listings plus the live
inventory and pump registry; the raw transaction store is never scanned for
totals. The only write is ``daily_report`` closing the day on the inventory,
which copies current stock into closing stock as the till does at day end.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..catalog import FuelType, PaymentMode
from ..ledger import AggregateDimension, FuelTotals, PumpTotals, Transaction
from ..logging_utils import get_logger
from ..station import Station

LOGGER = get_logger(__name__)

RULE = "-" * 52


class ReportBuilder:
    """Build station summaries for the console and web interface."""

    def __init__(self, station: Station) -> None:
        self.station = station

    def pump_performance(self) -> List[Dict[str, Any]]:
        totals = self.station.ledger.snapshot(AggregateDimension.PUMP)
        rows = []
        for pump in self.station.pumps.list_pumps():
            pump_totals = totals.get(pump.pump_id, PumpTotals())
            rows.append(
                {
                    **pump.as_dict(),
                    "transactions": pump_totals.transaction_count,
                    "quantity": pump_totals.quantity,
                    "revenue": pump_totals.amount,
                }
            )
        return rows

    def fuel_summary(self) -> List[Dict[str, Any]]:
        totals = self.station.ledger.snapshot(AggregateDimension.FUEL)
        rows = []
        for stock in self.station.inventory.stocks():
            fuel_totals = totals.get(stock.fuel_type, FuelTotals())
            rows.append(
                {
                    **stock.as_dict(),
                    "sold_quantity": fuel_totals.quantity,
                    "revenue": fuel_totals.amount,
                }
            )
        return rows

    def hour_wise(self) -> List[Dict[str, Any]]:
        """Hours with any sales, in clock order."""

        return [
            {"hour": hour, "quantity": totals.quantity, "revenue": totals.amount}
            for hour, totals in self.station.ledger.snapshot(AggregateDimension.HOUR).items()
            if totals.quantity > 0.0 or totals.amount > 0.0
        ]

    def payment_breakdown(self) -> Dict[str, float]:
        totals = self.station.ledger.snapshot(AggregateDimension.PAYMENT)
        return {mode.value: totals.get(mode, 0.0) for mode in PaymentMode}

    def dimension(self, dimension: str) -> Any:
        """Dispatch to the summary for a named aggregate dimension."""

        views = {
            AggregateDimension.FUEL: self.fuel_summary,
            AggregateDimension.PUMP: self.pump_performance,
            AggregateDimension.HOUR: self.hour_wise,
            AggregateDimension.PAYMENT: self.payment_breakdown,
        }
        return views[AggregateDimension.from_str(dimension)]()

    def daily_report(self) -> Dict[str, Any]:
        """Close the day and return the full end-of-day summary."""

        self.station.inventory.close_day()
        totals = self.station.ledger.totals()
        report = {
            "station": self.station.name,
            "stocks": [
                {
                    "fuel_type": stock.fuel_type.value,
                    "opening_stock": stock.opening_stock,
                    "closing_stock": stock.closing_stock,
                }
                for stock in self.station.inventory.stocks()
            ],
            "total_quantity": totals.quantity,
            "total_revenue": totals.amount,
            "transaction_count": len(self.station.ledger),
            "fuel_summary": self.fuel_summary(),
            "payment_breakdown": self.payment_breakdown(),
            "pump_performance": self.pump_performance(),
            "hour_wise": self.hour_wise(),
        }
        LOGGER.info(
            "Daily report generated: %s transactions, revenue %.2f",
            report["transaction_count"],
            report["total_revenue"],
        )
        return report

    def render_receipt(self, transaction: Transaction) -> str:
        fuel = transaction.fuel_type
        lines = [
            "------------------- FUEL RECEIPT -------------------",
            f"Station        : {self.station.name}",
            f"Address        : {self.station.address}",
            f"Transaction ID : {transaction.transaction_id}",
            f"Date & Time    : {transaction.timestamp:%Y-%m-%d %H:%M:%S}",
            f"Pump ID        : {transaction.pump_id}",
            f"Fuel Type      : {fuel.label}",
            f"Vehicle Type   : {transaction.vehicle_type.label}",
            f"Quantity       : {transaction.quantity:.3f} {fuel.unit}",
            f"Rate (INR)     : {self.station.inventory.unit_price(fuel):.2f} per {_per_unit(fuel)}",
            f"Amount (INR)   : {transaction.amount:.2f}",
            f"Payment Mode   : {transaction.payment_mode.label}",
            RULE,
        ]
        return "\n".join(lines)

    def render_transactions(self) -> str:
        transactions = self.station.ledger.list_transactions()
        if not transactions:
            return "No transactions yet."
        lines = ["---- Transactions (most recent first) ----"]
        for transaction in transactions:
            lines.append(
                f"{transaction.transaction_id} | {transaction.timestamp:%Y-%m-%d %H:%M:%S} | "
                f"Pump {transaction.pump_id} | Qty: {transaction.quantity:.3f} | "
                f"INR {transaction.amount:.2f} | {transaction.payment_mode.label}"
            )
        return "\n".join(lines)

    def render_pump_performance(self) -> str:
        lines = ["----- Pump-wise Performance -----"]
        for row in self.pump_performance():
            lines.append(
                f"Pump {row['pump_id']} | Fuel: {row['fuel_label']} | Status: {row['status_label']} | "
                f"Txns: {row['transactions']} | Qty: {row['quantity']:.3f} | Revenue: INR {row['revenue']:.2f}"
            )
        return "\n".join(lines)

    def render_fuel_summary(self) -> str:
        lines = ["----- Fuel-wise Summary -----"]
        for row in self.fuel_summary():
            lines.append(
                f"{row['label']} | Opening Stock: {row['opening_stock']:.2f} | "
                f"Current Stock: {row['current_stock']:.2f} | Sold Qty: {row['sold_quantity']:.3f} | "
                f"Revenue: INR {row['revenue']:.2f}"
            )
        return "\n".join(lines)

    def render_hour_wise(self) -> str:
        lines = ["----- Hour-wise Sales Analysis -----"]
        for row in self.hour_wise():
            lines.append(f"Hour {row['hour']:02d}:00 - Qty: {row['quantity']:.3f} | Revenue: INR {row['revenue']:.2f}")
        return "\n".join(lines)

    def render_payment_breakdown(self) -> str:
        lines = ["----- Payment Mode Breakdown -----"]
        breakdown = self.payment_breakdown()
        for mode in PaymentMode:
            lines.append(f"{mode.label}: INR {breakdown[mode.value]:.2f}")
        return "\n".join(lines)

    def render_daily_report(self) -> str:
        report = self.daily_report()
        lines = ["================= DAILY REPORT =================", "Fuel Opening & Closing Stocks:"]
        for stock in self.station.inventory.stocks():
            lines.append(
                f"{stock.fuel_type.label}: Opening: {stock.opening_stock:.2f} | Closing: {stock.closing_stock:.2f}"
            )
        lines.extend(
            [
                f"Total Sales Quantity (all fuels): {report['total_quantity']:.3f}",
                f"Total Revenue (all fuels): INR {report['total_revenue']:.2f}",
                self.render_fuel_summary(),
                f"Number of transactions: {report['transaction_count']}",
                self.render_payment_breakdown(),
                self.render_pump_performance(),
                self.render_hour_wise(),
                "================================================",
            ]
        )
        return "\n".join(lines)


def _per_unit(fuel: FuelType) -> str:
    return "kg" if fuel is FuelType.CNG else "liter"


SAMPLE_RECEIPT_FORMAT = "\n".join(
    [
        "--- Sample Receipt Format ---",
        "Station: <Station name>",
        "Address: <Station address>",
        "Receipt No: <TXN ID>",
        "Date/Time: <YYYY-MM-DD HH:MM:SS>",
        "Pump: <ID>",
        "Fuel: <Petrol/Diesel/CNG>",
        "Vehicle: <2W/4W/Commercial>",
        "Quantity: <x.xxx liters/kg>",
        "Rate: INR <price> per unit",
        "Amount: INR <xx.xx>",
        "Payment: <Cash/Card/Wallet>",
        "Thank you!",
        "-----------------------------",
    ]
)

STORAGE_STRATEGY_NOTES = "\n".join(
    [
        "--- System Architecture & Memory Strategy ---",
        "1. Data structures:",
        "   - FuelStock, Pump, Transaction (dataclasses)",
        "2. Transactions stored in a preallocated slot list (TransactionStore)",
        "   - initially sized by FUELSTATION_LEDGER_INITIAL_CAPACITY (default 50)",
        "   - capacity doubles when full, falling back to a fixed increment",
        "3. Aggregates (fuel, pump, hour, payment) updated on every record",
        "4. Transaction id sequence owned by the ledger, never reset during a run",
        "5. Ledger storage released when the station shuts down",
        "-----------------------------------------------",
    ]
)

DYNAMIC_STORAGE_ADVANTAGES = "\n".join(
    [
        "--- Advantages of Dynamic Allocation for Transactions ---",
        "- Small initial footprint (start with a few preallocated slots)",
        "- Grows as needed, avoiding fixed limits on daily sales",
        "- Doubling keeps the average cost of each append constant",
        "- Running totals mean reports never rescan the full history",
        "-----------------------------------------------",
    ]
)
