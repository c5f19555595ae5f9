"""Mini README: Entry point CLI for the fuel station simulator.

This script exposes a Typer CLI with two commands: ``run`` starts the
FastAPI dashboard under uvicorn, and ``console`` opens the attendant's
numbered menu for processing sales, receiving supplies, changing pump
status and printing reports. Both read defaults from ``FUELSTATION_``
environment variables.
"""

from __future__ import annotations

from typing import Callable, Dict

import typer
import uvicorn

from fuelstation.catalog import FuelType, PaymentMode, PumpStatus, VehicleType
from fuelstation.configuration import get_settings
from fuelstation.inventory import InsufficientStockError
from fuelstation.ledger import StorageExhaustedError
from fuelstation.logging_utils import configure_root_logger, get_logger
from fuelstation.pumps import UnknownPumpError
from fuelstation.reporting import (
    DYNAMIC_STORAGE_ADVANTAGES,
    SAMPLE_RECEIPT_FORMAT,
    STORAGE_STRATEGY_NOTES,
    ReportBuilder,
)
from fuelstation.sales import SaleProcessor, SaleRequest
from fuelstation.station import Station

LOGGER = get_logger(__name__)

cli = typer.Typer(help="Run the fuel station point-of-sale simulator.")

MENU = """
====== PETROL PUMP MANAGEMENT SYSTEM ======
1. Process Sale (new transaction)
2. Add Fuel Supply
3. Change Pump Status
4. List Transactions
5. Generate Daily Report
6. Show Pump Performance
7. Show Fuel Summary
8. Show Hour-wise Sales
9. Show Payment Breakdown
10. Print Sample Receipt Format
11. Print System Architecture & Memory Strategy
12. Show Advantages of Dynamic Allocation
0. Exit"""


def _choose(prompt: str, options) -> object:
    """Prompt for a numbered option from an enum and return the member."""

    members = list(options)
    listing = ", ".join(f"{index}={member.label}" for index, member in enumerate(members))
    choice = typer.prompt(f"{prompt} ({listing})", type=int)
    if not 0 <= choice < len(members):
        raise ValueError("Invalid choice.")
    return members[choice]


def _process_sale(station: Station, processor: SaleProcessor, reports: ReportBuilder) -> None:
    typer.echo("\nAvailable Pumps:")
    for pump in station.pumps.list_pumps():
        typer.echo(f"Pump {pump.pump_id} - {pump.fuel_type.label} ({pump.status.label})")
    pump_id = typer.prompt("Enter Pump ID to use", type=int)
    vehicle = _choose("Select vehicle type", VehicleType)
    by_amount = typer.prompt("Enter input mode (0=Quantity, 1=Amount)", type=int)
    if by_amount not in (0, 1):
        raise ValueError("Invalid input mode.")
    if by_amount:
        figure = {"amount": typer.prompt("Enter amount to spend (INR)", type=float)}
    else:
        figure = {"quantity": typer.prompt("Enter quantity to dispense", type=float)}
    payment = _choose("Payment Mode", PaymentMode)

    transaction = processor.process(
        SaleRequest(pump_id=pump_id, vehicle_type=vehicle, payment_mode=payment, **figure)
    )
    typer.echo("\n" + reports.render_receipt(transaction))
    for stock in station.low_stock():
        typer.echo(
            f"WARNING: Low stock for {stock.fuel_type.label}: {stock.current_stock:.2f} units left "
            f"(threshold {station.low_stock_threshold:.2f})"
        )


def _add_supply(station: Station) -> None:
    fuel = _choose("Add supply to which fuel?", FuelType)
    quantity = typer.prompt(f"Enter quantity to add ({fuel.unit})", type=float)
    new_stock = station.inventory.add_supply(fuel, quantity)
    typer.echo(f"Supply added. New stock for {fuel.label}: {new_stock:.2f}")


def _change_pump_status(station: Station) -> None:
    pump_id = typer.prompt("Enter Pump ID to change status", type=int)
    station.pumps.get(pump_id)
    status = _choose("Select status", PumpStatus)
    pump = station.pumps.set_status(pump_id, status)
    typer.echo(f"Pump {pump.pump_id} status set to {pump.status.label}")


def build_station() -> Station:
    """Open the station the console session works on."""

    return Station.create(get_settings())


@cli.command()
def console() -> None:
    """Open the interactive attendant menu."""

    configure_root_logger(get_settings().log_level.upper())
    station = build_station()
    processor = SaleProcessor(station)
    reports = ReportBuilder(station)

    actions: Dict[int, Callable[[], None]] = {
        1: lambda: _process_sale(station, processor, reports),
        2: lambda: _add_supply(station),
        3: lambda: _change_pump_status(station),
        4: lambda: typer.echo(reports.render_transactions()),
        5: lambda: typer.echo(reports.render_daily_report()),
        6: lambda: typer.echo(reports.render_pump_performance()),
        7: lambda: typer.echo(reports.render_fuel_summary()),
        8: lambda: typer.echo(reports.render_hour_wise()),
        9: lambda: typer.echo(reports.render_payment_breakdown()),
        10: lambda: typer.echo(SAMPLE_RECEIPT_FORMAT),
        11: lambda: typer.echo(STORAGE_STRATEGY_NOTES),
        12: lambda: typer.echo(DYNAMIC_STORAGE_ADVANTAGES),
    }

    while True:
        typer.echo(MENU)
        choice = typer.prompt("Enter choice", type=int)
        if choice == 0:
            typer.echo("Exiting... shutting down.")
            return
        action = actions.get(choice)
        if action is None:
            typer.echo("Invalid choice.")
            continue
        try:
            action()
        except StorageExhaustedError as error:
            LOGGER.critical("Stopping: %s", error)
            typer.echo(f"Critical: {error}. Exiting.", err=True)
            raise typer.Exit(code=1) from error
        except (UnknownPumpError, InsufficientStockError, ValueError) as error:
            typer.echo(str(error))


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI dashboard using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level.upper())

    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting {settings.station_name} on {effective_host}:{effective_port}.\n"
        f"Open your browser at http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "fuelstation.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


if __name__ == "__main__":
    cli()
