"""Mini README: FastAPI front end for the fuel station simulator.

Structure:
    * create_application - application factory wiring routes and templates.

The app owns one ``Station`` for the lifetime of the process (or uses the
one passed in, which is how tests inject a prepared station). Sales,
supplies and pump status changes go through the same objects the console
uses; reports are read from the ledger aggregates via ``ReportBuilder``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from ..catalog import FuelType, PaymentMode, PumpStatus, VehicleType
from ..inventory import InsufficientStockError
from ..ledger import StorageExhaustedError
from ..logging_utils import get_logger
from ..pumps import UnknownPumpError
from ..reporting import ReportBuilder
from ..sales import PumpUnavailableError, SaleProcessor, SaleRequest
from ..station import Station

LOGGER = get_logger(__name__)


def create_application(station: Optional[Station] = None) -> FastAPI:
    """Create the FastAPI application bound to ``station`` (or a fresh one)."""

    app = FastAPI(title="Fuel Station Point of Sale", version="0.1.0")
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

    station = station or Station.create()
    processor = SaleProcessor(station)
    reports = ReportBuilder(station)

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(request: Request) -> HTMLResponse:
        """Render the forecourt dashboard."""

        LOGGER.debug("Rendering dashboard with %s transactions", len(station.ledger))
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "station": station,
                "pumps": reports.pump_performance(),
                "fuels": reports.fuel_summary(),
                "payments": reports.payment_breakdown(),
                "transactions": station.ledger.list_transactions()[:20],
                "low_stock": station.low_stock(),
            },
        )

    @app.get("/pumps")
    async def list_pumps() -> JSONResponse:
        return JSONResponse({"pumps": [pump.as_dict() for pump in station.pumps.list_pumps()]})

    @app.post("/pumps/{pump_id}/status")
    async def change_pump_status(pump_id: int, status: str = Form(...)) -> JSONResponse:
        """Set a pump to active, inactive or maintenance."""

        try:
            new_status = PumpStatus.from_str(status)
            pump = station.pumps.set_status(pump_id, new_status)
        except UnknownPumpError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(pump.as_dict())

    @app.post("/sales")
    async def record_sale(
        pump_id: int = Form(...),
        vehicle_type: str = Form(...),
        payment_mode: str = Form(...),
        quantity: Optional[float] = Form(None),
        amount: Optional[float] = Form(None),
    ) -> JSONResponse:
        """Process a sale and return the stored transaction with its receipt."""

        try:
            request = SaleRequest(
                pump_id=pump_id,
                vehicle_type=VehicleType.from_str(vehicle_type),
                payment_mode=PaymentMode.from_str(payment_mode),
                quantity=quantity,
                amount=amount,
            )
            transaction = processor.process(request)
        except UnknownPumpError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        except (PumpUnavailableError, InsufficientStockError) as error:
            raise HTTPException(status_code=409, detail=str(error)) from error
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        except StorageExhaustedError as error:
            LOGGER.critical("Ledger storage exhausted: %s", error)
            raise HTTPException(status_code=507, detail=str(error)) from error
        return JSONResponse(
            {
                "transaction": transaction.as_dict(),
                "receipt": reports.render_receipt(transaction),
                "low_stock": [stock.fuel_type.value for stock in station.low_stock()],
            },
            status_code=201,
        )

    @app.post("/supply")
    async def add_supply(fuel_type: str = Form(...), quantity: float = Form(...)) -> JSONResponse:
        """Receive a fuel delivery."""

        try:
            fuel = FuelType.from_str(fuel_type)
            new_stock = station.inventory.add_supply(fuel, quantity)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse({"fuel_type": fuel.value, "current_stock": new_stock})

    @app.get("/transactions")
    async def list_transactions() -> JSONResponse:
        """Return every transaction, most recent first."""

        transactions = station.ledger.list_transactions()
        return JSONResponse({"transactions": [transaction.as_dict() for transaction in transactions]})

    @app.get("/reports/daily")
    async def daily_report() -> JSONResponse:
        return JSONResponse(reports.daily_report())

    @app.get("/reports/{dimension}")
    async def dimension_report(dimension: str) -> JSONResponse:
        """Return the fuel, pump, hour or payment summary."""

        try:
            payload = reports.dimension(dimension)
        except ValueError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        return JSONResponse({"dimension": dimension, "summary": payload})

    return app
