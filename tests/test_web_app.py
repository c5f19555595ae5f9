"""Mini README: Tests for the FastAPI interface.

The app is built around an injected station so each test starts from the
opening stock with an empty ledger.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from fuelstation import Station
from fuelstation.catalog import FuelType
from fuelstation.configuration import FuelStationSettings
from fuelstation.interface import create_application


@pytest.fixture()
def client() -> TestClient:
    return TestClient(create_application(Station.create(FuelStationSettings())))


def test_sale_returns_transaction_and_receipt(client: TestClient) -> None:
    """Posting a sale returns the stored transaction and its receipt."""

    response = client.post(
        "/sales",
        data={"pump_id": 3, "vehicle_type": "4w", "payment_mode": "cash", "quantity": 25.0},
    )

    assert response.status_code == 201
    payload = response.json()
    assert payload["transaction"]["amount"] == pytest.approx(2218.75)
    assert payload["transaction"]["transaction_id"] in payload["receipt"]
    listing = client.get("/transactions").json()["transactions"]
    assert [entry["transaction_id"] for entry in listing] == [payload["transaction"]["transaction_id"]]


def test_sale_errors_map_to_http_statuses(client: TestClient) -> None:
    """Sale rejections map to 404, 400 and 409 responses."""

    base = {"vehicle_type": "2w", "payment_mode": "cash"}

    assert client.post("/sales", data={**base, "pump_id": 42, "quantity": 1}).status_code == 404
    assert client.post("/sales", data={**base, "pump_id": 1}).status_code == 400
    assert client.post("/sales", data={**base, "pump_id": 5, "quantity": 999999}).status_code == 409

    client.post("/pumps/2/status", data={"status": "inactive"})
    assert client.post("/sales", data={**base, "pump_id": 2, "quantity": 1}).status_code == 409


def test_supply_and_dimension_reports(client: TestClient) -> None:
    """Supplies and dimension reports are served as JSON."""

    supply = client.post("/supply", data={"fuel_type": "cng", "quantity": 250})
    client.post("/sales", data={"pump_id": 1, "vehicle_type": "2w", "payment_mode": "wallet", "amount": 205})

    assert supply.json()["current_stock"] == pytest.approx(20250.0)
    payments = client.get("/reports/payment").json()["summary"]
    assert payments["wallet"] == pytest.approx(205.0)
    assert client.get("/reports/vehicle").status_code == 404
    assert client.get("/reports/daily").json()["transaction_count"] == 1


def test_dashboard_renders(client: TestClient) -> None:
    """The dashboard page renders with the station name."""

    response = client.get("/")

    assert response.status_code == 200
    assert "ABC Fuel Station" in response.text


@pytest.mark.parametrize("field", ["quantity", "amount"])
@pytest.mark.parametrize("value", ["nan", "inf"])
def test_non_finite_sale_figures_are_bad_requests(client: TestClient, field: str, value: str) -> None:
    """NaN or infinite sale figures are refused and nothing is recorded."""

    response = client.post(
        "/sales",
        data={"pump_id": 1, "vehicle_type": "2w", "payment_mode": "cash", field: value},
    )

    assert response.status_code == 400
    assert client.get("/transactions").json()["transactions"] == []


@pytest.mark.parametrize("value", ["nan", "inf"])
def test_non_finite_supply_is_a_bad_request(client: TestClient, value: str) -> None:
    """A supply of NaN or infinite quantity leaves the stock unchanged."""

    response = client.post("/supply", data={"fuel_type": "petrol", "quantity": value})

    assert response.status_code == 400
    fuels = client.get("/reports/fuel").json()["summary"]
    assert fuels[0]["current_stock"] == pytest.approx(50000.0)


def test_storage_exhaustion_is_insufficient_storage() -> None:
    """When the ledger cannot grow the sale answers 507 and stock is kept."""

    def allocator(size):
        if size > 1:
            raise MemoryError("simulated exhaustion")
        return [None] * size

    station = Station.create(FuelStationSettings(ledger_initial_capacity=1), allocator=allocator)
    client = TestClient(create_application(station))
    sale = {"pump_id": 3, "vehicle_type": "4w", "payment_mode": "card", "quantity": 10}

    assert client.post("/sales", data=sale).status_code == 201
    response = client.post("/sales", data=sale)

    assert response.status_code == 507
    assert station.inventory.current_stock(FuelType.DIESEL) == pytest.approx(49990.0)
    assert len(station.ledger) == 1
