"""Mini README: Tests for the FastAPI dashboard routes.

Each test builds a fresh application against a temporary data directory so
receipts and in-memory stores never leak between tests.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from fintrack.configuration import FinanceTrackerSettings
from fintrack.interface import create_application
from fintrack.interface.web_app import format_currency


def make_client(tmp_path: Path, **overrides: object) -> TestClient:
    settings = FinanceTrackerSettings(
        data_directory=tmp_path,
        environment="test",
        public_base_url="http://testserver",
        **overrides,
    )
    return TestClient(create_application(settings))


@pytest.fixture()
def client(tmp_path: Path) -> TestClient:
    return make_client(tmp_path)


def test_dashboard_renders_calculator(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert "Calculator" in response.text
    assert "fintrack_session" in response.cookies


def test_calculator_press_sequence(client: TestClient) -> None:
    for key in ["2", "+", "3", "*"]:
        state = client.post("/calculator/abc/press", data={"key": key}).json()
    assert state["display"] == "5"
    assert state["expression"] == "5 *"

    client.post("/calculator/abc/press", data={"key": "4"})
    state = client.post("/calculator/abc/press", data={"key": "="}).json()
    assert state["display"] == "20"
    assert state["accumulator"] is None

    view = client.get("/calculator/abc").json()
    assert view["display"] == "20"
    assert "10%" in view["keys"]


def test_calculator_division_by_zero_and_formatting(client: TestClient) -> None:
    for key in ["8", "/", "0"]:
        client.post("/calculator/zero/press", data={"key": key})
    state = client.post("/calculator/zero/press", data={"key": "="}).json()
    assert state["display"] == "Infinity"
    assert state["formatted_display"] == "Infinity"

    for key in ["C", "1", "2", "3", "4", "5"]:
        state = client.post("/calculator/big/press", data={"key": key}).json()
    assert state["formatted_display"] == "12,345"


def test_calculator_unknown_key_and_reset(client: TestClient) -> None:
    assert client.post("/calculator/abc/press", data={"key": "sqrt"}).status_code == 400
    client.post("/calculator/abc/press", data={"key": "7"})
    client.post("/calculator/abc/reset")
    assert client.get("/calculator/abc").json()["display"] == "0"


def test_calculator_sessions_stay_bounded(tmp_path: Path) -> None:
    client = make_client(tmp_path, calculator_session_limit=3)
    calculators = client.app.state.calculators

    assert client.get("/calculator/unseen").json()["display"] == "0"
    client.get("/")
    assert len(calculators) == 0

    for index in range(10):
        client.post(f"/calculator/visitor-{index}/press", data={"key": "1"})
    assert len(calculators) == 3
    assert client.get("/calculator/visitor-9").json()["display"] == "1"
    assert client.get("/calculator/visitor-0").json()["display"] == "0"
    assert len(calculators) == 3


def test_record_and_list_transactions(client: TestClient) -> None:
    created = client.post(
        "/transactions",
        data={
            "type": "expense",
            "amount": "2500",
            "description": "Banner printing",
            "category": "Marketing",
            "vendor": "PrintHub",
            "date": "2024-06-10",
        },
    )
    assert created.status_code == 201
    assert created.json()["vendor"] == "PrintHub"

    listing = client.get("/transactions", params={"type": "expense"}).json()
    assert [t["description"] for t in listing["transactions"]] == ["Banner printing"]
    assert listing["summary"]["total_expenses"] == pytest.approx(2500.0)

    bad = client.post(
        "/transactions",
        data={"type": "income", "amount": "10", "description": "x", "category": "Marketing"},
    )
    assert bad.status_code == 400
    assert client.get("/transactions", params={"date_from": "June"}).status_code == 400


def test_categories_route(client: TestClient) -> None:
    categories = client.get("/transactions/categories").json()
    assert "Grants" in categories["income"]
    assert "Travel" in categories["expense"]


def test_budget_crud(client: TestClient) -> None:
    created = client.post(
        "/budgets",
        data={
            "event_name": "Tech Talk",
            "category": "Catering",
            "description": "Tea and snacks",
            "estimated_amount": "8000",
        },
    ).json()
    budget_id = created["budget_id"]
    assert created["status"] == "planned"

    updated = client.post(f"/budgets/{budget_id}", data={"status": "spent", "actual_amount": "7600"})
    assert updated.status_code == 200
    assert updated.json()["actual_amount"] == pytest.approx(7600.0)

    listing = client.get("/budgets").json()
    assert listing["totals"]["remaining"] == pytest.approx(400.0)

    assert client.delete(f"/budgets/{budget_id}").status_code == 200
    assert client.delete(f"/budgets/{budget_id}").status_code == 404
    assert client.post("/budgets/budget_9999", data={"status": "approved"}).status_code == 404


def test_export_requires_data(client: TestClient) -> None:
    assert client.get("/export/transactions").status_code == 404
    client.post(
        "/transactions",
        data={
            "type": "income",
            "amount": "900",
            "description": "Workshop tickets",
            "category": "Event Earnings",
            "date": "2024-07-01",
        },
    )
    report = client.get("/export/transactions", params={"date_from": "2024-07-01"}).json()
    assert report["rows"][0]["amount"] == pytest.approx(900.0)


def test_receipt_upload_download_delete(client: TestClient) -> None:
    uploaded = client.post(
        "/receipts",
        files=[("files", ("receipt.pdf", b"%PDF-1.4 test", "application/pdf"))],
    )
    assert uploaded.status_code == 201
    name = uploaded.json()["uploaded"][0]["name"]

    files = client.get("/receipts").json()["files"]
    assert [entry["name"] for entry in files] == [name]

    download = client.get(f"/receipts/{name}")
    assert download.status_code == 200
    assert download.content == b"%PDF-1.4 test"

    assert client.get(f"/receipts/{name}/url").json()["url"] == f"http://testserver/receipts/{name}"
    assert client.delete(f"/receipts/{name}").status_code == 200
    assert client.get(f"/receipts/{name}").status_code == 404

    rejected = client.post("/receipts", files=[("files", ("notes.txt", b"hi", "text/plain"))])
    assert rejected.status_code == 400


def test_members_cannot_use_treasurer_routes(tmp_path: Path) -> None:
    client = make_client(tmp_path, operator_role="member")
    assert client.get("/transactions").status_code == 200
    assert client.get("/budgets").status_code == 403
    assert client.get("/export/transactions").status_code == 403
    assert client.get("/receipts").status_code == 403
    denied = client.post(
        "/transactions",
        data={"type": "income", "amount": "1", "description": "x", "category": "Grants"},
    )
    assert denied.status_code == 403


def test_sign_out_blocks_further_requests(client: TestClient) -> None:
    assert client.get("/me").json()["role"] == "treasurer"
    client.post("/sign-out")
    assert client.get("/me").status_code == 401
    assert client.get("/").status_code == 401


def test_format_currency() -> None:
    assert format_currency(1234.5) == "LKR 1,234.50"
    assert format_currency(-20, "USD") == "-USD 20.00"
