"""Mini README: FastAPI-powered finance tracker dashboard.

Structure:
    * create_application - application factory wiring stores, routes and templates.
    * format_currency - Jinja filter rendering amounts with the currency label.

The dashboard shows totals, recent transactions, the budget summary and the
calculator. JSON routes back each tab: calculator key presses, transaction
entry and listing, budget editing, report export and receipt handling.
Treasurer-only routes answer 403 for members and every route answers 401
once the operator has signed out.
"""

from __future__ import annotations

import datetime
import mimetypes
import secrets
from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Optional

from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from ..calculator import KEYPAD, QUICK_ACTIONS, CalculatorSessions, press
from ..calculator.keypad import labels
from ..configuration import FinanceTrackerSettings, get_settings
from ..export import build_transaction_report
from ..finance import (
    BUDGET_CATEGORIES,
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    BudgetManager,
    TransactionFilter,
    TransactionLedger,
    TransactionType,
)
from ..finance.ledger import parse_date
from ..identity import IdentityProvider, UserProfile
from ..logging_utils import get_logger
from ..storage import ReceiptStore

LOGGER = get_logger(__name__)

SESSION_COOKIE = "fintrack_session"


def format_currency(amount: object, label: str = "LKR") -> str:
    """Render ``amount`` as ``LKR 1,234.50``."""

    value = Decimal(str(amount)).quantize(Decimal("0.01"))
    sign = "-" if value < 0 else ""
    return f"{sign}{label} {abs(value):,.2f}"


def _money(values: Dict[str, object]) -> Dict[str, object]:
    return {
        key: float(value) if isinstance(value, Decimal) else value
        for key, value in values.items()
    }


def _optional_date(value: Optional[str]) -> Optional[datetime.date]:
    if value is None or not value.strip():
        return None
    return parse_date(value)


def create_application(settings: Optional[FinanceTrackerSettings] = None) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    app = FastAPI(title=settings.organisation_name, version="0.1.0")
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
    templates.env.filters["currency"] = lambda amount: format_currency(amount, settings.currency_label)
    static_directory = Path(__file__).parent / "static"
    app.mount("/static", StaticFiles(directory=str(static_directory)), name="static")

    demo_data = settings.seeds_demo_data
    ledger = TransactionLedger(seed_demo=demo_data)
    budgets = BudgetManager(seed_demo=demo_data)
    receipts = ReceiptStore(
        storage_directory=settings.receipts_directory,
        max_bytes=settings.receipt_max_bytes,
        public_base_url=settings.public_base_url,
    )
    identity = IdentityProvider.from_settings(settings)
    calculators = CalculatorSessions(settings.calculator_session_limit)
    app.state.calculators = calculators

    def require_user() -> UserProfile:
        user = identity.current_user()
        if user is None:
            raise HTTPException(status_code=401, detail="Sign in to continue.")
        return user

    def require_treasurer() -> UserProfile:
        user = require_user()
        if not user.is_treasurer:
            raise HTTPException(status_code=403, detail="Only the treasurer can do this.")
        return user

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(request: Request) -> HTMLResponse:
        """Render the dashboard with totals, recent activity and the calculator."""

        user = require_user()
        session_id = request.cookies.get(SESSION_COOKIE) or secrets.token_hex(8)
        summary = ledger.summarise()
        LOGGER.debug(
            "Dashboard summary -> transactions: %s balance: %s",
            summary["transaction_count"],
            summary["balance"],
        )
        response = templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "organisation_name": settings.organisation_name,
                "user": user,
                "summary": summary,
                "recent_transactions": ledger.list()[:10],
                "budget_totals": budgets.totals(),
                "calculator": calculators.state_of(session_id),
                "keypad": KEYPAD,
                "quick_actions": QUICK_ACTIONS,
                "session_id": session_id,
            },
        )
        response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
        return response

    @app.get("/me")
    async def me() -> JSONResponse:
        return JSONResponse(require_user().as_dict())

    @app.post("/sign-out")
    async def sign_out() -> JSONResponse:
        identity.sign_out()
        return JSONResponse({"signed_out": True})

    @app.get("/calculator/{session_id}")
    async def calculator_view(session_id: str) -> JSONResponse:
        """Return the calculator display for a session."""

        require_user()
        try:
            state = calculators.state_of(session_id)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse({**state.as_dict(), "keys": labels()})

    @app.post("/calculator/{session_id}/press")
    async def calculator_press(session_id: str, key: str = Form(...)) -> JSONResponse:
        """Press a keypad button and return the new display."""

        require_user()
        try:
            state = press(calculators.get(session_id), key)
        except (KeyError, ValueError) as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(state.as_dict())

    @app.post("/calculator/{session_id}/reset")
    async def calculator_reset(session_id: str) -> JSONResponse:
        require_user()
        calculators.reset(session_id)
        return JSONResponse({"session_id": session_id, "reset": True})

    @app.get("/transactions")
    async def list_transactions(
        type: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
    ) -> JSONResponse:
        """List transactions, optionally filtered by type and date range."""

        require_user()
        try:
            criteria = TransactionFilter(
                transaction_type=TransactionType.from_str(type) if type else None,
                date_from=_optional_date(date_from),
                date_to=_optional_date(date_to),
            )
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        transactions = [transaction.as_dict() for transaction in ledger.list(criteria)]
        LOGGER.debug("Returning %s transactions", len(transactions))
        return JSONResponse(
            {"transactions": transactions, "summary": _money(ledger.summarise(criteria))}
        )

    @app.get("/transactions/categories")
    async def transaction_categories() -> JSONResponse:
        return JSONResponse(
            {"income": list(INCOME_CATEGORIES), "expense": list(EXPENSE_CATEGORIES)}
        )

    @app.post("/transactions")
    async def add_transaction(
        type: str = Form(...),
        amount: str = Form(...),
        description: str = Form(...),
        category: str = Form(...),
        vendor: Optional[str] = Form(None),
        date: Optional[str] = Form(None),
    ) -> JSONResponse:
        """Record an income or expense entered on the add forms."""

        user = require_treasurer()
        record = {
            "type": type,
            "amount": amount,
            "description": description,
            "category": category,
            "vendor": vendor,
            "date": date,
        }
        try:
            transaction = ledger.insert(record, recorded_by=user.id)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(transaction.as_dict(), status_code=201)

    @app.get("/budgets")
    async def list_budgets() -> JSONResponse:
        require_treasurer()
        return JSONResponse(
            {
                "budgets": [item.as_dict() for item in budgets.list()],
                "totals": _money(budgets.totals()),
                "categories": list(BUDGET_CATEGORIES),
            }
        )

    @app.post("/budgets")
    async def add_budget(
        event_name: str = Form(...),
        category: str = Form(...),
        description: str = Form(...),
        estimated_amount: str = Form(...),
        status: str = Form("planned"),
        actual_amount: Optional[str] = Form(None),
    ) -> JSONResponse:
        require_treasurer()
        fields = {
            "event_name": event_name,
            "category": category,
            "description": description,
            "estimated_amount": estimated_amount,
            "status": status,
            "actual_amount": actual_amount,
        }
        try:
            item = budgets.insert(fields)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(item.as_dict(), status_code=201)

    @app.post("/budgets/{budget_id}")
    async def update_budget(
        budget_id: str,
        event_name: Optional[str] = Form(None),
        category: Optional[str] = Form(None),
        description: Optional[str] = Form(None),
        estimated_amount: Optional[str] = Form(None),
        status: Optional[str] = Form(None),
        actual_amount: Optional[str] = Form(None),
    ) -> JSONResponse:
        """Apply the edit form to an existing budget item."""

        require_treasurer()
        submitted = {
            "event_name": event_name,
            "category": category,
            "description": description,
            "estimated_amount": estimated_amount,
            "status": status,
            "actual_amount": actual_amount,
        }
        changes = {key: value for key, value in submitted.items() if value is not None}
        try:
            item = budgets.update(budget_id, changes)
        except KeyError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(item.as_dict())

    @app.delete("/budgets/{budget_id}")
    async def delete_budget(budget_id: str) -> JSONResponse:
        require_treasurer()
        try:
            item = budgets.delete(budget_id)
        except KeyError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        return JSONResponse({"deleted": item.budget_id})

    @app.get("/export/transactions")
    async def export_transactions(
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
    ) -> JSONResponse:
        """Export the ledger for the requested period."""

        require_treasurer()
        try:
            report = build_transaction_report(
                ledger,
                date_from=_optional_date(date_from),
                date_to=_optional_date(date_to),
            )
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        if not report["rows"]:
            raise HTTPException(status_code=404, detail="No data to export")
        return JSONResponse(report)

    @app.post("/receipts")
    async def upload_receipts(files: List[UploadFile] = File(...)) -> JSONResponse:
        """Store one or more uploaded receipts."""

        require_treasurer()
        uploaded = []
        for upload in files:
            data = await upload.read()
            try:
                stored_name = receipts.upload(upload.filename or "", data)
            except ValueError as error:
                raise HTTPException(status_code=400, detail=str(error)) from error
            uploaded.append({"original_name": upload.filename, "name": stored_name})
        return JSONResponse({"uploaded": uploaded}, status_code=201)

    @app.get("/receipts")
    async def list_receipts() -> JSONResponse:
        require_treasurer()
        return JSONResponse({"files": [stored.as_dict() for stored in receipts.list()]})

    @app.get("/receipts/{name}/url")
    async def receipt_url(name: str) -> JSONResponse:
        require_treasurer()
        try:
            url = receipts.get_public_url(name)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse({"name": name, "url": url})

    @app.get("/receipts/{name}")
    async def download_receipt(name: str) -> Response:
        require_treasurer()
        try:
            data = receipts.download(name)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        except FileNotFoundError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        media_type = mimetypes.guess_type(name)[0] or "application/octet-stream"
        return Response(
            content=data,
            media_type=media_type,
            headers={"Content-Disposition": f'attachment; filename="{name}"'},
        )

    @app.delete("/receipts/{name}")
    async def delete_receipt(name: str) -> JSONResponse:
        require_treasurer()
        try:
            receipts.delete(name)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        except FileNotFoundError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        return JSONResponse({"deleted": name})

    return app
