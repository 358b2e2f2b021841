"""Mini README: FastAPI-powered cashier service for the stall.

Structure:
    * create_application - application factory wiring routes to a StallManager.
    * Error handlers - map till errors onto HTTP status codes.

The service is the till's back end: the menu screen, the cart and checkout
panel, the transaction history and the reports page all read and write
through these JSON routes. Mutating routes accept form fields, matching
the browser forms that post to them.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Form, Request
from fastapi.responses import JSONResponse

from ..catalog import CatalogItem, Category
from ..errors import NotFoundError, SyncError, ValidationError
from ..logging_utils import get_logger
from ..reports import DateRange
from ..sales import PaymentMethod, suggest_cash_amounts
from ..stall import StallManager, build_manager
from ..utils.calendar import parse_iso_date

LOGGER = get_logger(__name__)


def _date_range(start: Optional[str], end: Optional[str]) -> DateRange:
    start_day: Optional[date] = parse_iso_date(start) if start else None
    end_day: Optional[date] = parse_iso_date(end) if end else None
    return DateRange.from_dates(start_day, end_day)


def _cart_payload(manager: StallManager) -> Dict[str, Any]:
    lines = manager.cart_lines()
    total = sum(line.subtotal for line in lines)
    return {
        "lines": [
            {
                "item_id": line.item_id,
                "name": line.item.name,
                "unit_price": line.item.unit_price,
                "quantity": line.quantity,
                "subtotal": line.subtotal,
            }
            for line in lines
        ],
        "total": total,
        "item_count": sum(line.quantity for line in lines),
        "suggested_cash": suggest_cash_amounts(total) if lines else [],
    }


def create_application(manager: Optional[StallManager] = None) -> FastAPI:
    """Create the FastAPI application with routes bound to ``manager``."""

    app = FastAPI(title="Angkringan POS", version="0.1.0")
    stall = manager or build_manager()

    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, error: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(error)})

    @app.exception_handler(NotFoundError)
    async def _not_found(request: Request, error: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(error)})

    @app.exception_handler(SyncError)
    async def _sync_error(request: Request, error: SyncError) -> JSONResponse:
        LOGGER.warning("Sync failure on %s: %s", request.url.path, error)
        return JSONResponse(status_code=502, content={"detail": str(error)})

    @app.get("/")
    def overview() -> Dict[str, Any]:
        """Quick status for the landing screen."""

        return {
            "menu_items": stall.menu_count(),
            "transactions": stall.transaction_count(),
            "cart": _cart_payload(stall),
            "cloud_sync": stall.remote is not None,
            "dashboard": stall.dashboard().as_dict(),
        }

    @app.get("/menu")
    def list_menu(category: Optional[str] = None, search: Optional[str] = None) -> Dict[str, Any]:
        selected = Category.from_str(category) if category else None
        items = stall.list_menu(selected, search)
        return {
            "items": [item.as_dict() for item in items],
            "categories": [member.value for member in Category],
        }

    @app.post("/menu")
    def save_menu_item(
        name: str = Form(...),
        price: int = Form(...),
        cost: int = Form(0),
        category: str = Form(Category.FOOD.value),
        item_id: Optional[str] = Form(None),
    ) -> Dict[str, Any]:
        """Create a menu item, or edit one when ``item_id`` is supplied."""

        item = CatalogItem(
            item_id=item_id or str(stall.clock.now_ms()),
            name=name.strip(),
            unit_price=price,
            unit_cost=cost,
            category=Category.from_str(category),
        )
        saved = stall.upsert_menu_item(item)
        return {"item": saved.as_dict()}

    @app.delete("/menu/{item_id}")
    def delete_menu_item(item_id: str) -> Dict[str, Any]:
        stall.remove_menu_item(item_id)
        return {"removed": item_id}

    @app.get("/cart")
    def show_cart() -> Dict[str, Any]:
        return _cart_payload(stall)

    @app.post("/cart/items/{item_id}")
    def add_to_cart(item_id: str) -> Dict[str, Any]:
        stall.add_to_cart(item_id)
        return _cart_payload(stall)

    @app.post("/cart/items/{item_id}/decrement")
    def decrement_cart_item(item_id: str) -> Dict[str, Any]:
        stall.decrement_in_cart(item_id)
        return _cart_payload(stall)

    @app.delete("/cart/items/{item_id}")
    def remove_cart_item(item_id: str) -> Dict[str, Any]:
        stall.remove_from_cart(item_id)
        return _cart_payload(stall)

    @app.delete("/cart")
    def clear_cart() -> Dict[str, Any]:
        stall.clear_cart()
        return _cart_payload(stall)

    @app.post("/checkout")
    def checkout(
        payment_method: str = Form(...),
        amount_received: Optional[int] = Form(None),
    ) -> Dict[str, Any]:
        outcome = stall.checkout(PaymentMethod.from_str(payment_method), amount_received)
        receipt = outcome.receipt
        LOGGER.info(
            "Checkout %s committed (change=%s, synced=%s)",
            receipt.transaction.transaction_id,
            receipt.change,
            outcome.synced,
        )
        if not outcome.saved:
            LOGGER.warning("Transaction %s is not yet saved locally", receipt.transaction.transaction_id)
        return {
            "transaction": receipt.transaction.as_dict(),
            "amount_received": receipt.amount_received,
            "change": receipt.change,
            "synced": outcome.synced,
            "saved": outcome.saved,
        }

    @app.post("/transactions/save")
    def save_transactions() -> Dict[str, Any]:
        """Retry writing the ledger after a failed save."""

        stall.save_ledger()
        return {"saved": True, "transactions": stall.transaction_count()}

    @app.get("/transactions")
    def list_transactions(
        search: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> Dict[str, Any]:
        history = stall.transactions(term=search, date_range=_date_range(start, end))
        payload: List[Dict[str, Any]] = []
        for transaction in history:
            entry = transaction.as_dict()
            entry["cost"] = transaction.cost
            entry["profit"] = transaction.profit
            payload.append(entry)
        return {"transactions": payload}

    @app.get("/transactions/{transaction_id}")
    def show_transaction(transaction_id: str) -> Dict[str, Any]:
        transaction = stall.get_transaction(transaction_id)
        entry = transaction.as_dict()
        entry["cost"] = transaction.cost
        entry["profit"] = transaction.profit
        return entry

    @app.get("/reports")
    def sales_report(start: Optional[str] = None, end: Optional[str] = None) -> Dict[str, Any]:
        return stall.report(_date_range(start, end)).as_dict()

    @app.get("/reports/daily")
    def daily_revenue(days: Optional[int] = None) -> Dict[str, Any]:
        if days is not None and days < 1:
            raise ValidationError("days must be at least 1")
        return {"days": [day.as_dict() for day in stall.daily_revenue(days)]}

    @app.get("/dashboard")
    def dashboard() -> Dict[str, Any]:
        return stall.dashboard().as_dict()

    @app.post("/expenses")
    def set_expenses(amount: int = Form(...)) -> Dict[str, Any]:
        return {"operational_expenses": stall.set_operational_expenses(amount)}

    @app.post("/sync/pull")
    def pull_from_cloud() -> Dict[str, Any]:
        snapshot = stall.pull_from_remote()
        return {
            "menu_items": len(snapshot.catalog) if snapshot.catalog is not None else None,
            "transactions": len(snapshot.transactions) if snapshot.transactions is not None else None,
        }

    return app
