"""Mini README: Stall manager owning the till's state and collaborators.

Structure:
    * CheckoutOutcome - committed receipt plus whether the cloud copy was updated.
    * SalesReport - every figure shown on the reports page for a date range.
    * StallManager - menu, cart, checkout, ledger, storage and sync in one place.
    * build_manager - wire a manager from ``AngkringanSettings``.

The manager is created explicitly and handed to whoever needs it; there is
no module level state. Every mutation runs under one re-entrant lock so the
web server's worker threads see a single writer. Local files are the
durable copy: a failed save is raised as ``SyncError`` after memory has
been updated, and a failed cloud push is only logged.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from ..catalog import Catalog, CatalogItem, Category, default_menu
from ..configuration import AngkringanSettings, get_settings
from ..errors import SyncError
from ..logging_utils import get_logger
from ..money import require_amount
from ..reports import (
    CategoryItems,
    CategoryRevenue,
    DailyRevenue,
    DashboardSummary,
    DateRange,
    ProfitAndLoss,
    Totals,
    by_category,
    by_day,
    by_item,
    dashboard_summary,
    filter_by_range,
    profit_and_loss,
    search,
    totals,
)
from ..sales import (
    Cart,
    CartLine,
    CheckoutProcessor,
    CheckoutReceipt,
    CheckoutRequest,
    Ledger,
    PaymentMethod,
    Transaction,
)
from ..storage import JsonFileStorage, Storage
from ..sync import RemoteSync, RemoteSyncClient, SyncSnapshot
from ..utils.clock import Clock, SystemClock

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CheckoutOutcome:
    """Committed receipt; ``saved``/``synced`` report the local and cloud copies."""

    receipt: CheckoutReceipt
    synced: bool
    saved: bool = True


@dataclass(frozen=True, slots=True)
class SalesReport:
    """Figures for the reports page."""

    date_range: DateRange
    totals: Totals
    profit_and_loss: ProfitAndLoss
    categories: Sequence[CategoryRevenue]
    items: Sequence[CategoryItems]
    daily: Sequence[DailyRevenue]

    def as_dict(self) -> dict:
        return {
            "start": self.date_range.start,
            "end": self.date_range.end,
            "totals": self.totals.as_dict(),
            "profit_and_loss": self.profit_and_loss.as_dict(),
            "categories": [group.as_dict() for group in self.categories],
            "items": [group.as_dict() for group in self.items],
            "daily": [day.as_dict() for day in self.daily],
        }


class StallManager:
    """Own the menu, current cart and transaction ledger of one stall."""

    def __init__(
        self,
        storage: Storage,
        *,
        remote: Optional[RemoteSync] = None,
        clock: Optional[Clock] = None,
        report_window_days: int = 7,
    ) -> None:
        self.storage = storage
        self.remote = remote
        self.clock = clock or SystemClock()
        self.report_window_days = report_window_days
        self._lock = threading.RLock()

        catalog = storage.load_catalog()
        if catalog is None:
            catalog = default_menu()
            LOGGER.info("No saved menu found, seeding %s starter items", len(catalog))
            storage.save_catalog(catalog)
        self.catalog = catalog
        self.ledger = Ledger(storage.load_transactions() or ())
        self.operational_expenses = storage.load_operational_expenses()
        self.cart = Cart(self.catalog)
        self.checkout_processor = CheckoutProcessor(self.cart, self.ledger, clock=self.clock)
        LOGGER.debug(
            "StallManager ready with %s menu items and %s transactions",
            len(self.catalog),
            len(self.ledger),
        )

    # Menu -----------------------------------------------------------------

    def list_menu(
        self, category: Optional[Category] = None, name_contains: Optional[str] = None
    ) -> List[CatalogItem]:
        with self._lock:
            return list(self.catalog.list(category, name_contains))

    def upsert_menu_item(self, item: CatalogItem) -> CatalogItem:
        """Add or edit a menu entry, then persist and back it up."""

        with self._lock:
            self.catalog.upsert(item)
            LOGGER.info("Saved menu item %s (%s)", item.item_id, item.name)
            self.storage.save_catalog(self.catalog)
            self._push("menu update", self.remote.push_catalog if self.remote else None, self.catalog)
            return item

    def remove_menu_item(self, item_id: str) -> None:
        with self._lock:
            if item_id not in self.catalog:
                return
            self.catalog.remove(item_id)
            LOGGER.info("Removed menu item %s", item_id)
            self.storage.save_catalog(self.catalog)
            self._push("menu update", self.remote.push_catalog if self.remote else None, self.catalog)

    # Cart -----------------------------------------------------------------

    def add_to_cart(self, item_id: str) -> CartLine:
        with self._lock:
            return self.cart.add_item(self.catalog.get(item_id))

    def decrement_in_cart(self, item_id: str) -> None:
        with self._lock:
            self.cart.decrement_item(item_id)

    def remove_from_cart(self, item_id: str) -> None:
        with self._lock:
            self.cart.remove_item(item_id)

    def clear_cart(self) -> None:
        with self._lock:
            self.cart.clear()

    def cart_lines(self) -> List[CartLine]:
        with self._lock:
            return self.cart.lines()

    def cart_total(self) -> int:
        with self._lock:
            return self.cart.total()

    # Checkout -------------------------------------------------------------

    def checkout(
        self, payment_method: PaymentMethod, amount_received: Optional[int] = None
    ) -> CheckoutOutcome:
        """Commit the cart, persist the ledger and back up the new transaction."""

        with self._lock:
            receipt = self.checkout_processor.submit(
                CheckoutRequest(payment_method=payment_method, amount_received=amount_received)
            )
            # The sale is committed in memory; a failed save is reported, not raised,
            # so the cashier still gets the receipt and change.
            saved = self._save_ledger()
            synced = self._push(
                "transaction",
                self.remote.push_transaction if self.remote else None,
                receipt.transaction,
            )
            return CheckoutOutcome(receipt=receipt, synced=synced, saved=saved)

    def save_ledger(self) -> None:
        """Write the in-memory ledger to storage, raising ``SyncError`` on failure."""

        with self._lock:
            self.storage.save_transactions(self.ledger.transactions())

    def _save_ledger(self) -> bool:
        try:
            self.save_ledger()
        except SyncError as error:
            LOGGER.warning("Saving transactions failed, kept in memory for retry: %s", error)
            return False
        return True

    def menu_count(self) -> int:
        with self._lock:
            return len(self.catalog)

    def transaction_count(self) -> int:
        with self._lock:
            return len(self.ledger)

    # Reporting ------------------------------------------------------------

    def transactions(
        self, *, term: Optional[str] = None, date_range: Optional[DateRange] = None
    ) -> List[Transaction]:
        """History filtered by free text and date range, newest first."""

        with self._lock:
            history = self.ledger.transactions()
        if date_range is not None:
            history = filter_by_range(history, date_range)
        return search(history, term)

    def get_transaction(self, transaction_id: str) -> Transaction:
        with self._lock:
            return self.ledger.get(transaction_id)

    def report(self, date_range: Optional[DateRange] = None) -> SalesReport:
        date_range = date_range or DateRange()
        with self._lock:
            selected = filter_by_range(self.ledger.transactions(), date_range)
            expenses = self.operational_expenses
        return SalesReport(
            date_range=date_range,
            totals=totals(selected),
            profit_and_loss=profit_and_loss(selected, expenses),
            categories=by_category(selected),
            items=by_item(selected),
            daily=by_day(selected, self.report_window_days, self.clock.today()),
        )

    def dashboard(self) -> DashboardSummary:
        with self._lock:
            history = self.ledger.transactions()
        return dashboard_summary(history, self.clock.today())

    def daily_revenue(self, window_days: Optional[int] = None) -> List[DailyRevenue]:
        with self._lock:
            history = self.ledger.transactions()
        return by_day(history, window_days or self.report_window_days, self.clock.today())

    def set_operational_expenses(self, amount: int) -> int:
        with self._lock:
            self.operational_expenses = require_amount(amount, "operational_expenses")
            self.storage.save_operational_expenses(self.operational_expenses)
            return self.operational_expenses

    # Sync -----------------------------------------------------------------

    def pull_from_remote(self) -> SyncSnapshot:
        """Replace local data with the cloud copy (whole-ledger last writer wins)."""

        if self.remote is None:
            raise SyncError("Cloud sync is not configured")
        snapshot = self.remote.pull()
        with self._lock:
            if snapshot.catalog is not None:
                self.catalog.replace_all(snapshot.catalog)
                self.storage.save_catalog(self.catalog)
            if snapshot.transactions is not None:
                self.ledger.replace_all(snapshot.transactions)
                self.storage.save_transactions(self.ledger.transactions())
        LOGGER.info(
            "Pulled %s menu items and %s transactions from the cloud",
            len(snapshot.catalog) if snapshot.catalog is not None else 0,
            len(snapshot.transactions) if snapshot.transactions is not None else 0,
        )
        return snapshot

    def _push(self, label: str, push: Optional[Callable[[object], None]], payload: object) -> bool:
        """Best-effort cloud push; failures are logged, never raised."""

        if push is None:
            return False
        try:
            push(payload)
        except SyncError as error:
            LOGGER.warning("Cloud %s failed, local data is kept: %s", label, error)
            return False
        return True


def build_manager(settings: Optional[AngkringanSettings] = None, *, clock: Optional[Clock] = None) -> StallManager:
    """Create a manager backed by JSON files and, if configured, cloud sync."""

    settings = settings or get_settings()
    clock = clock or SystemClock()
    remote = (
        RemoteSyncClient(settings.sync_url, timeout_seconds=settings.sync_timeout_seconds, clock=clock)
        if settings.sync_url
        else None
    )
    return StallManager(
        JsonFileStorage(data_directory=settings.data_directory),
        remote=remote,
        clock=clock,
        report_window_days=settings.report_window_days,
    )
