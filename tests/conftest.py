"""Mini README: Shared fixtures for the Angkringan test-suite.

Structure:
    * MemoryStorage - in-memory Storage double that can be told to fail.
    * clock - FixedClock pinned to 2024-06-15 12:00 local time.
    * catalog / tea - small menus used across tests.
    * make_transaction - helper building committed transactions directly.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional, Sequence

import pytest

from angkringan.catalog import Catalog, CatalogItem, Category
from angkringan.errors import SyncError
from angkringan.sales import PaymentMethod, Transaction, TransactionLine
from angkringan.utils.clock import FixedClock


class MemoryStorage:
    """Storage double keeping exported dictionaries, like the JSON store."""

    def __init__(self) -> None:
        self.menu: Optional[list] = None
        self.transactions: Optional[list] = None
        self.expenses = 0
        self.fail_saves = False
        self.save_calls = 0

    def _check(self) -> None:
        self.save_calls += 1
        if self.fail_saves:
            raise SyncError("disk full")

    def load_catalog(self) -> Optional[Catalog]:
        if self.menu is None:
            return None
        return Catalog(CatalogItem.from_dict(entry) for entry in self.menu)

    def save_catalog(self, catalog: Catalog) -> None:
        self._check()
        self.menu = catalog.as_list()

    def load_transactions(self) -> Optional[List[Transaction]]:
        if self.transactions is None:
            return None
        return [Transaction.from_dict(entry) for entry in self.transactions]

    def save_transactions(self, transactions: Sequence[Transaction]) -> None:
        self._check()
        self.transactions = [transaction.as_dict() for transaction in transactions]

    def load_operational_expenses(self) -> int:
        return self.expenses

    def save_operational_expenses(self, amount: int) -> None:
        self._check()
        self.expenses = amount



def local_ms(year: int, month: int, day: int, hour: int = 12, minute: int = 0) -> int:
    """Epoch milliseconds for a local wall-clock time."""

    return round(datetime(year, month, day, hour, minute).timestamp() * 1000)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(local_ms(2024, 6, 15))


@pytest.fixture
def today() -> date:
    return date(2024, 6, 15)


@pytest.fixture
def tea() -> CatalogItem:
    return CatalogItem("1", "Tea", 3000, 1200, Category.BEVERAGE)


@pytest.fixture
def catalog(tea: CatalogItem) -> Catalog:
    return Catalog(
        [
            tea,
            CatalogItem("2", "Sate Usus", 2000, 1000, Category.SKEWER),
            CatalogItem("3", "Tempe Mendoan", 1000, 600, Category.FRIED_SNACK),
        ]
    )


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


def make_line(
    item_id: str,
    unit_price: int,
    unit_cost: int,
    quantity: int = 1,
    *,
    name: Optional[str] = None,
    category: Category = Category.FOOD,
) -> TransactionLine:
    return TransactionLine(
        item_id=item_id,
        name=name or f"Item {item_id}",
        unit_price=unit_price,
        unit_cost=unit_cost,
        quantity=quantity,
        category=category,
    )


def make_transaction(
    transaction_id: str,
    timestamp: int,
    lines: Sequence[TransactionLine],
    payment_method: PaymentMethod = PaymentMethod.CASH,
) -> Transaction:
    return Transaction.build(
        transaction_id=transaction_id,
        timestamp=timestamp,
        lines=lines,
        payment_method=payment_method,
    )
