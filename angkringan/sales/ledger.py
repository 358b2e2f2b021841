"""Mini README: Immutable transactions and the append-only ledger.

Structure:
    * PaymentMethod - enum of accepted tenders.
    * TransactionLine - denormalised snapshot of one sold menu item.
    * Transaction - frozen record of a completed order.
    * Ledger - most-recent-first collection of transactions.
    * generate_transaction_id - unique id factory used at checkout.

A transaction copies every name, price and cost it needs at checkout time,
so later menu edits never rewrite history. The ledger only ever grows at the
front; reports read it and never mutate it.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from ..catalog import CatalogItem, Category
from ..errors import NotFoundError, ValidationError
from ..logging_utils import get_logger
from ..money import line_amount, require_amount, require_quantity, sum_amounts

LOGGER = get_logger(__name__)


class PaymentMethod(str, Enum):
    """Tenders the stall accepts."""

    CASH = "Cash"
    QRIS = "QRIS"
    TRANSFER = "Transfer"

    @classmethod
    def from_str(cls, value: object) -> "PaymentMethod":
        """Coerce arbitrary casing into a valid payment method."""

        if isinstance(value, cls):
            return value
        normalised = str(value).strip().lower()
        for member in cls:
            if normalised in {member.value.lower(), member.name.lower()}:
                return member
        raise ValidationError(f"Unsupported payment method: {value!r}")


@dataclass(frozen=True, slots=True)
class TransactionLine:
    """One menu item as it was sold."""

    item_id: str
    name: str
    unit_price: int
    unit_cost: int
    quantity: int
    category: Category

    @classmethod
    def snapshot(cls, item: CatalogItem, quantity: int) -> "TransactionLine":
        """Copy the menu fields of ``item`` so the line no longer depends on it."""

        return cls(
            item_id=item.item_id,
            name=item.name,
            unit_price=item.unit_price,
            unit_cost=item.unit_cost,
            quantity=require_quantity(quantity),
            category=item.category,
        )

    @property
    def revenue(self) -> int:
        return line_amount(self.unit_price, self.quantity)

    @property
    def cost(self) -> int:
        return line_amount(self.unit_cost, self.quantity)

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.item_id,
            "name": self.name,
            "price": self.unit_price,
            "cost": self.unit_cost,
            "category": self.category.value,
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, object]) -> "TransactionLine":
        try:
            return cls(
                item_id=str(payload["id"]),
                name=str(payload["name"]),
                unit_price=require_amount(payload["price"], "price"),
                unit_cost=require_amount(payload.get("cost", 0), "cost"),
                quantity=require_quantity(payload["quantity"]),
                category=Category.from_str(payload.get("category", Category.OTHER.value)),
            )
        except KeyError as error:
            raise ValidationError(f"Transaction line is missing field {error}") from error


@dataclass(frozen=True, slots=True)
class Transaction:
    """A completed order. ``total`` always equals the sum of its lines."""

    transaction_id: str
    timestamp: int
    lines: Tuple[TransactionLine, ...]
    total: int
    payment_method: PaymentMethod

    def __post_init__(self) -> None:
        if not self.transaction_id:
            raise ValidationError("Transaction id must not be empty")
        if isinstance(self.timestamp, bool) or not isinstance(self.timestamp, int):
            raise ValidationError(f"Transaction timestamp must be integer milliseconds, got {self.timestamp!r}")
        if not isinstance(self.lines, tuple):
            object.__setattr__(self, "lines", tuple(self.lines))
        require_amount(self.total, "total")
        expected = sum_amounts(line.revenue for line in self.lines)
        if self.total != expected:
            raise ValidationError(
                f"Transaction {self.transaction_id} total {self.total} does not match its lines ({expected})"
            )

    @classmethod
    def build(
        cls,
        *,
        transaction_id: str,
        timestamp: int,
        lines: Iterable[TransactionLine],
        payment_method: PaymentMethod,
    ) -> "Transaction":
        """Create a transaction whose total is computed from ``lines``."""

        frozen_lines = tuple(lines)
        return cls(
            transaction_id=transaction_id,
            timestamp=timestamp,
            lines=frozen_lines,
            total=sum_amounts(line.revenue for line in frozen_lines),
            payment_method=payment_method,
        )

    @property
    def cost(self) -> int:
        """Cost of goods sold (HPP) for the whole order."""

        return sum_amounts(line.cost for line in self.lines)

    @property
    def profit(self) -> int:
        return self.total - self.cost

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def as_dict(self) -> Dict[str, object]:
        """Export with the field names used by storage and the sync backend."""

        return {
            "id": self.transaction_id,
            "timestamp": self.timestamp,
            "items": [line.as_dict() for line in self.lines],
            "total": self.total,
            "paymentMethod": self.payment_method.value,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, object]) -> "Transaction":
        """Strictly rebuild a transaction exported by ``as_dict``."""

        try:
            items = payload["items"]
            if not isinstance(items, list):
                raise ValidationError("Transaction items must be a list")
            return cls(
                transaction_id=str(payload["id"]),
                timestamp=payload["timestamp"],  # type: ignore[arg-type]
                lines=tuple(TransactionLine.from_dict(item) for item in items),
                total=payload["total"],  # type: ignore[arg-type]
                payment_method=PaymentMethod.from_str(payload["paymentMethod"]),
            )
        except KeyError as error:
            raise ValidationError(f"Transaction is missing field {error}") from error


def generate_transaction_id(timestamp_ms: int) -> str:
    """Return ``TRX-<ms>-<hex>``; the random suffix separates same-millisecond orders."""

    return f"TRX-{timestamp_ms}-{secrets.token_hex(3)}"


class Ledger:
    """Most-recent-first history of completed transactions."""

    def __init__(self, transactions: Optional[Iterable[Transaction]] = None) -> None:
        self._transactions: List[Transaction] = []
        self._ids: set = set()
        for transaction in transactions or ():
            self._register(transaction)
            self._transactions.append(transaction)
        LOGGER.debug("Ledger initialised with %s transactions", len(self._transactions))

    def _register(self, transaction: Transaction) -> None:
        """Track the id, rejecting duplicates."""

        if transaction.transaction_id in self._ids:
            raise ValidationError(f"Transaction {transaction.transaction_id} already exists.")
        self._ids.add(transaction.transaction_id)

    def prepend(self, transaction: Transaction) -> None:
        """Record a new transaction at the front of the history."""

        self._register(transaction)
        self._transactions.insert(0, transaction)
        LOGGER.info(
            "Recorded transaction %s total=%s via %s",
            transaction.transaction_id,
            transaction.total,
            transaction.payment_method.value,
        )

    def replace_all(self, transactions: Iterable[Transaction]) -> None:
        """Swap in a whole new history sorted by descending timestamp.

        Used when pulling from the cloud backend: the remote copy wins at
        whole-ledger granularity. The swap happens only after every entry has
        been checked so a duplicate id leaves the current history intact.
        """

        incoming = sorted(transactions, key=lambda transaction: transaction.timestamp, reverse=True)
        ids = set()
        for transaction in incoming:
            if transaction.transaction_id in ids:
                raise ValidationError(f"Transaction {transaction.transaction_id} already exists.")
            ids.add(transaction.transaction_id)
        self._transactions = incoming
        self._ids = ids
        LOGGER.info("Ledger replaced with %s transactions", len(incoming))

    def get(self, transaction_id: str) -> Transaction:
        for transaction in self._transactions:
            if transaction.transaction_id == transaction_id:
                return transaction
        raise NotFoundError(f"Transaction {transaction_id} not found")

    def transactions(self) -> Sequence[Transaction]:
        """Return an immutable snapshot of the history, newest first."""

        return tuple(self._transactions)

    def __contains__(self, transaction_id: object) -> bool:
        return transaction_id in self._ids

    def __iter__(self) -> Iterator[Transaction]:
        return iter(tuple(self._transactions))

    def __len__(self) -> int:
        return len(self._transactions)
