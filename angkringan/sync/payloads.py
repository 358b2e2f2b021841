"""Mini README: Validation of data pulled from the spreadsheet backend.

Structure:
    * MenuItemPayload / LineItemPayload / TransactionPayload - Pydantic
      models describing the loosely typed rows the backend returns.
    * SyncSnapshot - well-typed result handed to the stall manager.
    * parse_snapshot - turn a raw ``get_data`` response into a snapshot.

Spreadsheet rows arrive with numbers as strings, item lists serialised as
JSON text and timestamps in whatever format the sheet stored. Everything is
parsed here, once. A bad timestamp falls back to "now" and an unknown
category to ``Lainnya``; a row that still cannot be typed (for example an
unreadable item list) is skipped with a warning so one broken row never
blocks the rest of the sync.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field
from pydantic import ValidationError as PayloadError
from pydantic import validator

from ..catalog import Catalog, CatalogItem, Category
from ..errors import SyncError, ValidationError
from ..logging_utils import get_logger
from ..sales.ledger import PaymentMethod, Transaction, TransactionLine
from ..utils.calendar import try_local_date

LOGGER = get_logger(__name__)


def _coerce_category(value: Any) -> Category:
    try:
        return Category.from_str(value)
    except ValidationError:
        LOGGER.warning("Unknown category %r from backend, filing under %s", value, Category.OTHER.value)
        return Category.OTHER


def _usable_ms(candidate: float) -> Optional[int]:
    """Positive, finite milliseconds that map onto a local calendar day."""

    if not math.isfinite(candidate) or candidate <= 0:
        return None
    try:
        milliseconds = int(candidate)
    except OverflowError:
        return None
    return milliseconds if try_local_date(milliseconds) is not None else None


def parse_timestamp(value: Any) -> Optional[int]:
    """Epoch milliseconds from numbers, numeric strings or ISO-8601 text.

    Anything unusable (unparseable, zero or negative, infinite, or outside
    the range a calendar day can hold) yields ``None``.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return _usable_ms(float(value))
        except OverflowError:
            return None
    text = str(value).strip()
    if not text:
        return None
    try:
        numeric = float(text)
    except ValueError:
        pass
    else:
        return _usable_ms(numeric)
    try:
        moment = datetime.fromisoformat(text.replace("Z", "+00:00"))
        return _usable_ms(moment.timestamp() * 1000)
    except (ValueError, OverflowError, OSError):
        return None


class MenuItemPayload(BaseModel):
    id: str
    name: str
    price: int = Field(ge=0)
    cost: int = Field(0, ge=0)
    category: Any = Category.OTHER.value

    @validator("id", "name", pre=True)
    def _stringify(cls, value: Any) -> str:
        return str(value).strip() if value is not None else ""

    @validator("cost", pre=True)
    def _blank_cost_is_zero(cls, value: Any) -> Any:
        return 0 if value in (None, "") else value

    def to_item(self) -> CatalogItem:
        return CatalogItem(
            item_id=self.id,
            name=self.name,
            unit_price=self.price,
            unit_cost=self.cost,
            category=_coerce_category(self.category),
        ).validate()


class LineItemPayload(MenuItemPayload):
    quantity: int = Field(1, ge=1)

    def to_line(self) -> TransactionLine:
        return TransactionLine.snapshot(self.to_item(), self.quantity)


class TransactionPayload(BaseModel):
    id: str
    timestamp: Optional[int] = None
    items: List[LineItemPayload]
    total: Optional[int] = None
    paymentMethod: PaymentMethod

    @validator("id", pre=True)
    def _stringify(cls, value: Any) -> str:
        return str(value).strip() if value is not None else ""

    @validator("timestamp", pre=True)
    def _parse_timestamp(cls, value: Any) -> Optional[int]:
        return parse_timestamp(value)

    @validator("items", pre=True)
    def _decode_items(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return json.loads(value)
            except json.JSONDecodeError as error:
                raise ValueError("items is not valid JSON") from error
        return value

    @validator("paymentMethod", pre=True)
    def _parse_payment_method(cls, value: Any) -> PaymentMethod:
        try:
            return PaymentMethod.from_str(value)
        except ValidationError as error:
            raise ValueError(str(error)) from error

    def to_transaction(self, now_ms: int) -> Transaction:
        lines = [item.to_line() for item in self.items]
        if self.timestamp is None:
            LOGGER.warning("Transaction %s has no usable timestamp, using current time", self.id)
        transaction = Transaction.build(
            transaction_id=self.id,
            timestamp=self.timestamp if self.timestamp is not None else now_ms,
            lines=lines,
            payment_method=self.paymentMethod,
        )
        if self.total is not None and self.total != transaction.total:
            LOGGER.warning(
                "Transaction %s total %s disagrees with its items (%s); keeping the item sum",
                self.id,
                self.total,
                transaction.total,
            )
        return transaction


@dataclass(frozen=True, slots=True)
class SyncSnapshot:
    """Typed result of a pull; ``None`` means "leave local data as is"."""

    catalog: Optional[Catalog] = None
    transactions: Optional[List[Transaction]] = None


def _parse_menu(rows: Any) -> Optional[Catalog]:
    if not isinstance(rows, list) or not rows:
        return None
    items: List[CatalogItem] = []
    for row in rows:
        try:
            items.append(MenuItemPayload.parse_obj(row).to_item())
        except (PayloadError, ValidationError) as error:
            LOGGER.warning("Skipping unreadable menu row %r: %s", row, error)
    if not items:
        return None
    try:
        return Catalog(items)
    except ValidationError as error:
        raise SyncError(f"Backend menu is invalid: {error}") from error


def _parse_transactions(rows: Any, now_ms: int) -> Optional[List[Transaction]]:
    if not isinstance(rows, list):
        return None
    transactions: List[Transaction] = []
    seen = set()
    for row in rows:
        try:
            transaction = TransactionPayload.parse_obj(row).to_transaction(now_ms)
        except (PayloadError, ValidationError) as error:
            LOGGER.warning("Skipping unreadable transaction row: %s", error)
            continue
        if transaction.transaction_id in seen:
            LOGGER.warning("Skipping duplicate transaction %s", transaction.transaction_id)
            continue
        seen.add(transaction.transaction_id)
        transactions.append(transaction)
    return sorted(transactions, key=lambda transaction: transaction.timestamp, reverse=True)


def parse_snapshot(data: Any, now_ms: int) -> SyncSnapshot:
    """Validate a ``get_data`` response body."""

    if not isinstance(data, dict):
        raise SyncError("Backend response must be a JSON object")
    return SyncSnapshot(
        catalog=_parse_menu(data.get("menu")),
        transactions=_parse_transactions(data.get("transactions"), now_ms),
    )
