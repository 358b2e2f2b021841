"""Mini README: Local persistence for the menu, transactions and expenses.

Structure:
    * Storage - protocol the stall manager depends on.
    * JsonFileStorage - JSON files inside the configured data directory.

Files use the same field names as the cloud backend (``id``, ``price``,
``cost``, ``paymentMethod`` ...). Writes go to a temporary file first and
are renamed into place so a crash never leaves a half-written ledger. Any
I/O or decoding problem surfaces as ``SyncError``; in-memory state is never
touched by this module.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import List, Optional, Protocol, Sequence

from ..catalog import Catalog, CatalogItem
from ..configuration import get_settings
from ..errors import SyncError, ValidationError
from ..logging_utils import get_logger
from ..money import require_amount
from ..sales.ledger import Transaction

LOGGER = get_logger(__name__)

MENU_FILENAME = "menu.json"
TRANSACTIONS_FILENAME = "transactions.json"
EXPENSES_FILENAME = "expenses.json"


class Storage(Protocol):
    def load_catalog(self) -> Optional[Catalog]:
        ...

    def save_catalog(self, catalog: Catalog) -> None:
        ...

    def load_transactions(self) -> Optional[List[Transaction]]:
        ...

    def save_transactions(self, transactions: Sequence[Transaction]) -> None:
        ...

    def load_operational_expenses(self) -> int:
        ...

    def save_operational_expenses(self, amount: int) -> None:
        ...


class JsonFileStorage:
    """Persist stall data as JSON documents."""

    def __init__(self, *, data_directory: Optional[Path] = None) -> None:
        self.data_directory = data_directory or get_settings().data_directory
        self.data_directory.mkdir(parents=True, exist_ok=True)
        LOGGER.debug("Stall data directory set to %s", self.data_directory)

    def _read(self, filename: str) -> Optional[object]:
        path = self.data_directory / filename
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as error:
            raise SyncError(f"Could not read {path}: {error}") from error

    def _write(self, filename: str, payload: object) -> None:
        path = self.data_directory / filename
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            temp_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
            os.replace(temp_path, path)
        except OSError as error:
            raise SyncError(f"Could not write {path}: {error}") from error
        LOGGER.debug("Saved %s", path)

    def load_catalog(self) -> Optional[Catalog]:
        payload = self._read(MENU_FILENAME)
        if payload is None:
            return None
        if not isinstance(payload, list):
            raise SyncError(f"{MENU_FILENAME} must contain a list of menu items")
        try:
            return Catalog(CatalogItem.from_dict(entry) for entry in payload)
        except (ValidationError, TypeError, AttributeError) as error:
            raise SyncError(f"{MENU_FILENAME} holds an invalid menu item: {error}") from error

    def save_catalog(self, catalog: Catalog) -> None:
        self._write(MENU_FILENAME, catalog.as_list())

    def load_transactions(self) -> Optional[List[Transaction]]:
        payload = self._read(TRANSACTIONS_FILENAME)
        if payload is None:
            return None
        if not isinstance(payload, list):
            raise SyncError(f"{TRANSACTIONS_FILENAME} must contain a list of transactions")
        try:
            return [Transaction.from_dict(entry) for entry in payload]
        except (ValidationError, TypeError, AttributeError) as error:
            raise SyncError(f"{TRANSACTIONS_FILENAME} holds an invalid transaction: {error}") from error

    def save_transactions(self, transactions: Sequence[Transaction]) -> None:
        self._write(TRANSACTIONS_FILENAME, [transaction.as_dict() for transaction in transactions])

    def load_operational_expenses(self) -> int:
        payload = self._read(EXPENSES_FILENAME)
        if payload is None:
            return 0
        try:
            return require_amount(payload.get("operational_expenses", 0), "operational_expenses")  # type: ignore[union-attr]
        except (ValidationError, AttributeError) as error:
            raise SyncError(f"{EXPENSES_FILENAME} is invalid: {error}") from error

    def save_operational_expenses(self, amount: int) -> None:
        self._write(EXPENSES_FILENAME, {"operational_expenses": amount})
