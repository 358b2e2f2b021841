"""Mini README: HTTP client for the spreadsheet (Apps Script) backend.

Structure:
    * RemoteSync - protocol the stall manager depends on.
    * RemoteSyncClient - ``requests`` implementation of pull and push.

The backend is a single web-app URL: ``GET ?action=get_data`` returns the
menu and every transaction; ``POST`` bodies carry ``{"action", "payload"}``
as plain text, which is what Apps Script exposes via ``postData.contents``.
Every transport or decoding failure is raised as ``SyncError``; callers
decide whether that matters.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Protocol

import requests

from ..catalog import Catalog
from ..errors import SyncError
from ..logging_utils import get_logger
from ..sales.ledger import Transaction
from ..utils.clock import Clock, SystemClock
from .payloads import SyncSnapshot, parse_snapshot

LOGGER = get_logger(__name__)


class RemoteSync(Protocol):
    def pull(self) -> SyncSnapshot:
        ...

    def push_catalog(self, catalog: Catalog) -> None:
        ...

    def push_transaction(self, transaction: Transaction) -> None:
        ...


class RemoteSyncClient:
    """Talk to the stall's cloud backup."""

    def __init__(
        self,
        url: str,
        *,
        timeout_seconds: float = 10.0,
        session: Optional[requests.Session] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        if not url or not url.strip():
            raise ValueError("A backend URL is required for cloud sync")
        self.url = url.strip()
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()
        self.clock = clock or SystemClock()

    def pull(self) -> SyncSnapshot:
        """Download the menu and transactions."""

        LOGGER.info("Pulling data from sync backend")
        try:
            response = self.session.get(
                self.url, params={"action": "get_data"}, timeout=self.timeout_seconds
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as error:
            raise SyncError(f"Sync backend request failed: {error}") from error
        except ValueError as error:
            raise SyncError("Sync backend returned invalid JSON") from error
        return parse_snapshot(data, self.clock.now_ms())

    def push_catalog(self, catalog: Catalog) -> None:
        self._post("update_menu", catalog.as_list())
        LOGGER.info("Pushed %s menu items to sync backend", len(catalog))

    def push_transaction(self, transaction: Transaction) -> None:
        self._post("save_transaction", transaction.as_dict())
        LOGGER.info("Pushed transaction %s to sync backend", transaction.transaction_id)

    def _post(self, action: str, payload: Any) -> None:
        body: Dict[str, Any] = {"action": action, "payload": payload}
        try:
            response = self.session.post(
                self.url,
                data=json.dumps(body, ensure_ascii=False).encode("utf-8"),
                headers={"Content-Type": "text/plain;charset=utf-8"},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
        except requests.RequestException as error:
            raise SyncError(f"Sync backend rejected {action}: {error}") from error
