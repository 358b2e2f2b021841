"""Mini README: Tests for the JSON file storage collaborator."""

from __future__ import annotations

import json

import pytest

from angkringan.catalog import Catalog, CatalogItem, Category
from angkringan.errors import SyncError
from angkringan.sales import PaymentMethod
from angkringan.storage import JsonFileStorage

from conftest import make_line, make_transaction


def test_missing_files_load_as_absent(tmp_path) -> None:
    storage = JsonFileStorage(data_directory=tmp_path)
    assert storage.load_catalog() is None
    assert storage.load_transactions() is None
    assert storage.load_operational_expenses() == 0


def test_round_trip_preserves_every_field(tmp_path, catalog: Catalog) -> None:
    storage = JsonFileStorage(data_directory=tmp_path)
    transactions = [
        make_transaction(
            "TRX-2",
            1718437200999,
            [make_line("1", 3000, 1200, 2, name="Tea", category=Category.BEVERAGE)],
            PaymentMethod.TRANSFER,
        ),
        make_transaction("TRX-1", 1718430000000, [make_line("5", 2500, 1500, 1, category=Category.SKEWER)]),
    ]

    storage.save_catalog(catalog)
    storage.save_transactions(transactions)
    storage.save_operational_expenses(25000)

    reloaded = JsonFileStorage(data_directory=tmp_path)
    assert list(reloaded.load_catalog()) == list(catalog)
    assert reloaded.load_transactions() == transactions
    assert reloaded.load_operational_expenses() == 25000
    assert not list(tmp_path.glob("*.tmp"))


def test_corrupt_files_raise_sync_error(tmp_path) -> None:
    (tmp_path / "transactions.json").write_text("{not json", encoding="utf-8")
    (tmp_path / "menu.json").write_text(json.dumps([{"id": "1", "name": "", "price": 1}]), encoding="utf-8")
    storage = JsonFileStorage(data_directory=tmp_path)

    with pytest.raises(SyncError):
        storage.load_transactions()
    with pytest.raises(SyncError):
        storage.load_catalog()


def test_write_failure_raises_sync_error(tmp_path) -> None:
    storage = JsonFileStorage(data_directory=tmp_path)
    (tmp_path / "menu.json.tmp").mkdir()
    with pytest.raises(SyncError):
        storage.save_catalog(Catalog([CatalogItem("1", "Tea", 3000, 1200, Category.BEVERAGE)]))
