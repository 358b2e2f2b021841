"""Mini README: Tests for money primitives and the menu catalog.

Covers amount validation, in-place upserts, idempotent removal and the
lazily filtered menu views used by the POS search box.
"""

from __future__ import annotations

import pytest

from angkringan.catalog import Catalog, CatalogItem, Category, default_menu
from angkringan.errors import NotFoundError, ValidationError
from angkringan.money import compute_change, format_rupiah, require_amount, require_quantity


def test_require_amount_rejects_floats_and_negatives() -> None:
    """Money is integer rupiah only."""

    assert require_amount(0) == 0
    with pytest.raises(ValidationError):
        require_amount(1.5)
    with pytest.raises(ValidationError):
        require_amount(-1)
    with pytest.raises(ValidationError):
        require_amount(True)
    with pytest.raises(ValidationError):
        require_quantity(0)


def test_change_and_formatting() -> None:
    assert compute_change(10000, 6000) == 4000
    with pytest.raises(ValidationError):
        compute_change(5000, 6000)
    assert format_rupiah(1234567) == "Rp 1.234.567"


def test_upsert_replaces_in_place(catalog: Catalog) -> None:
    """Editing an item keeps its position in the menu."""

    catalog.upsert(CatalogItem("1", "Teh Hangat", 3500, 1300, Category.BEVERAGE))
    catalog.upsert(CatalogItem("4", "Kopi Joss", 6000, 3000, Category.BEVERAGE))

    assert [item.item_id for item in catalog] == ["1", "2", "3", "4"]
    assert catalog.get("1").name == "Teh Hangat"
    assert catalog.get("1").unit_price == 3500


@pytest.mark.parametrize(
    "item",
    [
        CatalogItem("9", "", 1000, 500, Category.FOOD),
        CatalogItem("9", "Tahu", -1, 500, Category.FOOD),
        CatalogItem("9", "Tahu", 1000, -5, Category.FOOD),
    ],
)
def test_upsert_rejects_invalid_items(catalog: Catalog, item: CatalogItem) -> None:
    """Invalid entries are rejected and the menu is left untouched."""

    with pytest.raises(ValidationError):
        catalog.upsert(item)
    assert "9" not in catalog
    assert len(catalog) == 3


def test_negative_margin_is_allowed(catalog: Catalog) -> None:
    item = catalog.upsert(CatalogItem("5", "Loss Leader", 1000, 1500, Category.OTHER))
    assert item.margin == -500


def test_remove_is_idempotent(catalog: Catalog) -> None:
    catalog.remove("2")
    catalog.remove("2")
    catalog.remove("missing")
    assert [item.item_id for item in catalog] == ["1", "3"]
    with pytest.raises(NotFoundError):
        catalog.get("2")


def test_list_filters_by_category_and_name(catalog: Catalog) -> None:
    """Filters combine; the view is restartable and reads the live menu."""

    view = catalog.list(name_contains="SATE")
    assert [item.name for item in view] == ["Sate Usus"]
    assert [item.name for item in view] == ["Sate Usus"]

    assert [item.item_id for item in catalog.list(category=Category.BEVERAGE)] == ["1"]
    assert list(catalog.list(category=Category.BEVERAGE, name_contains="sate")) == []

    catalog.upsert(CatalogItem("6", "Sate Kikil", 2500, 1500, Category.SKEWER))
    assert [item.item_id for item in view] == ["2", "6"]


def test_category_parsing_accepts_labels_and_names() -> None:
    assert Category.from_str("Minuman") is Category.BEVERAGE
    assert Category.from_str("fried_snack") is Category.FRIED_SNACK
    with pytest.raises(ValidationError):
        Category.from_str("Dessert")


def test_item_dict_round_trip_defaults_cost() -> None:
    item = CatalogItem.from_dict({"id": "7", "name": "Bakwan", "price": 1000, "category": "Gorengan"})
    assert item.unit_cost == 0
    assert item.category is Category.FRIED_SNACK
    assert CatalogItem.from_dict(item.as_dict()) == item


def test_default_menu_has_starter_items() -> None:
    menu = default_menu()
    assert len(menu) == 12
    assert menu.get("11").name == "Kopi Joss"
