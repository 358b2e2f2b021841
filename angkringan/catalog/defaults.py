"""Mini README: Starter menu used when no saved menu exists yet.

Mirrors the stall's opening menu so a fresh install can take orders
immediately; owners edit it from the menu management screen.
"""

from __future__ import annotations

from typing import List

from .menu import Catalog, CatalogItem, Category

_DEFAULT_ITEMS: List[CatalogItem] = [
    CatalogItem("1", "Nasi Kucing Teri", 3000, 1800, Category.FOOD),
    CatalogItem("2", "Nasi Kucing Tempe", 3000, 1800, Category.FOOD),
    CatalogItem("3", "Sate Usus", 2000, 1000, Category.SKEWER),
    CatalogItem("4", "Sate Telur Puyuh", 3500, 2200, Category.SKEWER),
    CatalogItem("5", "Sate Kikil", 2500, 1500, Category.SKEWER),
    CatalogItem("6", "Tempe Mendoan", 1000, 600, Category.FRIED_SNACK),
    CatalogItem("7", "Bakwan Goreng", 1000, 600, Category.FRIED_SNACK),
    CatalogItem("8", "Tahu Isi", 1000, 600, Category.FRIED_SNACK),
    CatalogItem("9", "Wedang Jahe", 5000, 2500, Category.BEVERAGE),
    CatalogItem("10", "Es Teh Manis", 3000, 1200, Category.BEVERAGE),
    CatalogItem("11", "Kopi Joss", 6000, 3000, Category.BEVERAGE),
    CatalogItem("12", "Susu Jahe", 6000, 3500, Category.BEVERAGE),
]


def default_menu() -> Catalog:
    """Return a fresh catalog seeded with the starter menu."""

    return Catalog(_DEFAULT_ITEMS)
