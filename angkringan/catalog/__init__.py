"""Mini README: Menu (catalog) package for Angkringan POS.

The ``menu`` module holds the item model and the ordered catalog; the
``defaults`` module provides the starter menu for fresh installs.
"""

from .defaults import default_menu
from .menu import Catalog, CatalogItem, CatalogView, Category

__all__ = ["Catalog", "CatalogItem", "CatalogView", "Category", "default_menu"]
