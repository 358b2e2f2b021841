"""Mini README: The stall's menu (catalog of sellable items).

Structure:
    * Category - closed enumeration of menu sections.
    * CatalogItem - immutable menu entry with price and unit cost (HPP).
    * Catalog - insertion-ordered mapping of items keyed by id.

Items are frozen dataclasses: editing a menu entry means upserting a new
``CatalogItem`` under the same id, which replaces the old one in place. A
unit cost above the price is allowed; a stall may sell a loss leader.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional

from ..errors import NotFoundError, ValidationError
from ..logging_utils import get_logger
from ..money import require_amount

LOGGER = get_logger(__name__)


class Category(str, Enum):
    """Menu sections. Values are the labels shown to (and stored for) the stall."""

    FOOD = "Makanan"
    SKEWER = "Sate"
    FRIED_SNACK = "Gorengan"
    BEVERAGE = "Minuman"
    OTHER = "Lainnya"

    @classmethod
    def from_str(cls, value: object) -> "Category":
        """Accept either the stall label or the member name, any casing."""

        if isinstance(value, cls):
            return value
        normalised = str(value).strip()
        for member in cls:
            if normalised.lower() in {member.value.lower(), member.name.lower()}:
                return member
        raise ValidationError(f"Unsupported category: {value!r}")


@dataclass(frozen=True, slots=True)
class CatalogItem:
    """A sellable menu entry; amounts are integer rupiah."""

    item_id: str
    name: str
    unit_price: int
    unit_cost: int = 0
    category: Category = Category.OTHER

    def validate(self) -> "CatalogItem":
        """Raise ``ValidationError`` for entries the menu must not hold."""

        if not isinstance(self.item_id, str) or not self.item_id.strip():
            raise ValidationError("Menu item id must be a non-empty string")
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError("Menu item name must not be empty")
        require_amount(self.unit_price, "unit_price")
        require_amount(self.unit_cost, "unit_cost")
        if not isinstance(self.category, Category):
            raise ValidationError(f"Unsupported category: {self.category!r}")
        return self

    @property
    def margin(self) -> int:
        return self.unit_price - self.unit_cost

    def as_dict(self) -> Dict[str, object]:
        """Export using the field names shared with the spreadsheet backend."""

        return {
            "id": self.item_id,
            "name": self.name,
            "price": self.unit_price,
            "cost": self.unit_cost,
            "category": self.category.value,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, object]) -> "CatalogItem":
        """Strictly rebuild an item exported by ``as_dict``."""

        try:
            item = cls(
                item_id=str(payload["id"]),
                name=str(payload["name"]),
                unit_price=payload["price"],  # type: ignore[arg-type]
                unit_cost=payload.get("cost", 0),  # type: ignore[arg-type]
                category=Category.from_str(payload.get("category", Category.OTHER.value)),
            )
        except KeyError as error:
            raise ValidationError(f"Menu item is missing field {error}") from error
        return item.validate()


class Catalog:
    """Insertion-ordered menu keyed by item id."""

    def __init__(self, items: Optional[Iterable[CatalogItem]] = None) -> None:
        self._items: Dict[str, CatalogItem] = {}
        for item in items or ():
            self.upsert(item)
        LOGGER.debug("Catalog initialised with %s items", len(self._items))

    def upsert(self, item: CatalogItem) -> CatalogItem:
        """Insert a new item or replace an existing one keeping its position."""

        item.validate()
        replacing = item.item_id in self._items
        # Assigning to an existing dict key keeps its original position.
        self._items[item.item_id] = item
        LOGGER.debug("%s menu item %s (%s)", "Replaced" if replacing else "Added", item.item_id, item.name)
        return item

    def remove(self, item_id: str) -> None:
        """Remove an item; unknown ids are ignored."""

        if self._items.pop(item_id, None) is not None:
            LOGGER.debug("Removed menu item %s", item_id)

    def replace_all(self, items: Iterable[CatalogItem]) -> None:
        """Swap the whole menu, keeping this object (and carts bound to it)."""

        incoming: Dict[str, CatalogItem] = {}
        for item in items:
            incoming[item.validate().item_id] = item
        self._items = incoming
        LOGGER.info("Menu replaced with %s items", len(incoming))

    def get(self, item_id: str) -> CatalogItem:
        """Retrieve an item, raising ``NotFoundError`` if it is not on the menu."""

        if item_id not in self._items:
            raise NotFoundError(f"Menu item {item_id} not found")
        return self._items[item_id]

    def find(self, item_id: str) -> Optional[CatalogItem]:
        return self._items.get(item_id)

    def list(
        self,
        category: Optional[Category] = None,
        name_contains: Optional[str] = None,
    ) -> "CatalogView":
        """Return a restartable, lazily filtered view in menu order."""

        return CatalogView(self, category=category, name_contains=name_contains)

    def as_list(self) -> List[Dict[str, object]]:
        return [item.as_dict() for item in self._items.values()]

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __iter__(self) -> Iterator[CatalogItem]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)


class CatalogView:
    """Filtered view over a catalog; every iteration re-reads the live menu."""

    def __init__(
        self,
        catalog: Catalog,
        *,
        category: Optional[Category] = None,
        name_contains: Optional[str] = None,
    ) -> None:
        self._catalog = catalog
        self._category = category
        self._needle = name_contains.strip().lower() if name_contains else ""

    def _matches(self, item: CatalogItem) -> bool:
        if self._category is not None and item.category is not self._category:
            return False
        return self._needle in item.name.lower()

    def __iter__(self) -> Iterator[CatalogItem]:
        return (item for item in self._catalog if self._matches(item))
