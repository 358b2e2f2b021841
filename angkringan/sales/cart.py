"""Mini README: The customer's in-progress order.

Structure:
    * CartLine - a menu item and how many the customer wants.
    * Cart - ordered lines keyed by item id, priced against the live menu.

Lines are priced from the live catalog every time the cart is read, so a
price edited mid-order shows up immediately. Each line also remembers the
last menu entry it saw; if the item is deleted from the menu while still in
the cart the line keeps that last known price instead of breaking the
order. Values are copied into a ``Transaction`` only at checkout.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from ..catalog import Catalog, CatalogItem
from ..errors import NotFoundError
from ..logging_utils import get_logger
from ..money import line_amount, sum_amounts

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class CartLine:
    """Menu item reference plus quantity."""

    item: CatalogItem
    quantity: int = 1

    @property
    def item_id(self) -> str:
        return self.item.item_id

    @property
    def subtotal(self) -> int:
        return line_amount(self.item.unit_price, self.quantity)


class Cart:
    """Mutable order for a single checkout cycle."""

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog
        self._lines: Dict[str, CartLine] = {}

    def add_item(self, item: CatalogItem) -> CartLine:
        """Add one unit of ``item``, creating the line if needed."""

        live_item = self._catalog.find(item.item_id)
        if live_item is None:
            raise NotFoundError(f"Menu item {item.item_id} is no longer on the menu")
        line = self._lines.get(live_item.item_id)
        if line is None:
            line = CartLine(item=live_item, quantity=1)
            self._lines[live_item.item_id] = line
        else:
            line.item = live_item
            line.quantity += 1
        LOGGER.debug("Cart %s x%s", live_item.item_id, line.quantity)
        return line

    def decrement_item(self, item_id: str) -> None:
        """Take one unit off a line, dropping the line when it reaches zero."""

        line = self._lines.get(item_id)
        if line is None:
            return
        if line.quantity > 1:
            line.quantity -= 1
        else:
            del self._lines[item_id]
        LOGGER.debug("Cart decremented %s", item_id)

    def remove_item(self, item_id: str) -> None:
        if self._lines.pop(item_id, None) is not None:
            LOGGER.debug("Cart removed %s", item_id)

    def lines(self) -> List[CartLine]:
        """Return lines in the order items were first added, priced from the live menu."""

        resolved: List[CartLine] = []
        for line in self._lines.values():
            live_item = self._catalog.find(line.item_id)
            if live_item is not None:
                line.item = live_item
            resolved.append(CartLine(item=line.item, quantity=line.quantity))
        return resolved

    def total(self) -> int:
        """Order total at current menu prices; 0 for an empty cart."""

        return sum_amounts(line.subtotal for line in self.lines())

    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def clear(self) -> None:
        self._lines.clear()

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._lines

    def __len__(self) -> int:
        return len(self._lines)
