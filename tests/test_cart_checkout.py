"""Mini README: Tests for the cart and the checkout protocol.

Includes the tea scenario (two teas paid with 10.000 cash), rejection
rules that must leave cart and ledger untouched, and the guarantee that
menu edits after checkout never rewrite a committed transaction.
"""

from __future__ import annotations

import pytest

from angkringan.catalog import Catalog, CatalogItem, Category
from angkringan.errors import NotFoundError, ValidationError
from angkringan.sales import (
    Cart,
    CheckoutProcessor,
    CheckoutRequest,
    CheckoutState,
    Ledger,
    PaymentMethod,
    suggest_cash_amounts,
)


@pytest.fixture
def cart(catalog: Catalog) -> Cart:
    return Cart(catalog)


@pytest.fixture
def processor(cart: Cart, clock) -> CheckoutProcessor:
    return CheckoutProcessor(cart, Ledger(), clock=clock)


def test_add_decrement_and_remove(cart: Cart, catalog: Catalog) -> None:
    """Quantities grow by one per tap and lines disappear at zero."""

    cart.add_item(catalog.get("1"))
    cart.add_item(catalog.get("1"))
    cart.add_item(catalog.get("2"))
    assert [(line.item_id, line.quantity) for line in cart.lines()] == [("1", 2), ("2", 1)]

    cart.decrement_item("1")
    cart.decrement_item("2")
    cart.decrement_item("missing")
    assert [(line.item_id, line.quantity) for line in cart.lines()] == [("1", 1)]

    cart.remove_item("1")
    cart.remove_item("1")
    assert cart.is_empty
    assert cart.total() == 0


def test_add_item_requires_live_menu_entry(cart: Cart) -> None:
    ghost = CatalogItem("99", "Ghost", 1000, 0, Category.OTHER)
    with pytest.raises(NotFoundError):
        cart.add_item(ghost)
    assert cart.is_empty


def test_total_reads_live_prices(cart: Cart, catalog: Catalog) -> None:
    """A price edited mid-order shows up in the cart total."""

    cart.add_item(catalog.get("1"))
    cart.add_item(catalog.get("1"))
    assert cart.total() == 6000

    catalog.upsert(CatalogItem("1", "Tea", 3500, 1200, Category.BEVERAGE))
    assert cart.total() == 7000


def test_removed_menu_item_keeps_last_known_price(cart: Cart, catalog: Catalog) -> None:
    cart.add_item(catalog.get("3"))
    catalog.remove("3")
    assert cart.total() == 1000


def test_tea_scenario(cart: Cart, catalog: Catalog, processor: CheckoutProcessor, clock) -> None:
    """Two teas paid with 10.000 cash give a 6.000 transaction and 4.000 change."""

    cart.add_item(catalog.get("1"))
    cart.add_item(catalog.get("1"))
    assert cart.total() == 6000

    receipt = processor.submit(CheckoutRequest(PaymentMethod.CASH, amount_received=10000))

    assert receipt.transaction.total == 6000
    assert receipt.change == 4000
    assert receipt.transaction.timestamp == clock.now_ms()
    assert len(processor.ledger) == 1
    assert processor.ledger.transactions()[0] is receipt.transaction
    assert cart.is_empty
    assert processor.state is CheckoutState.OPEN
    assert processor.last_outcome is CheckoutState.COMMITTED


def test_empty_cart_is_rejected(processor: CheckoutProcessor) -> None:
    with pytest.raises(ValidationError):
        processor.submit(CheckoutRequest(PaymentMethod.QRIS))
    assert len(processor.ledger) == 0
    assert processor.last_outcome is CheckoutState.REJECTED
    assert processor.state is CheckoutState.OPEN


@pytest.mark.parametrize("amount_received", [None, 5999])
def test_insufficient_cash_is_rejected(
    cart: Cart, catalog: Catalog, processor: CheckoutProcessor, amount_received
) -> None:
    """Cash must cover the total; the cart survives a rejection unchanged."""

    cart.add_item(catalog.get("1"))
    cart.add_item(catalog.get("1"))

    with pytest.raises(ValidationError):
        processor.submit(CheckoutRequest(PaymentMethod.CASH, amount_received=amount_received))

    assert len(processor.ledger) == 0
    assert [(line.item_id, line.quantity) for line in cart.lines()] == [("1", 2)]


def test_exact_cash_and_non_cash_payments(cart: Cart, catalog: Catalog, processor: CheckoutProcessor, clock) -> None:
    cart.add_item(catalog.get("2"))
    exact = processor.submit(CheckoutRequest(PaymentMethod.CASH, amount_received=2000))
    assert exact.change == 0

    clock.advance(1)
    cart.add_item(catalog.get("3"))
    transfer = processor.submit(CheckoutRequest(PaymentMethod.TRANSFER))
    assert transfer.change is None
    assert transfer.transaction.payment_method is PaymentMethod.TRANSFER

    assert [t.transaction_id for t in processor.ledger] == [
        transfer.transaction.transaction_id,
        exact.transaction.transaction_id,
    ]


def test_committed_transaction_is_a_snapshot(cart: Cart, catalog: Catalog, processor: CheckoutProcessor) -> None:
    """Later menu edits or removals never change a committed transaction."""

    cart.add_item(catalog.get("1"))
    receipt = processor.submit(CheckoutRequest(PaymentMethod.QRIS))

    catalog.upsert(CatalogItem("1", "Tea Premium", 9000, 5000, Category.BEVERAGE))
    catalog.remove("1")

    stored = processor.ledger.transactions()[0]
    line = stored.lines[0]
    assert stored.total == 3000
    assert (line.name, line.unit_price, line.unit_cost) == ("Tea", 3000, 1200)
    assert stored == receipt.transaction


def test_transaction_ids_are_unique_within_a_millisecond(cart: Cart, catalog: Catalog, processor: CheckoutProcessor) -> None:
    ids = set()
    for _ in range(20):
        cart.add_item(catalog.get("3"))
        ids.add(processor.submit(CheckoutRequest(PaymentMethod.QRIS)).transaction.transaction_id)
    assert len(ids) == 20


def test_suggest_cash_amounts() -> None:
    assert suggest_cash_amounts(6000) == [6000, 10000, 20000, 50000, 100000]
    assert suggest_cash_amounts(5000) == [5000, 10000, 20000, 50000, 100000]
    assert suggest_cash_amounts(150000) == [150000]
