"""Mini README: Checkout protocol turning a cart into a ledger transaction.

Structure:
    * CheckoutState - OPEN, VALIDATING, COMMITTED, REJECTED.
    * CheckoutRequest - payment method plus the cash handed over, if any.
    * CheckoutReceipt - the committed transaction and the change owed.
    * CheckoutProcessor - runs the state machine against a cart and ledger.
    * suggest_cash_amounts - quick-tender amounts offered to the cashier.

A rejected checkout raises ``ValidationError`` and touches neither the cart
nor the ledger. A committed checkout snapshots every line, prepends the
transaction to the ledger and clears the cart. Either way the processor is
back in ``OPEN`` for the next order, with ``last_outcome`` recording what
happened.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from ..errors import ValidationError
from ..logging_utils import get_logger
from ..money import compute_change, require_amount
from ..utils.clock import Clock, SystemClock
from .cart import Cart
from .ledger import Ledger, PaymentMethod, Transaction, TransactionLine, generate_transaction_id

LOGGER = get_logger(__name__)

QUICK_CASH_AMOUNTS = (5000, 10000, 20000, 50000, 100000)


class CheckoutState(str, Enum):
    OPEN = "open"
    VALIDATING = "validating"
    COMMITTED = "committed"
    REJECTED = "rejected"


@dataclass(frozen=True, slots=True)
class CheckoutRequest:
    """Cashier's request to settle the current cart."""

    payment_method: PaymentMethod
    amount_received: Optional[int] = None


@dataclass(frozen=True, slots=True)
class CheckoutReceipt:
    """Outcome of a committed checkout."""

    transaction: Transaction
    amount_received: Optional[int]
    change: Optional[int]


class CheckoutProcessor:
    """Validate and commit the cart into the ledger."""

    def __init__(
        self,
        cart: Cart,
        ledger: Ledger,
        *,
        clock: Optional[Clock] = None,
        id_factory: Callable[[int], str] = generate_transaction_id,
    ) -> None:
        self.cart = cart
        self.ledger = ledger
        self.clock = clock or SystemClock()
        self._id_factory = id_factory
        self.state = CheckoutState.OPEN
        self.last_outcome: Optional[CheckoutState] = None

    def submit(self, request: CheckoutRequest) -> CheckoutReceipt:
        """Run ``OPEN -> VALIDATING -> COMMITTED|REJECTED`` for ``request``."""

        self.state = CheckoutState.VALIDATING
        try:
            self._validate(request)
        except ValidationError as error:
            self._finish(CheckoutState.REJECTED)
            LOGGER.info("Checkout rejected: %s", error)
            raise

        timestamp = self.clock.now_ms()
        transaction = Transaction.build(
            transaction_id=self._id_factory(timestamp),
            timestamp=timestamp,
            lines=[TransactionLine.snapshot(line.item, line.quantity) for line in self.cart.lines()],
            payment_method=request.payment_method,
        )
        try:
            self.ledger.prepend(transaction)
        except ValidationError:
            self._finish(CheckoutState.REJECTED)
            raise
        self.cart.clear()

        change = None
        if request.payment_method is PaymentMethod.CASH and request.amount_received is not None:
            change = compute_change(request.amount_received, transaction.total)
        self._finish(CheckoutState.COMMITTED)
        return CheckoutReceipt(
            transaction=transaction,
            amount_received=request.amount_received,
            change=change,
        )

    def _validate(self, request: CheckoutRequest) -> int:
        """Return the cart total, raising ``ValidationError`` when the order cannot be settled."""

        if self.cart.is_empty:
            raise ValidationError("Cart is empty")
        if not isinstance(request.payment_method, PaymentMethod):
            raise ValidationError(f"Unsupported payment method: {request.payment_method!r}")
        total = self.cart.total()
        if request.payment_method is PaymentMethod.CASH:
            if request.amount_received is None:
                raise ValidationError("Cash payments require the amount received")
            received = require_amount(request.amount_received, "amount_received")
            if received < total:
                raise ValidationError(f"Amount received {received} is less than total {total}")
        elif request.amount_received is not None:
            require_amount(request.amount_received, "amount_received")
        return total

    def _finish(self, outcome: CheckoutState) -> None:
        self.last_outcome = outcome
        self.state = CheckoutState.OPEN


def suggest_cash_amounts(total: int) -> List[int]:
    """Exact amount plus the common notes that cover ``total``, ascending."""

    candidates = {total, *(amount for amount in QUICK_CASH_AMOUNTS if amount >= total)}
    return sorted(candidates)
