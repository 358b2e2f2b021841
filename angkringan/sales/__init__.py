"""Mini README: Sales package - cart, checkout protocol and ledger.

Data flows one way: the cart is built from the menu, checkout validates it
and snapshots it into a ``Transaction``, and the ledger keeps the resulting
history for reporting.
"""

from .cart import Cart, CartLine
from .checkout import (
    CheckoutProcessor,
    CheckoutReceipt,
    CheckoutRequest,
    CheckoutState,
    suggest_cash_amounts,
)
from .ledger import (
    Ledger,
    PaymentMethod,
    Transaction,
    TransactionLine,
    generate_transaction_id,
)

__all__ = [
    "Cart",
    "CartLine",
    "CheckoutProcessor",
    "CheckoutReceipt",
    "CheckoutRequest",
    "CheckoutState",
    "Ledger",
    "PaymentMethod",
    "Transaction",
    "TransactionLine",
    "generate_transaction_id",
    "suggest_cash_amounts",
]
