"""Mini README: Core package initializer for Angkringan POS.

Angkringan POS is the till for a small street-food stall: it keeps the
menu, builds orders, settles them in cash, QRIS or bank transfer, and turns
the resulting ledger into sales and profit reports. Subpackages:

    * catalog - menu items and the ordered menu.
    * sales - cart, checkout protocol and transaction ledger.
    * reports - pure aggregation over the ledger.
    * storage / sync - local JSON files and the cloud spreadsheet backend.
    * stall - the manager object that owns all of the above.
    * interface - FastAPI service.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
