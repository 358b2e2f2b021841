"""Mini README: Stall package - the explicitly owned store object.

``StallManager`` is what interfaces talk to; ``build_manager`` wires one
from settings.
"""

from .manager import CheckoutOutcome, SalesReport, StallManager, build_manager

__all__ = ["CheckoutOutcome", "SalesReport", "StallManager", "build_manager"]
