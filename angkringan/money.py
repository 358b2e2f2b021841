"""Mini README: Integer money and quantity primitives.

Every amount in the till is an ``int`` in rupiah (the smallest unit used by
the stall); floats never touch money. The helpers below validate raw values
at the edges and perform the handful of operations the ledger needs.
``format_rupiah`` is only used for human-facing output.
"""

from __future__ import annotations

from typing import Iterable

from .errors import ValidationError


def require_amount(value: object, field: str = "amount") -> int:
    """Return ``value`` when it is a non-negative integer amount."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer amount, got {value!r}")
    if value < 0:
        raise ValidationError(f"{field} must not be negative, got {value}")
    return value


def require_quantity(value: object) -> int:
    """Return ``value`` when it is a positive integer quantity."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"quantity must be an integer, got {value!r}")
    if value < 1:
        raise ValidationError(f"quantity must be at least 1, got {value}")
    return value


def line_amount(unit_amount: int, quantity: int) -> int:
    """Price (or cost) of ``quantity`` units."""

    return unit_amount * quantity


def sum_amounts(amounts: Iterable[int]) -> int:
    return sum(amounts, 0)


def compute_change(amount_received: int, total: int) -> int:
    """Change owed to a cash customer; callers validate the tender first."""

    if amount_received < total:
        raise ValidationError(
            f"Amount received {amount_received} does not cover total {total}"
        )
    return amount_received - total


def format_rupiah(amount: int) -> str:
    """Format an amount Indonesian style, e.g. ``12500`` -> ``Rp 12.500``."""

    sign = "-" if amount < 0 else ""
    return f"{sign}Rp {abs(amount):,}".replace(",", ".")
