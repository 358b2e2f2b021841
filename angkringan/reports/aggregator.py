"""Mini README: Pure reporting functions over ledger transactions.

Structure:
    * DateRange - optional inclusive bounds in epoch milliseconds.
    * Totals / DailyRevenue / CategoryRevenue / ItemSummary / CategoryItems -
      report rows, each exportable with ``as_dict``.
    * totals, by_day, by_category, by_item, filter_by_range - the report
      builders used by the dashboard and the reports page.
    * search, profit_and_loss, dashboard_summary - history and summary views.

Every function reads its input and never mutates it. Empty input produces
zero-valued results and nothing divides, so there is no failure path.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from ..catalog import Category
from ..sales.ledger import Transaction
from ..utils.calendar import day_end_ms, day_start_ms, try_local_date


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive timestamp bounds; a missing bound is unbounded on that side."""

    start: Optional[int] = None
    end: Optional[int] = None

    @classmethod
    def from_dates(cls, start: Optional[date] = None, end: Optional[date] = None) -> "DateRange":
        """Bounds from calendar days: local midnight to 23:59:59.999."""

        return cls(
            start=day_start_ms(start) if start is not None else None,
            end=day_end_ms(end) if end is not None else None,
        )

    def contains(self, timestamp: int) -> bool:
        if self.start is not None and timestamp < self.start:
            return False
        if self.end is not None and timestamp > self.end:
            return False
        return True

    @property
    def is_unbounded(self) -> bool:
        return self.start is None and self.end is None


@dataclass(frozen=True, slots=True)
class Totals:
    revenue: int = 0
    cost: int = 0
    profit: int = 0
    count: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {
            "revenue": self.revenue,
            "cost": self.cost,
            "profit": self.profit,
            "count": self.count,
        }


@dataclass(frozen=True, slots=True)
class DailyRevenue:
    day: date
    revenue: int

    def as_dict(self) -> Dict[str, object]:
        return {"day": self.day.isoformat(), "revenue": self.revenue}


@dataclass(frozen=True, slots=True)
class CategoryRevenue:
    category: Category
    revenue: int

    def as_dict(self) -> Dict[str, object]:
        return {"category": self.category.value, "revenue": self.revenue}


@dataclass(slots=True)
class ItemSummary:
    """Quantity, revenue and cost of one menu item across transactions."""

    item_id: str
    name: str
    category: Category
    quantity: int = 0
    revenue: int = 0
    cost: int = 0

    @property
    def profit(self) -> int:
        return self.revenue - self.cost

    def as_dict(self) -> Dict[str, object]:
        return {
            "item_id": self.item_id,
            "name": self.name,
            "category": self.category.value,
            "quantity": self.quantity,
            "revenue": self.revenue,
            "cost": self.cost,
            "profit": self.profit,
        }


@dataclass(frozen=True, slots=True)
class CategoryItems:
    category: Category
    items: Sequence[ItemSummary]

    def as_dict(self) -> Dict[str, object]:
        return {
            "category": self.category.value,
            "items": [item.as_dict() for item in self.items],
        }


@dataclass(frozen=True, slots=True)
class ProfitAndLoss:
    """Gross profit and net profit after operational expenses."""

    revenue: int
    cost: int
    gross_profit: int
    operational_expenses: int
    net_profit: int

    def as_dict(self) -> Dict[str, int]:
        return {
            "revenue": self.revenue,
            "cost": self.cost,
            "gross_profit": self.gross_profit,
            "operational_expenses": self.operational_expenses,
            "net_profit": self.net_profit,
        }


@dataclass(frozen=True, slots=True)
class DashboardSummary:
    today: Totals
    all_time: Totals

    def as_dict(self) -> Dict[str, object]:
        return {"today": self.today.as_dict(), "all_time": self.all_time.as_dict()}


def totals(transactions: Iterable[Transaction]) -> Totals:
    """Revenue, cost of goods, profit and order count."""

    revenue = cost = count = 0
    for transaction in transactions:
        revenue += transaction.total
        cost += transaction.cost
        count += 1
    return Totals(revenue=revenue, cost=cost, profit=revenue - cost, count=count)


def by_day(transactions: Iterable[Transaction], window_days: int, today: date) -> List[DailyRevenue]:
    """Revenue for each of the ``window_days`` local days ending ``today``.

    Every calendar day in the window is reported, including days without
    sales; transactions outside the window are ignored.
    """

    if window_days <= 0:
        return []
    days = [today - timedelta(days=offset) for offset in range(window_days - 1, -1, -1)]
    buckets: Dict[date, int] = {day: 0 for day in days}
    for transaction in transactions:
        day = try_local_date(transaction.timestamp)
        if day is not None and day in buckets:
            buckets[day] += transaction.total
    return [DailyRevenue(day=day, revenue=buckets[day]) for day in days]


def by_category(transactions: Iterable[Transaction]) -> List[CategoryRevenue]:
    """Line revenue per category, highest revenue first."""

    distribution: Dict[Category, int] = {}
    for transaction in transactions:
        for line in transaction.lines:
            distribution[line.category] = distribution.get(line.category, 0) + line.revenue
    ordered = sorted(distribution.items(), key=lambda entry: (-entry[1], entry[0].value))
    return [CategoryRevenue(category=category, revenue=revenue) for category, revenue in ordered]


def by_item(transactions: Iterable[Transaction]) -> List[CategoryItems]:
    """Per-item sales grouped by category, categories in label order."""

    stats: Dict[str, ItemSummary] = {}
    for transaction in transactions:
        for line in transaction.lines:
            summary = stats.get(line.item_id)
            if summary is None:
                summary = ItemSummary(item_id=line.item_id, name=line.name, category=line.category)
                stats[line.item_id] = summary
            summary.quantity += line.quantity
            summary.revenue += line.revenue
            summary.cost += line.cost

    grouped: Dict[Category, List[ItemSummary]] = {}
    for summary in stats.values():
        grouped.setdefault(summary.category, []).append(summary)
    return [
        CategoryItems(
            category=category,
            items=tuple(sorted(grouped[category], key=lambda summary: summary.name)),
        )
        for category in sorted(grouped, key=lambda category: category.value)
    ]


def filter_by_range(transactions: Iterable[Transaction], date_range: DateRange) -> List[Transaction]:
    """Transactions inside ``date_range``, in their original order."""

    return [transaction for transaction in transactions if date_range.contains(transaction.timestamp)]


def search(transactions: Iterable[Transaction], term: Optional[str]) -> List[Transaction]:
    """Transactions whose id or any sold item name contains ``term`` (any case)."""

    needle = (term or "").strip().lower()
    if not needle:
        return list(transactions)
    return [
        transaction
        for transaction in transactions
        if needle in transaction.transaction_id.lower()
        or any(needle in line.name.lower() for line in transaction.lines)
    ]


def profit_and_loss(transactions: Iterable[Transaction], operational_expenses: int = 0) -> ProfitAndLoss:
    """Gross profit (revenue minus HPP) and net profit after expenses."""

    expenses = max(operational_expenses, 0)
    summary = totals(transactions)
    return ProfitAndLoss(
        revenue=summary.revenue,
        cost=summary.cost,
        gross_profit=summary.profit,
        operational_expenses=expenses,
        net_profit=summary.profit - expenses,
    )


def dashboard_summary(transactions: Sequence[Transaction], today: date) -> DashboardSummary:
    """Totals for ``today`` next to all-time totals."""

    today_only = filter_by_range(transactions, DateRange.from_dates(today, today))
    return DashboardSummary(today=totals(today_only), all_time=totals(transactions))

