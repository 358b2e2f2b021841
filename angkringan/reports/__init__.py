"""Mini README: Reporting package for Angkringan POS.

Exposes the pure aggregation helpers that power the dashboard, the
transaction history filters and the sales/profit report.
"""

from .aggregator import (
    CategoryItems,
    CategoryRevenue,
    DailyRevenue,
    DashboardSummary,
    DateRange,
    ItemSummary,
    ProfitAndLoss,
    Totals,
    by_category,
    by_day,
    by_item,
    dashboard_summary,
    filter_by_range,
    profit_and_loss,
    search,
    totals,
)

__all__ = [
    "CategoryItems",
    "CategoryRevenue",
    "DailyRevenue",
    "DashboardSummary",
    "DateRange",
    "ItemSummary",
    "ProfitAndLoss",
    "Totals",
    "by_category",
    "by_day",
    "by_item",
    "dashboard_summary",
    "filter_by_range",
    "profit_and_loss",
    "search",
    "totals",
]
