"""Mini README: Tests for the reporting aggregator.

Exercises totals, daily buckets, category and item groupings, the
date-range filter and the history search, including empty input.
"""

from __future__ import annotations

from datetime import date

from angkringan.catalog import Category
from angkringan.reports import (
    DateRange,
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

from conftest import local_ms, make_line, make_transaction


def _sample():
    return [
        make_transaction(
            "TRX-3",
            local_ms(2024, 6, 15, 9),
            [
                make_line("1", 3000, 1200, 2, name="Es Teh Manis", category=Category.BEVERAGE),
                make_line("3", 2000, 1000, 1, name="Sate Usus", category=Category.SKEWER),
            ],
        ),
        make_transaction(
            "TRX-2",
            local_ms(2024, 6, 14, 23, 59),
            [make_line("1", 3000, 1200, 1, name="Es Teh Manis", category=Category.BEVERAGE)],
        ),
        make_transaction(
            "TRX-1",
            local_ms(2024, 6, 10, 0, 0),
            [
                make_line("6", 1000, 600, 5, name="Tempe Mendoan", category=Category.FRIED_SNACK),
                make_line("2", 3000, 1800, 1, name="Nasi Kucing", category=Category.FOOD),
            ],
        ),
    ]


def test_totals_scenario() -> None:
    """Two orders of 3.000/1.200 and 5.000/2.000 sum as expected."""

    transactions = [
        make_transaction("a", 1, [make_line("1", 3000, 1200)]),
        make_transaction("b", 2, [make_line("2", 5000, 2000)]),
    ]
    assert totals(transactions) == Totals(revenue=8000, cost=3200, profit=4800, count=2)


def test_empty_input_yields_zeroes(today: date) -> None:
    assert totals([]) == Totals(0, 0, 0, 0)
    assert by_category([]) == []
    assert by_item([]) == []
    assert [day.revenue for day in by_day([], 7, today)] == [0] * 7
    assert profit_and_loss([], 0).net_profit == 0


def test_profit_is_revenue_minus_cost() -> None:
    summary = totals(_sample())
    assert summary.revenue == 8000 + 3000 + 8000
    assert summary.profit == summary.revenue - summary.cost


def test_by_day_buckets_calendar_days(today: date) -> None:
    """Every day in the window is listed, including those without sales."""

    days = by_day(_sample(), 7, today)
    assert [day.day for day in days] == [date(2024, 6, d) for d in range(9, 16)]
    revenue = {day.day: day.revenue for day in days}
    assert revenue[date(2024, 6, 15)] == 8000
    assert revenue[date(2024, 6, 14)] == 3000
    assert revenue[date(2024, 6, 10)] == 8000
    assert revenue[date(2024, 6, 12)] == 0

    assert [day.revenue for day in by_day(_sample(), 1, today)] == [8000]


def test_by_category_sorted_and_complete() -> None:
    groups = by_category(_sample())
    assert [(group.category, group.revenue) for group in groups] == [
        (Category.BEVERAGE, 9000),
        (Category.FRIED_SNACK, 5000),
        (Category.FOOD, 3000),
        (Category.SKEWER, 2000),
    ]
    assert sum(group.revenue for group in groups) == totals(_sample()).revenue


def test_by_item_groups_by_category_name() -> None:
    groups = by_item(_sample())
    assert [group.category.value for group in groups] == ["Gorengan", "Makanan", "Minuman", "Sate"]

    tea = groups[2].items[0]
    assert (tea.item_id, tea.quantity, tea.revenue, tea.cost, tea.profit) == ("1", 3, 9000, 3600, 5400)


def test_filter_by_range_inclusive_and_idempotent() -> None:
    transactions = _sample()
    june_14 = DateRange.from_dates(date(2024, 6, 14), date(2024, 6, 14))
    filtered = filter_by_range(transactions, june_14)
    assert [t.transaction_id for t in filtered] == ["TRX-2"]
    assert filter_by_range(filtered, june_14) == filtered

    since_tenth = filter_by_range(transactions, DateRange.from_dates(start=date(2024, 6, 10)))
    assert [t.transaction_id for t in since_tenth] == ["TRX-3", "TRX-2", "TRX-1"]

    until_thirteenth = filter_by_range(transactions, DateRange.from_dates(end=date(2024, 6, 13)))
    assert [t.transaction_id for t in until_thirteenth] == ["TRX-1"]

    assert filter_by_range(transactions, DateRange()) == transactions


def test_search_matches_id_or_item_name() -> None:
    transactions = _sample()
    assert [t.transaction_id for t in search(transactions, "sate")] == ["TRX-3"]
    assert [t.transaction_id for t in search(transactions, "trx-2")] == ["TRX-2"]
    assert search(transactions, "  ") == transactions


def test_profit_and_loss_subtracts_expenses() -> None:
    pnl = profit_and_loss(_sample(), 10000)
    summary = totals(_sample())
    assert pnl.gross_profit == summary.profit
    assert pnl.net_profit == summary.profit - 10000


def test_dashboard_summary_splits_today(today: date) -> None:
    summary = dashboard_summary(_sample(), today)
    assert summary.today.count == 1
    assert summary.today.revenue == 8000
    assert summary.all_time.count == 3


def test_by_day_skips_timestamps_without_a_calendar_day(today: date) -> None:
    """A stored timestamp far outside the calendar never breaks the daily chart."""

    transactions = _sample() + [make_transaction("TRX-far", 10**18, [make_line("1", 1000, 500)])]

    days = by_day(transactions, 7, today)

    assert days[-1].revenue == 8000
    assert sum(day.revenue for day in days) == 8000 + 3000 + 8000
    assert dashboard_summary(transactions, today).all_time.count == 4
