"""Tests for the overview service, ledger grouping and demo data generator."""

from __future__ import annotations

import pandas as pd
import pytest

from analytics.ledger import group_by_date
from core.store import InMemoryTransactionStore
from core.summary_service import build_budget_overview
from data.synth import generate_demo_transactions, seed_store


@pytest.fixture()
def demo_transactions():
    return generate_demo_transactions(6, end_date="2024-07-15", seed=7)


def test_overview_on_empty_snapshot():
    overview = build_budget_overview([])

    assert overview.transaction_count == 0
    assert overview.category_summary.total_spending == 0.0
    assert overview.monthly_forecast.insufficient_data_reason is not None
    assert overview.recurrence.insufficient_data_reason is not None


def test_overview_excludes_income_from_category_totals(make_txn):
    overview = build_budget_overview(
        [
            make_txn(1000, "2024-01-01", "Other", type="income"),
            make_txn(50, "2024-01-02", "Other"),
        ]
    )

    assert overview.category_summary.category_totals == {"Other": pytest.approx(50.0)}
    assert overview.transaction_count == 2


def test_demo_data_covers_complete_months(demo_transactions):
    months = {pd.Timestamp(txn.date).to_period("M") for txn in demo_transactions}

    assert min(months) == pd.Period("2024-01", freq="M")
    assert max(months) == pd.Period("2024-06", freq="M")
    assert any(txn.is_income for txn in demo_transactions)
    assert generate_demo_transactions(6, end_date="2024-07-15", seed=7) == demo_transactions


def test_demo_data_rejects_empty_range():
    with pytest.raises(ValueError):
        generate_demo_transactions(0)


def test_overview_on_demo_data(demo_transactions):
    overview = build_budget_overview(demo_transactions)

    history = overview.monthly_forecast.history
    assert len(history) == 6
    assert overview.monthly_forecast.forecast.target_label == "July 2024"
    assert overview.monthly_forecast.forecast.predicted_amount >= 0

    rent = next(group for group in overview.recurrence.groups if group.category == "Rent")
    assert rent.is_recurring
    assert len(rent.members) == 6
    assert rent.average_amount == pytest.approx(1450.0)

    utilities = [group for group in overview.recurrence.recurring_groups if group.category == "Utilities"]
    assert {group.rounded_amount for group in utilities} == {86, 45}

    summary = overview.category_summary
    assert summary.category_totals["Rent"] == pytest.approx(1450.0 * 6)
    assert summary.total_spending == pytest.approx(sum(history_bucket.total for history_bucket in history))


def test_overview_thresholds_are_forwarded(demo_transactions):
    overview = build_budget_overview(
        demo_transactions,
        forecast_min_months=12,
        recurrence_min_transactions=10_000,
    )

    assert overview.monthly_forecast.forecast is None
    assert overview.recurrence.groups == []


def test_seed_store_adds_every_demo_transaction():
    store = InMemoryTransactionStore()

    added = seed_store(store, "demo", months=2, seed=3, end_date="2024-03-01")
    listed = store.list_transactions("demo")

    assert len(listed) == len(added)
    assert listed[0].id == added[-1].id
    assert all(txn.user_id == "demo" for txn in listed)


def test_group_by_date_orders_newest_first(make_txn):
    transactions = [
        make_txn(1, "2024-01-02", description="a"),
        make_txn(2, "2024-01-05", description="b"),
        make_txn(3, "bad", description="c"),
        make_txn(4, "2024-01-02", description="d"),
    ]

    days = group_by_date(transactions)

    assert [day["date"] for day in days] == ["2024-01-05", "2024-01-02", "bad"]
    assert [txn.description for txn in days[1]["transactions"]] == ["a", "d"]
    assert group_by_date([]) == []
