"""Assemble the three BudgetTrack analytics for one transaction snapshot."""

from __future__ import annotations

from typing import Iterable

from analytics.categorisation import snapshot_transactions, summarize_by_category
from analytics.forecasting import forecast_next_month
from analytics.recurring import detect_recurring
from core.models import BudgetOverview, Transaction

__all__ = ["build_budget_overview"]


def build_budget_overview(
    transactions: Iterable[Transaction],
    *,
    forecast_min_months: int = 2,
    recurrence_min_transactions: int = 6,
    recurrence_day_window: float = 3,
) -> BudgetOverview:
    snapshot = snapshot_transactions(transactions)
    return BudgetOverview(
        category_summary=summarize_by_category(snapshot),
        monthly_forecast=forecast_next_month(snapshot, min_months=forecast_min_months),
        recurrence=detect_recurring(
            snapshot,
            min_transactions=recurrence_min_transactions,
            day_window=recurrence_day_window,
        ),
        transaction_count=len(snapshot),
    )
