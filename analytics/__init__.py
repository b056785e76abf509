"""Analytics helpers shared across BudgetTrack services."""

from analytics.categorisation import prepare_expenses, snapshot_transactions, summarize_by_category
from analytics.forecasting import (
    NO_DATA_REASON,
    fill_missing_months,
    fit_linear_trend,
    forecast_next_month,
    group_by_month,
)
from analytics.ledger import LedgerDay, group_by_date
from analytics.recurring import day_of_month, detect_recurring

__all__ = [
    "prepare_expenses",
    "snapshot_transactions",
    "summarize_by_category",
    "NO_DATA_REASON",
    "fill_missing_months",
    "fit_linear_trend",
    "forecast_next_month",
    "group_by_month",
    "LedgerDay",
    "group_by_date",
    "day_of_month",
    "detect_recurring",
]
