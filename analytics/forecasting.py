"""Monthly expense history and next-month forecasting helpers."""

from __future__ import annotations

from typing import Iterable, Sequence, Tuple

import numpy as np
import pandas as pd

from analytics.categorisation import prepare_expenses, snapshot_transactions
from core.logging_setup import get_logger
from core.models import ForecastResult, MonthBucket, MonthlyForecast, Transaction

__all__ = [
    "NO_DATA_REASON",
    "group_by_month",
    "fill_missing_months",
    "fit_linear_trend",
    "forecast_next_month",
]

logger = get_logger("budgettrack.forecasting")

NO_DATA_REASON = "No transaction data available for forecasting."
_RELATIVE_TOLERANCE = 1e-12


def _insufficient_months_reason(min_months: int) -> str:
    return f"At least {min_months} months of transaction data are required for forecasting."


def group_by_month(transactions: Sequence[Transaction]) -> list[MonthBucket]:
    """Sum expenses per calendar month, oldest month first.

    Each transaction is keyed by the year and month written in its own date.
    Expenses whose date does not parse are dropped with a warning.
    """

    expenses = prepare_expenses(transactions)
    if expenses.empty:
        return []

    undated = ~expenses["has_date"].astype(bool)
    for raw_date in expenses.loc[undated, "raw_date"]:
        logger.warning("Invalid date %r; expense left out of monthly history", raw_date)

    dated = expenses.loc[~undated]
    if dated.empty:
        return []

    totals = dated.groupby(["year", "month"])["amount"].sum().sort_index()
    buckets = [
        MonthBucket(date=pd.Timestamp(year=int(year), month=int(month), day=1), total=float(total))
        for (year, month), total in totals.items()
    ]
    logger.debug(
        "Grouped expenses by month: %s",
        [(bucket.label, bucket.total) for bucket in buckets],
    )
    return buckets


def fill_missing_months(buckets: Sequence[MonthBucket]) -> list[MonthBucket]:
    """Return a contiguous month-by-month history with zero-total fillers."""

    if len(buckets) < 2:
        return list(buckets)

    ordered = sorted(buckets, key=lambda bucket: bucket.date)
    existing = {bucket.date.to_period("M"): bucket for bucket in ordered}
    months = pd.period_range(
        ordered[0].date.to_period("M"),
        ordered[-1].date.to_period("M"),
        freq="M",
    )

    filled: list[MonthBucket] = []
    for period in months:
        bucket = existing.get(period)
        if bucket is None:
            bucket = MonthBucket(date=period.to_timestamp(how="start"), total=0.0, is_filler=True)
        filled.append(bucket)
    return filled


def fit_linear_trend(values: Iterable[float]) -> Tuple[float, float, float]:
    """Fit ``y = slope * index + intercept`` by ordinary least squares.

    Returns
    -------
    tuple[float, float, float]
        ``(slope, intercept, r_squared)``. When the values have no variance the
        coefficient of determination is ``1.0`` for an exact fit and ``0.0``
        otherwise.
    """

    y = np.asarray(list(values), dtype=float)
    n = int(y.size)
    if n < 2:
        raise ValueError("At least two points are required to fit a trend")

    x = np.arange(n, dtype=float)
    sum_x = float(x.sum())
    sum_y = float(y.sum())
    sum_xy = float((x * y).sum())
    sum_xx = float((x * x).sum())

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x**2)
    intercept = (sum_y - slope * sum_x) / n

    fitted = intercept + slope * x
    ss_res = float(np.sum((y - fitted) ** 2))
    ss_tot = float(np.sum((y - y.mean()) ** 2))

    # Rounding noise scales with the magnitude of the totals
    tolerance = _RELATIVE_TOLERANCE * float(np.sum(y * y))
    if ss_tot <= tolerance:
        r_squared = 1.0 if ss_res <= tolerance else 0.0
    else:
        r_squared = 1.0 - ss_res / ss_tot

    return float(slope), float(intercept), float(r_squared)


def forecast_next_month(
    transactions: Iterable[Transaction],
    *,
    min_months: int = 2,
) -> MonthlyForecast:
    """Build the filled monthly history and forecast the following month.

    Parameters
    ----------
    transactions:
        Snapshot of the user's transactions. Income is ignored.
    min_months:
        Minimum number of months in the filled history before a trend is
        fitted. Values below two are raised to two.

    Returns
    -------
    MonthlyForecast
        ``forecast`` is ``None`` and ``insufficient_data_reason`` is set when
        there is not enough history; otherwise the prediction is clamped at
        zero and targets the month after the last observed month.
    """

    snapshot = snapshot_transactions(transactions)
    if not snapshot:
        return MonthlyForecast(history=[], insufficient_data_reason=NO_DATA_REASON)

    required = max(int(min_months), 2)
    history = fill_missing_months(group_by_month(snapshot))
    if len(history) < required:
        return MonthlyForecast(
            history=history,
            insufficient_data_reason=_insufficient_months_reason(required),
        )

    slope, intercept, r_squared = fit_linear_trend(bucket.total for bucket in history)
    predicted = intercept + slope * len(history)
    target_month = history[-1].date + pd.DateOffset(months=1)

    forecast = ForecastResult(
        target_month=pd.Timestamp(target_month),
        predicted_amount=max(0.0, float(predicted)),
        slope=slope,
        intercept=intercept,
        r_squared=r_squared,
    )
    logger.debug(
        "Forecast for %s: %.2f (slope=%.4f, intercept=%.4f, r2=%.4f)",
        forecast.target_label,
        forecast.predicted_amount,
        slope,
        intercept,
        r_squared,
    )
    return MonthlyForecast(history=history, forecast=forecast)
