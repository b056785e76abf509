"""Dashboard page: category breakdown and headline numbers."""

from __future__ import annotations

import pandas as pd
import streamlit as st

from app.layout import card
from config import Settings
from core import BudgetOverview, CategorySummary
from visualization import build_category_chart, build_category_frame


def _render_headline(overview: BudgetOverview, currency: str) -> None:
    summary = overview.category_summary
    forecast = overview.monthly_forecast.forecast
    recurring = overview.recurrence.recurring_groups

    cols = st.columns(3)
    cols[0].metric("Total spending", f"{currency}{summary.total_spending:,.2f}")
    if forecast is not None:
        cols[1].metric(f"Forecast for {forecast.target_label}", f"{currency}{forecast.predicted_amount:,.2f}")
    else:
        cols[1].metric("Next month forecast", "n/a")
    cols[2].metric("Recurring payments", str(len(recurring)))
    st.caption(f"{overview.transaction_count} transactions · refreshed {pd.Timestamp.today():%d %b %Y}")


def _render_category_card(summary: CategorySummary, currency: str) -> None:
    if not summary.category_totals:
        st.info("No transaction data available")
        return

    chart = build_category_chart(summary, currency_symbol=currency)
    st.plotly_chart(chart, use_container_width=True, key="category-donut")

    table = build_category_frame(summary)
    st.dataframe(
        table,
        hide_index=True,
        use_container_width=True,
        column_config={
            "Total": st.column_config.NumberColumn(format=f"{currency}%.2f"),
            "Share": st.column_config.ProgressColumn(min_value=0.0, max_value=1.0, format="%.2f"),
        },
    )


def render_page(overview: BudgetOverview, settings: Settings) -> None:
    """Render the dashboard page."""

    currency = settings.currency_symbol
    st.title("Dashboard")
    with card("At a glance"):
        _render_headline(overview, currency)
    with card(
        "Spending by Category",
        suffix=f"Total spending: {currency}{overview.category_summary.total_spending:,.2f}",
    ):
        _render_category_card(overview.category_summary, currency)


__all__ = ["render_page"]
