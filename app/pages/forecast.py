"""Forecast page: monthly history and next-month prediction."""

from __future__ import annotations

import streamlit as st

from app.layout import card
from config import Settings
from core import MonthlyForecast
from visualization import build_forecast_chart


def render_page(monthly_forecast: MonthlyForecast, settings: Settings) -> None:
    """Render the budget forecast page."""

    currency = settings.currency_symbol
    st.title("Budget Forecast")
    st.caption("Predicted expenses for the next month based on your spending patterns")

    forecast = monthly_forecast.forecast
    if forecast is None:
        st.info(monthly_forecast.insufficient_data_reason or "Forecast unavailable.")
        return

    with card(f"Predicted Expenses for {forecast.target_label}", suffix="Linear trend"):
        st.metric("Predicted spend", f"{currency}{forecast.predicted_amount:,.2f}")
        st.caption(f"Based on your spending patterns from the last {len(monthly_forecast.history)} months")
        st.plotly_chart(
            build_forecast_chart(monthly_forecast, currency_symbol=currency),
            use_container_width=True,
            key="forecast-line",
        )

    left, right = st.columns(2)
    with left:
        with card("Regression Equation"):
            st.code(f"y = {forecast.slope:.2f}x + {forecast.intercept:.2f}", language=None)
    with right:
        with card("Confidence (R²)"):
            st.code(f"{forecast.r_squared * 100:.2f}%", language=None)


__all__ = ["render_page"]
