"""Visualization utilities for BudgetTrack dashboards."""

from .charts import (
    build_category_chart,
    build_category_frame,
    build_forecast_chart,
    build_history_frame,
)
from .theme import theme_tokens

__all__ = [
    "build_category_chart",
    "build_category_frame",
    "build_forecast_chart",
    "build_history_frame",
    "theme_tokens",
]
