"""Shared Plotly theme tokens for BudgetTrack visualizations."""

from __future__ import annotations

from dataclasses import dataclass, field


def _default_category_colors() -> dict[str, str]:
    return {
        "Groceries": "rgba(255, 99, 132, 0.8)",
        "Transport": "rgba(54, 162, 235, 0.8)",
        "Entertainment": "rgba(255, 206, 86, 0.8)",
        "Rent": "rgba(75, 192, 192, 0.8)",
        "Utilities": "rgba(153, 102, 255, 0.8)",
        "Other": "rgba(255, 159, 64, 0.8)",
    }


@dataclass(frozen=True)
class ThemeTokens:
    month_format: str = "%b %Y"
    label_color: str = "#475569"
    label_font: str = "Inter"
    label_size: int = 12
    grid_color: str = "#EEF2FF"
    history_color: str = "rgb(75, 192, 192)"
    history_fill: str = "rgba(75, 192, 192, 0.2)"
    forecast_color: str = "rgb(255, 99, 132)"
    filler_color: str = "#94A3B8"
    neutral_grey: str = "#94A3B8"
    neutral_white: str = "#FFFFFF"
    fallback_category_color: str = "rgba(128, 128, 128, 0.8)"
    category_colors: dict[str, str] = field(default_factory=_default_category_colors)

    def category_color(self, category: str) -> str:
        return self.category_colors.get(category, self.fallback_category_color)


_TOKENS = ThemeTokens()


def theme_tokens() -> ThemeTokens:
    """Return the shared visualization tokens."""

    return _TOKENS
