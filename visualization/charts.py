"""Plotly chart builders for the BudgetTrack dashboard."""

from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go

from core.models import CategorySummary, MonthlyForecast

from .theme import theme_tokens

TOKENS = theme_tokens()

__all__ = [
    "build_category_frame",
    "build_history_frame",
    "build_category_chart",
    "build_forecast_chart",
]


def _empty_plotly_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        annotations=[
            dict(
                text=message,
                x=0.5,
                y=0.5,
                xref="paper",
                yref="paper",
                showarrow=False,
                font=dict(color=TOKENS.neutral_grey, size=14, family=TOKENS.label_font),
            )
        ],
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        margin=dict(l=0, r=0, t=20, b=0),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def build_category_frame(summary: CategorySummary) -> pd.DataFrame:
    """Return category totals and shares, largest spend first."""

    rows = [
        {"Category": category, "Total": total, "Share": summary.share(category)}
        for category, total in summary.sorted_totals()
    ]
    return pd.DataFrame(rows, columns=["Category", "Total", "Share"])


def build_history_frame(forecast: MonthlyForecast) -> pd.DataFrame:
    """Return the monthly history plus the forecast point, one row per month."""

    rows: list[dict[str, object]] = [
        {
            "Month": bucket.date,
            "Label": bucket.label,
            "Total": bucket.total,
            "Series": "Filled" if bucket.is_filler else "Historical",
        }
        for bucket in forecast.history
    ]
    if forecast.forecast is not None:
        rows.append(
            {
                "Month": forecast.forecast.target_month,
                "Label": forecast.forecast.target_label,
                "Total": forecast.forecast.predicted_amount,
                "Series": "Forecast",
            }
        )
    return pd.DataFrame(rows, columns=["Month", "Label", "Total", "Series"])


def build_category_chart(summary: CategorySummary, currency_symbol: str = "$") -> go.Figure:
    """Render a doughnut chart of spending per category."""

    data = build_category_frame(summary)
    if data.empty:
        return _empty_plotly_figure("No transaction data available")

    fig = go.Figure(
        go.Pie(
            labels=data["Category"],
            values=data["Total"],
            hole=0.55,
            sort=False,
            marker=dict(
                colors=[TOKENS.category_color(category) for category in data["Category"]],
                line=dict(color=TOKENS.neutral_white, width=2),
            ),
            texttemplate="%{label}<br>%{percent:.1%}",
            textposition="inside",
            hovertemplate=f"%{{label}}<br>Spend: {currency_symbol}%{{value:,.2f}}<br>%{{percent:.1%}}<extra></extra>",
        )
    )
    fig.update_layout(
        margin=dict(l=0, r=0, t=0, b=0),
        legend=dict(
            title="",
            orientation="v",
            yanchor="middle",
            y=0.5,
            xanchor="left",
            x=1.05,
            font=dict(color=TOKENS.label_color, family=TOKENS.label_font, size=TOKENS.label_size),
        ),
        showlegend=True,
    )
    return fig


def build_forecast_chart(forecast: MonthlyForecast, currency_symbol: str = "$") -> go.Figure:
    """Render historical monthly expenses with the forecast month highlighted."""

    data = build_history_frame(forecast)
    if data.empty:
        return _empty_plotly_figure("No monthly history yet.")

    hover_template = f"%{{x|{TOKENS.month_format}}}<br>{currency_symbol}%{{y:,.2f}}<extra></extra>"
    history = data[data["Series"] != "Forecast"]

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=history["Month"],
            y=history["Total"],
            mode="lines+markers",
            name="Historical Expenses",
            line=dict(color=TOKENS.history_color, width=2),
            marker=dict(
                size=7,
                color=[
                    TOKENS.filler_color if series == "Filled" else TOKENS.history_color
                    for series in history["Series"]
                ],
            ),
            fill="tozeroy",
            fillcolor=TOKENS.history_fill,
            hovertemplate=hover_template,
        )
    )

    predicted = data[data["Series"] == "Forecast"]
    if not predicted.empty:
        fig.add_trace(
            go.Scatter(
                x=predicted["Month"],
                y=predicted["Total"],
                mode="markers",
                name="Forecast",
                marker=dict(size=12, color=TOKENS.forecast_color, line=dict(color=TOKENS.neutral_white, width=2)),
                hovertemplate=hover_template,
            )
        )

    fig.update_layout(
        margin=dict(l=0, r=0, t=20, b=0),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="left", x=0),
        xaxis=dict(tickformat=TOKENS.month_format, showgrid=False),
        yaxis=dict(rangemode="tozero", gridcolor=TOKENS.grid_color, tickprefix=currency_symbol),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig
