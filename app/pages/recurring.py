"""Recurring payments page."""

from __future__ import annotations

import pandas as pd
import streamlit as st

from app.layout import card
from config import Settings
from core import RecurrenceGroup, RecurrenceReport


def _members_frame(group: RecurrenceGroup) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Date": member.date,
                "Description": member.description or "No description",
                "Amount": member.amount,
            }
            for member in group.members
        ],
        columns=["Date", "Description", "Amount"],
    )


def render_page(report: RecurrenceReport, settings: Settings) -> None:
    """Render the recurring transactions page."""

    currency = settings.currency_symbol
    st.title("Recurring Transactions")
    st.caption("Analysis to identify recurring spending patterns")

    if report.insufficient_data_reason:
        st.info(report.insufficient_data_reason)
        return

    if not report.groups:
        st.info("No recurring transactions found.")
        return

    for group in report.groups:
        with card(group.category, suffix=group.label, muted=not group.is_recurring):
            st.write(
                f"{len(group.members)} transactions · around day {group.mean_day:.0f} · "
                f"average {currency}{group.average_amount:,.2f}"
            )
            with st.expander("Show transactions", expanded=False):
                st.dataframe(
                    _members_frame(group),
                    hide_index=True,
                    use_container_width=True,
                )


__all__ = ["render_page"]
