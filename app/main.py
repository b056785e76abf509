"""BudgetTrack Streamlit dashboard."""

from __future__ import annotations

import streamlit as st

from app.layout import NAV_LINKS, determine_active_page, inject_css, render_navbar
from app.pages import (
    render_dashboard_page,
    render_forecast_page,
    render_recurring_page,
    render_transactions_page,
)
from config import Settings, get_settings
from core import JsonFileTransactionStore, StoreError, configure_logging, get_logger
from core.summary_service import build_budget_overview
from data import seed_store

logger = get_logger("budgettrack.app")

DEFAULT_USER = "local-user"


@st.cache_resource(show_spinner=False)
def _get_store(data_dir: str) -> JsonFileTransactionStore:
    return JsonFileTransactionStore(data_dir)


def _render_sidebar(store: JsonFileTransactionStore, settings: Settings) -> str:
    """Render the user selector and demo data controls; return the active user id."""

    with st.sidebar:
        st.markdown("### Profile")
        user_id = st.text_input("User", value=st.session_state.get("user_id", DEFAULT_USER)).strip()
        user_id = user_id or DEFAULT_USER
        st.session_state["user_id"] = user_id
        st.caption(f"Data stored in {store.path_for(user_id)}")

        st.markdown("---")
        if st.button("Load demo data"):
            try:
                added = seed_store(store, user_id)
            except StoreError as exc:
                st.error(f"Could not load demo data: {exc}")
            else:
                logger.info("Seeded %d demo transactions for %s", len(added), user_id)
                st.rerun()
    return user_id


def main() -> None:
    """Application entrypoint for the BudgetTrack dashboard."""

    settings = get_settings()
    configure_logging(settings.log_level)

    st.set_page_config(
        page_title="Budget Tracker",
        page_icon="💰",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    inject_css()

    store = _get_store(str(settings.resolved_data_dir))
    active_page = determine_active_page([link.slug for link in NAV_LINKS if link.enabled])
    render_navbar(active_page)

    user_id = _render_sidebar(store, settings)
    transactions = store.list_transactions(user_id)
    overview = build_budget_overview(transactions, **settings.analytics_kwargs)

    if active_page == "transactions":
        render_transactions_page(transactions, store, user_id, settings)
    elif active_page == "forecast":
        render_forecast_page(overview.monthly_forecast, settings)
    elif active_page == "recurring":
        render_recurring_page(overview.recurrence, settings)
    else:
        render_dashboard_page(overview, settings)


if __name__ == "__main__":
    main()
