"""Shared layout primitives for the BudgetTrack Streamlit app."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable

import streamlit as st


@dataclass(frozen=True)
class NavigationLink:
    slug: str
    label: str
    enabled: bool = True


NAV_LINKS: tuple[NavigationLink, ...] = (
    NavigationLink("dashboard", "Dashboard"),
    NavigationLink("transactions", "Transactions"),
    NavigationLink("forecast", "Forecast"),
    NavigationLink("recurring", "Recurring"),
)

DEFAULT_PAGE = "dashboard"


def inject_css() -> None:
    """Inject global CSS tokens and card styling into the Streamlit app."""

    st.markdown(
        """
        <style>
          :root {
            --gap: 16px;
            --radius: 12px;
            --card-bg: #FFFFFF;
            --border: #E6EAF2;
            --shadow: 0 1px 2px rgba(16, 24, 40, 0.05), 0 1px 3px rgba(16, 24, 40, 0.06);
          }

          body, [data-testid="stAppViewContainer"] > .main {
            background: #F9FAFB;
          }

          .block-container {
            max-width: 1100px;
            padding-top: 2.5rem;
            padding-bottom: 4rem;
          }

          .bt-nav {
            display: flex;
            align-items: center;
            justify-content: space-between;
            gap: 2rem;
            padding: 0.9rem 0;
          }

          .bt-nav__brand {
            font-size: 1.4rem;
            font-weight: 700;
            color: #111827;
          }

          .bt-nav__links {
            display: flex;
            align-items: center;
            gap: 1.6rem;
          }

          .bt-nav__link,
          .bt-nav__link:visited {
            font-weight: 600;
            color: #5C6478;
            text-decoration: none;
          }

          .bt-nav__link.is-active {
            color: #1D4ED8;
            border-bottom: 3px solid #1D4ED8;
          }

          .bt-card-anchor {
            display: none;
          }

          [data-testid="stVerticalBlock"]:has(> .bt-card-anchor) {
            background: var(--card-bg);
            border: 1px solid var(--border);
            border-radius: var(--radius);
            box-shadow: var(--shadow);
            padding: 16px;
            margin-bottom: var(--gap);
          }

          .bt-card__head {
            display: flex;
            align-items: center;
            justify-content: space-between;
            font-weight: 600;
            color: #111827;
          }

          .bt-chip {
            font-size: 12px;
            padding: 2px 8px;
            border-radius: 999px;
            border: 1px solid #D6DEFF;
            background: #F0F4FF;
            color: #3346FF;
          }

          .bt-chip.is-muted {
            border-color: #E5E7EB;
            background: #F9FAFB;
            color: #6B7280;
          }
        </style>
        """,
        unsafe_allow_html=True,
    )


@contextmanager
def card(title: str, suffix: str | None = None, muted: bool = False):
    """Render content inside a reusable BudgetTrack card."""

    chip_class = "bt-chip is-muted" if muted else "bt-chip"
    chip_html = f'<span class="{chip_class}">{suffix}</span>' if suffix else ""
    container = st.container()
    with container:
        st.markdown('<div class="bt-card-anchor"></div>', unsafe_allow_html=True)
        st.markdown(
            f'<div class="bt-card__head"><span>{title}</span>{chip_html}</div>',
            unsafe_allow_html=True,
        )
        yield


def render_navbar(active_page: str) -> None:
    """Render the navigation bar with active state."""

    link_markup: list[str] = []
    for link in NAV_LINKS:
        if not link.enabled:
            continue
        css_class = "bt-nav__link"
        aria_current = ""
        if link.slug == active_page:
            css_class += " is-active"
            aria_current = ' aria-current="page"'
        link_markup.append(
            f'<a class="{css_class}" href="?page={link.slug}"{aria_current} target="_self">{link.label}</a>'
        )

    st.markdown(
        f"""
        <nav class="bt-nav">
            <div class="bt-nav__brand">Budget Tracker</div>
            <div class="bt-nav__links">{''.join(link_markup)}</div>
        </nav>
        """,
        unsafe_allow_html=True,
    )


def determine_active_page(valid_pages: Iterable[str]) -> str:
    """Determine the active page from the query params or session state."""

    params = st.query_params
    default_page = st.session_state.get("active_page", DEFAULT_PAGE)
    raw_page = params.get("page", default_page)
    if isinstance(raw_page, list):
        raw_page = raw_page[0]

    page = raw_page if raw_page in set(valid_pages) else DEFAULT_PAGE
    if st.session_state.get("active_page") != page:
        st.session_state["active_page"] = page

    if params.get("page") != page:
        st.query_params["page"] = page
    return page


__all__ = [
    "NavigationLink",
    "NAV_LINKS",
    "DEFAULT_PAGE",
    "card",
    "determine_active_page",
    "inject_css",
    "render_navbar",
]
