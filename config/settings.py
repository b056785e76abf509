"""Centralised configuration handling for BudgetTrack."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import streamlit as st
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATA_DIR = Path("~/.budgettrack")

_SECRET_KEYS = (
    "data_dir",
    "log_level",
    "currency_symbol",
    "forecast_min_months",
    "recurrence_min_transactions",
    "recurrence_day_window",
)


def _streamlit_section(name: str) -> Mapping[str, Any] | None:
    """Return a mapping from Streamlit secrets for the given section."""

    try:
        if hasattr(st, "secrets") and name in st.secrets:
            section = st.secrets[name]
            if isinstance(section, Mapping):
                return section
            return dict(section)
    except Exception:  # pragma: no cover - accessing secrets may fail outside a Streamlit run
        return None
    return None


class Settings(BaseSettings):
    """Application settings sourced from env vars and Streamlit secrets."""

    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = "INFO"
    currency_symbol: str = "$"
    forecast_min_months: int = Field(default=2, ge=2)
    recurrence_min_transactions: int = Field(default=6, ge=1)
    recurrence_day_window: float = Field(default=3.0, ge=0)

    model_config = SettingsConfigDict(env_prefix="BUDGETTRACK_", extra="ignore")

    @property
    def resolved_data_dir(self) -> Path:
        return self.data_dir.expanduser()

    @property
    def analytics_kwargs(self) -> dict[str, Any]:
        return {
            "forecast_min_months": self.forecast_min_months,
            "recurrence_min_transactions": self.recurrence_min_transactions,
            "recurrence_day_window": self.recurrence_day_window,
        }


@lru_cache
def get_settings() -> Settings:
    """Load and cache application settings."""

    overrides: dict[str, Any] = {}
    secrets_section = _streamlit_section("budgettrack")
    if secrets_section:
        overrides = {key: secrets_section.get(key) for key in _SECRET_KEYS}

    return Settings(**{k: v for k, v in overrides.items() if v is not None})
