"""Streamlit application package for BudgetTrack."""

from .main import main

__all__ = ["main"]
