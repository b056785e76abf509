"""Synthetic demo data for BudgetTrack."""

from .synth import generate_demo_transactions, seed_store

__all__ = ["generate_demo_transactions", "seed_store"]
