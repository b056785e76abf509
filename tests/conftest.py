"""Shared fixtures for the BudgetTrack test-suite."""

from __future__ import annotations

import itertools
import sys
from pathlib import Path

import pytest
import streamlit as st

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.models import Transaction  # noqa: E402


@pytest.fixture(autouse=True)
def clear_streamlit_secrets(monkeypatch):
    """Provide an empty secrets mapping so tests don't rely on Streamlit runtime."""

    monkeypatch.setattr(st, "secrets", {}, raising=False)


@pytest.fixture()
def make_txn():
    """Return a factory building expense transactions with sequential ids."""

    counter = itertools.count(1)

    def factory(amount, date, category="Other", type="expense", description=""):
        return Transaction(
            id=f"t{next(counter)}",
            amount=amount,
            type=type,
            category=category,
            date=date,
            description=description,
        )

    return factory


@pytest.fixture()
def mixed_transactions(make_txn) -> list[Transaction]:
    return [
        make_txn(40, "2023-12-10", "Groceries"),
        make_txn(50, "2024-01-01", "Groceries"),
        make_txn("30.00", "2024-01-02", "Transport"),
        make_txn(20, "2024-01-03", "Entertainment"),
        make_txn(20, "2024-01-04", None),
        make_txn(2000, "2024-01-05", "Salary", type="income"),
    ]
