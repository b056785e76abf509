"""Expense preparation and per-category aggregation."""

from __future__ import annotations

from typing import Iterable, Sequence

import pandas as pd

from core.models import CategorySummary, Transaction
from core.parsing import parse_amount, parse_transaction_date

__all__ = [
    "EXPENSE_COLUMNS",
    "snapshot_transactions",
    "prepare_expenses",
    "summarize_by_category",
]

EXPENSE_COLUMNS = (
    "position",
    "id",
    "category",
    "amount",
    "raw_date",
    "has_date",
    "year",
    "month",
    "day",
)


def snapshot_transactions(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Materialise the caller's transactions into a private list."""

    if transactions is None:
        raise TypeError("transactions must be a sequence of Transaction, not None")
    return list(transactions)


def prepare_expenses(transactions: Sequence[Transaction]) -> pd.DataFrame:
    """Return one row per expense transaction with parsed amount and date parts.

    ``position`` is the transaction's index in ``transactions`` so callers can
    map rows back to the original objects. Rows whose date failed to parse keep
    ``has_date=False`` and zeroed date parts.
    """

    rows: list[dict[str, object]] = []
    for position, transaction in enumerate(transactions):
        if transaction.is_income:
            continue

        parsed = parse_transaction_date(transaction.date)
        rows.append(
            {
                "position": position,
                "id": transaction.id,
                "category": transaction.resolved_category,
                "amount": parse_amount(transaction.amount),
                "raw_date": transaction.date,
                "has_date": parsed is not None,
                "year": parsed.year if parsed is not None else 0,
                "month": parsed.month if parsed is not None else 0,
                "day": parsed.day if parsed is not None else 0,
            }
        )

    frame = pd.DataFrame(rows, columns=list(EXPENSE_COLUMNS))
    frame["amount"] = frame["amount"].astype(float)
    return frame


def summarize_by_category(transactions: Iterable[Transaction]) -> CategorySummary:
    """Sum expense amounts per category.

    Income is skipped, missing categories count as ``"Other"`` and amounts that
    fail to parse count as zero. Empty or income-only input yields an empty
    mapping with a zero total.
    """

    snapshot = snapshot_transactions(transactions)
    expenses = prepare_expenses(snapshot)
    if expenses.empty:
        return CategorySummary(category_totals={}, total_spending=0.0)

    totals = expenses.groupby("category", sort=False)["amount"].sum()
    category_totals = {str(category): float(total) for category, total in totals.items()}
    return CategorySummary(
        category_totals=category_totals,
        total_spending=float(expenses["amount"].sum()),
    )
