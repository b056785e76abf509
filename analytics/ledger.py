"""Date grouping for the transaction ledger view."""

from __future__ import annotations

from typing import Iterable, TypedDict

from analytics.categorisation import snapshot_transactions
from core.models import Transaction
from core.parsing import parse_transaction_date

__all__ = ["LedgerDay", "group_by_date"]


class LedgerDay(TypedDict):
    date: str
    transactions: list[Transaction]


def group_by_date(transactions: Iterable[Transaction]) -> list[LedgerDay]:
    """Group transactions sharing a date, newest date first.

    Dates that fail to parse are listed after every valid date.
    """

    grouped: dict[str, list[Transaction]] = {}
    for transaction in snapshot_transactions(transactions):
        grouped.setdefault(str(transaction.date), []).append(transaction)

    def sort_key(date_key: str) -> tuple[int, float]:
        parsed = parse_transaction_date(date_key)
        if parsed is None:
            return (1, 0.0)
        return (0, -parsed.timestamp())

    return [
        {"date": date_key, "transactions": grouped[date_key]}
        for date_key in sorted(grouped, key=sort_key)
    ]
