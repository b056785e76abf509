"""Recurring payment detection helpers."""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np

from analytics.categorisation import prepare_expenses, snapshot_transactions
from core.logging_setup import get_logger
from core.models import RecurrenceGroup, RecurrenceReport, Transaction
from core.parsing import parse_transaction_date

__all__ = [
    "day_of_month",
    "detect_recurring",
]

logger = get_logger("budgettrack.recurring")


def day_of_month(transaction: Transaction) -> int:
    """Return the 1-31 day of the transaction date, or ``1`` when it is invalid."""

    parsed = parse_transaction_date(transaction.date)
    if parsed is None:
        logger.error("Error parsing date %r for transaction %s; using day 1", transaction.date, transaction.id)
        return 1
    return int(parsed.day)


def detect_recurring(
    transactions: Iterable[Transaction],
    *,
    min_transactions: int = 6,
    day_window: float = 3,
) -> RecurrenceReport:
    """Group expenses by category and rounded amount, flagging recurring ones.

    Parameters
    ----------
    transactions:
        Snapshot of the user's transactions.
    min_transactions:
        Minimum number of transactions, and separately of expense
        transactions, required before any grouping happens.
    day_window:
        Maximum distance, in days, between each member's day of month and the
        group's mean day for the group to count as recurring.

    Returns
    -------
    RecurrenceReport
        Groups of two or more expenses in first-seen order, each keeping its
        members in their original order. When the preconditions fail the
        report has no groups and carries an insufficient-data reason.
    """

    snapshot = snapshot_transactions(transactions)
    if len(snapshot) < min_transactions:
        return RecurrenceReport(
            groups=[],
            insufficient_data_reason=(
                f"At least {min_transactions} transactions are required for recurring transaction analysis."
            ),
        )

    expenses = prepare_expenses(snapshot)
    if len(expenses) < min_transactions:
        return RecurrenceReport(
            groups=[],
            insufficient_data_reason=(
                f"At least {min_transactions} expense transactions are required for "
                "recurring transaction analysis."
            ),
        )

    # Round half up so 12.5 and 13.49 share a key
    expenses["rounded_amount"] = [math.floor(amount + 0.5) for amount in expenses["amount"]]

    groups: list[RecurrenceGroup] = []
    for (category, rounded_amount), group_df in expenses.groupby(["category", "rounded_amount"], sort=False):
        if len(group_df) < 2:
            continue

        members = tuple(snapshot[int(position)] for position in group_df["position"])
        days = np.array([day_of_month(member) for member in members], dtype=float)
        mean_day = float(days.mean())
        is_recurring = bool(np.all(np.abs(days - mean_day) <= day_window))

        groups.append(
            RecurrenceGroup(
                category=str(category),
                rounded_amount=int(rounded_amount),
                average_amount=float(group_df["amount"].mean()),
                mean_day=mean_day,
                is_recurring=is_recurring,
                members=members,
            )
        )

    logger.debug(
        "Found %d candidate groups (%d recurring)",
        len(groups),
        sum(1 for group in groups if group.is_recurring),
    )
    return RecurrenceReport(groups=groups)
