"""Synthetic personal budget generator for BudgetTrack demos and tests.

Produces a few months of household transactions with a realistic mix of
fixed monthly bills (rent, utilities, streaming), noisy day-to-day spend
(groceries, transport, entertainment) and a monthly salary.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence, Tuple, TypeVar

import numpy as np

from core.models import Transaction, TransactionDraft, TransactionType
from core.store import TransactionStore

T = TypeVar("T")


@dataclass(frozen=True)
class FixedBill:
    """A charge that lands on roughly the same day every month."""

    category: str
    description: str
    amount: float
    day: int
    day_jitter: int = 0


FIXED_BILLS: Tuple[FixedBill, ...] = (
    FixedBill("Rent", "Oakwood Estates rent", 1450.0, day=1),
    FixedBill("Utilities", "City Power & Light", 86.0, day=14, day_jitter=1),
    FixedBill("Utilities", "Fibre broadband", 45.0, day=22),
    FixedBill("Entertainment", "Streaming subscription", 15.99, day=9),
)

GROCERY_STORES: Sequence[str] = ("Fresh Market", "Corner Grocer", "Wholesale Club", "Farmers market")
TRANSPORT_VENDORS: Sequence[str] = ("Metro card top-up", "Ride share", "Fuel station", "Parking")
ENTERTAINMENT_VENDORS: Sequence[str] = ("Cinema", "Concert tickets", "Bowling", "Book shop")
INCOME_SOURCES: Sequence[Tuple[str, str]] = (("Salary", "Monthly salary"), ("Freelance", "Freelance invoice"))


def generate_demo_transactions(
    months: int = 6,
    *,
    end_date: date | datetime | str | None = None,
    seed: Optional[int] = None,
) -> List[Transaction]:
    """Generate ``months`` complete months of transactions ending at ``end_date``.

    The last generated month is the month before ``end_date`` (today by
    default), so every month in the ledger is complete.
    """

    if months < 1:
        raise ValueError("months must be at least 1")

    rng = np.random.default_rng(seed)
    anchor = _month_floor(_normalize_date(end_date) if end_date is not None else date.today())
    first_month = _add_months(anchor, -months)

    records: List[Tuple[date, str, float, str, str]] = []
    for offset in range(months):
        month_start = _add_months(first_month, offset)
        year, month = month_start.year, month_start.month
        month_dates = _month_date_range(year, month)

        salary = round(float(rng.normal(3200, 60)), 2)
        records.append((_clamp_day(year, month, 1), TransactionType.INCOME.value, salary, *INCOME_SOURCES[0]))
        if rng.random() < 0.3:
            source = INCOME_SOURCES[1]
            payout = round(float(rng.uniform(250, 600)), 2)
            records.append((_rng_choice(month_dates, rng), TransactionType.INCOME.value, payout, *source))

        for bill in FIXED_BILLS:
            jitter = int(rng.integers(-bill.day_jitter, bill.day_jitter + 1)) if bill.day_jitter else 0
            bill_date = _clamp_day(year, month, bill.day + jitter)
            records.append((bill_date, TransactionType.EXPENSE.value, bill.amount, bill.category, bill.description))

        for _ in range(int(rng.integers(4, 7))):
            amount = round(abs(float(rng.normal(68, 22))), 2)
            records.append(
                (_rng_choice(month_dates, rng), TransactionType.EXPENSE.value, amount, "Groceries", _rng_choice(GROCERY_STORES, rng))
            )

        for _ in range(int(rng.integers(3, 8))):
            amount = round(float(rng.uniform(3.5, 42.0)), 2)
            records.append(
                (_rng_choice(month_dates, rng), TransactionType.EXPENSE.value, amount, "Transport", _rng_choice(TRANSPORT_VENDORS, rng))
            )

        if rng.random() < 0.6:
            amount = round(float(rng.uniform(18, 120)), 2)
            records.append(
                (
                    _rng_choice(month_dates, rng),
                    TransactionType.EXPENSE.value,
                    amount,
                    "Entertainment",
                    _rng_choice(ENTERTAINMENT_VENDORS, rng),
                )
            )

    records.sort(key=lambda record: record[0])
    return [
        Transaction(
            id=f"demo_{index:04d}",
            amount=amount,
            type=txn_type,
            category=category,
            date=txn_date.isoformat(),
            description=description,
        )
        for index, (txn_date, txn_type, amount, category, description) in enumerate(records, start=1)
    ]


def seed_store(
    store: TransactionStore,
    user_id: str,
    *,
    months: int = 6,
    seed: Optional[int] = None,
    end_date: date | datetime | str | None = None,
) -> List[Transaction]:
    """Generate demo data and add it to ``store`` for ``user_id``."""

    added: List[Transaction] = []
    for transaction in generate_demo_transactions(months, end_date=end_date, seed=seed):
        draft = TransactionDraft(
            amount=transaction.amount,
            type=transaction.type,
            category=transaction.category,
            date=transaction.date,
            description=transaction.description,
        )
        added.append(store.add_transaction(user_id, draft))
    return added


def _normalize_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value).date()
    raise TypeError(f"Unsupported date value: {value!r}")


def _add_months(anchor: date, months: int) -> date:
    month = anchor.month - 1 + months
    year = anchor.year + month // 12
    month = month % 12 + 1
    day = min(anchor.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _month_floor(moment: date) -> date:
    return moment.replace(day=1)


def _clamp_day(year: int, month: int, day: int) -> date:
    _, max_day = calendar.monthrange(year, month)
    return date(year, month, max(1, min(day, max_day)))


def _month_date_range(year: int, month: int) -> List[date]:
    start = date(year, month, 1)
    end = _add_months(start, 1) - timedelta(days=1)
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def _rng_choice(options: Sequence[T], rng: np.random.Generator) -> T:
    if not options:
        raise ValueError("Cannot choose from an empty sequence")
    idx = int(rng.integers(0, len(options)))
    return options[idx]
