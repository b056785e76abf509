"""Shared data model definitions for BudgetTrack."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Mapping, Optional

import pandas as pd

DEFAULT_CATEGORY = "Other"


class TransactionType(str, Enum):
    EXPENSE = "expense"
    INCOME = "income"


SUGGESTED_CATEGORIES: dict[str, tuple[str, ...]] = {
    TransactionType.EXPENSE.value: ("Groceries", "Transport", "Entertainment", "Rent", "Utilities", "Other"),
    TransactionType.INCOME.value: ("Salary", "Freelance", "Investments", "Gifts", "Refunds", "Other"),
}


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


@dataclass(frozen=True)
class TransactionDraft:
    """User-editable transaction fields, as submitted from a form."""

    amount: Any
    type: str = TransactionType.EXPENSE.value
    category: Optional[str] = DEFAULT_CATEGORY
    date: str = field(default_factory=lambda: date.today().isoformat())
    description: str = ""

    def to_fields(self) -> dict[str, Any]:
        return {
            "amount": self.amount,
            "type": _plain(self.type),
            "category": self.category,
            "date": self.date,
            "description": self.description or "",
        }


@dataclass(frozen=True)
class Transaction:
    """A single logged transaction.

    ``amount`` and ``date`` hold the values as they were stored. Analytics read
    them through :func:`core.parsing.parse_amount` and
    :func:`core.parsing.parse_transaction_date` so dirty records degrade to
    zero amounts or missing dates instead of raising.
    """

    id: str
    amount: Any
    type: str = TransactionType.EXPENSE.value
    category: Optional[str] = DEFAULT_CATEGORY
    date: Any = ""
    description: str = ""
    user_id: Optional[str] = None
    created_at: Optional[str] = None

    @property
    def is_income(self) -> bool:
        return _plain(self.type) == TransactionType.INCOME.value

    @property
    def resolved_category(self) -> str:
        if self.category is None:
            return DEFAULT_CATEGORY
        label = str(self.category)
        return label if label else DEFAULT_CATEGORY

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Transaction":
        """Build a transaction from its stored JSON record."""

        return cls(
            id=str(record.get("id", "")),
            amount=record.get("amount"),
            type=record.get("type") or TransactionType.EXPENSE.value,
            category=record.get("category"),
            date=record.get("date", ""),
            description=record.get("description") or "",
            user_id=record.get("userId"),
            created_at=record.get("createdAt"),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "amount": self.amount,
            "type": _plain(self.type),
            "category": self.category,
            "date": self.date,
            "description": self.description,
            "userId": self.user_id,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class CategorySummary:
    category_totals: dict[str, float]
    total_spending: float

    def sorted_totals(self) -> list[tuple[str, float]]:
        """Return ``(category, total)`` pairs, largest spend first."""

        return sorted(self.category_totals.items(), key=lambda item: (-item[1], item[0]))

    def share(self, category: str) -> float:
        if self.total_spending <= 0:
            return 0.0
        return self.category_totals.get(category, 0.0) / self.total_spending


@dataclass(frozen=True)
class MonthBucket:
    date: pd.Timestamp
    total: float
    is_filler: bool = False

    @property
    def label(self) -> str:
        return self.date.strftime("%B %Y")


@dataclass(frozen=True)
class ForecastResult:
    target_month: pd.Timestamp
    predicted_amount: float
    slope: float
    intercept: float
    r_squared: float

    @property
    def target_label(self) -> str:
        return self.target_month.strftime("%B %Y")


@dataclass(frozen=True)
class MonthlyForecast:
    history: list[MonthBucket]
    forecast: Optional[ForecastResult] = None
    insufficient_data_reason: Optional[str] = None

    @property
    def is_available(self) -> bool:
        return self.forecast is not None


@dataclass(frozen=True)
class RecurrenceGroup:
    category: str
    rounded_amount: int
    average_amount: float
    mean_day: float
    is_recurring: bool
    members: tuple[Transaction, ...]

    @property
    def label(self) -> str:
        return "Recurring" if self.is_recurring else "Similar"


@dataclass(frozen=True)
class RecurrenceReport:
    groups: list[RecurrenceGroup]
    insufficient_data_reason: Optional[str] = None

    @property
    def recurring_groups(self) -> list[RecurrenceGroup]:
        return [group for group in self.groups if group.is_recurring]


@dataclass(frozen=True)
class BudgetOverview:
    category_summary: CategorySummary
    monthly_forecast: MonthlyForecast
    recurrence: RecurrenceReport
    transaction_count: int


__all__ = [
    "DEFAULT_CATEGORY",
    "SUGGESTED_CATEGORIES",
    "TransactionType",
    "TransactionDraft",
    "Transaction",
    "CategorySummary",
    "MonthBucket",
    "ForecastResult",
    "MonthlyForecast",
    "RecurrenceGroup",
    "RecurrenceReport",
    "BudgetOverview",
]
