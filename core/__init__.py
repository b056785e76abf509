"""Core domain package for the BudgetTrack application."""

from .logging_setup import configure_logging, get_logger
from .models import (
    DEFAULT_CATEGORY,
    SUGGESTED_CATEGORIES,
    BudgetOverview,
    CategorySummary,
    ForecastResult,
    MonthBucket,
    MonthlyForecast,
    RecurrenceGroup,
    RecurrenceReport,
    Transaction,
    TransactionDraft,
    TransactionType,
)
from .parsing import parse_amount, parse_transaction_date
from .store import (
    InMemoryTransactionStore,
    JsonFileTransactionStore,
    StoreError,
    TransactionNotFoundError,
    TransactionStore,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "DEFAULT_CATEGORY",
    "SUGGESTED_CATEGORIES",
    "BudgetOverview",
    "CategorySummary",
    "ForecastResult",
    "MonthBucket",
    "MonthlyForecast",
    "RecurrenceGroup",
    "RecurrenceReport",
    "Transaction",
    "TransactionDraft",
    "TransactionType",
    "parse_amount",
    "parse_transaction_date",
    "InMemoryTransactionStore",
    "JsonFileTransactionStore",
    "StoreError",
    "TransactionNotFoundError",
    "TransactionStore",
]
