"""Tolerant parsers for stored transaction values."""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any, Optional

import pandas as pd

__all__ = ["parse_amount", "parse_transaction_date"]


def parse_amount(value: Any) -> float:
    """Return the transaction magnitude as a finite, non-negative float.

    Anything that does not parse as a finite number (``None``, blank or
    non-numeric strings, ``NaN``, infinities, booleans) counts as ``0.0``.
    Negative values are read as their magnitude.
    """

    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0

    try:
        amount = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0

    if not math.isfinite(amount):
        return 0.0
    return abs(amount)


def parse_transaction_date(value: Any) -> Optional[pd.Timestamp]:
    """Parse an ISO 8601 transaction date, returning ``None`` when invalid.

    The calendar fields are taken as written: an offset such as ``+09:00`` is
    kept on the timestamp and never converted to another zone.
    """

    if value is None:
        return None

    if isinstance(value, (datetime, date)):
        parsed = pd.Timestamp(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        parsed = pd.to_datetime(text, format="ISO8601", errors="coerce")
    else:
        return None

    if pd.isna(parsed):
        return None
    return parsed
