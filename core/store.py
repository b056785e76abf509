"""Per-user transaction persistence behind the ``TransactionStore`` protocol."""

from __future__ import annotations

import json
import os
import re
import tempfile
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Optional, Protocol

from core.logging_setup import get_logger
from core.models import Transaction, TransactionDraft

__all__ = [
    "StoreError",
    "TransactionNotFoundError",
    "TransactionStore",
    "InMemoryTransactionStore",
    "JsonFileTransactionStore",
]

logger = get_logger("budgettrack.store")

_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w.-]")


class StoreError(RuntimeError):
    """Raised when transactions cannot be persisted."""


class TransactionNotFoundError(StoreError, KeyError):
    """Raised when updating a transaction id the user does not have."""


class TransactionStore(Protocol):
    def list_transactions(self, user_id: str) -> list[Transaction]: ...

    def add_transaction(self, user_id: str, draft: TransactionDraft) -> Transaction: ...

    def update_transaction(self, user_id: str, transaction_id: str, draft: TransactionDraft) -> Transaction: ...

    def delete_transaction(self, user_id: str, transaction_id: str) -> bool: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _require(value: Optional[str], name: str) -> str:
    if not value:
        raise ValueError(f"{name} is required")
    return value


class _RecordStore:
    """Shared add/update/delete logic over a per-user list of JSON records.

    Records are kept newest-added first. Subclasses provide ``_load`` and
    ``_save``. Each load-modify-save runs under one lock so a store shared by
    several Streamlit sessions does not lose writes.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._last_id_ms = 0
        self._lock = threading.RLock()

    def _load(self, user_id: str) -> list[dict[str, Any]]:
        raise NotImplementedError

    def _save(self, user_id: str, records: list[dict[str, Any]]) -> None:
        raise NotImplementedError

    def _next_id(self, existing: set[str]) -> str:
        millis = max(int(self._clock().timestamp() * 1000), self._last_id_ms + 1)
        while f"local_{millis}" in existing:
            millis += 1
        self._last_id_ms = millis
        return f"local_{millis}"

    def list_transactions(self, user_id: str) -> list[Transaction]:
        _require(user_id, "user_id")
        with self._lock:
            records = self._load(user_id)
        return [Transaction.from_record(record) for record in records]

    def add_transaction(self, user_id: str, draft: TransactionDraft) -> Transaction:
        _require(user_id, "user_id")
        with self._lock:
            records = self._load(user_id)
            record = {
                "id": self._next_id({str(existing.get("id")) for existing in records}),
                **draft.to_fields(),
                "userId": user_id,
                "createdAt": self._clock().isoformat(),
            }
            self._save(user_id, [record, *records])
        logger.info("Added transaction %s for user %s", record["id"], user_id)
        return Transaction.from_record(record)

    def update_transaction(self, user_id: str, transaction_id: str, draft: TransactionDraft) -> Transaction:
        _require(user_id, "user_id")
        _require(transaction_id, "transaction_id")
        with self._lock:
            records = self._load(user_id)

            updated: Optional[dict[str, Any]] = None
            for index, record in enumerate(records):
                if record.get("id") == transaction_id:
                    updated = {**record, **draft.to_fields()}
                    records[index] = updated
                    break

            if updated is None:
                raise TransactionNotFoundError(f"Transaction with ID {transaction_id} not found")

            self._save(user_id, records)
        logger.info("Updated transaction %s for user %s", transaction_id, user_id)
        return Transaction.from_record(updated)

    def delete_transaction(self, user_id: str, transaction_id: str) -> bool:
        _require(user_id, "user_id")
        _require(transaction_id, "transaction_id")
        with self._lock:
            records = self._load(user_id)

            remaining = [record for record in records if record.get("id") != transaction_id]
            if len(remaining) == len(records):
                logger.warning("Transaction with ID %s not found for user %s", transaction_id, user_id)
                return False

            self._save(user_id, remaining)
        logger.info("Deleted transaction %s for user %s", transaction_id, user_id)
        return True


class InMemoryTransactionStore(_RecordStore):
    """Keeps records in process memory; useful for tests and demos."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        super().__init__(clock)
        self._records: dict[str, list[dict[str, Any]]] = {}

    def _load(self, user_id: str) -> list[dict[str, Any]]:
        return [dict(record) for record in self._records.get(user_id, [])]

    def _save(self, user_id: str, records: list[dict[str, Any]]) -> None:
        self._records[user_id] = [dict(record) for record in records]


class JsonFileTransactionStore(_RecordStore):
    """Stores each user's transactions in ``transactions_<user_id>.json``.

    Unreadable or corrupt files are logged and read as an empty list. Failed
    writes raise :class:`StoreError`.
    """

    def __init__(self, data_dir: str | Path, clock: Callable[[], datetime] = _utcnow) -> None:
        super().__init__(clock)
        self.data_dir = Path(data_dir).expanduser()

    def path_for(self, user_id: str) -> Path:
        safe_id = _UNSAFE_FILENAME_CHARS.sub("_", _require(user_id, "user_id"))
        return self.data_dir / f"transactions_{safe_id}.json"

    def _load(self, user_id: str) -> list[dict[str, Any]]:
        path = self.path_for(user_id)
        if not path.exists():
            return []

        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("Error accessing stored transactions at %s: %s", path, exc)
            return []

        if not isinstance(payload, list):
            logger.error("Stored transactions at %s are not a list; ignoring", path)
            return []
        return [record for record in payload if isinstance(record, dict)]

    def _save(self, user_id: str, records: list[dict[str, Any]]) -> None:
        path = self.path_for(user_id)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=path.name, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(records, handle, indent=2, default=str)
            os.replace(tmp_name, path)
        except OSError as exc:
            raise StoreError(f"Failed to save transactions to {path}") from exc
