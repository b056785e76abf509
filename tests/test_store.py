from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest

from core.models import TransactionDraft
from core.store import (
    InMemoryTransactionStore,
    JsonFileTransactionStore,
    StoreError,
    TransactionNotFoundError,
)


def _fixed_clock() -> datetime:
    return datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture(params=["memory", "json"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryTransactionStore(clock=_fixed_clock)
    return JsonFileTransactionStore(tmp_path, clock=_fixed_clock)


def test_add_assigns_local_ids_and_prepends(store):
    first = store.add_transaction("u1", TransactionDraft(amount=10, category="Groceries", date="2024-01-02"))
    second = store.add_transaction("u1", TransactionDraft(amount=20, category="Rent", date="2024-01-03"))

    assert first.id == "local_1704067200000"
    assert second.id == "local_1704067200001"
    assert first.user_id == "u1"
    assert first.created_at == "2024-01-01T00:00:00+00:00"
    assert [txn.id for txn in store.list_transactions("u1")] == [second.id, first.id]


def test_users_are_isolated(store):
    store.add_transaction("u1", TransactionDraft(amount=10, date="2024-01-02"))

    assert store.list_transactions("u2") == []


def test_update_merges_draft_and_keeps_identity(store):
    added = store.add_transaction("u1", TransactionDraft(amount=10, category="Groceries", date="2024-01-02"))

    updated = store.update_transaction(
        "u1",
        added.id,
        TransactionDraft(amount="12.50", type="income", category="Gifts", date="2024-01-05", description="Birthday"),
    )

    assert updated.id == added.id
    assert updated.created_at == added.created_at
    assert updated.is_income
    assert store.list_transactions("u1") == [updated]


def test_update_unknown_id_raises(store):
    with pytest.raises(TransactionNotFoundError):
        store.update_transaction("u1", "missing", TransactionDraft(amount=1))

    assert issubclass(TransactionNotFoundError, KeyError)
    assert issubclass(TransactionNotFoundError, StoreError)


def test_delete_reports_success(store, caplog):
    added = store.add_transaction("u1", TransactionDraft(amount=10, date="2024-01-02"))

    assert store.delete_transaction("u1", added.id) is True
    assert store.list_transactions("u1") == []

    with caplog.at_level(logging.WARNING, logger="budgettrack"):
        assert store.delete_transaction("u1", added.id) is False
    assert any(added.id in record.getMessage() for record in caplog.records)


@pytest.mark.parametrize("user_id", ["", None])
def test_missing_user_id_is_rejected(store, user_id):
    with pytest.raises(ValueError):
        store.list_transactions(user_id)
    with pytest.raises(ValueError):
        store.add_transaction(user_id, TransactionDraft(amount=1))


def test_missing_transaction_id_is_rejected(store):
    with pytest.raises(ValueError):
        store.delete_transaction("u1", "")


def test_json_store_persists_between_instances(tmp_path):
    writer = JsonFileTransactionStore(tmp_path, clock=_fixed_clock)
    added = writer.add_transaction("user@example.com", TransactionDraft(amount=42, date="2024-02-01"))

    reader = JsonFileTransactionStore(tmp_path)
    path = reader.path_for("user@example.com")

    assert path.name == "transactions_user_example.com.json"
    assert json.loads(path.read_text(encoding="utf-8"))[0]["id"] == added.id
    assert reader.list_transactions("user@example.com") == [added]


def test_json_store_reads_corrupt_file_as_empty(tmp_path, caplog):
    store = JsonFileTransactionStore(tmp_path)
    store.path_for("u1").write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.ERROR, logger="budgettrack"):
        assert store.list_transactions("u1") == []
    assert caplog.records


def test_json_store_ignores_non_list_payloads(tmp_path):
    store = JsonFileTransactionStore(tmp_path)
    store.path_for("u1").write_text(json.dumps({"id": "x"}), encoding="utf-8")

    assert store.list_transactions("u1") == []


def test_json_store_raises_store_error_when_directory_is_a_file(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = JsonFileTransactionStore(blocker / "nested")

    with pytest.raises(StoreError):
        store.add_transaction("u1", TransactionDraft(amount=1))


def test_concurrent_adds_from_shared_store_are_all_kept(store):
    drafts = [TransactionDraft(amount=index, date="2024-01-02") for index in range(1, 41)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        added = list(pool.map(lambda draft: store.add_transaction("u1", draft), drafts))

    stored = store.list_transactions("u1")
    assert len(stored) == len(drafts)
    assert len({txn.id for txn in stored}) == len(drafts)
    assert {txn.id for txn in stored} == {txn.id for txn in added}
