import importlib

import plotly.graph_objects as go
import pytest

from analytics import forecast_next_month, summarize_by_category
from core import InMemoryTransactionStore, StoreError, Transaction, TransactionDraft
from visualization import (
    build_category_chart,
    build_category_frame,
    build_forecast_chart,
    build_history_frame,
)


def _transactions():
    return [
        Transaction(id="1", amount=100, category="Rent", date="2024-01-05"),
        Transaction(id="2", amount=40, category="Groceries", date="2024-03-07"),
        Transaction(id="3", amount=80, category="Rent", date="2024-03-05"),
        Transaction(id="4", amount=500, type="income", category="Salary", date="2024-03-01"),
    ]


def test_app_package_exports_main():
    module = importlib.import_module("app")

    assert hasattr(module, "main"), "app package should expose main entrypoint"


def test_category_frame_and_chart():
    summary = summarize_by_category(_transactions())

    frame = build_category_frame(summary)
    assert frame["Category"].tolist() == ["Rent", "Groceries"]
    assert frame["Share"].sum() == pytest.approx(1.0)

    fig = build_category_chart(summary)
    assert isinstance(fig, go.Figure)
    assert fig.data[0].type == "pie"


def test_history_frame_marks_fillers_and_forecast():
    forecast = forecast_next_month(_transactions())

    frame = build_history_frame(forecast)

    assert frame["Series"].tolist() == ["Historical", "Filled", "Historical", "Forecast"]
    assert frame["Label"].iloc[-1] == "April 2024"
    assert len(build_forecast_chart(forecast).data) == 2


def test_charts_handle_empty_inputs():
    empty_summary = summarize_by_category([])
    empty_forecast = forecast_next_month([])

    assert build_category_frame(empty_summary).empty
    assert build_history_frame(empty_forecast).empty
    assert build_category_chart(empty_summary).data == ()
    assert build_forecast_chart(empty_forecast).data == ()


def test_delete_reports_store_failures_instead_of_raising(monkeypatch):
    from app.pages.transactions import _delete_transaction

    store = InMemoryTransactionStore()
    added = store.add_transaction("u1", TransactionDraft(amount=10, date="2024-01-02"))

    def failing_save(user_id, records):
        raise StoreError("Failed to save transactions to disk")

    monkeypatch.setattr(store, "_save", failing_save)

    assert _delete_transaction(store, "u1", added.id) == (
        "Failed to delete transaction: Failed to save transactions to disk"
    )
    assert _delete_transaction(store, "u1", "missing") == "Failed to delete transaction. Please try again."
    assert [txn.id for txn in store.list_transactions("u1")] == [added.id]
