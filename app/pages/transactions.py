"""Transactions page: add, edit and delete ledger entries."""

from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

import pandas as pd
import streamlit as st

from analytics import group_by_date
from app.layout import card
from config import Settings
from core import (
    DEFAULT_CATEGORY,
    SUGGESTED_CATEGORIES,
    StoreError,
    Transaction,
    TransactionDraft,
    TransactionNotFoundError,
    TransactionStore,
    TransactionType,
    parse_amount,
    parse_transaction_date,
)


def _category_options(txn_type: str, current: Optional[str]) -> list[str]:
    options = list(SUGGESTED_CATEGORIES.get(txn_type, SUGGESTED_CATEGORIES[TransactionType.EXPENSE.value]))
    if current and current not in options:
        options.append(current)
    return options


def _transaction_form(key: str, transaction: Optional[Transaction] = None) -> Optional[TransactionDraft]:
    """Render the add/edit form and return a draft once submitted."""

    types = [TransactionType.EXPENSE.value, TransactionType.INCOME.value]
    current_type = TransactionType.INCOME.value if transaction and transaction.is_income else types[0]
    txn_type = st.radio(
        "Type",
        types,
        index=types.index(current_type),
        horizontal=True,
        format_func=str.title,
        key=f"{key}-type",
    )

    current_category = transaction.resolved_category if transaction else DEFAULT_CATEGORY
    categories = _category_options(txn_type, current_category)
    parsed_date = parse_transaction_date(transaction.date) if transaction else None

    with st.form(key=f"{key}-form", clear_on_submit=transaction is None):
        amount = st.number_input(
            "Amount",
            min_value=0.0,
            step=0.01,
            format="%.2f",
            value=parse_amount(transaction.amount) if transaction else 0.0,
        )
        category = st.selectbox(
            "Category",
            categories,
            index=categories.index(current_category) if current_category in categories else len(categories) - 1,
        )
        txn_date = st.date_input("Date", value=parsed_date.date() if parsed_date is not None else date.today())
        description = st.text_area("Description", value=transaction.description if transaction else "")
        submitted = st.form_submit_button("Update Transaction" if transaction else "Add Transaction")

    if not submitted:
        return None
    if amount <= 0:
        st.error("Amount must be greater than zero.")
        return None
    return TransactionDraft(
        amount=round(float(amount), 2),
        type=txn_type,
        category=category,
        date=txn_date.isoformat(),
        description=description.strip(),
    )


def _delete_transaction(store: TransactionStore, user_id: str, transaction_id: str) -> Optional[str]:
    """Delete one transaction and return an error message when it fails."""

    try:
        deleted = store.delete_transaction(user_id, transaction_id)
    except StoreError as exc:
        return f"Failed to delete transaction: {exc}"
    if not deleted:
        return "Failed to delete transaction. Please try again."
    return None


def _render_ledger(
    transactions: Sequence[Transaction],
    store: TransactionStore,
    user_id: str,
    currency: str,
) -> None:
    if not transactions:
        st.info("No transactions yet. Add your first one above.")
        return

    for day in group_by_date(transactions):
        parsed = parse_transaction_date(day["date"])
        st.markdown(f"**{parsed:%B %d, %Y}**" if parsed is not None else f"**{day['date'] or 'Undated'}**")
        for transaction in day["transactions"]:
            sign = "+" if transaction.is_income else "-"
            amount = parse_amount(transaction.amount)
            info_col, amount_col, delete_col = st.columns((4, 2, 1))
            info_col.write(f"{transaction.description or 'No description'} · {transaction.resolved_category}")
            amount_col.write(f"{sign}{currency}{amount:,.2f}")
            if delete_col.button("Delete", key=f"delete-{transaction.id}"):
                error = _delete_transaction(store, user_id, transaction.id)
                if error is None:
                    st.toast("Transaction deleted")
                    st.rerun()
                else:
                    st.error(error)

            with st.expander("Edit", expanded=False):
                draft = _transaction_form(f"edit-{transaction.id}", transaction)
                if draft is not None:
                    try:
                        store.update_transaction(user_id, transaction.id, draft)
                    except (TransactionNotFoundError, StoreError) as exc:
                        st.error(f"Failed to update transaction: {exc}")
                    else:
                        st.rerun()


def render_page(
    transactions: Sequence[Transaction],
    store: TransactionStore,
    user_id: str,
    settings: Settings,
) -> None:
    """Render the transaction ledger with its add form."""

    st.title("Transactions")
    with card("Add New Transaction"):
        draft = _transaction_form("add")
        if draft is not None:
            try:
                store.add_transaction(user_id, draft)
            except StoreError as exc:
                st.error(f"Failed to add transaction: {exc}")
            else:
                st.rerun()

    with card("Recent Transactions", suffix=f"{len(transactions)} total"):
        _render_ledger(transactions, store, user_id, settings.currency_symbol)
        if transactions:
            with st.expander("Export", expanded=False):
                frame = pd.DataFrame([transaction.to_record() for transaction in transactions])
                st.download_button(
                    "Download CSV",
                    frame.to_csv(index=False).encode("utf-8"),
                    file_name=f"transactions_{user_id}.csv",
                    mime="text/csv",
                )


__all__ = ["render_page"]
