from __future__ import annotations

from typing import Iterable, Union

from .models import Transaction
from .source import Sourced


def format_payees(transactions: Iterable[Union[Transaction, Sourced[Transaction]]]) -> str:
    """Join payees for a warning line: "A", "A and B", "A, B and C"."""
    payees = []
    for txn in transactions:
        inner = txn.inner if isinstance(txn, Sourced) else txn
        if inner.payee:
            payees.append(inner.payee)

    if len(payees) <= 1:
        return "".join(payees)
    return f"{', '.join(payees[:-1])} and {payees[-1]}"
