from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from .models import Account, IncompleteAmount, Posting, Transaction


@dataclass(frozen=True)
class PostingFingerprint:
    account: Account
    units: IncompleteAmount


@dataclass(frozen=True)
class TransactionFingerprint:
    """Structural identity of a transaction.

    Narration, metadata and source position are left out. Postings keep their
    declared order, so a reordered copy of a transaction is not considered the
    same transaction.
    """

    date: date
    payee: Optional[str]
    postings: Tuple[PostingFingerprint, ...]


def posting_fingerprint(posting: Posting) -> PostingFingerprint:
    return PostingFingerprint(account=posting.account, units=posting.units)


def fingerprint(transaction: Transaction) -> TransactionFingerprint:
    return TransactionFingerprint(
        date=transaction.date,
        payee=transaction.payee,
        postings=tuple(posting_fingerprint(p) for p in transaction.postings),
    )
