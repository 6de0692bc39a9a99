from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Dict, List, Sequence, Tuple

from ...ledger.location import Location
from ...ledger.models import Directive, Transaction
from ...ledger.readable import format_payees
from ...ledger.source import Sourced, transactions
from ...logging_setup import get_logger
from ..context import LintContext
from ..lint import Lint
from ..models import Finding, Severity
from ..registry import register_lint

logger = get_logger(__name__)


@dataclass(frozen=True)
class DoubleEntry(Finding):
    entries: Tuple[Sourced[Transaction], Sourced[Transaction]]

    @classmethod
    def from_pair(cls, a: Sourced[Transaction], b: Sourced[Transaction]) -> "DoubleEntry":
        first, second = sorted((a, b), key=lambda txn: txn.location.sort_key())
        return cls(entries=(first, second))

    def headline(self) -> str:
        return f"potential double entry transaction {format_payees(self.entries)}:"

    def locations(self) -> List[Location]:
        return [entry.location for entry in self.entries]


def _is_transfer_pair(a: Transaction, b: Transaction) -> bool:
    if a.date != b.date or not a.postings or not b.postings:
        return False

    # By convention the first posting is the account the money leaves from.
    a_source = a.postings[0]
    b_source = b.postings[0]
    if not any(p.account == a_source.account for p in b.postings[1:]):
        return False
    if not any(p.account == b_source.account for p in a.postings[1:]):
        return False

    if a_source.units.currency != b_source.units.currency:
        return False

    a_num, b_num = a_source.units.number, b_source.units.number
    if a_num is None or b_num is None:
        return False
    return (a_num + b_num).is_zero()


def find_double_entries(directives: Sequence[Sourced[Directive]]) -> List[DoubleEntry]:
    """Same-day transfers booked once on each side instead of as one transaction.

    Compares every pair of transactions, which is quadratic in the number of
    transactions.
    """
    logger.debug("checking for double entries")
    found: Dict[Tuple[Tuple[str, int, int], Tuple[str, int, int]], DoubleEntry] = {}
    for a, b in combinations(transactions(directives), 2):
        if not _is_transfer_pair(a.inner, b.inner):
            continue
        entry = DoubleEntry.from_pair(a, b)
        key = (entry.entries[0].location.sort_key(), entry.entries[1].location.sort_key())
        found.setdefault(key, entry)
    return list(found.values())


@register_lint
class DOUBLE_ENTRY(Lint):
    lint_id = "DOUBLE-ENTRY"
    lint_title = "Transfers should be booked as a single transaction"
    description = (
        "Two same-day transactions whose first postings mirror each other's accounts "
        "with opposite amounts in the same currency."
    )
    default_severity = Severity.MEDIUM

    def evaluate(self, ctx: LintContext) -> List[Finding]:
        if not self.config(ctx).enabled:
            return []
        return list(find_double_entries(ctx.directives))
