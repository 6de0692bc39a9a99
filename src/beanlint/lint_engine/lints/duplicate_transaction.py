from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from ...ledger.fingerprint import TransactionFingerprint, fingerprint
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
class DuplicateTransaction(Finding):
    entries: Tuple[Sourced[Transaction], Sourced[Transaction]]

    @classmethod
    def from_group(cls, group: Sequence[Sourced[Transaction]]) -> "DuplicateTransaction":
        first, second = sorted(group[:2], key=lambda txn: txn.location.sort_key())
        return cls(entries=(first, second))

    def headline(self) -> str:
        return f"identical transaction {format_payees(self.entries[:1])} found in multiple locations:"

    def locations(self) -> List[Location]:
        return [entry.location for entry in self.entries]


def find_duplicate_transactions(directives: Sequence[Sourced[Directive]]) -> List[DuplicateTransaction]:
    """One finding per group of structurally identical transactions.

    Groups of three or more still produce a single finding that points at a
    representative pair.
    """
    logger.debug("checking for duplicate transactions")
    groups: Dict[TransactionFingerprint, List[Sourced[Transaction]]] = {}
    for txn in transactions(directives):
        groups.setdefault(fingerprint(txn.inner), []).append(txn)

    return [DuplicateTransaction.from_group(group) for group in groups.values() if len(group) > 1]


@register_lint
class DUPLICATE_TRANSACTION(Lint):
    lint_id = "DUPLICATE-TRANSACTION"
    lint_title = "Transactions must not be recorded twice"
    description = "Same date, payee and postings (in order) appearing more than once."
    default_severity = Severity.HIGH

    def evaluate(self, ctx: LintContext) -> List[Finding]:
        if not self.config(ctx).enabled:
            return []
        return list(find_duplicate_transactions(ctx.directives))
