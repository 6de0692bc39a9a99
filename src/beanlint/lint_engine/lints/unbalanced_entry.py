from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

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
class UnbalancedEntry(Finding):
    entry: Sourced[Transaction]

    def headline(self) -> str:
        return f"unbalanced transaction {format_payees([self.entry])}:"

    def locations(self) -> List[Location]:
        return [self.entry.location]


def find_unbalanced_entries(directives: Sequence[Sourced[Directive]]) -> List[UnbalancedEntry]:
    # A lone posting can neither balance nor have its amount inferred.
    # TODO: verify that transactions with several declared postings sum to zero per currency.
    logger.debug("checking for unbalanced transactions")
    return [UnbalancedEntry(entry=txn) for txn in transactions(directives) if len(txn.inner.postings) == 1]


@register_lint
class UNBALANCED_ENTRY(Lint):
    lint_id = "UNBALANCED-ENTRY"
    lint_title = "Transactions must have more than one posting"
    description = "Single-posting transactions can never balance to zero."
    default_severity = Severity.HIGH

    def evaluate(self, ctx: LintContext) -> List[Finding]:
        if not self.config(ctx).enabled:
            return []
        return list(find_unbalanced_entries(ctx.directives))
