from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from ...ledger.location import Location
from ...ledger.models import Directive, Transaction
from ...ledger.readable import format_payees
from ...ledger.source import Sourced, transactions
from ...logging_setup import get_logger
from ..appendix import AppendixExtractionError, AppendixExtractor, AppendixNotFoundError
from ..context import LintContext
from ..lint import Lint
from ..models import Finding, Severity
from ..registry import register_lint

logger = get_logger(__name__)


@dataclass(frozen=True)
class MissingAppendix(Finding):
    entry: Sourced[Transaction]

    def headline(self) -> str:
        return f"transaction {format_payees([self.entry])} does not have an appendix attached:"

    def locations(self) -> List[Location]:
        return [self.entry.location]


def find_missing_appendices(
    directives: Sequence[Sourced[Directive]],
    extractor: AppendixExtractor,
) -> List[MissingAppendix]:
    """Transactions carrying no appendix reference at all.

    Only an absent reference counts here; malformed references are left to
    the other appendix lints, which skip them.
    """
    logger.debug("checking for missing appendices")
    missing: List[MissingAppendix] = []
    for txn in transactions(directives):
        try:
            extractor.extract(txn)
        except AppendixNotFoundError:
            missing.append(MissingAppendix(entry=txn))
        except AppendixExtractionError:
            continue
    return missing


@register_lint
class MISSING_APPENDIX(Lint):
    lint_id = "MISSING-APPENDIX"
    lint_title = "Every transaction should reference an appendix"
    description = "Transactions without a statement reference."
    default_severity = Severity.LOW

    def evaluate(self, ctx: LintContext) -> List[Finding]:
        if not self.config(ctx).enabled:
            return []
        return list(find_missing_appendices(ctx.directives, ctx.extractor))
