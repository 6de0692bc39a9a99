from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

from ...ledger.location import Location
from ...ledger.models import Directive
from ...ledger.readable import format_payees
from ...ledger.source import Sourced
from ...logging_setup import get_logger
from ..appendix import AppendixExtractor, TransactionWithAppendix, extract_appendices
from ..context import LintContext
from ..lint import Lint
from ..models import Finding, Severity
from ..registry import register_lint

logger = get_logger(__name__)


@dataclass(frozen=True)
class NonSequentialAppendix(Finding):
    before: TransactionWithAppendix
    after: TransactionWithAppendix

    def headline(self) -> str:
        payees = format_payees([self.before.transaction, self.after.transaction])
        return (
            f"nonsequential appendix ids between {payees} "
            f"({self.before.appendix.id} --> {self.after.appendix.id}):"
        )

    def locations(self) -> List[Location]:
        return [self.before.transaction.location, self.after.transaction.location]


def find_nonsequential_appendices(
    directives: Sequence[Sourced[Directive]],
    extractor: AppendixExtractor,
) -> List[NonSequentialAppendix]:
    logger.debug("checking for nonsequential appendices")
    # First transaction seen for each id represents it.
    by_id: Dict[int, TransactionWithAppendix] = {}
    for item in extract_appendices(directives, extractor):
        by_id.setdefault(item.appendix.id, item)

    ids = sorted(by_id)
    return [
        NonSequentialAppendix(before=by_id[prev], after=by_id[curr])
        for prev, curr in zip(ids, ids[1:])
        if curr != prev + 1
    ]


@register_lint
class NONSEQUENTIAL_APPENDIX(Lint):
    lint_id = "NONSEQUENTIAL-APPENDIX"
    lint_title = "Appendix ids should form an unbroken sequence"
    description = "Gaps between consecutive appendix ids."
    default_severity = Severity.LOW

    def evaluate(self, ctx: LintContext) -> List[Finding]:
        if not self.config(ctx).enabled:
            return []
        return list(find_nonsequential_appendices(ctx.directives, ctx.extractor))
