from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

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
class DuplicateAppendix(Finding):
    # One representative transaction per distinct statement sharing the id.
    entries: Tuple[TransactionWithAppendix, ...]

    @property
    def appendix_id(self) -> int:
        return self.entries[0].appendix.id

    def headline(self) -> str:
        payees = format_payees([entry.transaction for entry in self.entries])
        return (
            f"appendix id {self.appendix_id} is used in transactions {payees}, "
            "but the appendices themselves are not the same."
        )

    def locations(self) -> List[Location]:
        return [entry.transaction.location for entry in self.entries]


def find_duplicate_appendix_ids(
    directives: Sequence[Sourced[Directive]],
    extractor: AppendixExtractor,
) -> List[DuplicateAppendix]:
    """Appendix ids shared by different statements.

    Several transactions pointing at the very same statement is fine.
    """
    logger.debug("checking for duplicate appendix ids")
    by_id: Dict[int, Dict[str, TransactionWithAppendix]] = {}
    for item in extract_appendices(directives, extractor):
        by_id.setdefault(item.appendix.id, {}).setdefault(item.appendix.statement, item)

    duplicates: List[DuplicateAppendix] = []
    for appendix_id in sorted(by_id):
        statements = by_id[appendix_id]
        if len(statements) > 1:
            entries = sorted(statements.values(), key=lambda e: e.transaction.location.sort_key())
            duplicates.append(DuplicateAppendix(entries=tuple(entries)))
    return duplicates


@register_lint
class DUPLICATE_APPENDIX_ID(Lint):
    lint_id = "DUPLICATE-APPENDIX-ID"
    lint_title = "Appendix ids must identify a single document"
    description = "The same appendix id used for different statement documents."
    default_severity = Severity.HIGH

    def evaluate(self, ctx: LintContext) -> List[Finding]:
        if not self.config(ctx).enabled:
            return []
        return list(find_duplicate_appendix_ids(ctx.directives, ctx.extractor))
