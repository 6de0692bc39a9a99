from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from ...ledger.location import Location
from ...ledger.models import Directive, Transaction
from ...ledger.readable import format_payees
from ...ledger.source import Sourced, transactions
from ...logging_setup import get_logger
from ..config import MissingDocumentLintConfig
from ..context import LintContext
from ..lint import Lint
from ..models import Finding, Severity
from ..registry import register_lint

logger = get_logger(__name__)


@dataclass(frozen=True)
class MissingDocument(Finding):
    entry: Sourced[Transaction]
    statement: str

    def headline(self) -> str:
        return (
            f"transaction {format_payees([self.entry])}'s statement points to "
            f"non-existent file path {self.statement}"
        )

    def locations(self) -> List[Location]:
        return [self.entry.location]


def find_missing_documents(
    directives: Sequence[Sourced[Directive]],
    *,
    meta_key: str = "statement",
    document_root: Optional[Path] = None,
) -> List[MissingDocument]:
    """Transactions whose statement path does not exist on disk.

    Transactions without a statement are not reported here; that is the
    missing-appendix lint's job.
    """
    logger.debug("checking for missing documents")
    missing: List[MissingDocument] = []
    for txn in transactions(directives):
        statement = txn.inner.meta.get(meta_key)
        if not isinstance(statement, str):
            continue
        path = Path(statement)
        if document_root is not None and not path.is_absolute():
            path = document_root / path
        if not path.exists():
            missing.append(MissingDocument(entry=txn, statement=statement))
    return missing


@register_lint
class MISSING_DOCUMENT(Lint):
    lint_id = "MISSING-DOCUMENT"
    lint_title = "Referenced appendix documents must exist"
    description = "Statement metadata pointing to a file that is not on disk."
    default_severity = Severity.MEDIUM
    config_model = MissingDocumentLintConfig

    def evaluate(self, ctx: LintContext) -> List[Finding]:
        cfg = ctx.client_config.get_lint_config(self.lint_id, MissingDocumentLintConfig)
        if not cfg.enabled:
            return []
        root = Path(cfg.document_root) if cfg.document_root else None
        return list(find_missing_documents(ctx.directives, document_root=root))
