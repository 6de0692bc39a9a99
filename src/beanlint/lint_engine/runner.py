from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from ..logging_setup import get_logger
from .context import LintContext
from .lint import Lint
from .models import Finding, FindingRecord, LintRunReport, LocationRecord
from .registry import create_lints

logger = get_logger(__name__)


class LintRunner:
    def __init__(self, lints: Optional[Iterable[Lint]] = None):
        self._lints = list(lints) if lints is not None else create_lints()

    def collect(self, ctx: LintContext, *, lint_ids: Optional[set[str]] = None) -> List[Tuple[Lint, Finding]]:
        if lint_ids is not None:
            unknown = sorted(set(lint_ids) - {lint.lint_id for lint in self._lints})
            if unknown:
                raise ValueError(f"unknown lint id(s): {', '.join(unknown)}")

        found: List[Tuple[Lint, Finding]] = []
        for lint in self._lints:
            if lint_ids is not None and lint.lint_id not in lint_ids:
                continue
            found.extend((lint, finding) for finding in lint.evaluate(ctx))
        logger.debug("discovered %d issues", len(found))
        return found

    def run(self, ctx: LintContext, *, lint_ids: Optional[set[str]] = None) -> LintRunReport:
        records: List[FindingRecord] = []
        totals: dict[str, int] = {}
        for lint, finding in self.collect(ctx, lint_ids=lint_ids):
            cfg = lint.config(ctx)
            records.append(
                FindingRecord(
                    lint_id=lint.lint_id,
                    lint_title=lint.lint_title,
                    severity=lint.severity(ctx),
                    message=finding.headline(),
                    locations=[LocationRecord.from_location(loc) for loc in finding.locations()],
                    rendered=finding.render(cfg.span_tolerance, cfg.lines_context),
                )
            )
            totals[lint.lint_id] = totals.get(lint.lint_id, 0) + 1

        return LintRunReport(
            run_id=str(uuid.uuid4()),
            generated_at=datetime.now(timezone.utc),
            findings=records,
            totals=totals,
        )
