from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Type

from .config import LintConfigBase
from .context import LintContext
from .models import Finding, Severity


class Lint(ABC):
    lint_id: str
    lint_title: str
    description: str = ""
    default_severity: Severity = Severity.MEDIUM
    config_model: Type[LintConfigBase] = LintConfigBase

    def __init__(self):
        if not getattr(self, "lint_id", None):
            raise ValueError("Lint must define lint_id")

    def config(self, ctx: LintContext) -> LintConfigBase:
        return ctx.client_config.get_lint_config(self.lint_id, self.config_model)

    def severity(self, ctx: LintContext) -> Severity:
        return self.config(ctx).severity or self.default_severity

    @abstractmethod
    def evaluate(self, ctx: LintContext) -> List[Finding]:  # pragma: no cover
        raise NotImplementedError
