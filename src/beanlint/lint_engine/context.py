from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from ..ledger.models import Directive
from ..ledger.source import Sourced
from .appendix import AppendixExtractor, get_appendix_extractor
from .config import ClientLintConfig


@dataclass(frozen=True)
class LintContext:
    directives: Sequence[Sourced[Directive]]
    extractor: AppendixExtractor = field(default_factory=lambda: get_appendix_extractor("statement-path"))
    client_config: ClientLintConfig = field(default_factory=ClientLintConfig)

    @classmethod
    def from_config(
        cls,
        directives: Sequence[Sourced[Directive]],
        client_config: ClientLintConfig,
    ) -> "LintContext":
        return cls(
            directives=tuple(directives),
            extractor=get_appendix_extractor(client_config.appendix_extractor),
            client_config=client_config,
        )
