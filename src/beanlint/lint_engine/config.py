from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar

import yaml
from pydantic import BaseModel, Field

from .models import DEFAULT_SPAN_TOLERANCE, Severity

T = TypeVar("T", bound=BaseModel)


class LintConfigBase(BaseModel):
    enabled: bool = True
    # Overrides the lint's default severity when set.
    severity: Optional[Severity] = None
    # Max line gap between related sites that still renders as one block.
    span_tolerance: int = Field(default=DEFAULT_SPAN_TOLERANCE, ge=0)
    lines_context: int = Field(default=1, ge=0)


class MissingDocumentLintConfig(LintConfigBase):
    # Relative statement paths are resolved against this directory; the
    # working directory is used when unset.
    document_root: Optional[str] = None


class ClientLintConfig(BaseModel):
    """Ledger-specific configuration for all lints.

    Lints pull their typed config via `get_lint_config`.
    """

    appendix_extractor: str = "statement-path"
    lints: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    def get_lint_config(self, lint_id: str, model: Type[T]) -> T:
        # An unconfigured lint, or an empty YAML entry, gets the model defaults.
        return model.model_validate(self.lints.get(lint_id) or {})


def load_client_config(path: Path) -> ClientLintConfig:
    with path.open(encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return ClientLintConfig.model_validate(raw)
