"""Lint engine for resolved ledger directives.

This package contains only domain logic:
- Lint inputs are resolved directives + an appendix extractor + ledger config.
- No filesystem traversal or terminal output lives here.
"""

from .appendix import Appendix, AppendixExtractor, get_appendix_extractor
from .config import ClientLintConfig, LintConfigBase, load_client_config
from .context import LintContext
from .models import Finding, FindingRecord, LintRunReport, Severity
from .runner import LintRunner

# Import built-in lints so they self-register with the global registry.
from . import lints as _builtin_lints  # noqa: F401
