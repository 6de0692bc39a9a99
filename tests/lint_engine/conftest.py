import pytest

from beanlint.lint_engine.appendix.statement import StatementPathExtractor
from beanlint.lint_engine.config import ClientLintConfig
from beanlint.lint_engine.context import LintContext


@pytest.fixture
def extractor() -> StatementPathExtractor:
    return StatementPathExtractor()


@pytest.fixture
def make_ctx(inline_directives):
    def _make(text: str, *, client_lints: dict | None = None, extractor=None) -> LintContext:
        cfg = ClientLintConfig(lints=client_lints or {})
        directives = inline_directives(text)
        if extractor is not None:
            return LintContext(directives=tuple(directives), extractor=extractor, client_config=cfg)
        return LintContext.from_config(directives, cfg)

    return _make
