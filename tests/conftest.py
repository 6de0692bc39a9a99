import textwrap

import pytest

from beanlint.ledger.source import Ledger


@pytest.fixture
def inline_ledger():
    def _make(text: str, identity: str = "<inline>") -> Ledger:
        return Ledger.from_text(textwrap.dedent(text), identity)

    return _make


@pytest.fixture
def inline_directives(inline_ledger):
    def _make(text: str, identity: str = "<inline>"):
        return inline_ledger(text, identity).directives()

    return _make
