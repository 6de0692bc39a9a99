from __future__ import annotations

import re

from ...ledger.models import Transaction
from ...ledger.source import Sourced
from . import (
    Appendix,
    AppendixNotFoundError,
    CaptureMatchFailedError,
    ConversionFailedError,
    NoCapturesError,
    StatementWrongTypeError,
    register_extractor,
)

# Matches .../2000-01-01.{AppendixID}.*
DATE_DOT_ID = re.compile(r".*/?\d\d\d\d-\d\d-\d\d\.(\d+)\..*")

U64_MAX = 2**64 - 1


class StatementPathExtractor:
    """Reads the appendix id out of a `statement` path named `YYYY-MM-DD.<id>.<rest>`."""

    def __init__(self, meta_key: str = "statement", pattern: re.Pattern[str] = DATE_DOT_ID):
        self.meta_key = meta_key
        self.pattern = pattern

    def extract(self, transaction: Sourced[Transaction]) -> Appendix:
        meta = transaction.inner.meta
        if self.meta_key not in meta:
            raise AppendixNotFoundError()

        statement = meta[self.meta_key]
        if not isinstance(statement, str):
            raise StatementWrongTypeError()

        match = self.pattern.search(statement)
        if match is None:
            raise CaptureMatchFailedError()

        if match.re.groups < 1 or match.group(1) is None:
            raise NoCapturesError()

        digits = match.group(1)
        if not digits.isascii() or not digits.isdigit():
            raise ConversionFailedError()
        appendix_id = int(digits)
        if appendix_id > U64_MAX:
            raise ConversionFailedError()

        return Appendix(id=appendix_id, statement=statement)


@register_extractor("statement-path")
def _statement_path() -> StatementPathExtractor:
    return StatementPathExtractor()
