"""Receipt ("appendix") references attached to transactions.

Extraction is pluggable: lints only depend on the `AppendixExtractor`
protocol, and concrete strategies register themselves by name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Protocol, Tuple

from ...errors import BeanlintError
from ...ledger.models import Directive, Transaction
from ...ledger.source import Sourced, transactions
from ...logging_setup import get_logger
from ..registry import Registry

logger = get_logger(__name__)


@dataclass(frozen=True, order=True)
class Appendix:
    # Field order gives the listing order: by id, then statement.
    id: int
    statement: str


class AppendixError(BeanlintError):
    pass


class AppendixNotFoundError(AppendixError):
    def __init__(self) -> None:
        super().__init__("no field identifying an associated appendix was found within the transaction")


class AppendixExtractionError(AppendixError):
    pass


class StatementWrongTypeError(AppendixExtractionError):
    def __init__(self) -> None:
        super().__init__("statement is not a string")


class CaptureMatchFailedError(AppendixExtractionError):
    def __init__(self) -> None:
        super().__init__("capture expression did not match statement")


class NoCapturesError(AppendixExtractionError):
    def __init__(self) -> None:
        super().__init__("capture expression matched, but no capture groups extracted")


class ConversionFailedError(AppendixExtractionError):
    def __init__(self) -> None:
        super().__init__("the statement id could not be converted to a 64-bit unsigned integer")


class AppendixExtractor(Protocol):
    def extract(self, transaction: Sourced[Transaction]) -> Appendix:
        """Return the transaction's appendix or raise an `AppendixError`."""
        ...


@dataclass(frozen=True)
class TransactionWithAppendix:
    transaction: Sourced[Transaction]
    appendix: Appendix


ExtractorFactory = Callable[[], AppendixExtractor]

extractors: Registry[ExtractorFactory] = Registry(
    "appendix extractor",
    normalize=lambda name: name.strip().lower(),
)


def register_extractor(name: str) -> Callable[[ExtractorFactory], ExtractorFactory]:
    def _register(factory: ExtractorFactory) -> ExtractorFactory:
        return extractors.register(name, factory)

    return _register


def get_appendix_extractor(name: str) -> AppendixExtractor:
    return extractors.get(name)()


def extract_appendices(
    directives: Iterable[Sourced[Directive]],
    extractor: AppendixExtractor,
) -> List[TransactionWithAppendix]:
    """Pair each transaction with its appendix, skipping those without a usable one."""
    found: List[TransactionWithAppendix] = []
    for txn in transactions(directives):
        try:
            appendix = extractor.extract(txn)
        except AppendixNotFoundError:
            continue
        except AppendixExtractionError as exc:
            logger.debug("ignoring appendix of %r: %s", txn.location, exc)
            continue
        found.append(TransactionWithAppendix(transaction=txn, appendix=appendix))
    return found


def group_by_appendix(
    directives: Iterable[Sourced[Directive]],
    extractor: AppendixExtractor,
) -> List[Tuple[Appendix, List[Sourced[Transaction]]]]:
    grouped: Dict[Appendix, List[Sourced[Transaction]]] = {}
    for item in extract_appendices(directives, extractor):
        grouped.setdefault(item.appendix, []).append(item.transaction)
    return sorted(grouped.items(), key=lambda pair: pair[0])


# Register the shipped strategies.
from . import statement as _statement  # noqa: E402,F401
