from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import Dict, Generic, Iterable, List, Optional, Sequence, Type, TypeVar

from ..errors import LedgerParseError, LocationNotFoundError, ParseError, SourceMissingError
from ..logging_setup import get_logger
from .location import Location
from .models import Directive, Transaction
from .parser import BeancountParser, DirectiveParser

logger = get_logger(__name__)

T = TypeVar("T")
D = TypeVar("D", bound=Directive)


@dataclass(frozen=True, eq=False)
class LedgerFile:
    """One loaded ledger text. Identity is the only thing that makes two files equal."""

    identity: str
    source: str = field(repr=False)
    path: Optional[Path] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LedgerFile):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)

    @property
    def display_name(self) -> str:
        return str(self.path) if self.path is not None else self.identity

    @cached_property
    def _lines(self) -> List[str]:
        return self.source.splitlines()

    @cached_property
    def _lines_keepends(self) -> List[str]:
        return self.source.splitlines(keepends=True)

    def lines(self, *, keepends: bool = False) -> List[str]:
        return self._lines_keepends if keepends else self._lines


@dataclass(frozen=True, eq=False)
class Sourced(Generic[T]):
    """A parsed value paired with where it came from.

    Equality and hashing look at the location only, so findings produced
    independently for the same text position collapse together.
    """

    inner: T
    location: Location

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sourced):
            return NotImplemented
        return self.location == other.location

    def __hash__(self) -> int:
        return hash(self.location)

    def downcast(self, kind: Type[D]) -> Optional["Sourced[D]"]:
        if isinstance(self.inner, kind):
            return Sourced(inner=self.inner, location=self.location)
        return None


def transactions(directives: Iterable[Sourced[Directive]]) -> List[Sourced[Transaction]]:
    found: List[Sourced[Transaction]] = []
    for directive in directives:
        txn = directive.downcast(Transaction)
        if txn is not None:
            found.append(txn)
    return found


def _block_starts(file_lines: Sequence[str], block: Sequence[str]) -> List[int]:
    # Ascending start lines of every run of lines equal to `block`.
    size = len(block)
    head = block[0]
    return [
        idx
        for idx in range(len(file_lines) - size + 1)
        if file_lines[idx] == head and list(file_lines[idx : idx + size]) == list(block)
    ]


def resolve_locations(
    file: LedgerFile,
    directives: Iterable[Directive],
    *,
    skip_missing_source: bool = False,
) -> List[Sourced[Directive]]:
    """Attach a Location to every directive parsed out of `file`.

    Directives arrive in file order, so each one is mapped onto the first
    block of lines reproducing its source text that starts at or after the
    end of the previously resolved directive. Verbatim duplicates thereby
    keep distinct, ordered locations, and a short directive never lands on
    the leading lines of a longer one above it.
    """
    file_lines = file.lines()
    occurrences: Dict[str, int] = {}
    starts_by_text: Dict[str, List[int]] = {}
    floor = 0

    resolved: List[Sourced[Directive]] = []
    for directive in directives:
        source_text = directive.source
        if not source_text:
            if skip_missing_source:
                logger.debug("skipping %s directive without source text in %s", type(directive).__name__, file.identity)
                continue
            raise SourceMissingError(file.identity, type(directive).__name__)

        occurrence = occurrences.get(source_text, 0)
        occurrences[source_text] = occurrence + 1

        block = source_text.splitlines()
        if source_text not in starts_by_text:
            starts_by_text[source_text] = _block_starts(file_lines, block)
        starts = starts_by_text[source_text]
        idx = bisect_left(starts, floor)
        if idx >= len(starts):
            raise LocationNotFoundError(file.identity, occurrence, source_text)

        start = starts[idx]
        floor = start + len(block)
        resolved.append(Sourced(inner=directive, location=Location(file, start, floor)))
    return resolved


class Ledger:
    """Central store for every ledger file loaded in one run.

    Files are keyed by identity; resolved locations reference the stored
    `LedgerFile` objects rather than holding copies of their text.
    """

    def __init__(self, files: Iterable[LedgerFile] = (), *, parser: Optional[DirectiveParser] = None):
        self._files: Dict[str, LedgerFile] = {}
        for ledger_file in files:
            if ledger_file.identity in self._files:
                raise ValueError(f"duplicate ledger file identity: {ledger_file.identity}")
            self._files[ledger_file.identity] = ledger_file
        self._parser: DirectiveParser = parser or BeancountParser()

    @classmethod
    def from_text(cls, text: str, identity: str = "<inline>", *, parser: Optional[DirectiveParser] = None) -> "Ledger":
        if not text.endswith("\n"):
            text += "\n"
        return cls([LedgerFile(identity=identity, source=text)], parser=parser)

    def file(self, identity: str) -> LedgerFile:
        return self._files[identity]

    def directives_for(self, ledger_file: LedgerFile) -> List[Sourced[Directive]]:
        try:
            parsed = self._parser.parse(ledger_file.source)
        except ParseError as exc:
            raise LedgerParseError(ledger_file.display_name, exc) from exc
        return resolve_locations(ledger_file, parsed, skip_missing_source=True)

    def directives(self) -> List[Sourced[Directive]]:
        directives: List[Sourced[Directive]] = []
        for ledger_file in self._files.values():
            found = self.directives_for(ledger_file)
            logger.debug("%s: %d directives", ledger_file.display_name, len(found))
            directives.extend(found)

        if not directives:
            logger.warning(
                "ledger contains no directives, are you sure the directory contains any beancount files?"
            )
        else:
            logger.debug("compiled ledger contains %d directives", len(directives))
        return directives
