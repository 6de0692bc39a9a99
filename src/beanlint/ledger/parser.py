"""Beancount-subset directive parser.

The parser only hands back directive models. Each model keeps the exact
substring of the input it was built from in ``source``; line numbers are
deliberately not exposed, those are recovered by the location resolver.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Optional, Protocol

from pydantic import ValidationError

from ..errors import ParseError
from .models import (
    Account,
    Amount,
    Balance,
    Close,
    Commodity,
    Custom,
    Directive,
    Document,
    Event,
    Include,
    IncompleteAmount,
    Note,
    Open,
    Option,
    Pad,
    Plugin,
    Posting,
    Price,
    PriceAnnotation,
    Query,
    Transaction,
    Unsupported,
)


class DirectiveParser(Protocol):
    def parse(self, text: str) -> list[Directive]:
        """Return directives in file order; raise `ParseError` on malformed input."""
        ...


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TOKEN_RE = re.compile(r'"(?:[^"\\]|\\.)*"|[^\s"]+')
_ACCOUNT_RE = re.compile(r"^[A-Z][A-Za-z0-9-]*(?::[A-Z0-9][A-Za-z0-9-]*)+$")
_CURRENCY_RE = re.compile(r"^[A-Z][A-Z0-9'._-]*$")
_NUMBER_RE = re.compile(r"^[-+]?(?:\d[\d,]*)?(?:\.\d+)?$")
_META_RE = re.compile(r"^(?P<key>[a-z][A-Za-z0-9_-]*):(?:\s+(?P<value>.*))?$")
_POSTING_RE = re.compile(
    r"^(?:(?P<flag>[*!])\s+)?"
    r"(?P<account>[A-Z][A-Za-z0-9-]*(?::[A-Z0-9][A-Za-z0-9-]*)+)"
    r"(?:\s+(?P<number>[-+]?[\d,]*\.?\d+))?"
    r"(?:(?:(?<=\d)\s*|\s+)(?P<currency>[A-Z][A-Z0-9'._-]*))?"
    r"(?:\s*(?P<cost>\{[^}]*\}))?"
    r"(?:\s*(?P<at>@@?)\s*(?P<price_number>[-+]?[\d,]*\.?\d+)?(?:\s*(?P<price_currency>[A-Z][A-Z0-9'._-]*))?)?"
    r"\s*$"
)

TRANSACTION_FLAGS = frozenset("*!&#?%PSTCURM") | {"txn"}
UNSUPPORTED_KEYWORDS = frozenset({"pushtag", "poptag", "pushmeta", "popmeta"})


@dataclass
class _Block:
    # Zero-based index of the header line within the parsed text.
    start: int
    lines: List[str]

    @property
    def header(self) -> str:
        return self.lines[0]

    @property
    def body(self) -> List[str]:
        return self.lines[1:]

    @property
    def source(self) -> str:
        return "".join(self.lines)


def _strip_comment(line: str) -> str:
    in_string = False
    escaped = False
    for idx, ch in enumerate(line):
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == '"':
            in_string = not in_string
        elif ch == ";" and not in_string:
            return line[:idx]
    return line


def _tokenize(line: str) -> List[str]:
    return _TOKEN_RE.findall(_strip_comment(line))


def _is_string(token: str) -> bool:
    return len(token) >= 2 and token.startswith('"') and token.endswith('"')


def _unquote(token: str) -> str:
    return re.sub(r"\\(.)", r"\1", token[1:-1])


def _parse_number(token: str) -> Decimal:
    try:
        return Decimal(token.replace(",", ""))
    except InvalidOperation as exc:
        raise ValueError(f"invalid number {token!r}") from exc


def _parse_meta_value(raw: Optional[str]) -> Any:
    if raw is None:
        return None
    tokens = _tokenize(raw)
    if not tokens:
        return None
    head = tokens[0]
    if _is_string(head):
        return _unquote(head)
    if head in ("TRUE", "FALSE"):
        return head == "TRUE"
    if _DATE_RE.match(head):
        return date.fromisoformat(head)
    if _ACCOUNT_RE.match(head):
        return Account.parse(head)
    if _NUMBER_RE.match(head) and any(ch.isdigit() for ch in head):
        number = _parse_number(head)
        if len(tokens) > 1 and _CURRENCY_RE.match(tokens[1]):
            return Amount(number=number, currency=tokens[1])
        return number
    return head


class BeancountParser:
    """Parses the subset of beancount syntax the lint engine needs.

    Transactions, account lifecycle, balance assertions, prices, documents and
    the remaining dated directives are understood. Tag and metadata stacks
    (`pushtag` and friends) come back as `Unsupported` without source text.
    """

    def parse(self, text: str) -> list[Directive]:
        directives: list[Directive] = []
        for block in self._blocks(text):
            try:
                directives.append(self._parse_block(block))
            except ParseError:
                raise
            except (ValueError, ValidationError) as exc:
                raise ParseError(str(exc), block.start + 1) from exc
        return directives

    def _blocks(self, text: str) -> List[_Block]:
        blocks: List[_Block] = []
        current: Optional[_Block] = None
        for idx, line in enumerate(text.splitlines(keepends=True)):
            stripped = line.strip()
            if not stripped:
                current = None
                continue
            if line[0] in " \t":
                if current is None:
                    if stripped.startswith(";"):
                        continue
                    raise ParseError("indented line outside of a directive", idx + 1)
                current.lines.append(line)
                continue
            current = None
            # Org-mode headings and comments between directives.
            if stripped.startswith((";", "*", "#")):
                continue
            current = _Block(start=idx, lines=[line])
            blocks.append(current)
        return blocks

    def _parse_block(self, block: _Block) -> Directive:
        tokens = _tokenize(block.header)
        if not tokens:
            raise ParseError("empty directive", block.start + 1)

        if not _DATE_RE.match(tokens[0]):
            return self._parse_undated(block, tokens)

        if len(tokens) < 2:
            raise ParseError("directive keyword missing after date", block.start + 1)

        when = date.fromisoformat(tokens[0])
        keyword = tokens[1]
        if keyword in TRANSACTION_FLAGS:
            return self._parse_transaction(block, when, keyword, tokens[2:])

        handler = self._dated_handlers().get(keyword)
        if handler is None:
            raise ParseError(f"unknown directive {keyword!r}", block.start + 1)
        meta = self._parse_meta_lines(block, block.body)
        return handler(block, when, tokens[2:], meta)

    def _parse_undated(self, block: _Block, tokens: List[str]) -> Directive:
        keyword, args = tokens[0], tokens[1:]
        if keyword in UNSUPPORTED_KEYWORDS:
            return Unsupported(keyword=keyword)
        strings = [_unquote(t) for t in args if _is_string(t)]
        if keyword == "option" and len(strings) == 2:
            return Option(source=block.source, name=strings[0], value=strings[1])
        if keyword == "include" and len(strings) == 1:
            return Include(source=block.source, filename=strings[0])
        if keyword == "plugin" and strings:
            return Plugin(
                source=block.source,
                module=strings[0],
                config=strings[1] if len(strings) > 1 else None,
            )
        raise ParseError(f"unrecognized directive {keyword!r}", block.start + 1)

    def _dated_handlers(self) -> Dict[str, Callable[..., Directive]]:
        return {
            "open": self._open,
            "close": self._close,
            "balance": self._balance,
            "pad": self._pad,
            "note": self._note,
            "document": self._document,
            "event": self._event,
            "price": self._price,
            "commodity": self._commodity,
            "query": self._query,
            "custom": self._custom,
        }

    def _parse_meta_lines(self, block: _Block, lines: List[str]) -> Dict[str, Any]:
        meta: Dict[str, Any] = {}
        for offset, line in enumerate(lines, start=1):
            content = _strip_comment(line).strip()
            if not content:
                continue
            match = _META_RE.match(content)
            if match is None:
                raise ParseError(f"unexpected line {content!r}", block.start + offset + 1)
            meta[match.group("key")] = _parse_meta_value(match.group("value"))
        return meta

    def _parse_transaction(self, block: _Block, when: date, flag: str, args: List[str]) -> Transaction:
        strings: List[str] = []
        tags: List[str] = []
        links: List[str] = []
        for token in args:
            if _is_string(token):
                strings.append(_unquote(token))
            elif token.startswith("#"):
                tags.append(token[1:])
            elif token.startswith("^"):
                links.append(token[1:])
            else:
                raise ParseError(f"unexpected token {token!r} in transaction header", block.start + 1)
        if len(strings) > 2:
            raise ParseError("too many strings in transaction header", block.start + 1)

        payee = strings[0] if len(strings) == 2 else None
        narration = strings[-1] if strings else ""

        meta: Dict[str, Any] = {}
        postings: List[Dict[str, Any]] = []
        for offset, line in enumerate(block.body, start=1):
            content = _strip_comment(line).strip()
            if not content:
                continue
            meta_match = _META_RE.match(content)
            if meta_match is not None:
                target = postings[-1]["meta"] if postings else meta
                target[meta_match.group("key")] = _parse_meta_value(meta_match.group("value"))
                continue
            posting_match = _POSTING_RE.match(content)
            if posting_match is None:
                raise ParseError(f"invalid posting {content!r}", block.start + offset + 1)
            postings.append(self._posting_fields(posting_match))

        return Transaction(
            source=block.source,
            date=when,
            flag=flag,
            payee=payee,
            narration=narration,
            tags=tags,
            links=links,
            meta=meta,
            postings=[Posting(**fields) for fields in postings],
        )

    @staticmethod
    def _posting_fields(match: "re.Match[str]") -> Dict[str, Any]:
        number = match.group("number")
        price: Optional[PriceAnnotation] = None
        if match.group("at"):
            price_number = match.group("price_number")
            price = PriceAnnotation(
                number=_parse_number(price_number) if price_number else None,
                currency=match.group("price_currency"),
                total=match.group("at") == "@@",
            )
        return {
            "account": Account.parse(match.group("account")),
            "units": IncompleteAmount(
                number=_parse_number(number) if number else None,
                currency=match.group("currency"),
            ),
            "cost": match.group("cost"),
            "price": price,
            "flag": match.group("flag"),
            "meta": {},
        }

    @staticmethod
    def _amount(block: _Block, number: str, currency: str) -> Amount:
        if not _CURRENCY_RE.match(currency):
            raise ParseError(f"invalid currency {currency!r}", block.start + 1)
        return Amount(number=_parse_number(number), currency=currency)

    @staticmethod
    def _expect(block: _Block, args: List[str], count: int, usage: str) -> None:
        if len(args) < count:
            raise ParseError(f"expected {usage}", block.start + 1)

    def _open(self, block, when, args, meta) -> Open:
        self._expect(block, args, 1, "open <account> [currencies]")
        currencies: List[str] = []
        booking: Optional[str] = None
        for token in args[1:]:
            if _is_string(token):
                booking = _unquote(token)
            else:
                currencies.extend(c for c in token.split(",") if c)
        return Open(
            source=block.source,
            date=when,
            meta=meta,
            account=Account.parse(args[0]),
            currencies=currencies,
            booking=booking,
        )

    def _close(self, block, when, args, meta) -> Close:
        self._expect(block, args, 1, "close <account>")
        return Close(source=block.source, date=when, meta=meta, account=Account.parse(args[0]))

    def _balance(self, block, when, args, meta) -> Balance:
        self._expect(block, args, 3, "balance <account> <number> <currency>")
        return Balance(
            source=block.source,
            date=when,
            meta=meta,
            account=Account.parse(args[0]),
            amount=self._amount(block, args[1], args[2]),
        )

    def _pad(self, block, when, args, meta) -> Pad:
        self._expect(block, args, 2, "pad <account> <source account>")
        return Pad(
            source=block.source,
            date=when,
            meta=meta,
            account=Account.parse(args[0]),
            source_account=Account.parse(args[1]),
        )

    def _note(self, block, when, args, meta) -> Note:
        self._expect(block, args, 2, 'note <account> "<comment>"')
        return Note(
            source=block.source,
            date=when,
            meta=meta,
            account=Account.parse(args[0]),
            comment=_unquote(args[1]),
        )

    def _document(self, block, when, args, meta) -> Document:
        self._expect(block, args, 2, 'document <account> "<path>"')
        return Document(
            source=block.source,
            date=when,
            meta=meta,
            account=Account.parse(args[0]),
            path=_unquote(args[1]),
        )

    def _event(self, block, when, args, meta) -> Event:
        self._expect(block, args, 2, 'event "<type>" "<description>"')
        return Event(
            source=block.source,
            date=when,
            meta=meta,
            type=_unquote(args[0]),
            description=_unquote(args[1]),
        )

    def _price(self, block, when, args, meta) -> Price:
        self._expect(block, args, 3, "price <currency> <number> <currency>")
        return Price(
            source=block.source,
            date=when,
            meta=meta,
            currency=args[0],
            amount=self._amount(block, args[1], args[2]),
        )

    def _commodity(self, block, when, args, meta) -> Commodity:
        self._expect(block, args, 1, "commodity <currency>")
        return Commodity(source=block.source, date=when, meta=meta, currency=args[0])

    def _query(self, block, when, args, meta) -> Query:
        self._expect(block, args, 2, 'query "<name>" "<query>"')
        return Query(
            source=block.source,
            date=when,
            meta=meta,
            name=_unquote(args[0]),
            query_string=_unquote(args[1]),
        )

    def _custom(self, block, when, args, meta) -> Custom:
        self._expect(block, args, 1, 'custom "<type>" [values]')
        return Custom(
            source=block.source,
            date=when,
            meta=meta,
            type=_unquote(args[0]),
            values=[_unquote(t) if _is_string(t) else t for t in args[1:]],
        )
