from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AccountType(str, Enum):
    ASSETS = "Assets"
    LIABILITIES = "Liabilities"
    EQUITY = "Equity"
    INCOME = "Income"
    EXPENSES = "Expenses"


class Account(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: AccountType
    parts: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, name: str) -> "Account":
        root, *parts = name.split(":")
        try:
            account_type = AccountType(root)
        except ValueError as exc:
            raise ValueError(f"unknown account root {root!r} in {name!r}") from exc
        if any(not part for part in parts):
            raise ValueError(f"empty account component in {name!r}")
        return cls(type=account_type, parts=tuple(parts))

    def __str__(self) -> str:
        return ":".join((self.type.value, *self.parts))


class Amount(BaseModel):
    model_config = ConfigDict(frozen=True)

    number: Decimal
    currency: str


class IncompleteAmount(BaseModel):
    """Units as written on a posting; either half may be left for inference."""

    model_config = ConfigDict(frozen=True)

    number: Optional[Decimal] = None
    currency: Optional[str] = None


class PriceAnnotation(BaseModel):
    model_config = ConfigDict(frozen=True)

    number: Optional[Decimal] = None
    currency: Optional[str] = None
    # `@@` gives the total price rather than the per-unit price.
    total: bool = False


MetaValue = Union[str, Decimal, bool, date, Account, Amount, None]


class Directive(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: Optional[str] = None


class DatedDirective(Directive):
    date: date
    meta: Dict[str, Any] = Field(default_factory=dict)


class Open(DatedDirective):
    account: Account
    currencies: List[str] = Field(default_factory=list)
    booking: Optional[str] = None


class Close(DatedDirective):
    account: Account


class Balance(DatedDirective):
    account: Account
    amount: Amount


class Pad(DatedDirective):
    account: Account
    source_account: Account


class Note(DatedDirective):
    account: Account
    comment: str


class Document(DatedDirective):
    account: Account
    path: str


class Event(DatedDirective):
    type: str
    description: str


class Price(DatedDirective):
    currency: str
    amount: Amount


class Commodity(DatedDirective):
    currency: str


class Query(DatedDirective):
    name: str
    query_string: str


class Custom(DatedDirective):
    type: str
    values: List[str] = Field(default_factory=list)


class Option(Directive):
    name: str
    value: str


class Include(Directive):
    filename: str


class Plugin(Directive):
    module: str
    config: Optional[str] = None


class Unsupported(Directive):
    keyword: str = ""


class Posting(BaseModel):
    model_config = ConfigDict(frozen=True)

    account: Account
    units: IncompleteAmount = Field(default_factory=IncompleteAmount)
    cost: Optional[str] = None
    price: Optional[PriceAnnotation] = None
    flag: Optional[str] = None
    meta: Dict[str, Any] = Field(default_factory=dict)


class Transaction(DatedDirective):
    flag: str = "*"
    payee: Optional[str] = None
    narration: str = ""
    tags: List[str] = Field(default_factory=list)
    links: List[str] = Field(default_factory=list)
    postings: List[Posting] = Field(default_factory=list)

    @model_validator(mode="after")
    def _at_most_one_inferred_posting(self) -> "Transaction":
        inferred = sum(1 for posting in self.postings if posting.units.number is None)
        if inferred > 1:
            raise ValueError("only one posting per transaction may omit its amount")
        return self
