"""Ledger text model: parsed directives, their resolved source locations, and
structural fingerprints. Nothing in here knows about lint rules."""

from .fingerprint import TransactionFingerprint, fingerprint
from .location import Location, LocationSpan, to_span
from .models import Account, AccountType, Directive, Posting, Transaction
from .parser import BeancountParser, DirectiveParser
from .source import Ledger, LedgerFile, Sourced, resolve_locations, transactions

__all__ = [
    "Account",
    "AccountType",
    "BeancountParser",
    "Directive",
    "DirectiveParser",
    "Ledger",
    "LedgerFile",
    "Location",
    "LocationSpan",
    "Posting",
    "Sourced",
    "Transaction",
    "TransactionFingerprint",
    "fingerprint",
    "resolve_locations",
    "to_span",
    "transactions",
]
