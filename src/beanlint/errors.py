from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class BeanlintError(Exception):
    """Base class for errors that abort a lint run."""


class LedgerIoError(BeanlintError):
    def __init__(self, path: Path, cause: Union[OSError, UnicodeDecodeError]):
        super().__init__(f"io: {path}: {cause}")
        self.path = path
        self.cause = cause


class ParseError(BeanlintError):
    """Raised by a directive parser for malformed ledger text.

    `line_number` is one-based when known.
    """

    def __init__(self, message: str, line_number: Optional[int] = None):
        location = f"line {line_number}: " if line_number is not None else ""
        super().__init__(f"{location}{message}")
        self.message = message
        self.line_number = line_number


class LedgerParseError(BeanlintError):
    def __init__(self, identity: str, cause: ParseError):
        super().__init__(f"loading ledger {identity}, {cause}")
        self.identity = identity
        self.cause = cause


class LocationError(BeanlintError):
    pass


class SourceMissingError(LocationError):
    def __init__(self, identity: str, kind: str):
        super().__init__(f"{kind} directive in {identity} carries no source text and cannot be located")
        self.identity = identity
        self.kind = kind


class LocationNotFoundError(LocationError):
    def __init__(self, identity: str, occurrence: int, source_text: str):
        first_line = source_text.splitlines()[0] if source_text else ""
        super().__init__(
            f"unable to find occurrence {occurrence + 1} of {first_line!r} in {identity}"
        )
        self.identity = identity
        self.occurrence = occurrence
        self.source_text = source_text


class SpanAcrossFilesError(LocationError):
    def __init__(self) -> None:
        super().__init__("cannot span across disparate files")


class CrossFileComparisonError(LocationError):
    def __init__(self, left: str, right: str):
        super().__init__(f"cannot order locations from different files ({left} vs {right})")
        self.left = left
        self.right = right
