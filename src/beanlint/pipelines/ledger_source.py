from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Protocol

from ..errors import LedgerIoError
from ..ledger.parser import DirectiveParser
from ..ledger.source import Ledger, LedgerFile
from ..logging_setup import get_logger

logger = get_logger(__name__)

LEDGER_EXTENSION = ".beancount"


class LedgerSource(Protocol):
    def load_files(self) -> List[LedgerFile]:
        """Return every ledger file this source provides, text already read."""
        ...


def get_ledger_source(path: str | Path) -> LedgerSource:
    """Resolve a ledger source for a directory (or a single ledger file)."""
    root = Path(path or ".")
    if root.is_file():
        return FilesystemLedgerSource(root.parent, files=[root])
    return FilesystemLedgerSource(root)


class FilesystemLedgerSource:
    def __init__(
        self,
        root: Path,
        *,
        extension: str = LEDGER_EXTENSION,
        files: Optional[List[Path]] = None,
    ) -> None:
        self._root = root
        self._extension = extension
        self._files = files

    def list_files(self) -> List[Path]:
        if self._files is not None:
            return list(self._files)
        if not self._root.is_dir():
            return []
        try:
            return sorted(p for p in self._root.rglob(f"*{self._extension}") if p.is_file())
        except OSError as exc:
            raise LedgerIoError(self._root, exc) from exc

    def load_files(self) -> List[LedgerFile]:
        logger.debug("loading ledgers from: %s", self._root)
        loaded: List[LedgerFile] = []
        for path in self.list_files():
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise LedgerIoError(path, exc) from exc
            # The grammar needs every directive line terminated.
            if not text.endswith("\n"):
                text += "\n"
            loaded.append(LedgerFile(identity=str(path), source=text, path=path))
        logger.debug("loaded %d ledger files", len(loaded))
        return loaded


class InlineLedgerSource:
    """In-memory ledgers keyed by a synthetic identity."""

    def __init__(self, texts: Dict[str, str]) -> None:
        self._texts = dict(texts)

    def load_files(self) -> List[LedgerFile]:
        files: List[LedgerFile] = []
        for identity, text in self._texts.items():
            if not text.endswith("\n"):
                text += "\n"
            files.append(LedgerFile(identity=identity, source=text))
        return files


def load_ledger(source: LedgerSource, *, parser: Optional[DirectiveParser] = None) -> Ledger:
    return Ledger(source.load_files(), parser=parser)
